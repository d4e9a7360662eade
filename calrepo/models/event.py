"""Event record model with Pydantic v2 validation."""

import datetime
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    field_validator,
    model_validator,
)


class EventRecord(BaseModel):
    """Schema for a single event inside an events list.

    Records on disk stay plain mappings; this model only validates them.
    Unknown keys are allowed so documents can carry extra fields.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(min_length=1)
    title: Optional[str] = None
    all_day: StrictBool = False
    date: Optional[datetime.date] = None
    start: Optional[datetime.datetime] = None
    end: Optional[datetime.datetime] = None
    end_date: Optional[datetime.date] = None
    updated_at: Optional[datetime.datetime] = None
    location: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    status: Optional[str] = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("date", "start", "end", "end_date", "updated_at", mode="before")
    @classmethod
    def iso_text(cls, v):
        """Temporal fields are ISO 8601 text on disk, never numbers."""
        if v is not None and not isinstance(v, str):
            raise ValueError("must be an ISO 8601 string")
        return v

    @model_validator(mode="after")
    def validate_temporal_fields(self):
        """All-day events need a date, timed events need a start."""
        if self.all_day and self.date is None:
            raise ValueError("all-day events require date")
        if not self.all_day and self.start is None:
            raise ValueError("timed events require start")
        if self.start is not None and self.end is not None:
            # Only comparable when both are naive or both are aware
            if (self.start.tzinfo is None) == (self.end.tzinfo is None):
                if self.end < self.start:
                    raise ValueError("end must be >= start")
        if self.date is not None and self.end_date is not None:
            if self.end_date < self.date:
                raise ValueError("end_date must be >= date")
        return self
