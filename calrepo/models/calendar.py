"""Calendar record model and storage modes."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from calrepo.models.event import EventRecord


class StorageMode(str, Enum):
    """Physical layout of a calendar on disk."""

    FLAT = "flat"
    SPLIT = "split"


class CalendarRecord(BaseModel):
    """Schema for calendar metadata, optionally carrying its events (flat mode)."""

    model_config = ConfigDict(extra="allow")

    calendar_id: str = Field(pattern=r"^[A-Za-z0-9][A-Za-z0-9._-]*$")
    title: str = Field(min_length=1)
    description: Optional[str] = None
    locale: Optional[str] = None
    timezone: Optional[str] = None
    maintainers: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    update_frequency: Optional[str] = None
    events: Optional[list[EventRecord]] = None

    @field_validator("maintainers", "tags")
    @classmethod
    def unique_items(cls, v: list[str]) -> list[str]:
        """Maintainers and tags behave as sets."""
        if len(set(v)) != len(v):
            raise ValueError("items must be unique")
        return v
