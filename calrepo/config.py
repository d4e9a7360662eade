"""Configuration for the calendar repository."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from calrepo.constants import METADATA_FILENAME
from calrepo.models.calendar import StorageMode

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("yaml", "json", "table")


class RepositoryConfig(BaseModel):
    """Repository configuration with Pydantic validation."""

    # Storage paths
    root: Path = Field(default=Path("."))
    data_dirname: str = Field(default="data")
    log_dir: Path = Field(default=Path("logs"))

    # File naming
    metadata_filename: str = Field(default=METADATA_FILENAME)
    log_filename: str = Field(default="calrepo.log")

    # CLI defaults
    default_mode: StorageMode = Field(default=StorageMode.FLAT)
    output_format: str = Field(default="yaml")

    @property
    def data_dir(self) -> Path:
        """Directory holding every calendar document."""
        return self.root / self.data_dirname

    @property
    def extension(self) -> str:
        """Extension used for documents this tool writes."""
        return Path(self.metadata_filename).suffix.lstrip(".") or "yaml"

    @classmethod
    def from_env(cls) -> "RepositoryConfig":
        """Load configuration from environment variables and .env file."""
        load_dotenv()

        config_dict = {}

        # Storage paths
        if "CALREPO_ROOT" in os.environ:
            config_dict["root"] = Path(os.environ["CALREPO_ROOT"])
        if "CALREPO_DATA_DIR" in os.environ:
            config_dict["data_dirname"] = os.environ["CALREPO_DATA_DIR"]
        if "CALREPO_LOG_DIR" in os.environ:
            config_dict["log_dir"] = Path(os.environ["CALREPO_LOG_DIR"])

        # File naming
        if "CALREPO_METADATA_FILENAME" in os.environ:
            config_dict["metadata_filename"] = os.environ["CALREPO_METADATA_FILENAME"]
        if "CALREPO_LOG_FILENAME" in os.environ:
            config_dict["log_filename"] = os.environ["CALREPO_LOG_FILENAME"]

        # CLI defaults
        if "CALREPO_DEFAULT_MODE" in os.environ:
            try:
                config_dict["default_mode"] = StorageMode(
                    os.environ["CALREPO_DEFAULT_MODE"]
                )
            except ValueError:
                logger.debug("Ignoring invalid CALREPO_DEFAULT_MODE")
        if "CALREPO_OUTPUT_FORMAT" in os.environ:
            if os.environ["CALREPO_OUTPUT_FORMAT"] in OUTPUT_FORMATS:
                config_dict["output_format"] = os.environ["CALREPO_OUTPUT_FORMAT"]

        return cls(**config_dict)
