"""Configuration models for sift."""

from __future__ import annotations

from pathlib import Path

from platformdirs import user_data_dir
from pydantic import BaseModel, Field

APP_NAME = "sift"
DEFAULT_DATA_FILE_NAME = "tasks.sift"


def default_data_file() -> Path:
    """Default location of the task file inside the user data directory."""
    return Path(user_data_dir(APP_NAME)) / DEFAULT_DATA_FILE_NAME


class OutputConfig(BaseModel):
    """Output configuration."""

    color: bool = Field(default=True)


class AppConfig(BaseModel):
    """Main sift configuration."""

    data_file: Path = Field(
        default_factory=default_data_file, description="Path of the task file"
    )
    history_limit: int | None = Field(
        default=None, ge=1, description="Maximum undo depth (unbounded when unset)"
    )
    snooze_days: int = Field(
        default=7, ge=1, description="Days a task is hidden when snoozed"
    )
    output: OutputConfig = Field(default_factory=OutputConfig)
