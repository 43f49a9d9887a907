"""Configuration models describing Parakeet settings."""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ParakeetBaseModel(BaseModel):
    """Shared configuration for Parakeet Pydantic models."""

    model_config = ConfigDict(extra="forbid")


class TagSettings(ParakeetBaseModel):
    """Tag registry settings.

    Attributes:
        registry_filename: Registry file name looked up beside the files being checked.
    """

    registry_filename: str = "tags.yaml"

    @field_validator("registry_filename")
    @classmethod
    def _plain_name(cls, value: str) -> str:
        if not value or "/" in value or "\\" in value:
            raise ValueError("registry_filename must be a bare file name")
        return value


class ScanSettings(ParakeetBaseModel):
    """Directory listing settings.

    Attributes:
        include_hidden: Whether dot-files take part in scans and renames.
        extensions: Default extension allow-list when no `--ext` is given.
    """

    include_hidden: bool = False
    extensions: List[str] = Field(default_factory=list)


class LoggingSettings(ParakeetBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("level", mode="before")
    @classmethod
    def _upper(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


class CLIOptions(ParakeetBaseModel):
    """CLI behavior defaults and presentation preferences.

    Attributes:
        quiet_default: Whether commands suppress non-error output by default.
        summary_default: Whether commands only print summary lines by default.
    """

    quiet_default: bool = False
    summary_default: bool = False


class ParakeetConfig(ParakeetBaseModel):
    """Top-level configuration struct for Parakeet.

    Attributes:
        tags: Tag registry settings.
        scan: Directory listing settings.
        logging: Logging configuration.
        cli: CLI presentation defaults.
    """

    tags: TagSettings = Field(default_factory=TagSettings)
    scan: ScanSettings = Field(default_factory=ScanSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)


__all__ = [
    "ParakeetBaseModel",
    "TagSettings",
    "ScanSettings",
    "LoggingSettings",
    "CLIOptions",
    "ParakeetConfig",
]
