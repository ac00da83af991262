"""Settings for the ``conic`` logger."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LoggingConfig(BaseModel):
    """How conic's own log records are emitted.

    Mirrors the arguments of ``setup_logging``. Only the logger named by
    ``logger_name`` is configured, so an application's root logger is
    never touched.
    """

    model_config = ConfigDict(extra='forbid')

    logger_name: str = Field(
        default="conic",
        min_length=1,
        description="Logger to configure; child loggers such as conic.controller inherit it",
    )
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    format: Literal["simple", "detailed", "json"] = Field(
        default="simple",
        description="Console format; file output is always json",
    )
    log_file: Optional[Path] = Field(default=None, description="Rotating JSON log file")
    max_file_size_mb: int = Field(default=10, gt=0)
    backup_count: int = Field(default=5, ge=0)

    @field_validator('level', mode='before')
    @classmethod
    def normalize_level(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator('format', mode='before')
    @classmethod
    def normalize_format(cls, v):
        if isinstance(v, str):
            return v.lower()
        return v
