"""Settings model for building a controller."""

from typing import List, Literal
from pydantic import BaseModel, Field, ConfigDict, field_validator

from .logging_config import LoggingConfig


class ConicSettings(BaseModel):
    """How a Conic controller is set up.

    Either ``config_file`` names the file directly, or ``config_name`` is
    looked up as ``<config_name>.<ext>`` in ``search_paths`` (default:
    current directory, then the user and site config directories of
    ``app_name``).
    """

    model_config = ConfigDict(extra='forbid')

    config_file: str | None = Field(default=None, description="Path to the configuration file")
    config_name: str | None = Field(
        default=None,
        description="File name without extension, searched for when config_file is not set"
    )
    config_type: Literal["json", "yaml", "yml", "toml"] | None = Field(
        default=None,
        description="Explicit format; inferred from the file extension when unset"
    )
    app_name: str = Field(default="conic", description="Application name for default search paths")
    search_paths: List[str] = Field(default_factory=list, description="Directories searched for config_name")
    key_delimiter: str = Field(default=".", description="Key path delimiter")
    load: bool = Field(default=False, description="Load the file immediately")
    watch: bool = Field(default=False, description="Reload when the file changes")
    logging: LoggingConfig | None = Field(
        default=None,
        description="Set up the conic logger; left untouched when unset"
    )

    @field_validator('key_delimiter')
    @classmethod
    def single_character(cls, v: str) -> str:
        """Key paths use exactly one delimiter character."""
        if len(v) != 1:
            raise ValueError("key_delimiter must be a single character")
        return v

    @field_validator('config_type', mode='before')
    @classmethod
    def normalize_type(cls, v: str | None) -> str | None:
        """Normalize format to lowercase for case-insensitive input."""
        if isinstance(v, str):
            return v.lower()
        return v
