"""Error definitions for conic."""

from typing import Any, Dict


class ConicError(Exception):
    """Base exception for all conic errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context


class UnsupportedFormatError(ConicError):
    """Configuration format is not supported."""

    def __init__(self, format_id: str, **context: Any) -> None:
        super().__init__(f"Unsupported Config Type {format_id!r}", format_id=format_id, **context)
        self.format_id = format_id


class MissingSourceError(ConicError):
    """No configuration file path is set."""

    def __init__(self, message: str = "No Config File", **context: Any) -> None:
        super().__init__(message, **context)


class ConfigReadError(ConicError):
    """Reading or decoding the configuration file failed."""
    pass


class ConfigWriteError(ConicError):
    """Writing the configuration file failed."""
    pass


class ConfigEncodeError(ConicError):
    """Encoding the configuration tree failed."""
    pass


class ConfigFileAlreadyExistsError(ConicError):
    """Refusing to create a configuration file that already exists."""

    def __init__(self, path: str, **context: Any) -> None:
        super().__init__(f"Config File {path!r} Already Exists", path=path, **context)
        self.path = path


class BindingError(ConicError):
    """Synchronizing a bound reference with the configuration tree failed."""
    pass


class ConfigKeyError(ConicError):
    """A key cannot be resolved or assigned in the configuration tree."""
    pass
