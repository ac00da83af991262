"""Configuration sources: where the configuration bytes live."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

import platformdirs

from .adapters import supported_formats
from .errors import ConfigReadError, ConfigWriteError, MissingSourceError
from .watcher import FileWatcher

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ConfigSource(ABC):
    """Abstract location of configuration bytes."""

    @abstractmethod
    def type(self) -> str:
        """Format identifier derived from the source name, or ``""``."""

    @abstractmethod
    def read(self) -> bytes:
        """Read the raw configuration bytes."""

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Persist raw configuration bytes."""

    @abstractmethod
    def exists(self) -> bool:
        """Whether the source currently exists."""

    @abstractmethod
    def on_changed(self, callback: Callable[[], None]) -> FileWatcher:
        """Call ``callback`` whenever the source changes."""


class RegularFile(ConfigSource):
    """A configuration file on the local filesystem."""

    def __init__(self, path: Optional[PathLike] = None) -> None:
        self.path: Optional[Path] = Path(path) if path else None

    def __repr__(self) -> str:
        return f"RegularFile({str(self.path) if self.path else ''!r})"

    def _require_path(self) -> Path:
        if self.path is None:
            raise MissingSourceError()
        return self.path

    def type(self) -> str:
        """Lower-cased file extension without the leading dot."""
        if self.path is None:
            return ""
        return self.path.suffix[1:].lower()

    def exists(self) -> bool:
        return self.path is not None and self.path.is_file()

    def read(self) -> bytes:
        """Read the file.

        Raises:
            MissingSourceError: If no path is set
            ConfigReadError: If the file cannot be read
        """
        path = self._require_path()
        try:
            return path.read_bytes()
        except OSError as e:
            raise ConfigReadError(
                f"Reading Config File Failed: {e}", path=str(path)
            ) from e

    def write(self, data: bytes) -> None:
        """Write the file, creating missing parent directories.

        Raises:
            MissingSourceError: If no path is set
            ConfigWriteError: If the file cannot be written
        """
        path = self._require_path()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise ConfigWriteError(
                f"Writing Config File Failed: {e}", path=str(path)
            ) from e
        logger.debug(f"Wrote config file: {{'path': {str(path)!r}, 'bytes': {len(data)}}}")

    def on_changed(self, callback: Callable[[], None]) -> FileWatcher:
        """Start watching the file; returns once the watch is active.

        Raises:
            MissingSourceError: If no path is set
            ConfigReadError: If the containing directory cannot be watched
        """
        path = self._require_path()
        try:
            return FileWatcher(path, callback).start()
        except OSError as e:
            raise ConfigReadError(
                f"Watching Config File Failed: {e}", path=str(path)
            ) from e


def default_search_paths(app_name: str) -> List[Path]:
    """Directories searched for a configuration file, in priority order.

    The current working directory, then the user config directory, then
    the site-wide config directory (e.g. ``/etc/xdg/<app_name>``).
    """
    return [
        Path.cwd(),
        Path(platformdirs.user_config_dir(appname=app_name, appauthor=False)),
        Path(platformdirs.site_config_dir(appname=app_name, appauthor=False)),
    ]


def find_config_file(
    name: str,
    search_paths: Iterable[PathLike],
    formats: Optional[Iterable[str]] = None,
) -> Optional[Path]:
    """Find the first existing ``<dir>/<name>.<ext>``.

    Args:
        name: File name without extension
        search_paths: Directories to search, in priority order
        formats: Extensions to try, in order (default: all registered formats)

    Returns:
        Path to the configuration file, or None if none exists
    """
    extensions = list(formats) if formats is not None else supported_formats()
    for directory in search_paths:
        for ext in extensions:
            candidate = Path(directory) / f"{name}.{ext}"
            if candidate.is_file():
                logger.debug(f"Found config file: {{'path': {str(candidate)!r}}}")
                return candidate
    logger.debug(f"No config file named {name!r} found")
    return None
