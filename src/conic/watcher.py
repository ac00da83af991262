"""Watch a single configuration file for changes.

The parent directory is watched rather than the file itself so that
editors which replace the file (write to a temp file, then rename) are
still seen. Events for other files in the directory are ignored.
"""

import logging
import os
import threading
from pathlib import Path
from typing import Callable, Optional

from watchdog.events import (
    FileSystemEvent,
    FileSystemEventHandler,
    FileSystemMovedEvent,
)
from watchdog.observers import Observer

logger = logging.getLogger(__name__)


class ConfigFileHandler(FileSystemEventHandler):
    """Dispatches watchdog events for one file to a callback."""

    def __init__(self, path: Path, on_change: Callable[[], None], on_delete: Callable[[], None]) -> None:
        super().__init__()
        self.path = Path(path).resolve()
        self._on_change = on_change
        self._on_delete = on_delete

    def _is_target(self, src_path: str) -> bool:
        return Path(os.fsdecode(src_path)).resolve() == self.path

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._is_target(event.src_path):
            self._on_change()

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._is_target(event.src_path):
            self._on_change()

    def on_moved(self, event: FileSystemMovedEvent) -> None:
        if event.is_directory:
            return
        if self._is_target(event.dest_path):
            self._on_change()
        elif self._is_target(event.src_path):
            self._on_delete()

    def on_deleted(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._is_target(event.src_path):
            self._on_delete()


class FileWatcher:
    """Runs a watchdog observer for one file.

    ``start()`` returns once the watch is registered. Changes are reported
    on the observer thread. The watcher stops on its own when the file is
    deleted, or when ``stop()`` is called.
    """

    def __init__(self, path: Path, callback: Callable[[], None]) -> None:
        self.path = Path(path)
        self.callback = callback
        self._observer: Optional[Observer] = None
        self._stopped = threading.Event()
        self._lock = threading.Lock()

    @property
    def is_alive(self) -> bool:
        return self._observer is not None and not self._stopped.is_set()

    def start(self) -> "FileWatcher":
        """Start watching.

        Raises:
            OSError: If the parent directory cannot be watched
        """
        with self._lock:
            if self._observer is not None:
                return self
            handler = ConfigFileHandler(self.path, self._handle_change, self._handle_delete)
            observer = Observer()
            observer.schedule(handler, str(self.path.parent.resolve()), recursive=False)
            observer.daemon = True
            observer.start()
            self._observer = observer
        logger.info(f"Watching config file: {{'path': {str(self.path)!r}}}")
        return self

    def _handle_change(self) -> None:
        if self._stopped.is_set():
            return
        logger.debug(f"Config file changed: {{'path': {str(self.path)!r}}}")
        try:
            self.callback()
        except Exception as e:
            logger.error(f"Config change callback failed: {{'error': {str(e)!r}}}", exc_info=True)

    def _handle_delete(self) -> None:
        logger.info(f"Config file removed, stopping watch: {{'path': {str(self.path)!r}}}")
        # Called from the observer thread, which cannot join itself
        self._stopped.set()
        observer = self._observer
        if observer is not None:
            observer.stop()

    def stop(self, timeout: Optional[float] = 2.0) -> None:
        """Stop the observer and wait for its thread to exit."""
        with self._lock:
            observer = self._observer
            self._stopped.set()
        if observer is None:
            return
        observer.stop()
        if observer.is_alive() and observer is not threading.current_thread():
            observer.join(timeout)
        logger.debug(f"Stopped watching: {{'path': {str(self.path)!r}}}")
