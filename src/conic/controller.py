"""Root configuration controller and sub-views.

A ``Conic`` owns one configuration tree read from one source. Typed
references bound with ``bind()`` are filled on ``load()`` and written
back on ``save()``. ``watch()`` reloads whenever the file changes.

Lifecycle::

    UNCONFIGURED --set_config_file/set_config_type--> CONFIGURED
    CONFIGURED   --load--> LOADED
    LOADED       --load/save--> LOADED
"""

import copy
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

from .adapters import Adapter, get_adapter
from .bindings import Binding, BindingRegistry
from .dispatch import NotificationQueue
from .errors import (
    ConfigEncodeError,
    ConfigFileAlreadyExistsError,
    ConfigKeyError,
    ConfigReadError,
    ConicError,
    UnsupportedFormatError,
)
from .logging import setup_logging_from_config
from .paths import DEFAULT_DELIMITER, contains, lookup, navigate, split_path
from .settings import ConicSettings
from .source import ConfigSource, RegularFile, default_search_paths, find_config_file
from .watcher import FileWatcher

logger = logging.getLogger(__name__)

LogFunc = Callable[..., None]


class ConicState(str, Enum):
    """Lifecycle state of a controller."""

    UNCONFIGURED = "unconfigured"
    CONFIGURED = "configured"
    LOADED = "loaded"


class Conic:
    """Loads, saves and watches one configuration file."""

    def __init__(self, key_delimiter: str = DEFAULT_DELIMITER, logger: Optional[LogFunc] = None) -> None:
        if len(key_delimiter) != 1:
            raise ValueError(f"key_delimiter must be a single character, got {key_delimiter!r}")
        self.key_delimiter = key_delimiter
        self._log: LogFunc = _default_log
        if logger is not None:
            self.set_logger(logger)

        self._source: ConfigSource = RegularFile()
        self._config_type = ""
        self._explicit_type = False
        self._adapter: Optional[Adapter] = None

        self._config: Dict[str, Any] = {}
        self._bindings = BindingRegistry(key_delimiter)
        self._loaded = False

        self._on_load: List[Callable[[], None]] = []
        self._notifications = NotificationQueue()
        self._watcher: Optional[FileWatcher] = None

    @classmethod
    def from_settings(cls, settings: ConicSettings) -> "Conic":
        """Build a controller from validated settings.

        Args:
            settings: Controller settings

        Returns:
            Configured (and, if requested, loaded and watching) controller

        Raises:
            ConicError: If the requested format, load or watch fails
        """
        if settings.logging is not None:
            setup_logging_from_config(settings.logging)

        conic = cls(key_delimiter=settings.key_delimiter)
        if settings.config_file:
            conic.set_config_file(settings.config_file)
        elif settings.config_name:
            conic.locate(
                settings.config_name,
                search_paths=settings.search_paths or None,
                app_name=settings.app_name,
            )
        if settings.config_type:
            conic.set_config_type(settings.config_type)

        if settings.load:
            conic.load()
        if settings.watch:
            conic.watch()
        return conic

    def __repr__(self) -> str:
        return f"Conic(source={self._source!r}, type={self._config_type!r}, state={self.state.value!r})"

    def __enter__(self) -> "Conic":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    @property
    def state(self) -> ConicState:
        if self._loaded:
            return ConicState.LOADED
        if self._adapter is not None or self.config_file is not None:
            return ConicState.CONFIGURED
        return ConicState.UNCONFIGURED

    @property
    def config_file(self) -> Optional[Path]:
        return getattr(self._source, "path", None)

    @property
    def config_type(self) -> str:
        return self._config_type

    @property
    def adapter(self) -> Optional[Adapter]:
        return self._adapter

    @property
    def source(self) -> ConfigSource:
        return self._source

    def set_logger(self, log: Union[LogFunc, logging.Logger]) -> None:
        """Replace the message sink.

        Args:
            log: ``log(message, *args)`` with ``%``-style args, or a Logger
                (its ``info`` method is used)
        """
        if isinstance(log, logging.Logger):
            log = log.info
        self._log = log

    def set_config_file(self, path: Union[str, Path, None]) -> None:
        """Use the file at ``path``; its extension selects the format.

        An empty path is ignored. An unrecognised extension is logged and
        the format is left for ``set_config_type``.
        """
        if not path:
            return
        self.set_source(RegularFile(path))

    def set_source(self, source: ConfigSource) -> None:
        """Use an arbitrary ConfigSource."""
        self._source = source
        if self._explicit_type:
            return
        try:
            self._select_format(source.type())
        except UnsupportedFormatError as e:
            self._log("cannot infer config type: %s", e)

    def set_config_type(self, format_id: str) -> None:
        """Select the format explicitly.

        An empty id infers the format from the source name.

        Raises:
            UnsupportedFormatError: If the format is unknown; the current
                adapter is kept
        """
        self._select_format(format_id or self._source.type())
        self._explicit_type = bool(format_id)

    def use_adapter(self, adapter: Adapter) -> None:
        """Use an adapter instance instead of a registered format."""
        self._adapter = adapter
        self._config_type = adapter.name or self._config_type
        self._explicit_type = True

    def locate(
        self,
        name: str,
        search_paths: Optional[Iterable[Union[str, Path]]] = None,
        app_name: str = "conic",
    ) -> Optional[Path]:
        """Find ``<name>.<ext>`` in the search paths and use it.

        Args:
            name: File name without extension
            search_paths: Directories to search (default: cwd, user and
                site config directories for app_name)
            app_name: Application name for the default directories

        Returns:
            The file found, or None (the source is then left unchanged)
        """
        paths = list(search_paths) if search_paths is not None else default_search_paths(app_name)
        found = find_config_file(name, paths)
        if found is not None:
            self.set_config_file(found)
        return found

    def _select_format(self, format_id: str) -> None:
        adapter = get_adapter(format_id)
        self._adapter = adapter
        self._config_type = format_id.lower()

    def _require_adapter(self) -> Adapter:
        if self._adapter is None:
            self._select_format(self._config_type or self._source.type())
        return self._adapter

    # ------------------------------------------------------------------
    # Bindings and observers
    # ------------------------------------------------------------------
    def bind(self, key: str, target: Any) -> Binding:
        """Keep ``target`` in sync with the subtree at ``key``.

        Bindings are applied in registration order on every load and
        save. Binding the same key twice registers two bindings.
        """
        return self._bind_path(split_path(key, self.key_delimiter), target)

    def _bind_path(self, path: Sequence[str], target: Any, writeback: bool = True) -> Binding:
        return self._bindings.register(path, target, writeback)

    @property
    def bindings(self) -> List[Binding]:
        return list(self._bindings)

    def on_load(self, callback: Callable[[], None]) -> None:
        """Call ``callback`` after every successful load.

        Callbacks run on the controller's notification thread, in FIFO
        order per callback; no ordering across callbacks is promised.
        """
        self._on_load.append(callback)

    def wait_for_notifications(self, timeout: Optional[float] = None) -> bool:
        """Block until queued on-load callbacks have run."""
        return self._notifications.join(timeout)

    # ------------------------------------------------------------------
    # Load / save
    # ------------------------------------------------------------------
    def load(self) -> None:
        """Read the source and synchronize every binding.

        The new tree replaces the current one only if every binding was
        updated; on failure the previous tree and the previous values of
        all bound targets are kept.

        Raises:
            MissingSourceError: If no config file is set
            ConfigReadError: If the file cannot be read or decoded, or its
                top level is not a mapping
            UnsupportedFormatError: If no format can be determined
            BindingError: If a bound target rejects its subtree
        """
        self._log("attempting to read in config file")

        data = self._source.read()
        adapter = self._require_adapter()

        try:
            tree = adapter.decode(data)
        except Exception as e:
            raise ConfigReadError(
                f"Reading Config File Failed: {e}", path=str(self.config_file)
            ) from e
        if not isinstance(tree, dict):
            raise ConfigReadError(
                f"Reading Config File Failed: top level is {type(tree).__name__}, not a mapping",
                path=str(self.config_file),
            )

        self._bindings.synchronize_from_tree(tree, adapter)

        self._config = tree
        self._loaded = True
        logger.debug(
            "Loaded config",
            extra={"extra_fields": {"path": str(self.config_file), "keys": len(tree)}},
        )

        for callback in self._on_load:
            self._notifications.submit(callback)

    def save(self) -> None:
        """Write every binding into the tree, then write the tree out.

        Raises:
            BindingError: If a bound target cannot be dumped
            ConfigEncodeError: If the tree cannot be encoded
            MissingSourceError: If no config file is set
            ConfigWriteError: If the file cannot be written
        """
        self._source.write(self._encode_tree(self._require_adapter()))

    def safe_save(self) -> None:
        """Like save(), but never overwrite an existing file.

        Raises:
            ConfigFileAlreadyExistsError: If the config file exists
        """
        if self._source.exists():
            raise ConfigFileAlreadyExistsError(str(self.config_file))
        self.save()

    def save_as(self, path: Union[str, Path], overwrite: bool = False) -> None:
        """Write the configuration to another file.

        The format follows the extension of ``path`` when it is a known
        one, else the current format. The controller keeps its own source.

        Raises:
            ConfigFileAlreadyExistsError: If path exists and overwrite is False
        """
        target = RegularFile(path)
        if target.exists() and not overwrite:
            raise ConfigFileAlreadyExistsError(str(path))
        try:
            adapter = get_adapter(target.type())
        except UnsupportedFormatError:
            adapter = self._require_adapter()
        target.write(self._encode_tree(adapter))

    def _encode_tree(self, adapter: Adapter) -> bytes:
        self._bindings.synchronize_to_tree(self._config, adapter)
        try:
            return adapter.encode(self._config)
        except Exception as e:
            raise ConfigEncodeError(f"While marshaling config: {e}") from e

    # ------------------------------------------------------------------
    # Watching
    # ------------------------------------------------------------------
    def watch(self) -> None:
        """Reload whenever the config file changes.

        Returns once the watch is active. Reload errors are logged, not
        raised. Watching stops when the file is deleted or on close().
        """
        if self._watcher is not None and self._watcher.is_alive:
            return
        self._watcher = self._source.on_changed(self._reload)

    def _reload(self) -> None:
        try:
            self.load()
        except ConicError as e:
            self._log("read config file: %s", e)

    @property
    def watching(self) -> bool:
        return self._watcher is not None and self._watcher.is_alive

    def stop_watching(self) -> None:
        if self._watcher is not None:
            self._watcher.stop()
            self._watcher = None

    def close(self) -> None:
        """Stop watching and shut down the notification thread."""
        self.stop_watching()
        self._notifications.close()

    # ------------------------------------------------------------------
    # Key access
    # ------------------------------------------------------------------
    @property
    def tree(self) -> Dict[str, Any]:
        """The live configuration tree."""
        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        """Return a copy of the value at ``key``, or ``default``."""
        return _get(self._config, split_path(key, self.key_delimiter), default)

    def is_set(self, key: str) -> bool:
        return contains(self._config, split_path(key, self.key_delimiter))

    def set(self, key: str, value: Any) -> None:
        """Set the value at ``key``, creating missing parent mappings.

        Raises:
            ConfigKeyError: If a parent of key holds a non-mapping value
        """
        _set(self._config, split_path(key, self.key_delimiter), value, key)

    def all_settings(self) -> Dict[str, Any]:
        """Deep copy of the whole tree."""
        return copy.deepcopy(self._config)

    def sub(self, key: str) -> "SubConic":
        """Return a view of the subtree at ``key``."""
        return SubConic(self, split_path(key, self.key_delimiter))


class SubConic:
    """View of one subtree of a root controller.

    The view keeps a snapshot of its subtree, bound on the root as a
    load-only binding: root loads refresh the snapshot. ``get`` reads the
    snapshot; ``set`` writes both the snapshot and the root tree, so the
    next root save carries it. Bindings made through the view are
    registered on the root under the view's prefix. Loading, saving and
    watching are delegated to the root.
    """

    def __init__(self, root: Conic, prefix: Sequence[str]) -> None:
        self._root = root
        self.prefix = tuple(prefix)
        self._config: Dict[str, Any] = {}

        current = lookup(root.tree, self.prefix)
        if isinstance(current, dict):
            self._config.update(copy.deepcopy(current))
        root._bind_path(self.prefix, self._config, writeback=False)

    def __repr__(self) -> str:
        return f"SubConic(root={self._root!r}, prefix={self.key!r})"

    @property
    def root(self) -> Conic:
        return self._root

    @property
    def key(self) -> str:
        return self._root.key_delimiter.join(self.prefix)

    @property
    def key_delimiter(self) -> str:
        return self._root.key_delimiter

    @property
    def config_type(self) -> str:
        return self._root.config_type

    @property
    def tree(self) -> Dict[str, Any]:
        return self._config

    def _path(self, key: str) -> List[str]:
        return split_path(key, self.key_delimiter)

    def bind(self, key: str, target: Any) -> Binding:
        return self._root._bind_path(self.prefix + tuple(self._path(key)), target)

    def get(self, key: str, default: Any = None) -> Any:
        return _get(self._config, self._path(key), default)

    def is_set(self, key: str) -> bool:
        return contains(self._config, self._path(key))

    def set(self, key: str, value: Any) -> None:
        """Set ``key`` in the view and at the prefixed key of the root.

        Raises:
            ConfigKeyError: If a parent of key holds a non-mapping value
        """
        path = self._path(key)
        _set(self._root.tree, self.prefix + tuple(path), copy.deepcopy(value), key)
        _set(self._config, path, value, key)

    def all_settings(self) -> Dict[str, Any]:
        return copy.deepcopy(self._config)

    def sub(self, key: str) -> "SubConic":
        return SubConic(self._root, self.prefix + tuple(self._path(key)))

    def load(self) -> None:
        self._root.load()

    def save(self) -> None:
        self._root.save()

    def safe_save(self) -> None:
        self._root.safe_save()

    def save_as(self, path: Union[str, Path], overwrite: bool = False) -> None:
        self._root.save_as(path, overwrite)

    def watch(self) -> None:
        self._root.watch()

    def set_logger(self, log: Union[LogFunc, logging.Logger]) -> None:
        self._root.set_logger(log)

    def close(self) -> None:
        self._root.close()

    def on_load(self, callback: Callable[[], None]) -> None:
        self._root.on_load(callback)

    def wait_for_notifications(self, timeout: Optional[float] = None) -> bool:
        return self._root.wait_for_notifications(timeout)


def _default_log(message: str, *args: Any) -> None:
    logger.info(message, *args)


def _get(tree: Dict[str, Any], path: Sequence[str], default: Any) -> Any:
    value = lookup(tree, path, default)
    if value is default:
        return default
    return copy.deepcopy(value)


def _set(tree: Dict[str, Any], path: Sequence[str], value: Any, key: str) -> None:
    if not path:
        if not isinstance(value, dict):
            raise ConfigKeyError("The root value must be a mapping", key=key)
        tree.clear()
        tree.update(value)
        return
    parent = navigate(tree, path[:-1])
    if parent is None:
        raise ConfigKeyError(f"Cannot set {key!r}: a parent key holds a non-mapping value", key=key)
    parent[path[-1]] = value
