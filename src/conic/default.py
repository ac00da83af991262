"""Module-level convenience functions over one shared controller.

Libraries should create and pass their own ``Conic``; these helpers are
for small scripts that want a single process-wide configuration.
"""

from pathlib import Path
from typing import Any, Callable, Optional, Union

from .adapters import Adapter
from .bindings import Binding
from .controller import Conic, LogFunc, SubConic

# Global instance
_conic = Conic()


def get_conic() -> Conic:
    """Get the shared controller."""
    return _conic


def reset_conic() -> Conic:
    """Close the shared controller and replace it with a fresh one."""
    global _conic
    _conic.close()
    _conic = Conic()
    return _conic


def set_logger(log: LogFunc) -> None:
    _conic.set_logger(log)


def set_config_file(path: Union[str, Path, None]) -> None:
    _conic.set_config_file(path)


def set_config_type(format_id: str) -> None:
    _conic.set_config_type(format_id)


def use_adapter(adapter: Adapter) -> None:
    _conic.use_adapter(adapter)


def bind(key: str, target: Any) -> Binding:
    return _conic.bind(key, target)


def on_load(callback: Callable[[], None]) -> None:
    _conic.on_load(callback)


def load() -> None:
    _conic.load()


def save() -> None:
    _conic.save()


def watch() -> None:
    _conic.watch()


def get(key: str, default: Any = None) -> Any:
    return _conic.get(key, default)


def set(key: str, value: Any) -> None:
    _conic.set(key, value)


def sub(key: str) -> SubConic:
    return _conic.sub(key)


def locate(name: str, app_name: str = "conic") -> Optional[Path]:
    return _conic.locate(name, app_name=app_name)
