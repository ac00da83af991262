"""Format adapters: encode and decode configuration values.

An adapter turns plain Python data (dicts, lists, scalars) into bytes and
back. Adapters are stateless; errors raised by the underlying library are
propagated unchanged.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List

import toml
import yaml

from .errors import UnsupportedFormatError


class Adapter(ABC):
    """Encode/decode strategy for one configuration format."""

    name: str = ""

    @abstractmethod
    def encode(self, value: Any) -> bytes:
        """Serialize a value to bytes."""

    @abstractmethod
    def decode(self, data: bytes) -> Any:
        """Deserialize bytes to plain Python data."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class JsonAdapter(Adapter):
    """JSON via the standard library, two-space indented."""

    name = "json"

    def encode(self, value: Any) -> bytes:
        return json.dumps(value, indent=2, ensure_ascii=False).encode("utf-8")

    def decode(self, data: bytes) -> Any:
        return json.loads(data)


class YamlAdapter(Adapter):
    """YAML via PyYAML safe loader/dumper."""

    name = "yaml"

    def encode(self, value: Any) -> bytes:
        text = yaml.safe_dump(
            value,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
        return text.encode("utf-8")

    def decode(self, data: bytes) -> Any:
        return yaml.safe_load(data)


class TomlAdapter(Adapter):
    """TOML via the toml library.

    TOML documents are always tables, and TOML has no null; encoding a
    tree containing ``None`` drops those keys.
    """

    name = "toml"

    def encode(self, value: Any) -> bytes:
        return toml.dumps(value).encode("utf-8")

    def decode(self, data: bytes) -> Any:
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return toml.loads(data)


_ADAPTERS: Dict[str, Callable[[], Adapter]] = {
    "json": JsonAdapter,
    "yaml": YamlAdapter,
    "yml": YamlAdapter,
    "toml": TomlAdapter,
}


def register_adapter(format_id: str, factory: Callable[[], Adapter]) -> None:
    """Make ``get_adapter(format_id)`` return ``factory()``.

    Args:
        format_id: Format identifier, matched case-insensitively
        factory: Zero-argument callable returning an Adapter
    """
    _ADAPTERS[format_id.lower()] = factory


def supported_formats() -> List[str]:
    """List registered format identifiers."""
    return sorted(_ADAPTERS)


def get_adapter(format_id: str) -> Adapter:
    """Return a new adapter for a format identifier.

    Args:
        format_id: Format identifier such as ``json`` or ``yaml``

    Returns:
        Adapter instance

    Raises:
        UnsupportedFormatError: If no adapter is registered for format_id
    """
    factory = _ADAPTERS.get((format_id or "").lower())
    if factory is None:
        raise UnsupportedFormatError(format_id or "")
    return factory()
