"""Bridge between plain configuration data and typed bound references.

A bound reference is any object the caller hands to ``Conic.bind``. On
load the subtree at the bound path is applied to it in place; on save the
reference is dumped back to plain data. Supported references:

- objects implementing the Bindable protocol (``dump_config`` / ``load_config``)
- ``Ref[T]`` holders, validated with a pydantic TypeAdapter for ``T``
- pydantic models, merged and re-validated, then updated field by field
- dataclass instances, same as models
- mutable mappings, whose contents are replaced
"""

import copy
import dataclasses
from collections.abc import MutableMapping
from typing import Any, Generic, Optional, Protocol, Type, TypeVar, runtime_checkable

from pydantic import BaseModel, TypeAdapter

from .paths import deep_merge

T = TypeVar("T")


@runtime_checkable
class Bindable(Protocol):
    """Objects that convert themselves to and from plain config data."""

    def dump_config(self) -> Any:
        ...

    def load_config(self, data: Any) -> None:
        ...


class Ref(Generic[T]):
    """Typed holder for a bound value.

    Useful when the bound value is not itself mutable in place, or when
    the caller wants a fresh validated instance of ``T`` on every load.

    Example::

        ports = Ref(dict[str, int], default={})
        conic.bind("ports", ports)
        conic.load()
        ports.value  # {'http': 80}
    """

    def __init__(self, type_: Type[T], default: Optional[T] = None) -> None:
        self.type = type_
        self.value: Optional[T] = default
        self._adapter: TypeAdapter = TypeAdapter(type_)

    def set(self, data: Any) -> None:
        """Validate ``data`` as ``T`` and store it."""
        self.value = None if data is None else self._adapter.validate_python(data)

    def dump(self) -> Any:
        """Dump the held value to JSON-compatible data."""
        if self.value is None:
            return None
        return self._adapter.dump_python(self.value, mode="json")

    def __repr__(self) -> str:
        return f"Ref({getattr(self.type, '__name__', self.type)!s}, value={self.value!r})"


class UnsupportedTargetError(TypeError):
    """The object cannot be used as a binding target."""


def dump_target(target: Any) -> Any:
    """Convert a bound reference to plain data.

    Raises:
        UnsupportedTargetError: If the target kind is not supported
    """
    if isinstance(target, Bindable):
        return target.dump_config()
    if isinstance(target, Ref):
        return target.dump()
    if isinstance(target, BaseModel):
        return target.model_dump(mode="json")
    if dataclasses.is_dataclass(target) and not isinstance(target, type):
        return TypeAdapter(type(target)).dump_python(target, mode="json")
    if isinstance(target, MutableMapping):
        return copy.deepcopy(dict(target))
    raise UnsupportedTargetError(f"unsupported binding target type {type(target).__name__}")


def apply_to_target(target: Any, data: Any) -> None:
    """Apply plain data to a bound reference in place.

    Models and dataclasses keep the values of fields absent from ``data``;
    nested mappings are merged. Mappings are replaced.

    Raises:
        pydantic.ValidationError: If data does not validate for the target type
        UnsupportedTargetError: If the target kind is not supported
    """
    if isinstance(target, Bindable):
        target.load_config(data)
    elif isinstance(target, Ref):
        target.set(data)
    elif isinstance(target, BaseModel):
        merged = _merge_with_current(target.model_dump(), data)
        validated = type(target).model_validate(merged)
        for name in type(target).model_fields:
            setattr(target, name, getattr(validated, name))
    elif dataclasses.is_dataclass(target) and not isinstance(target, type):
        adapter = TypeAdapter(type(target))
        merged = _merge_with_current(adapter.dump_python(target), data)
        validated = adapter.validate_python(merged)
        for field in dataclasses.fields(target):
            setattr(target, field.name, getattr(validated, field.name))
    elif isinstance(target, MutableMapping):
        target.clear()
        target.update(data or {})
    else:
        raise UnsupportedTargetError(f"unsupported binding target type {type(target).__name__}")


def _merge_with_current(current: Any, data: Any) -> Any:
    if isinstance(current, dict) and isinstance(data, dict):
        return deep_merge(current, data)
    return data
