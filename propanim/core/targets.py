"""
Target handles - the engine's view of externally owned objects.

Tracks never own their targets. Each target is wrapped once, when the
track is built, in an adapter exposing ``get``/``set`` by property name.
"""

from collections.abc import MutableMapping
from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class PropertyTarget(Protocol):
    """
    Capability interface for animated objects.

    Usage:
        target = as_target({"x": 0})
        target.set("x", target.get("x") + 1)
    """

    def get(self, name: str) -> Any:
        """Read the current value of a property."""
        ...

    def set(self, name: str, value: Any) -> None:
        """Write a property value."""
        ...


class MappingTarget:
    """Adapter for dict-like targets."""

    def __init__(self, mapping: MutableMapping[str, Any]):
        self.obj = mapping

    def get(self, name: str) -> Any:
        return self.obj[name]

    def set(self, name: str, value: Any) -> None:
        self.obj[name] = value

    def __repr__(self) -> str:
        return f"MappingTarget({self.obj!r})"


class AttributeTarget:
    """Adapter for plain objects; dotted names walk nested attributes."""

    def __init__(self, obj: Any):
        self.obj = obj

    def _owner(self, name: str):
        owner = self.obj
        *path, leaf = name.split(".")
        for part in path:
            owner = getattr(owner, part)
        return owner, leaf

    def get(self, name: str) -> Any:
        owner, leaf = self._owner(name)
        return getattr(owner, leaf)

    def set(self, name: str, value: Any) -> None:
        owner, leaf = self._owner(name)
        setattr(owner, leaf, value)

    def __repr__(self) -> str:
        return f"AttributeTarget({self.obj!r})"


class CallableSource:
    """Read-only source wrapping a zero-argument callable (recording input)."""

    def __init__(self, func: Callable[[], Any]):
        self.func = func

    def get(self, name: str = None) -> Any:
        return self.func()

    def set(self, name: str, value: Any) -> None:
        raise TypeError("CallableSource is read-only")


def as_target(obj: Any):
    """
    Wrap ``obj`` in the matching adapter.

    Objects that already implement ``get``/``set`` are returned as-is,
    mappings get ``MappingTarget`` and anything else ``AttributeTarget``.
    """
    if isinstance(obj, (MappingTarget, AttributeTarget, CallableSource)):
        return obj
    if isinstance(obj, MutableMapping):
        return MappingTarget(obj)
    if isinstance(obj, PropertyTarget):
        return obj
    return AttributeTarget(obj)


__all__ = [
    "PropertyTarget",
    "MappingTarget",
    "AttributeTarget",
    "CallableSource",
    "as_target",
]
