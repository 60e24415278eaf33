"""Type definitions for configmask."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Literal, Union


class _Undefined:
    """Marker for a value that was not provided at all.

    ``None`` is a present null value; ``UNDEFINED`` is what an absent input
    or a missing object property looks like to a mask.
    """

    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __copy__(self) -> _Undefined:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Undefined:
        return self

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED = _Undefined()

# Type aliases for better readability
Coercer = Callable[[Any], Any]
CoercionMapping = Mapping[str, Union[Coercer, None]]
TypeSpec = Union[str, CoercionMapping]
SchemaKind = Literal["any", "object", "set", "list", "combined", "list_of"]
RuntimeKind = Literal[
    "null", "array", "string", "number", "undefined", "boolean", "object", "function"
]

ParseHook = Callable[[Any, Any], Any]
ValidateHook = Callable[[Any, Any], Any]
InvalidHook = Callable[[Any, Any], None]
FilterHook = Callable[[Any], Any]

__all__ = [
    "UNDEFINED",
    "Coercer",
    "CoercionMapping",
    "TypeSpec",
    "SchemaKind",
    "RuntimeKind",
    "ParseHook",
    "ValidateHook",
    "InvalidHook",
    "FilterHook",
]
