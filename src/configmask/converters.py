"""Primitive coercion for configmask.

A coercer is a function that maps an arbitrary value to a value of a target
kind, or to ``None`` when no sensible conversion exists. Masks only rely on
:func:`construct_coercer`; the conversions themselves live here.
"""

import math
import re
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional, Set, Union

import numpy as np
import pandas as pd

from ._types import UNDEFINED, Coercer, TypeSpec


# Runtime kinds a value can have, as reported by get_kind()
KINDS = ("null", "array", "string", "number", "undefined", "boolean", "object", "function")

FALSE_STRINGS = frozenset({"", "false", "0", "no", "off"})

NUMBER_PATTERN = re.compile(r"\s*[-+]?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?\s*", re.ASCII)


class MaskConfigurationError(ValueError):
    """Raised when a mask configuration cannot be compiled."""

    pass


def get_kind(value: Any) -> str:
    """Return the runtime kind name of a value."""
    if value is UNDEFINED:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, (bool, np.bool_)):
        return "boolean"
    if isinstance(value, (int, float, np.integer, np.floating)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple, np.ndarray, pd.Series)):
        return "array"
    if isinstance(value, dict):
        return "object"
    if callable(value):
        return "function"
    return "object"


def _parse_number(text: str) -> Optional[Union[int, float]]:
    if not NUMBER_PATTERN.fullmatch(text):
        return None
    text = text.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _plain(value: Any) -> Any:
    # numpy scalars -> builtin int/float/bool
    return value.item() if isinstance(value, np.generic) else value


class TypeCoercer:
    """Built-in conversions, one per coercion kind."""

    @staticmethod
    def to_number(value: Any) -> Any:
        kind = get_kind(value)
        if kind == "boolean":
            return int(bool(value))
        if kind == "number":
            value = _plain(value)
            return None if isinstance(value, float) and math.isnan(value) else value
        if kind == "string":
            return _parse_number(value)
        return None

    @staticmethod
    def to_integer(value: Any) -> Any:
        number = TypeCoercer.to_number(value)
        if number is None:
            return None
        if isinstance(number, float):
            if not number.is_integer():
                return None
            return int(number)
        return number

    @staticmethod
    def to_boolean(value: Any) -> Any:
        kind = get_kind(value)
        if kind == "boolean":
            return bool(value)
        if kind == "number":
            value = _plain(value)
            if isinstance(value, float) and math.isnan(value):
                return None
            return value != 0
        if kind == "string":
            return value.strip().lower() not in FALSE_STRINGS
        return None

    @staticmethod
    def to_string(value: Any) -> Any:
        kind = get_kind(value)
        if kind == "string":
            return value
        if kind == "boolean":
            return "true" if value else "false"
        if kind == "number":
            value = _plain(value)
            if isinstance(value, float):
                if math.isnan(value):
                    return None
                if value.is_integer():
                    return str(int(value))
            return str(value)
        return None

    @staticmethod
    def to_text(value: Any) -> Any:
        return TypeCoercer._join_text(value, set())

    @staticmethod
    def _join_text(value: Any, seen: Set[int]) -> Any:
        kind = get_kind(value)
        if kind in ("null", "undefined"):
            return ""
        if kind == "array":
            # arrays already being joined render as empty text
            if id(value) in seen:
                return ""
            seen = seen | {id(value)}
            items = value.tolist() if isinstance(value, (np.ndarray, pd.Series)) else value
            return ",".join(TypeCoercer._join_text(item, seen) or "" for item in items)
        return TypeCoercer.to_string(value)

    @staticmethod
    def to_array(value: Any) -> Any:
        if get_kind(value) != "array":
            return None
        if isinstance(value, (np.ndarray, pd.Series)):
            return value.tolist()
        return list(value)

    @staticmethod
    def to_object(value: Any) -> Any:
        return value if isinstance(value, dict) else None

    @staticmethod
    def to_function(value: Any) -> Any:
        return value if get_kind(value) == "function" else None


COERCERS: Dict[str, Coercer] = {
    "number": TypeCoercer.to_number,
    "integer": TypeCoercer.to_integer,
    "boolean": TypeCoercer.to_boolean,
    "string": TypeCoercer.to_string,
    "text": TypeCoercer.to_text,
    "array": TypeCoercer.to_array,
    "object": TypeCoercer.to_object,
    "function": TypeCoercer.to_function,
}

# Python type names accepted in place of coercion kinds
TYPE_ALIASES = {
    "str": "string",
    "int": "integer",
    "float": "number",
    "bool": "boolean",
    "list": "array",
    "dict": "object",
}


def _reject(value: Any) -> None:
    return None


def _mapping_coercer(mapping: Mapping[str, Optional[Callable[[Any], Any]]]) -> Coercer:
    handlers = dict(mapping)

    def coerce(value: Any) -> Any:
        handler = handlers.get(get_kind(value))
        return handler(value) if callable(handler) else None

    return coerce


def construct_coercer(type_spec: Optional[TypeSpec]) -> Coercer:
    """Build a coercion function for a type specification.

    Args:
        type_spec: A coercion kind name (``"number"``, ``"text"``, ...), or a
            mapping from runtime kind name to a per-kind conversion function.
            ``None`` builds a coercer that rejects everything.

    Returns:
        Function mapping any value to the coerced value or ``None``

    Raises:
        MaskConfigurationError: If the kind name is unknown
    """
    if type_spec is None:
        return _reject
    if isinstance(type_spec, Mapping):
        return _mapping_coercer(type_spec)
    if isinstance(type_spec, str):
        name = TYPE_ALIASES.get(type_spec, type_spec)
        try:
            return COERCERS[name]
        except KeyError:
            raise MaskConfigurationError(
                f"Unknown coercion type: {type_spec}. Use one of: {', '.join(COERCERS)}"
            ) from None
    raise MaskConfigurationError(
        f"Coercion type must be a string or a mapping, got {type(type_spec).__name__}"
    )
