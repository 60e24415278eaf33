"""Schema normalization helpers.

Turns the shorthand forms a configuration record may use into canonical
data, and compiles a record into a node model.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import numpy as np
import pandas as pd
from pydantic import ValidationError

from ._types import UNDEFINED, TypeSpec
from .converters import KINDS, TYPE_ALIASES, MaskConfigurationError, construct_coercer
from .models import (
    AnyNode,
    CoerceNode,
    CombinedNode,
    ListNode,
    ListOfNode,
    Node,
    ObjectNode,
    SetNode,
)

if TYPE_CHECKING:
    from .core import Mask

logger = logging.getLogger(__name__)

HOOK_KEYS = ("parse", "validate", "validate_after", "on_invalid")


def _identity(value: Any) -> Any:
    return value


def _integral(value: Any) -> Any:
    number = value.item() if isinstance(value, np.generic) else value
    if isinstance(number, float) and not number.is_integer():
        return None
    return value


def strict_coercer_config(kind: str) -> dict[str, Any]:
    """Coercion mapping that lets only ``kind`` through and rejects the rest.

    Python type names are accepted as aliases. ``integer`` passes integral
    numbers only.

    Raises:
        MaskConfigurationError: If ``kind`` is not a runtime kind
    """
    kind = TYPE_ALIASES.get(kind, kind)
    config: dict[str, Any] = dict.fromkeys(KINDS)
    if kind == "integer":
        config["number"] = _integral
    elif kind in KINDS:
        config[kind] = _identity
    else:
        raise MaskConfigurationError(
            f"Unknown strict type: {kind}. Use one of: integer, {', '.join(KINDS)}"
        )
    return config


def resolve_type_spec(type_spec: TypeSpec | None) -> TypeSpec | None:
    """Expand a ``"kind:strict"`` type string into a strict coercion mapping.

    Other strings lose any suffix; mappings and ``None`` pass through.
    """
    if isinstance(type_spec, str):
        kind, *rest = type_spec.split(":")
        if rest and rest[0] == "strict":
            return strict_coercer_config(kind)
        return kind
    return type_spec


def get_default_value(options: Mapping[str, Any]) -> Any:
    """Select the default value of a configuration record.

    A ``set`` without an explicit ``default`` falls back to its first value.
    """
    if options.get("type") == "set" and "default" not in options:
        values = options.get("values")
        return values[0] if values is not None and len(values) > 0 else None
    return options.get("default")


def normalize_properties(properties: Any) -> dict[str, Any] | None:
    """Turn a list of property names into a mapping of ``any`` schemas."""
    if properties is None:
        return None
    if isinstance(properties, (list, tuple)):
        return {name: {"type": "any"} for name in properties}
    return dict(properties)


def ensure_list(value: Any) -> list[Any]:
    """Make sure the value is a list. ``UNDEFINED`` becomes an empty list."""
    if value is UNDEFINED:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    if isinstance(value, (np.ndarray, pd.Series)):
        return value.tolist()
    return [value]


def get_config_mask(schema: Any) -> Mask:
    """Accept a configuration record, a type name or a Mask; return a Mask.

    A bare type name is a strict coercion to that kind with ``None`` default.
    """
    from .core import Mask

    if isinstance(schema, Mask):
        return schema
    if isinstance(schema, str):
        return Mask({"type": strict_coercer_config(schema), "default": None})
    if isinstance(schema, Mapping):
        return Mask(schema if isinstance(schema, dict) else dict(schema))
    raise MaskConfigurationError(
        f"Expected configuration, type name or Mask, got {type(schema).__name__}"
    )


def _compile_object(options: Mapping[str, Any], common: dict[str, Any]) -> ObjectNode:
    properties = normalize_properties(options.get("properties"))
    if properties is not None:
        properties = {key: get_config_mask(value) for key, value in properties.items()}
    return ObjectNode.model_validate(
        {
            **common,
            "properties": properties,
            "keep_properties": bool(options.get("keep_properties")),
        }
    )


def _compile_combined(options: Mapping[str, Any], common: dict[str, Any]) -> CombinedNode:
    submasks = options.get("submasks")
    if submasks is None:
        raise MaskConfigurationError("Type 'combined' requires 'submasks'")
    return CombinedNode.model_validate(
        {**common, "submasks": [get_config_mask(submask) for submask in submasks]}
    )


def _compile_list_of(options: Mapping[str, Any], common: dict[str, Any]) -> ListOfNode:
    submask = options.get("submask")
    subtype = options.get("subtype")
    fields: dict[str, Any] = {"filter": options.get("filter")}

    # submask wins over subtype; neither means a list of anything
    if submask is not None:
        fields["submask"] = get_config_mask(submask)
    elif subtype is not None:
        fields["coerce"] = construct_coercer(subtype)
    else:
        fields["submask"] = get_config_mask({"type": "any"})

    return ListOfNode.model_validate({**common, **fields})


def compile_node(options: Mapping[str, Any]) -> Node:
    """Compile a configuration record into its node model.

    Args:
        options: Configuration record

    Returns:
        The node model selected by the record's ``type``

    Raises:
        MaskConfigurationError: If the record is malformed
    """
    type_spec = options.get("type")
    common = {key: options[key] for key in HOOK_KEYS if key in options}
    common["default"] = get_default_value(options)

    try:
        if type_spec == "any":
            node: Node = AnyNode.model_validate(common)
        elif type_spec == "object":
            node = _compile_object(options, common)
        elif type_spec in ("set", "list"):
            model = SetNode if type_spec == "set" else ListNode
            node = model.model_validate({**common, "values": options.get("values")})
        elif type_spec == "combined":
            node = _compile_combined(options, common)
        elif type_spec == "list_of":
            node = _compile_list_of(options, common)
        else:
            coerce = construct_coercer(resolve_type_spec(type_spec))
            node = CoerceNode.model_validate({**common, "coerce": coerce})
    except ValidationError as e:
        raise MaskConfigurationError(f"Invalid mask configuration: {e}") from e

    logger.debug("Compiled %s node", node.kind)
    return node
