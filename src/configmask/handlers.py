"""Evaluation strategies, one per node kind.

Each handler takes the (parsed, validated) input, the compiled node and the
context parameter, and returns a candidate result. ``None`` means "no usable
result"; the mask then falls back to the node's default.
"""

from typing import Any, Callable, Dict, List

from ._types import UNDEFINED
from .converters import get_kind
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
from .normalize import ensure_list


def is_member(item: Any, values: List[Any]) -> bool:
    """Check whether item equals one of values.

    Values of different runtime kinds never match, so ``True`` is not a
    member of ``[1]``.
    """
    kind = get_kind(item)
    for candidate in values:
        if candidate is item:
            return True
        if get_kind(candidate) != kind:
            continue
        try:
            if bool(candidate == item):
                return True
        except (TypeError, ValueError):
            # array-likes without a single truth value
            continue
    return False


def handle_any(value: Any, node: AnyNode, param: Any) -> Any:
    return node.default if value is UNDEFINED else value


def handle_object(value: Any, node: ObjectNode, param: Any) -> Any:
    if not isinstance(value, dict):
        value = {}

    if node.properties is None:
        return value

    result = dict(value) if node.keep_properties else {}
    for key, sub_mask in node.properties.items():
        result[key] = sub_mask.sanitize(value.get(key, UNDEFINED), param)
    return result


def handle_set(value: Any, node: SetNode, param: Any) -> Any:
    return value if is_member(value, node.values) else node.default


def handle_list(value: Any, node: ListNode, param: Any) -> List[Any]:
    return [item for item in ensure_list(value) if is_member(item, node.values)]


def handle_combined(value: Any, node: CombinedNode, param: Any) -> Any:
    for submask in node.submasks:
        result = submask.sanitize(value, param)
        if result is not None:
            return result
    return None


def handle_list_of(value: Any, node: ListOfNode, param: Any) -> List[Any]:
    items = ensure_list(value)

    if node.submask is not None:
        result = [node.submask.sanitize(item, param) for item in items]
    else:
        result = [node.coerce(item) for item in items]

    if node.filter is not None:
        result = [item for item in result if node.filter(item)]
    return result


def handle_coerce(value: Any, node: CoerceNode, param: Any) -> Any:
    result = node.coerce(value)
    # an absent result from a custom coercer counts as no result
    return None if result is UNDEFINED else result


HANDLERS: Dict[str, Callable[[Any, Any, Any], Any]] = {
    "any": handle_any,
    "object": handle_object,
    "set": handle_set,
    "list": handle_list,
    "combined": handle_combined,
    "list_of": handle_list_of,
    "coerce": handle_coerce,
}


def dispatch(value: Any, node: Node, param: Any) -> Any:
    """Run the handler matching the node's kind."""
    return HANDLERS[node.kind](value, node, param)
