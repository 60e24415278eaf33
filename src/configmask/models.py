"""Pydantic models for compiled mask nodes.

A mask's configuration record is loose, mutable data. Before a mask sanitizes
anything, the record is compiled into exactly one of the node models below.
Each model carries only the fields its kind needs, with nested sub-schemas
already resolved to ``Mask`` instances.

Example:
    >>> node = SetNode.model_validate({"values": ["px", "%"], "default": "px"})
    >>> node.kind
    'set'
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from .core import Mask


class NodeModel(BaseModel):
    """Fields shared by every compiled node.

    Attributes:
        default: Resolved default value of the node.
        parser: Hook applied to input before validation (``parse``).
        validator: Gate applied to parsed input (``validate``).
        validate_after: Gate applied to the sanitized result.
        on_invalid: Notification hook called when a gate fails.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, arbitrary_types_allowed=True)

    default: Any = None
    parser: Callable[[Any, Any], Any] | None = Field(default=None, alias="parse")
    validator: Callable[[Any, Any], Any] | None = Field(default=None, alias="validate")
    validate_after: Callable[[Any, Any], Any] | None = None
    on_invalid: Callable[[Any, Any], Any] | None = None


class AnyNode(NodeModel):
    """Pass-through node."""

    kind: Literal["any"] = "any"


class ObjectNode(NodeModel):
    """Key-value record with optional fixed properties.

    ``properties`` of ``None`` means a free-form object.
    """

    kind: Literal["object"] = "object"
    properties: dict[str, Mask] | None = None
    keep_properties: bool = False


class SetNode(NodeModel):
    """Single value that must be one of ``values``."""

    kind: Literal["set"] = "set"
    values: list[Any]


class ListNode(NodeModel):
    """List whose items must be members of ``values``."""

    kind: Literal["list"] = "list"
    values: list[Any]


class CombinedNode(NodeModel):
    """Ordered alternatives, the first non-null result wins."""

    kind: Literal["combined"] = "combined"
    submasks: list[Mask]


class ListOfNode(NodeModel):
    """Homogeneous list.

    Exactly one of ``submask`` (full pipeline per item) and ``coerce``
    (item coercion only) is set.
    """

    kind: Literal["list_of"] = "list_of"
    submask: Mask | None = None
    coerce: Callable[[Any], Any] | None = None
    filter: Callable[[Any], Any] | None = None


class CoerceNode(NodeModel):
    """Primitive coercion through a coercer function."""

    kind: Literal["coerce"] = "coerce"
    coerce: Callable[[Any], Any]


Node = Union[AnyNode, ObjectNode, SetNode, ListNode, CombinedNode, ListOfNode, CoerceNode]


def rebuild_models(mask_class: type) -> None:
    """Resolve the forward reference to ``Mask`` in nodes holding sub-masks."""
    namespace = {"Mask": mask_class}
    for model in (ObjectNode, CombinedNode, ListOfNode):
        model.model_rebuild(_types_namespace=namespace)
