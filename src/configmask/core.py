"""Core sanitation logic for configmask."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

from ._types import UNDEFINED
from .handlers import dispatch
from .models import Node, rebuild_models
from .normalize import compile_node

logger = logging.getLogger(__name__)


class Mask:
    """Schema node that turns untrusted input into a value of a known shape.

    The mask is backed by a configuration record with keys such as ``type``,
    ``default``, ``values`` and ``properties``. Sanitizing never fails on
    input data: anything that does not fit is replaced by the node's default.

    Example:
        >>> size = Mask({
        ...     "type": "object",
        ...     "properties": {
        ...         "value": {"type": "number", "default": 0},
        ...         "unit": {"type": "set", "values": ["px", "%"]},
        ...     },
        ... })
        >>> size.sanitize({"value": "100"})
        {'value': 100, 'unit': 'px'}
        >>> size.sanitize("xxx")
        {'value': 0, 'unit': 'px'}
    """

    def __init__(self, config: dict[str, Any] | None = None):
        """Initialize the mask with a configuration record.

        Args:
            config: Configuration record. The dict is used as is, not copied.
        """
        self._options: dict[str, Any] = {}
        self._node: Node | None = None
        self.set_options({} if config is None else config)

    @classmethod
    def from_file(cls, path: str | Path) -> Mask:
        """Create a Mask from a YAML or JSON configuration file."""
        from .loaders import load_config_from_file

        return cls(load_config_from_file(path))

    @property
    def options(self) -> dict[str, Any]:
        """The configuration record.

        Mutating it in place is only picked up after ``set_options`` or
        ``update_options`` is called.
        """
        return self._options

    @property
    def node(self) -> Node:
        """Compiled form of the configuration record, built on first use."""
        node = self._node
        if node is None:
            node = compile_node(self._options)
            self._node = node
        return node

    def set_options(self, config: dict[str, Any]) -> None:
        """Replace the configuration record."""
        self._options = config
        self._node = None

    def update_options(self, config: dict[str, Any]) -> None:
        """Add new keys to and replace existing keys in the configuration record.

        The merge is shallow and happens in place.
        """
        self._options.update(config)
        self._node = None

    def sanitize(self, value: Any = UNDEFINED, param: Any = None) -> Any:
        """Apply the mask to a value and return the sanitized result.

        Args:
            value: Input value, ``UNDEFINED`` when absent
            param: Context parameter passed on to every ``parse``/``validate``
                hook and every nested ``sanitize`` call

        Returns:
            Sanitized value, or the default when nothing usable remains
        """
        node = self.node
        default_value = node.default

        value = self.parse(value, param)

        # invalid input is ignored, the default is used instead
        if not self.validate(value, param):
            logger.debug("Input rejected by validate, using default: %r", default_value)
            value = default_value

        result = dispatch(value, node, param)

        if not self.validate(result, param, node.validate_after):
            logger.debug("Result rejected by validate_after")
            result = None

        return default_value if result is None else result

    def parse(self, value: Any, param: Any = None) -> Any:
        """Apply the ``parse`` hook, or return the value unchanged if not set.

        Example:
            >>> prefixed = Mask({"type": "text", "parse": lambda value, param: value + "bbb"})
            >>> prefixed.sanitize("aaa")
            'aaabbb'
        """
        parser = self.node.parser
        return parser(value, param) if parser is not None else value

    def validate(
        self,
        value: Any,
        param: Any = None,
        validation_function: Callable[[Any, Any], Any] | None = UNDEFINED,  # type: ignore[assignment]
    ) -> bool:
        """Check a value with a validation function.

        Args:
            value: Value to check
            param: Passed as second argument to the validation function
            validation_function: Function to use. Defaults to the configured
                ``validate`` hook; ``None`` means no check.

        Returns:
            True if the value is valid or there is nothing to check with.
            On False, the ``on_invalid`` hook is called with the value.
        """
        node = self.node
        if validation_function is UNDEFINED:
            validation_function = node.validator

        result = bool(validation_function(value, param)) if validation_function is not None else True

        if not result and node.on_invalid is not None:
            node.on_invalid(value, param)

        return result

    def clone(self, config: dict[str, Any] | None = None) -> Mask:
        """Create a new Mask from a shallow copy of this one's configuration.

        Args:
            config: Keys that replace or extend the copied configuration

        Returns:
            Independent Mask; nested configuration objects stay shared
        """
        return type(self)({**self._options, **(config or {})})

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._options!r})"


rebuild_models(Mask)
