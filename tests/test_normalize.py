"""Tests for configmask.normalize module."""

import numpy as np
import pytest

from configmask import UNDEFINED, Mask, MaskConfigurationError
from configmask.converters import KINDS
from configmask.models import CoerceNode, ListOfNode, ObjectNode, SetNode
from configmask.normalize import (
    compile_node,
    ensure_list,
    get_config_mask,
    get_default_value,
    normalize_properties,
    resolve_type_spec,
    strict_coercer_config,
)


class TestStrictConfig:
    """Test strict coercion configs."""

    def test_only_named_kind_passes(self):
        config = strict_coercer_config("number")

        assert set(config) == set(KINDS)
        assert config["number"](5) == 5
        assert all(config[kind] is None for kind in KINDS if kind != "number")

    def test_integer(self):
        """Test that integer passes integral numbers only."""
        config = strict_coercer_config("integer")

        assert config["number"](5) == 5
        assert config["number"](5.0) == 5.0
        assert config["number"](5.5) is None
        assert config["string"] is None

        mask = Mask({"type": "integer:strict", "default": 0})
        assert mask.sanitize(5) == 5
        assert mask.sanitize(np.int64(7)) == 7
        assert mask.sanitize(2.5) == 0
        assert mask.sanitize("5") == 0
        assert mask.sanitize(True) == 0

    def test_python_type_names(self):
        """Test that Python type names resolve like in regular coercion."""
        assert strict_coercer_config("str")["string"]("a") == "a"
        assert strict_coercer_config("dict")["array"] is None

        mask = Mask({"type": "combined", "submasks": ["int"], "default": 0})
        assert mask.sanitize(5) == 5
        assert mask.sanitize("5") == 0

    def test_unknown_kind(self):
        with pytest.raises(MaskConfigurationError, match="Unknown strict type: colour"):
            strict_coercer_config("colour")
        with pytest.raises(MaskConfigurationError, match="Unknown strict type: text"):
            Mask({"type": "text:strict"}).sanitize("a")
        with pytest.raises(MaskConfigurationError):
            Mask({"type": "combined", "submasks": ["colour"]}).sanitize("a")

    def test_resolve_type_spec(self):
        """Test the ':strict' suffix and other suffixes."""
        assert resolve_type_spec("number") == "number"
        assert resolve_type_spec("number:loose") == "number"
        assert resolve_type_spec("string:strict")["string"]("a") == "a"
        assert resolve_type_spec(None) is None

        mapping = {"string": str}
        assert resolve_type_spec(mapping) is mapping


class TestDefaults:
    """Test default value resolution."""

    def test_default(self):
        assert get_default_value({"type": "number", "default": 3}) == 3
        assert get_default_value({"type": "number"}) is None

    def test_set_first_value(self):
        assert get_default_value({"type": "set", "values": ["a", "b"]}) == "a"

    def test_set_explicit_none(self):
        assert get_default_value({"type": "set", "values": ["a"], "default": None}) is None

    def test_set_without_values(self):
        assert get_default_value({"type": "set", "values": []}) is None
        assert get_default_value({"type": "set"}) is None


class TestShorthands:
    """Test shorthand normalization."""

    def test_property_names(self):
        assert normalize_properties(["a", "b"]) == {"a": {"type": "any"}, "b": {"type": "any"}}

    def test_property_mapping(self):
        props = {"a": {"type": "text"}}
        assert normalize_properties(props) == props
        assert normalize_properties(None) is None

    @pytest.mark.parametrize(
        "value,expected",
        [
            (UNDEFINED, []),
            (None, [None]),
            ("a", ["a"]),
            ((1, 2), [1, 2]),
            (np.array([1, 2]), [1, 2]),
        ],
    )
    def test_ensure_list(self, value, expected):
        assert ensure_list(value) == expected

    def test_ensure_list_keeps_list(self):
        items = [1]
        assert ensure_list(items) is items


class TestGetConfigMask:
    """Test wrapping sub-schemas into masks."""

    def test_mask_kept(self):
        mask = Mask({"type": "any"})
        assert get_config_mask(mask) is mask

    def test_config_wrapped(self):
        config = {"type": "number"}
        mask = get_config_mask(config)

        assert isinstance(mask, Mask)
        assert mask.options is config

    def test_type_name(self):
        """Test that a type name becomes a strict mask with None default."""
        mask = get_config_mask("boolean")

        assert mask.options["default"] is None
        assert mask.sanitize(True) is True
        assert mask.sanitize("true") is None

    def test_invalid(self):
        with pytest.raises(MaskConfigurationError):
            get_config_mask(42)


class TestCompileNode:
    """Test compiling records into node models."""

    def test_object(self):
        node = compile_node({"type": "object", "properties": ["a"], "keep_properties": 1})

        assert isinstance(node, ObjectNode)
        assert node.keep_properties is True
        assert isinstance(node.properties["a"], Mask)

    def test_set(self):
        node = compile_node({"type": "set", "values": ("a", "b")})

        assert isinstance(node, SetNode)
        assert node.values == ["a", "b"]
        assert node.default == "a"

    def test_list_of_subtype(self):
        node = compile_node({"type": "list_of", "subtype": "number"})

        assert isinstance(node, ListOfNode)
        assert node.submask is None
        assert node.coerce("3") == 3

    def test_list_of_default_submask(self):
        node = compile_node({"type": "list_of"})
        assert node.submask.options == {"type": "any"}

    def test_coerce(self):
        node = compile_node({"type": "number", "default": 1})

        assert isinstance(node, CoerceNode)
        assert node.default == 1

    def test_hooks(self):
        def parse(value, param):
            return value

        node = compile_node({"type": "any", "parse": parse})
        assert node.parser is parse
        assert node.validator is None

    def test_invalid_hook(self):
        with pytest.raises(MaskConfigurationError, match="Invalid mask configuration"):
            compile_node({"type": "any", "parse": "not callable"})
