"""Tests for configmask.loaders module."""

from pathlib import Path

import pytest

from configmask import Mask, load_config, load_config_from_file, validate_config_structure

FIXTURES = Path(__file__).parent / "fixtures" / "masks"


class TestLoadConfig:
    """Test loading configurations from strings."""

    def test_yaml(self):
        config = load_config("type: set\nvalues: [a, b]\n")
        assert config == {"type": "set", "values": ["a", "b"]}

    def test_json(self):
        config = load_config('{"type": "number", "default": 0}', format="json")
        assert config == {"type": "number", "default": 0}

    def test_invalid_yaml(self):
        with pytest.raises(ValueError, match="Failed to parse YAML"):
            load_config("type: [unclosed")

    def test_invalid_json(self):
        with pytest.raises(ValueError, match="Failed to parse JSON"):
            load_config("{nope", format="json")

    def test_unsupported_format(self):
        with pytest.raises(ValueError, match="Unsupported format: toml"):
            load_config("", format="toml")


class TestLoadConfigFromFile:
    """Test loading configurations from files."""

    def test_yaml_file(self):
        config = load_config_from_file(FIXTURES / "size.yaml")
        assert config["properties"]["unit"]["values"] == ["px", "%"]

    def test_json_file(self, tmp_path):
        path = tmp_path / "mask.json"
        path.write_text('{"type": "list", "values": [1, 2]}', encoding="utf-8")

        assert load_config_from_file(str(path)) == {"type": "list", "values": [1, 2]}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            load_config_from_file(tmp_path / "missing.yaml")

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "mask.txt"
        path.write_text("type: any", encoding="utf-8")

        with pytest.raises(ValueError, match="Unsupported file extension: .txt"):
            load_config_from_file(path)

    def test_structure_validated(self):
        with pytest.raises(ValueError, match="'values' is a required property"):
            load_config_from_file(FIXTURES / "broken.yaml")

    def test_structure_validation_disabled(self):
        config = load_config_from_file(FIXTURES / "broken.yaml", validate=False)
        assert config == {"type": "set", "default": "a"}


class TestValidateConfigStructure:
    """Test structural validation of loaded configurations."""

    def test_valid(self):
        validate_config_structure(load_config_from_file(FIXTURES / "widget.yml", validate=False))

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="Configuration error"):
            validate_config_structure({"type": "any", "bogus": 1})

    def test_nested_error_location(self):
        config = {"type": "object", "properties": {"a": {"type": "combined"}}}

        with pytest.raises(ValueError, match="Configuration error at 'properties"):
            validate_config_structure(config)

    def test_not_an_object(self):
        with pytest.raises(ValueError, match="Configuration error"):
            validate_config_structure(["type", "any"])


class TestMaskFromFile:
    """Test building masks from configuration files."""

    def test_size(self):
        mask = Mask.from_file(FIXTURES / "size.yaml")

        assert mask.sanitize() == {"value": 0, "unit": "px"}
        assert mask.sanitize({"value": "100", "unit": "%"}) == {"value": 100, "unit": "%"}

    def test_widget(self):
        mask = Mask.from_file(FIXTURES / "widget.yml")
        result = mask.sanitize(
            {
                "title": 42,
                "visible": "yes",
                "tags": ["sale", "cheap"],
                "position": "7",
                "items": [{"id": 1, "label": "a", "extra": True}],
                "unknown": "dropped",
            }
        )

        assert result == {
            "title": "42",
            "visible": True,
            "tags": ["sale"],
            "position": "top",
            "items": [{"id": 1, "label": "a"}],
        }
