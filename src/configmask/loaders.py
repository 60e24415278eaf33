"""Configuration loading utilities for configmask."""

import json
from pathlib import Path
from typing import Any, Dict, Union

import jsonschema
import yaml


def load_config(content: str, format: str = "yaml") -> Dict[str, Any]:
    """Load a mask configuration from string content.

    Args:
        content: Configuration content as string
        format: Format of the content ('yaml' or 'json')

    Returns:
        Configuration dictionary

    Raises:
        ValueError: If format is not supported or parsing fails
    """
    if format == "yaml":
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML: {e}") from e
    elif format == "json":
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse JSON: {e}") from e
    else:
        raise ValueError(f"Unsupported format: {format}. Use 'yaml' or 'json'")


def detect_format(path: Union[str, Path]) -> str:
    """Pick 'yaml' or 'json' from a file extension."""
    suffix = Path(path).suffix.lower()
    if suffix in [".yaml", ".yml"]:
        return "yaml"
    elif suffix == ".json":
        return "json"
    raise ValueError(f"Unsupported file extension: {suffix}. Use .yaml, .yml, or .json")


def load_config_from_file(path: Union[str, Path], validate: bool = True) -> Dict[str, Any]:
    """Load a mask configuration from a YAML or JSON file.

    Args:
        path: Path to the configuration file
        validate: Check the structure against the bundled JSON schema

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file format is not supported, parsing or validation fails
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    content = path.read_text(encoding="utf-8")
    config = load_config(content, format=detect_format(path))

    if validate:
        validate_config_structure(config)
    return config


def validate_config_structure(config: Any) -> None:
    """Validate that a loaded configuration has the expected structure.

    Only file-expressible keys are covered; hooks cannot come from files.

    Args:
        config: Configuration to validate

    Raises:
        ValueError: If the structure is invalid
    """
    schema_path = Path(__file__).parent / "schemas" / "mask-config-1.json"

    with open(schema_path, encoding="utf-8") as f:
        validation_schema = json.load(f)

    try:
        jsonschema.validate(instance=config, schema=validation_schema)
    except jsonschema.ValidationError as e:
        if e.absolute_path:
            location = ".".join(str(p) for p in e.absolute_path)
            raise ValueError(f"Configuration error at '{location}': {e.message}") from e
        raise ValueError(f"Configuration error: {e.message}") from e
