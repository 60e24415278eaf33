import sys
from typing import Any, Optional

import click

from configmask._types import UNDEFINED
from configmask.cli.utils import configure_logging, output_error, output_result
from configmask.converters import MaskConfigurationError
from configmask.core import Mask
from configmask.loaders import detect_format, load_config


def read_input(input_path: Optional[str], input_format: Optional[str]) -> Any:
    """Read the document to sanitize from a file or stdin.

    Empty input is treated as an absent value.
    """
    if input_path is None or input_path == "-":
        content = sys.stdin.read()
        input_format = input_format or "yaml"
    else:
        with open(input_path, encoding="utf-8") as f:
            content = f.read()
        input_format = input_format or detect_format(input_path)

    if not content.strip():
        return UNDEFINED
    return load_config(content, format=input_format)


@click.command(name="sanitize")
@click.argument("schema", type=click.Path(dir_okay=False))
@click.argument("input_path", required=False)
@click.option(
    "--format",
    "input_format",
    type=click.Choice(["yaml", "json"]),
    help="Format of the input document (default: from extension, yaml for stdin)",
)
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
def sanitize(
    schema: str,
    input_path: Optional[str],
    input_format: Optional[str],
    json_output: bool,
    debug: bool,
) -> None:
    """Sanitize a YAML or JSON document with a mask configuration file.

    The input document is read from INPUT_PATH, or from stdin when it is
    omitted or "-". The sanitized value is printed as JSON.

    \b
    Examples:
        configmask sanitize mask.yml settings.json
        cat settings.yml | configmask sanitize mask.yml
        configmask sanitize mask.yml - --json-output < settings.json
    """
    configure_logging(debug)

    try:
        mask = Mask.from_file(schema)
    except (ValueError, OSError) as e:
        output_error(e, "mask", json_output, debug)

    try:
        value = read_input(input_path, input_format)
    except (ValueError, OSError) as e:
        output_error(e, "input", json_output, debug)

    try:
        result = mask.sanitize(value)
    except MaskConfigurationError as e:
        output_error(e, "mask", json_output, debug)

    output_result(result, json_output)
