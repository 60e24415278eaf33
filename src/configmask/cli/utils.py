import json
import logging
import os
from typing import Any, Dict, NoReturn

import click

logger = logging.getLogger(__name__)


TRUE_STRINGS = ("1", "true", "yes", "on")


def get_env_flag(env_var: str) -> bool:
    """Whether an environment variable is set to a true-ish value."""
    return os.environ.get(env_var, "").strip().lower() in TRUE_STRINGS


def configure_logging(debug: bool = False) -> None:
    """Configure logging for all modules.

    Args:
        debug: Whether to enable debug logging
    """
    if not debug:
        debug = get_env_flag("CONFIGMASK_DEBUG")

    log_level = logging.DEBUG if debug else logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove any existing handlers to avoid duplicate messages
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter("%(levelname)s:%(name)s:%(message)s"))
    root_logger.addHandler(handler)

    logging.getLogger("configmask").setLevel(log_level)


def format_error(error: Exception, source: str, debug: bool = False) -> Dict[str, Any]:
    """Describe an error as a JSON-serializable mapping.

    In debug mode the exception class and its cause are included.
    """
    error_info: Dict[str, Any] = {"error": str(error), "source": source}

    if debug:
        error_info["type"] = error.__class__.__name__
        if error.__cause__ is not None:
            error_info["cause"] = str(error.__cause__)

    return error_info


def output_result(result: Any, json_output: bool = False) -> None:
    """Output a sanitized value as JSON, wrapped in a status envelope if requested."""
    if json_output:
        click.echo(json.dumps({"status": "ok", "result": result}, indent=2, default=str))
    else:
        click.echo(json.dumps(result, indent=2, default=str))


def output_error(
    error: Exception, source: str, json_output: bool = False, debug: bool = False
) -> NoReturn:
    """Report an error and abort the command.

    Args:
        error: The exception that occurred
        source: Where it came from: "mask" or "input"
        json_output: Whether to output a JSON error envelope
        debug: Whether to include the exception class and cause
    """
    error_info = format_error(error, source, debug)

    if json_output:
        click.echo(json.dumps({"status": "error", **error_info}, indent=2))
    else:
        click.echo(f"Error ({error_info['source']}): {error_info['error']}", err=True)
        if "cause" in error_info:
            click.echo(f"Caused by: {error_info['cause']}", err=True)

    logger.debug("Command failed", exc_info=error)
    raise click.Abort()
