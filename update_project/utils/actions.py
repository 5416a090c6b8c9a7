"""
GitHub Actions workflow command helpers.
Records informational messages, failures and step outputs for the runner.
"""

import json
import os
import uuid
from typing import Any
from update_project.utils.logger import get_logger

logger = get_logger(__name__)

# Run status for the current process
_state = {"exit_code": 0, "failed_message": None}


def _escape_data(message: str) -> str:
    """Escape a message for use as workflow command data."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(value: str) -> str:
    """Escape a workflow command property value."""
    return (
        _escape_data(value).replace(":", "%3A").replace(",", "%2C")
    )


def _to_command_value(value: Any) -> str:
    """Convert an output value to its string form.

    None becomes an empty string, strings pass through, whole-number floats
    are written without a fraction, anything else is serialized as JSON.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return json.dumps(value)


def info(message: str):
    """Record an informational message."""
    logger.info(message)


def set_failed(message: str):
    """
    Record a failure and mark the run as failed.

    Args:
        message: Failure message shown as an error annotation
    """
    logger.error(message)
    print(f"::error::{_escape_data(message)}", flush=True)
    _state["exit_code"] = 1
    _state["failed_message"] = message


def set_output(name: str, value: Any):
    """
    Set a step output.

    Writes to the file named by GITHUB_OUTPUT, falling back to the
    set-output workflow command when the variable is not set.

    Args:
        name: Output name
        value: Output value
    """
    converted = _to_command_value(value)
    output_path = os.environ.get("GITHUB_OUTPUT", "")

    if output_path:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        if delimiter in name or delimiter in converted:
            raise ValueError(f"Unexpected input: delimiter {delimiter} found in output")

        with open(output_path, "a", encoding="utf-8") as f:
            f.write(f"{name}<<{delimiter}\n{converted}\n{delimiter}\n")
    else:
        print(f"::set-output name={_escape_property(name)}::{_escape_data(converted)}", flush=True)

    logger.debug(f"Output {name}={converted!r}")


def get_exit_code() -> int:
    """Return the process exit code reflecting recorded failures."""
    return _state["exit_code"]


def get_failed_message() -> str | None:
    """Return the last recorded failure message, if any."""
    return _state["failed_message"]


def reset():
    """Clear the recorded run status."""
    _state["exit_code"] = 0
    _state["failed_message"] = None
