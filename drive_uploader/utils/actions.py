"""
Helpers for running as a GitHub Actions step.

Action inputs arrive as ``INPUT_<NAME>`` environment variables and secrets
are hidden from the job log with the ``::add-mask::`` workflow command.
"""

import sys
from typing import Mapping, Optional

from drive_uploader.utils.logging import (
    get_logger,
    register_secret,
    running_in_github_actions,
)

logger = get_logger(__name__)

TRUE_VALUES = frozenset(["1", "t", "T", "TRUE", "true", "True"])
FALSE_VALUES = frozenset(["0", "f", "F", "FALSE", "false", "False"])


def input_env_name(name: str) -> str:
    """
    Environment variable holding an action input.

    Example:
        >>> input_env_name("folderId")
        'INPUT_FOLDERID'
    """
    return "INPUT_" + name.replace(" ", "_").upper()


def get_input(name: str, environ: Mapping[str, str]) -> str:
    """Return the stripped value of an action input, or an empty string."""
    return environ.get(input_env_name(name), "").strip()


def parse_bool(name: str, value: str) -> Optional[bool]:
    """
    Parse a boolean input value.

    Returns None for an empty value. Unrecognized values are logged and
    treated as False.
    """
    if not value:
        return None
    if value in TRUE_VALUES:
        return True
    if value not in FALSE_VALUES:
        logger.warning(f"Invalid boolean value for '{name}': {value!r}, using false")
    return False


def add_mask(value: str) -> None:
    """
    Hide a value from all further output.

    The value is masked by the logging filters and, inside GitHub Actions,
    also registered with the runner so it is redacted from the job log.
    """
    if not value or not value.strip():
        return
    register_secret(value)
    if running_in_github_actions():
        for line in value.splitlines():
            if line.strip():
                sys.stdout.write(f"::add-mask::{line}\n")
        sys.stdout.flush()
