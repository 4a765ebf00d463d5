"""Confirmation policy for outbound az invocations."""

from enum import Enum
from typing import Optional

from azb.core.errors import ConfigurationError
from azb.core.invocation import Invocation


class ConfirmMode(str, Enum):
    """When the user must approve an az invocation before it runs."""

    ALWAYS = "always"
    MUTATIONS = "mutations"
    NEVER = "never"


_ALIASES = {
    ConfirmMode.ALWAYS: ("always", "all", "true", "on", "1", "yes", "y"),
    ConfirmMode.MUTATIONS: ("mutations", "mutation", "writes", "write", "updates", "changes"),
    ConfirmMode.NEVER: ("never", "none", "false", "off", "0", "no", "n"),
}

DEFAULT_CONFIRM_MODE = ConfirmMode.MUTATIONS


def parse_confirm_mode(
    value: Optional[str], current: ConfirmMode = DEFAULT_CONFIRM_MODE
) -> ConfirmMode:
    """Parse a confirmation mode name or alias.

    Args:
        value: Mode text such as "always", "off" or "writes"
        current: Mode returned when ``value`` is blank

    Returns:
        The parsed ConfirmMode

    Raises:
        ConfigurationError: If the value is not a known mode or alias
    """
    text = (value or "").strip().lower()
    if not text:
        return current
    for mode, aliases in _ALIASES.items():
        if text in aliases:
            return mode
    raise ConfigurationError(
        f"invalid confirm mode: {value!r} (valid: always|mutations|never)"
    )


def should_confirm(invocation: Invocation, mode: ConfirmMode) -> bool:
    """Decide whether ``invocation`` needs explicit approval under ``mode``."""
    if mode is ConfirmMode.NEVER:
        return False
    if mode is ConfirmMode.ALWAYS:
        return True
    return invocation.is_mutating
