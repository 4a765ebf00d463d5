"""Configuration management for azb."""

import os
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional

from dotenv import load_dotenv

from azb.core.columns import ColumnSequence
from azb.core.confirm import DEFAULT_CONFIRM_MODE, ConfirmMode, parse_confirm_mode
from azb.core.errors import ConfigurationError

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_TRUTHY = {"1", "true", "yes", "y", "on"}


def env_true(value: Optional[str]) -> bool:
    """Interpret an environment variable value as a boolean flag."""
    return (value or "").strip().lower() in _TRUTHY


@dataclass(frozen=True)
class AzbConfig:
    """Process-wide settings, fixed once at startup.

    Attributes:
        confirm_mode: When outbound az calls need explicit approval
        columns: Kanban column order used by forward/backward
        silent: Suppress echoing az command lines before they run
        po_order: Order listings by StackRank where possible
        log_level: Console logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        assume_yes: --yes was given; also skips the repository delete prompt
    """

    confirm_mode: ConfirmMode = DEFAULT_CONFIRM_MODE
    columns: ColumnSequence = field(default_factory=ColumnSequence.default)
    silent: bool = False
    po_order: bool = False
    log_level: str = "WARNING"
    assume_yes: bool = False

    def __post_init__(self):
        """Validate configuration values."""
        if not isinstance(self.confirm_mode, ConfirmMode):
            raise ConfigurationError(f"invalid confirm mode: {self.confirm_mode!r}")

        if not isinstance(self.columns, ColumnSequence):
            raise ConfigurationError("columns must be a ColumnSequence")

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigurationError(f"log_level must be one of {VALID_LOG_LEVELS}")

        # Normalize log level to uppercase
        object.__setattr__(self, "log_level", self.log_level.upper())

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AzbConfig":
        """Build configuration from environment variables.

        When ``environ`` is None, a ``.env`` file in the working directory is
        loaded first and ``os.environ`` is used.

        Recognized variables:
            AB_CONFIRM: always|mutations|never (and aliases)
            AB_COLUMNS: comma-separated Kanban column order
            AB_PO_ORDER / AB_STACKRANK: truthy to enable PO ordering
            AZB_LOG_LEVEL: console log level

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        confirm_mode = parse_confirm_mode(environ.get("AB_CONFIRM"), DEFAULT_CONFIRM_MODE)

        columns_csv = (environ.get("AB_COLUMNS") or "").strip()
        columns = ColumnSequence.from_csv(columns_csv) if columns_csv else ColumnSequence.default()

        po_order = env_true(environ.get("AB_PO_ORDER")) or env_true(environ.get("AB_STACKRANK"))

        log_level = (environ.get("AZB_LOG_LEVEL") or "WARNING").strip().upper()
        if log_level not in VALID_LOG_LEVELS:
            log_level = "WARNING"

        return cls(
            confirm_mode=confirm_mode,
            columns=columns,
            po_order=po_order,
            log_level=log_level,
        )

    def with_overrides(
        self,
        confirm: Optional[str] = None,
        yes: bool = False,
        silent: Optional[bool] = None,
        default_columns: bool = False,
        po_order: Optional[bool] = None,
    ) -> "AzbConfig":
        """Apply command-line overrides on top of this configuration.

        ``yes`` wins over ``confirm`` and means "never confirm";
        ``default_columns`` selects the Agile column set over AB_COLUMNS.
        """
        changes = {}
        if yes:
            changes["confirm_mode"] = ConfirmMode.NEVER
            changes["assume_yes"] = True
        elif confirm:
            changes["confirm_mode"] = parse_confirm_mode(confirm, self.confirm_mode)
        if silent is not None:
            changes["silent"] = silent
        if default_columns:
            changes["columns"] = ColumnSequence.agile()
        if po_order is not None:
            changes["po_order"] = po_order
        return replace(self, **changes) if changes else self
