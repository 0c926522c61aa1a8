"""Domain errors.

Why here:
- The CLI is the only layer that turns these into messages and exit codes.
- Core and adapters raise them and let them propagate untouched.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class BeeminderError(Exception):
    """Base class for errors raised by this client (not by httpx/pydantic)."""


class ConfigurationError(BeeminderError):
    """Credentials are still missing after flags, environment and config file."""

    def __init__(self, missing: Sequence[str], config_file: Path | None = None) -> None:
        self.missing = tuple(missing)
        self.config_file = config_file
        hints = []
        for name in self.missing:
            flag = "--" + name.replace("_", "-")
            hints.append(f"{name} (use {flag} or BEEMINDER_{name.upper()})")
        message = "No Beeminder " + " and ".join(hints) + " provided."
        if config_file is not None:
            message += f" Config file: {config_file}"
        super().__init__(message)


class DatapointParseError(BeeminderError):
    """A standard-input line does not describe a datapoint."""

    def __init__(self, line: str, reason: str = "Invalid line") -> None:
        self.line = line
        self.reason = reason
        super().__init__(f"{reason}: {line}")
