"""Console messages with a severity level."""

from __future__ import annotations

import enum
import sys


class Severity(enum.Enum):
    """How important a message is."""

    MESSAGE = "message"
    WARNING = "warning"


_PREFIXES = {
    Severity.WARNING: "WARNING: ",
}


def print_message(severity: Severity, message: str) -> None:
    """Write ``message`` to standard output, prefixed according to severity."""
    prefix = _PREFIXES.get(severity, "")
    sys.stdout.write(f"{prefix}{message}\n")