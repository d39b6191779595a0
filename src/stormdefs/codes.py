"""Issue code constants for stormdefs.api conversions.

These constants prevent stringly-typed issue codes and ensure
client code uses the correct codes.
"""

from enum import Enum


class IssueCode(str, Enum):
    """Per-file conversion issue codes."""

    # Recorded for files skipped under on_malformed="skip"
    MALFORMED_XML = "MALFORMED_XML"
    UNEXPECTED_ROOT = "UNEXPECTED_ROOT"
