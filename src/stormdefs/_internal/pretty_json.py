"""Centralized JSON serialization for the output document.

Rules:
- UTF-8, non-ASCII characters written as-is
- Two-space indentation
- Key order is the insertion order of the record fields (not sorted)
- Exactly one trailing newline

Same input objects always produce the same bytes, so repeated runs over an
unchanged folder write identical files.
"""

import json
from typing import Any


def pretty_dumps(obj: Any) -> str:
    """
    Pretty JSON serialization for the output document.

    Args:
        obj: Python object to serialize

    Returns:
        JSON string ending with a newline
    """
    return json.dumps(
        obj,
        indent=2,
        ensure_ascii=False  # UTF-8 encoding
    ) + "\n"
