"""
Text utilities for loosely typed transaction values.

JSON documents from integrations mix strings, numbers and nulls in the
same fields, so comparisons go through these helpers.
"""

import math
from typing import Any, Optional


def to_text(value: Any) -> Optional[str]:
    """
    Render a scalar as display text.

    - None → None
    - "abc" → "abc"
    - 5 → "5"
    - 5.0 → "5"  (integral floats drop the fraction)
    - 2.5 → "2.5"
    - True → "true"

    Args:
        value: Any JSON scalar

    Returns:
        String form, or None for None
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if value.is_integer():
            return str(int(value))
    return str(value)


def is_blank(value: Any) -> bool:
    """
    True for None and strings that are empty after trimming.

    Non-string scalars are never blank.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def join_non_blank(parts: list[Any], separator: str = ", ") -> str:
    """
    Join the non-blank parts, skipping None and whitespace-only strings.

    Parts are rendered with to_text() and kept untrimmed.
    """
    return separator.join(
        to_text(part) for part in parts
        if not is_blank(part) and not isinstance(part, (dict, list))
    )
