"""
Sanitize pipeline for mapped values.

Operations run in the order configured on the mapping entry, each one
only when the current value has the type it works on. Mutual exclusion
between stringToNumber and numberToString is enforced when an entry is
edited (see models.mapping), not here.
"""

import math
from typing import Any, Callable, Iterable, Union

from models.mapping import SanitizeOperation, override_active
from utils.text_utils import to_text


def is_falsy(value: Any) -> bool:
    """
    JavaScript-style falsiness, as the dashboard evaluates it.

    None, False, 0, 0.0, NaN and "" are falsy. Empty lists and dicts
    are NOT falsy.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_number(text: str) -> Union[int, float]:
    """
    Parse a numeric string; unparseable input gives 0.

    Integral results come back as int ("19" → 19, "19.0" → 19).
    """
    try:
        number = float(text.strip())
    except ValueError:
        return 0
    if math.isnan(number) or math.isinf(number):
        return 0
    if number.is_integer():
        return int(number)
    return number


def _trim(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _upper(value: Any) -> Any:
    return value.upper() if isinstance(value, str) else value


def _lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def _string_to_number(value: Any) -> Any:
    return parse_number(value) if isinstance(value, str) else value


def _number_to_string(value: Any) -> Any:
    return to_text(value) if _is_number(value) else value


OPERATIONS: dict[SanitizeOperation, Callable[[Any], Any]] = {
    SanitizeOperation.TRIM: _trim,
    SanitizeOperation.TO_UPPER_CASE: _upper,
    SanitizeOperation.TO_LOWER_CASE: _lower,
    SanitizeOperation.STRING_TO_NUMBER: _string_to_number,
    SanitizeOperation.NUMBER_TO_STRING: _number_to_string,
}


def sanitize(
    value: Any,
    operations: Iterable[SanitizeOperation],
    literal_override: str = "",
) -> Any:
    """
    Apply a literal override or the sanitize operations to a value.

    1. A non-blank literal override is returned as-is.
    2. Falsy values (see is_falsy) are returned unchanged, so a 0.00
       order total skips every operation.
    3. Otherwise operations run in order.

    Args:
        value: Resolved source value
        operations: Ordered operations
        literal_override: User defined value

    Returns:
        Sanitized value
    """
    if override_active(literal_override):
        return literal_override

    if is_falsy(value):
        return value

    result = value
    for operation in operations:
        result = OPERATIONS[SanitizeOperation(operation)](result)
    return result
