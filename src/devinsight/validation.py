"""
Input validation for DevInsight operations.

Every public engine operation validates its arguments here before touching
any state, so malformed input is never partially processed.
"""

import math
import re
from typing import Iterable, Union

from .exceptions import InvalidInputError
from .models import TimeRange

MAX_IDENTIFIER_LENGTH = 256

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def validate_identifier(value: object, field: str = "identifier") -> str:
    """Check a workspace/engine/algorithm/user/insight identifier.

    Args:
        value: Candidate identifier
        field: Name used in the error message

    Returns:
        The identifier unchanged

    Raises:
        InvalidInputError: If the identifier is not a non-empty string without
            surrounding whitespace or control characters, or is too long.
    """
    if not isinstance(value, str):
        raise InvalidInputError(field, value, "must be a string")
    if not value:
        raise InvalidInputError(field, value, "must not be empty")
    if value != value.strip():
        raise InvalidInputError(field, value, "must not have surrounding whitespace")
    if len(value) > MAX_IDENTIFIER_LENGTH:
        raise InvalidInputError(field, value, f"longer than {MAX_IDENTIFIER_LENGTH} characters")
    if _CONTROL_CHARS.search(value):
        raise InvalidInputError(field, value, "contains control characters")
    return value


def validate_time_range(time_range: Union[TimeRange, tuple]) -> TimeRange:
    """Coerce ``(start, end)`` tuples and reject ranges with start > end."""
    if isinstance(time_range, tuple):
        if len(time_range) != 2:
            raise InvalidInputError("time_range", time_range, "expected (start, end)")
        try:
            time_range = TimeRange(float(time_range[0]), float(time_range[1]))
        except (TypeError, ValueError):
            raise InvalidInputError("time_range", time_range, "bounds must be numbers")
    if not isinstance(time_range, TimeRange):
        raise InvalidInputError("time_range", time_range, "expected a TimeRange")
    if math.isnan(time_range.start) or math.isnan(time_range.end):
        raise InvalidInputError("time_range", time_range, "bounds must be numbers")
    if time_range.start > time_range.end:
        raise InvalidInputError("time_range", time_range, "start is after end")
    return time_range


def validate_choice(value: object, choices: Iterable[str], field: str) -> str:
    choices = tuple(choices)
    if value not in choices:
        raise InvalidInputError(field, value, f"expected one of {', '.join(choices)}")
    return value  # type: ignore[return-value]


def validate_positive_int(value: object, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidInputError(field, value, "must be a positive integer")
    return value
