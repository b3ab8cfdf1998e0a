"""
Audience Dice - Input Validation Utilities

Provides validation functions for values arriving from clients. Validators
either return normalized data or raise descriptive exceptions; the mode
parsers return None for anything outside their enumeration.
"""

import math
from typing import Any

from src.engine.base import AggregationMode, Number, RollMode
from src.engine.exceptions import InvalidValue


MAX_RAW_VALUES = 2


def _to_number(value: Any) -> Number | None:
    """Coerce ints, floats and numeric strings; None when not a finite number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        try:
            float(value)
        except OverflowError:
            return None
        return value
    if isinstance(value, float):
        number = value
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def validate_roll_value(value: Any) -> Number:
    """
    Validate and normalize a submitted roll result.

    Integral floats and numeric strings are normalized to int
    ("4" -> 4, 4.0 -> 4).

    Args:
        value: Raw result from the client payload

    Returns:
        The finite numeric result

    Raises:
        InvalidValue: If the value is missing, non-numeric, NaN or infinite
    """
    number = _to_number(value)
    if number is None:
        raise InvalidValue()
    return number


def validate_raw_values(raw: Any) -> tuple[Number, ...] | None:
    """
    Normalize the optional underlying dice values of a roll.

    Only a list or tuple of 1 or 2 finite numbers is kept; anything else
    is dropped rather than rejected, since raw values are display-only.

    Returns:
        Tuple of dice values, or None
    """
    if not isinstance(raw, (list, tuple)):
        return None
    if not 1 <= len(raw) <= MAX_RAW_VALUES:
        return None

    values = tuple(_to_number(v) for v in raw)
    if any(v is None for v in values):
        return None
    return values


def validate_session_id(session_id: Any) -> str:
    """
    Validate a client-chosen session identifier.

    Raises:
        ValueError: If the identifier is not a non-empty string
    """
    if not isinstance(session_id, str) or not session_id.strip():
        raise ValueError("A non-empty sessionId is required.")
    return session_id


def parse_aggregation_mode(value: Any) -> AggregationMode | None:
    """Return the matching AggregationMode, or None if not recognized."""
    if isinstance(value, AggregationMode):
        return value
    try:
        return AggregationMode(value)
    except ValueError:
        return None


def parse_roll_mode(value: Any) -> RollMode | None:
    """Return the matching RollMode, or None if not recognized."""
    if isinstance(value, RollMode):
        return value
    try:
        return RollMode(value)
    except ValueError:
        return None
