"""
Tolerant numeric coercion for admin-submitted configuration values.

Admin forms send numbers as JSON numbers or as strings typed by hand,
sometimes with a comma as the decimal separator ("0,022"). Every
validated field goes through the same two parsers, which never raise:
they return a ParseResult carrying either the value or an error text.
"""

import math
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ParseResult:
    """Outcome of a coercion attempt: ``value`` on success, ``error`` otherwise."""

    value: Optional[float] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def is_blank(raw: Any) -> bool:
    """True for values that mean "not provided" (None or an empty string)."""
    return raw is None or (isinstance(raw, str) and raw.strip() == "")


def parse_decimal(raw: Any) -> ParseResult:
    """
    Coerce a number or numeric string into a finite float.

    Accepts "." or "," as the decimal separator. Booleans, blanks,
    non-numeric text and non-finite values (NaN, infinity) are errors.

    Args:
        raw: Value taken from the submitted document

    Returns:
        ParseResult with the float value or an error message
    """
    if isinstance(raw, bool):
        return ParseResult(error="must be a number")

    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        text = raw.strip().replace(",", ".")
        if not text:
            return ParseResult(error="is required")
        # float() also takes digit separators ("1_000"), which are not decimal input
        if "_" in text:
            return ParseResult(error="must be a number")
        try:
            value = float(text)
        except ValueError:
            return ParseResult(error="must be a number")
    elif raw is None:
        return ParseResult(error="is required")
    else:
        return ParseResult(error="must be a number")

    if not math.isfinite(value):
        return ParseResult(error="must be a finite number")

    return ParseResult(value=value)


def parse_int(raw: Any) -> ParseResult:
    """
    Coerce a value into an integer.

    Integral floats and strings ("3", "3.0", "3,0") are accepted;
    fractional values are errors. The value is returned as a float
    holding an integral number; callers convert with ``int()``.
    """
    result = parse_decimal(raw)
    if not result.ok:
        return result
    if not float(result.value).is_integer():
        return ParseResult(error="must be an integer")
    return result
