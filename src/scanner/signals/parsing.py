"""Lenient numeric parsing for raw exchange fields.

The exchange encodes every number as a decimal string, and any of them may
be missing or empty. The engine never rejects a whole snapshot because of
one bad field: ``parse_float`` degrades to a default instead.
"""

import math

from scanner.exceptions import MalformedRecord


def parse_number(value: str | float | int | None) -> float:
    """Strictly parse a raw field into a finite float.

    Raises:
        MalformedRecord: If the value is missing, empty, not numeric, or
            not finite (nan/inf).
    """
    if value is None:
        raise MalformedRecord("missing value")
    if isinstance(value, bool):
        raise MalformedRecord(f"not a number: {value!r}")
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise MalformedRecord("empty value")
    else:
        text = value
    try:
        number = float(text)
    except (TypeError, ValueError) as exc:
        raise MalformedRecord(f"not a number: {value!r}") from exc
    if not math.isfinite(number):
        raise MalformedRecord(f"not finite: {value!r}")
    return number


def parse_float(value: str | float | int | None, default: float = 0.0) -> float:
    """Parse a raw field, returning ``default`` when it is missing or malformed."""
    try:
        return parse_number(value)
    except MalformedRecord:
        return default
