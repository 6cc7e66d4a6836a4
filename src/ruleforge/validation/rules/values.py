"""Value coercion helpers shared by the built-in rules and the composer.

Rule parameters arrive as strings ("between:3,10"), while record values keep
their Python types. These helpers give the rules one consistent way to turn
record values into strings, numbers and dates.
"""

import math
import re
from collections.abc import Mapping
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Any

_NUMBER_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")

COLLECTION_TYPES = (list, tuple, set, frozenset)


def stringify(value: Any) -> str:
    """String form of a value as it appears in rule parameters and messages.

    None becomes "", booleans become "true"/"false" and integral floats drop
    their fractional part (3.0 -> "3").
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def to_number(value: Any) -> float:
    """Coerce a value to a float, returning NaN when it is not numeric.

    Blank strings and empty lists coerce to 0; a one-element list coerces to
    its element. None, mappings and other objects are NaN.
    """
    if value is None:
        return math.nan
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, (float, Decimal)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if text == "":
            return 0.0
        if text in ("Infinity", "+Infinity", "-Infinity"):
            return -math.inf if text.startswith("-") else math.inf
        if _NUMBER_PATTERN.match(text):
            return float(text)
        return math.nan
    if isinstance(value, (list, tuple)):
        if len(value) == 0:
            return 0.0
        if len(value) == 1:
            return to_number(value[0])
    return math.nan


def is_numeric(value: Any) -> bool:
    """Check if a value is not NaN under numeric coercion."""
    return not math.isnan(to_number(value))


def is_present(value: Any) -> bool:
    """Check if a value satisfies the "required" rule."""
    if value is None:
        return False
    if isinstance(value, (str, bytes, bytearray)):
        return len(value.strip()) > 0
    if isinstance(value, (date, datetime)):
        return True
    if isinstance(value, (COLLECTION_TYPES, Mapping)):
        return len(value) > 0
    return True


def parse_date(value: Any) -> datetime | None:
    """Parse a date, datetime or ISO-8601 string into a naive UTC datetime.

    Returns None when the value is not a recognizable date.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time())
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
