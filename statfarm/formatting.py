"""Number formatting shared by the page and the display components."""
from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any

NAN = float("nan")

_INT_PREFIX_RE = re.compile(r"^\s*([+-]?\d+)")


def js_number(value: Any) -> str:
    """Render a number the way string concatenation would (150.0 -> "150").

    Uses the shortest round-trip digits, switching to exponent notation
    below 1e-6 and from 1e21 upward.
    """
    if isinstance(value, bool):
        return str(value).lower()
    if not isinstance(value, float):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign, digit_tuple, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    n = k + exponent
    prefix = "-" if sign else ""

    if k <= n <= 21:
        return prefix + digits + "0" * (n - k)
    if 0 < n <= 21:
        return prefix + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return prefix + "0." + "0" * -n + digits

    e = n - 1
    exp = f"e{'+' if e >= 0 else '-'}{abs(e)}"
    if k == 1:
        return prefix + digits + exp
    return prefix + digits[0] + "." + digits[1:] + exp


def to_locale_string(value: Any) -> str:
    """en-US grouping with at most three fraction digits."""
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "∞" if value > 0 else "-∞"
        text = f"{value:,.3f}".rstrip("0").rstrip(".")
        return "0" if text in ("-0", "") else text
    return f"{value:,}"


def parse_int(value: Any) -> int | float:
    """Integer parse with leading-prefix semantics.

    Numbers truncate toward zero. Strings parse their leading integer part
    ("12.9abc" -> 12). Anything else yields NaN.
    """
    if isinstance(value, bool) or value is None:
        return NAN
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return NAN
        return math.trunc(value)
    match = _INT_PREFIX_RE.match(str(value))
    if not match:
        return NAN
    return int(match.group(1))


def dollars(value: Any) -> str:
    return "$" + to_locale_string(value)
