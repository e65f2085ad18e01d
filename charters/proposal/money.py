"""
Money parsing for user-entered prices.

Brokers type prices in whatever convention they are used to ("1.200,50",
"1,200.50", "2.000", "1200"). The decimal separator is inferred from the
string itself; there is no locale flag. This is the only routine that
turns a price string into a number: validation and payload assembly
both go through it.
"""

import math
import re


# Everything except digits, separators and the minus sign is dropped
_DISALLOWED = re.compile(r"[^0-9.,-]")

# 1-3 leading digits followed by one or more ".ddd" groups, e.g. "2.000", "-1.250.000"
_DOT_THOUSANDS = re.compile(r"^-?\d{1,3}(\.\d{3})+$")


def _to_float(s: str) -> float:
    """float() that reports failure as NaN instead of raising."""
    if not s:
        return math.nan
    try:
        return float(s)
    except ValueError:
        return math.nan


def parse_money(value: str) -> float:
    """
    Parse a locale-ambiguous money string.

    Rules:
    - both "." and "," present: whichever appears last is the decimal point,
      the other is grouping
    - only ",": decimal comma
    - only ".": grouping if the string is strictly "d.ddd(.ddd)*", else decimal point
    - neither: plain integer string

    Args:
        value: Raw user input

    Returns:
        Parsed amount, or NaN when nothing parseable remains
    """
    if value is None:
        return math.nan

    s = _DISALLOWED.sub("", str(value))

    has_comma = "," in s
    has_dot = "." in s

    if has_comma and has_dot:
        if s.rfind(",") > s.rfind("."):
            return _to_float(s.replace(".", "").replace(",", ".", 1))
        return _to_float(s.replace(",", ""))

    if has_comma:
        return _to_float(s.replace(".", "").replace(",", ".", 1))

    if has_dot and _DOT_THOUSANDS.match(s):
        return _to_float(s.replace(".", ""))

    return _to_float(s)


def is_valid_amount(amount: float) -> bool:
    """A parsed amount is usable as a price only if finite and positive."""
    return math.isfinite(amount) and amount > 0
