# FILE: receiptly/services/number_words.py
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, List

# =========================================================
# Amount in words – Indian system (Thousand / Lakh / Crore)
# =========================================================
_ONES = [
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine"
]
_TEENS = [
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen",
    "Seventeen", "Eighteen", "Nineteen"
]
_TENS = [
    "", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty",
    "Ninety"
]

# (label, divisor, group width) most significant first.
# Crore keeps a three-digit group so "Nine Hundred Ninety Nine Crore" is the ceiling.
_SCALES = (
    ("Crore", 10_000_000, 1000),
    ("Lakh", 100_000, 100),
    ("Thousand", 1_000, 100),
    ("", 1, 1000),
)

MAX_SUPPORTED = 10_000_000 * 1000 - 1
_MAX_DIGITS = len(str(MAX_SUPPORTED))


class AmountOutOfRangeError(ValueError):
    pass


def _to_int(value: Any) -> int:
    """Integer part of value; anything non-numeric counts as 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    try:
        s = str(value).strip().replace(",", "")
        if not s:
            return 0
        d = Decimal(s)
    except (InvalidOperation, ValueError):
        return 0
    if not d.is_finite():
        return 0
    # checked on the exponent so "1e999999999" never becomes a huge int
    if d.adjusted() >= _MAX_DIGITS:
        raise AmountOutOfRangeError(
            f"Amount has {d.adjusted() + 1} digits, beyond the Crore scale "
            f"({MAX_SUPPORTED})")
    return int(d)


def _two_digits(n: int) -> str:
    if n == 0:
        return ""
    if n < 10:
        return _ONES[n]
    if n < 20:
        return _TEENS[n - 10]
    t, o = divmod(n, 10)
    return _TENS[t] if o == 0 else f"{_TENS[t]} {_ONES[o]}"


def _three_digits(n: int) -> str:
    h, r = divmod(n, 100)
    parts: List[str] = []
    if h:
        parts.append(f"{_ONES[h]} Hundred")
    if r:
        parts.append(_two_digits(r))
    return " ".join(parts)


def words_of(value: Any) -> str:
    """
    Indian-system words for the integer part of value.

    words_of(50000)    -> "Fifty Thousand"
    words_of(1500000)  -> "Fifteen Lakh"
    words_of(10000000) -> "One Crore"

    Negative amounts and amounts of a thousand crore or more raise
    AmountOutOfRangeError.
    """
    n = _to_int(value)
    if n == 0:
        return "Zero"
    if n < 0:
        raise AmountOutOfRangeError("Negative amount not supported")
    if n > MAX_SUPPORTED:
        raise AmountOutOfRangeError(
            f"Amount is beyond the Crore scale ({MAX_SUPPORTED})")

    parts: List[str] = []
    for label, divisor, width in _SCALES:
        group = (n // divisor) % width
        if not group:
            continue
        words = _three_digits(group)
        parts.append(f"{words} {label}" if label else words)
    return " ".join(parts)
