# FILE: receiptly/services/date_format.py
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Optional

logger = logging.getLogger(__name__)

_MONTHS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct",
    "Nov", "Dec"
]

_STR_FORMATS = ("%Y-%m-%d", "%d/%m/%Y", "%d-%m-%Y", "%Y/%m/%d", "%d-%b-%Y",
                "%d/%b/%Y")


def parse_date(value: Any) -> Optional[date]:
    """
    Best-effort conversion to a calendar date.
    Accepts date/datetime, "YYYY-MM-DD", ISO datetimes and a few
    day-first forms. Returns None when nothing matches.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    s = str(value).strip()
    if not s:
        return None
    for fmt in _STR_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(s.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def display_date(value: Any) -> str:
    """9-Feb-2025 style; "" for blank or unparseable input."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return ""
    d = parse_date(value)
    if d is None:
        logger.warning("Invalid date: %r", value)
        return ""
    return f"{d.day}-{_MONTHS[d.month - 1]}-{d.year}"


def numeric_date(value: Any) -> str:
    """DD/MM/YYYY (en-GB); "" for blank or unparseable input."""
    d = parse_date(value)
    if d is None:
        return ""
    return d.strftime("%d/%m/%Y")
