# FILE: receiptly/services/rental_period.py
from __future__ import annotations

from datetime import date, timedelta
from typing import Optional, Tuple

from receiptly.utils.timezone import today_local


def previous_month_period(today: Optional[date] = None) -> Tuple[date, date]:
    """First and last day of the month before `today` (default: local today)."""
    today = today or today_local()
    last = today.replace(day=1) - timedelta(days=1)
    return last.replace(day=1), last
