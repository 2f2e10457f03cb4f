# FILE: receiptly/utils/timezone.py
from __future__ import annotations

from datetime import datetime, date
from zoneinfo import ZoneInfo

from receiptly.core.config import settings


def local_tz() -> ZoneInfo:
    return ZoneInfo(settings.TIMEZONE or "Asia/Kolkata")


def now_local() -> datetime:
    """
    Returns a *naive* datetime representing local (configured TZ) time.
    Naive so it can go straight into SQLite DateTime columns.
    """
    return datetime.now(local_tz()).replace(tzinfo=None)


def today_local() -> date:
    return now_local().date()
