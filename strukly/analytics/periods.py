"""
Reporting window presets for the revenue page.

Each preset resolves to an inclusive (start_date, end_date) pair of calendar
dates ending "now". The reference clock can be pinned with the
RECEIPT_REFERENCE_DATE environment variable for deterministic tests:
- YYYYMMDD format (e.g., "20250314")
- ISO format (e.g., "2025-03-14T10:00:00")
"""

import os
import re
from datetime import date, datetime
from typing import Optional, Tuple

from dateutil.relativedelta import relativedelta

from strukly.utils.logging_config import logger

PERIODS = ("today", "week", "month", "year")


def get_reference_datetime() -> datetime:
    """The local "now", unless RECEIPT_REFERENCE_DATE pins it."""
    ref_str = os.getenv("RECEIPT_REFERENCE_DATE")
    if ref_str:
        try:
            if re.match(r"^\d{8}$", ref_str):
                return datetime.strptime(ref_str, "%Y%m%d")
            return datetime.fromisoformat(ref_str.replace('Z', '+00:00'))
        except ValueError as e:
            logger.warning(f"Invalid RECEIPT_REFERENCE_DATE '{ref_str}': {e}")
    return datetime.now()


def resolve_period(period: str, now: Optional[datetime] = None) -> Tuple[date, date]:
    """
    Maps a preset name to its window.

    - today: [start of today, now]
    - week:  [now - 7 days, now]
    - month: [first day of the current month, now]
    - year:  [first day of the current year, now]

    Raises:
        ValueError: unknown preset name.
    """
    now = now or get_reference_datetime()
    today = now.date()

    if period == "today":
        start = today
    elif period == "week":
        start = today - relativedelta(days=7)
    elif period == "month":
        start = today.replace(day=1)
    elif period == "year":
        start = today.replace(month=1, day=1)
    else:
        raise ValueError(f"Unknown period '{period}'. Expected one of {', '.join(PERIODS)}")

    return start, today
