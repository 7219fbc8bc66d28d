import os
from datetime import date, datetime
from unittest.mock import patch

import pytest

from strukly.analytics.periods import get_reference_datetime, resolve_period

NOW = datetime(2025, 3, 14, 15, 30)


@pytest.mark.parametrize("period,expected_start", [
    ("today", date(2025, 3, 14)),
    ("week", date(2025, 3, 7)),
    ("month", date(2025, 3, 1)),
    ("year", date(2025, 1, 1)),
])
def test_resolve_period(period, expected_start):
    start, end = resolve_period(period, now=NOW)
    assert start == expected_start
    assert end == date(2025, 3, 14)


def test_resolve_period_week_crosses_month():
    start, _ = resolve_period("week", now=datetime(2025, 3, 3))
    assert start == date(2025, 2, 24)


def test_resolve_period_unknown():
    with pytest.raises(ValueError):
        resolve_period("decade", now=NOW)


@patch.dict(os.environ, {"RECEIPT_REFERENCE_DATE": "20250314"})
def test_reference_date_compact_format():
    assert get_reference_datetime() == datetime(2025, 3, 14)


@patch.dict(os.environ, {"RECEIPT_REFERENCE_DATE": "2025-03-14T10:00:00"})
def test_reference_date_iso_format():
    assert get_reference_datetime() == datetime(2025, 3, 14, 10, 0)


@patch.dict(os.environ, {"RECEIPT_REFERENCE_DATE": "not-a-date"})
def test_reference_date_invalid_falls_back_to_now():
    before = datetime.now()
    assert get_reference_datetime() >= before


@patch.dict(os.environ, {"RECEIPT_REFERENCE_DATE": "20250314"})
def test_resolve_period_uses_reference_date():
    assert resolve_period("month") == (date(2025, 3, 1), date(2025, 3, 14))
