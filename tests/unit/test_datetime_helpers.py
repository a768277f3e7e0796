"""Unit tests for Datetime Helpers (cyberaware/utils/datetime_helpers.py)"""
import pytest
from datetime import datetime, date, timezone, timedelta
from zoneinfo import ZoneInfo

from cyberaware.utils.datetime_helpers import (
    get_timezone,
    now_utc,
    parse_iso_date,
    to_utc,
    today_in_timezone,
    yesterday_of,
)


# ============================================================================
# UTC Time Tests
# ============================================================================

def test_now_utc_is_aware():
    """Test that now_utc returns an aware UTC datetime"""
    result = now_utc()

    assert result.utcoffset() == timedelta(0)


def test_now_utc_is_current():
    """Test that now_utc returns current time"""
    before = datetime.now(timezone.utc)
    result = now_utc()
    after = datetime.now(timezone.utc)

    assert before <= result <= after


# ============================================================================
# Timezone Tests
# ============================================================================

def test_get_timezone_valid():
    assert get_timezone("Europe/Berlin") == ZoneInfo("Europe/Berlin")


def test_get_timezone_falls_back_to_utc():
    """Test unknown or empty zone names resolve to UTC"""
    assert get_timezone("Not/AZone") == ZoneInfo("UTC")
    assert get_timezone(None) == ZoneInfo("UTC")


def test_today_in_timezone_uses_clock():
    instant = datetime(2024, 12, 31, 23, 30, tzinfo=timezone.utc)

    assert today_in_timezone("UTC", lambda: instant) == date(2024, 12, 31)
    assert today_in_timezone("Europe/Berlin", lambda: instant) == date(2025, 1, 1)


def test_today_in_timezone_naive_clock_assumed_utc():
    naive = datetime(2024, 3, 15, 23, 30)

    assert today_in_timezone("Asia/Tokyo", lambda: naive) == date(2024, 3, 16)


def test_yesterday_of():
    assert yesterday_of(date(2024, 3, 1)) == date(2024, 2, 29)


def test_to_utc():
    berlin = datetime(2024, 6, 1, 14, 0, tzinfo=ZoneInfo("Europe/Berlin"))

    assert to_utc(berlin) == datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
    assert to_utc(datetime(2024, 6, 1, 12, 0)).tzinfo == ZoneInfo("UTC")


# ============================================================================
# Date Parsing Tests
# ============================================================================

@pytest.mark.parametrize("value,expected", [
    ("2024-03-14", date(2024, 3, 14)),
    ("2024-03-14T22:10:00", date(2024, 3, 14)),
    ("2024-03-14T22:10:00Z", date(2024, 3, 14)),
    ("2024-03-14T22:10:00+02:00", date(2024, 3, 14)),
    (date(2024, 3, 14), date(2024, 3, 14)),
    (datetime(2024, 3, 14, 8, 0), date(2024, 3, 14)),
    (None, None),
    ("", None),
])
def test_parse_iso_date(value, expected):
    assert parse_iso_date(value) == expected


def test_parse_iso_date_rejects_locale_strings():
    """Test locale-formatted dates are not accepted"""
    with pytest.raises(ValueError):
        parse_iso_date("Thu Mar 14 2024")
