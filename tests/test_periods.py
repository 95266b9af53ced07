"""Tests for calendar period boundaries."""

from datetime import date, datetime

import pytest

from app.algos.reporting.services import (
    InvalidPeriodError,
    Period,
    current_period,
    month_period,
    previous_month,
    quarter_period,
    report_period,
    statement_period,
)


def test_month_period_handles_leap_february():
    assert month_period(2024, 2) == Period(date(2024, 2, 1), date(2024, 2, 29))
    assert month_period(2025, 2) == Period(date(2025, 2, 1), date(2025, 2, 28))


def test_bounds_include_the_whole_last_day():
    start, end = month_period(2025, 3).bounds()
    assert start == datetime(2025, 3, 1)
    assert end == datetime(2025, 4, 1)

    period = month_period(2025, 3)
    assert period.contains(datetime(2025, 3, 31, 23, 59, 59))
    assert not period.contains(datetime(2025, 4, 1))


def test_quarter_period():
    assert quarter_period(2025, 1) == Period(date(2025, 1, 1), date(2025, 3, 31))
    assert quarter_period(2025, 4) == Period(date(2025, 10, 1), date(2025, 12, 31))


def test_statement_period_without_month_is_the_year():
    assert statement_period(2025) == Period(date(2025, 1, 1), date(2025, 12, 31))
    assert statement_period(2025, 6) == month_period(2025, 6)


def test_previous_month_wraps_january():
    assert previous_month(2025, 1) == (2024, 12)
    assert previous_month(2025, 7) == (2025, 6)


@pytest.mark.parametrize("report_type, number, expected", [
    ("daily", 1, Period(date(2025, 1, 1), date(2025, 1, 1))),
    ("daily", 365, Period(date(2025, 12, 31), date(2025, 12, 31))),
    ("weekly", 1, Period(date(2025, 1, 1), date(2025, 1, 7))),
    ("weekly", 53, Period(date(2025, 12, 31), date(2025, 12, 31))),
    ("monthly", 3, Period(date(2025, 3, 1), date(2025, 3, 31))),
    ("quarterly", 2, Period(date(2025, 4, 1), date(2025, 6, 30))),
    ("yearly", 1, Period(date(2025, 1, 1), date(2025, 12, 31))),
])
def test_report_period(report_type, number, expected):
    assert report_period(report_type, 2025, number) == expected


@pytest.mark.parametrize("report_type, number", [
    ("hourly", 1),
    ("monthly", 13),
    ("monthly", 0),
    ("quarterly", 5),
    ("daily", 366),
    ("weekly", 54),
])
def test_report_period_rejects_bad_input(report_type, number):
    with pytest.raises(InvalidPeriodError):
        report_period(report_type, 2025, number)


def test_daily_report_accepts_leap_day_366():
    assert report_period("daily", 2024, 366).start == date(2024, 12, 31)


def test_current_period():
    today = date(2025, 5, 17)
    assert current_period("monthly", today) == month_period(2025, 5)
    assert current_period("quarterly", today) == quarter_period(2025, 2)
    with pytest.raises(InvalidPeriodError):
        current_period("campaign_total", today)


def test_period_widened_and_reversed():
    period = Period(date(2025, 3, 1), date(2025, 3, 31)).widened(7)
    assert period == Period(date(2025, 2, 22), date(2025, 4, 7))
    assert period.days == 45

    with pytest.raises(InvalidPeriodError):
        Period(date(2025, 3, 2), date(2025, 3, 1))
