"""Period math - Calendar boundaries for statements and reports.

Every period is a closed date interval [start, end]. Ledger rows carry
timestamps, so range filters use the half-open datetime window
[start 00:00, end + 1 day 00:00) to include the whole last day.
Dates are naive server-local calendar dates.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Literal, Optional, Union

from .errors import InvalidPeriodError

ReportType = Literal["daily", "weekly", "monthly", "quarterly", "yearly"]
CampaignReportPeriod = Literal["campaign_total", "monthly", "quarterly"]

REPORT_TYPES = ("daily", "weekly", "monthly", "quarterly", "yearly")


@dataclass(frozen=True)
class Period:
    """Inclusive calendar interval."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise InvalidPeriodError(f"Period end {self.end} is before start {self.start}")

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def bounds(self) -> tuple[datetime, datetime]:
        """Half-open datetime window covering every instant of the period."""
        return (
            datetime.combine(self.start, time.min),
            datetime.combine(self.end + timedelta(days=1), time.min),
        )

    def contains(self, ts: Union[date, datetime]) -> bool:
        if isinstance(ts, datetime):
            ts = ts.date()
        return self.start <= ts <= self.end

    def widened(self, days: int) -> "Period":
        """Same period with `days` added on each side."""
        delta = timedelta(days=days)
        return Period(self.start - delta, self.end + delta)

    def label(self) -> str:
        return f"{self.start.isoformat()} - {self.end.isoformat()}"


def _check_range(name: str, value: int, low: int, high: int) -> None:
    if not low <= value <= high:
        raise InvalidPeriodError(f"{name} must be between {low} and {high}, got {value}")


def month_period(year: int, month: int) -> Period:
    """First through last day of a month."""
    _check_range("month", month, 1, 12)
    last_day = calendar.monthrange(year, month)[1]
    return Period(date(year, month, 1), date(year, month, last_day))


def quarter_period(year: int, quarter: int) -> Period:
    """Calendar quarter (Q1 = January through March)."""
    _check_range("quarter", quarter, 1, 4)
    first_month = (quarter - 1) * 3 + 1
    return Period(month_period(year, first_month).start, month_period(year, first_month + 2).end)


def year_period(year: int) -> Period:
    return Period(date(year, 1, 1), date(year, 12, 31))


def statement_period(year: int, month: Optional[int] = None) -> Period:
    """The named month, or the whole calendar year when no month is given."""
    return month_period(year, month) if month else year_period(year)


def previous_month(year: int, month: int) -> tuple[int, int]:
    """(year, month) of the month before, wrapping January to December."""
    _check_range("month", month, 1, 12)
    if month == 1:
        return year - 1, 12
    return year, month - 1


def report_period(report_type: str, year: int, period: int) -> Period:
    """Boundaries of a platform report.

    Args:
        report_type: daily, weekly, monthly, quarterly or yearly
        year: Calendar year
        period: Day of year, week of year, month or quarter (ignored for yearly)

    Returns:
        Period for the requested granularity

    Raises:
        InvalidPeriodError: Unknown report type or period out of range
    """
    year_start = date(year, 1, 1)
    days_in_year = 366 if calendar.isleap(year) else 365

    if report_type == "daily":
        _check_range("day of year", period, 1, days_in_year)
        day = year_start + timedelta(days=period - 1)
        return Period(day, day)
    if report_type == "weekly":
        _check_range("week", period, 1, 53)
        start = year_start + timedelta(days=(period - 1) * 7)
        end = min(year_start + timedelta(days=period * 7 - 1), date(year, 12, 31))
        return Period(start, end)
    if report_type == "monthly":
        return month_period(year, period)
    if report_type == "quarterly":
        return quarter_period(year, period)
    if report_type == "yearly":
        return year_period(year)

    raise InvalidPeriodError(f"Invalid report type: {report_type}")


def current_period(kind: str, today: date) -> Period:
    """Month or quarter containing `today`."""
    if kind == "monthly":
        return month_period(today.year, today.month)
    if kind == "quarterly":
        return quarter_period(today.year, (today.month - 1) // 3 + 1)
    raise InvalidPeriodError(f"Invalid report period: {kind}")
