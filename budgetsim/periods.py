"""Calendar helpers: custom month periods, pay dates and activity windows.

A "month" here is the cycle that runs from day ``S`` of one calendar month up
to (but not including) day ``S`` of the next, where ``S`` is the configured
month start day (1..28). All intervals are half-open ``[start, end_exclusive)``.
"""
import calendar
import logging
from datetime import date, datetime, timedelta
from functools import lru_cache
from typing import Optional

from dateutil.relativedelta import relativedelta

from budgetsim.domain import Item, Period

logger = logging.getLogger(__name__)


def to_date_only(value) -> date:
    """Drop the time-of-day part of a datetime (or pandas Timestamp)."""
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_iso_date(text) -> Optional[date]:
    """Parse ``YYYY-MM-DD`` as a local calendar date, ``None`` if it can't be parsed."""
    if isinstance(text, date):
        return to_date_only(text)
    if not text or not isinstance(text, str):
        return None
    try:
        return datetime.strptime(text.strip()[:10], "%Y-%m-%d").date()
    except ValueError:
        logger.debug("Ignoring malformed date %r", text)
        return None


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def is_within(day: date, start: date, end_exclusive: date) -> bool:
    return start <= day < end_exclusive


@lru_cache(maxsize=256)
def _resolve(reference: date, month_start_day: int) -> Period:
    start = reference.replace(day=month_start_day)
    if reference.day < month_start_day:
        start -= relativedelta(months=1)
    return Period(start=start, end_exclusive=start + relativedelta(months=1))


def resolve_period(reference, month_start_day: int) -> Period:
    """Return the custom month period that contains ``reference``.

    ``month_start_day`` must already be clamped to 1..28 by the caller.
    """
    return _resolve(to_date_only(reference), month_start_day)


def effective_pay_day(pay_day: Optional[int]) -> int:
    if pay_day is None:
        return 1
    return max(1, int(pay_day))


def pay_date_in_month(year: int, month: int, pay_day: Optional[int]) -> date:
    """Due date for a recurring item in the given calendar month (1-12).

    Pay days past the end of the month are clamped to its last day.
    """
    day = min(effective_pay_day(pay_day), days_in_month(year, month))
    return date(year, month, day)


def is_active(item: Item, period_start: date, period_end_exclusive: date) -> bool:
    """Does the item's [start_date, end_date] window overlap the interval?

    A missing start date means always active in the past, a missing end date
    means active indefinitely. The end date counts as a whole day.
    """
    if item.start_date is not None and item.start_date >= period_end_exclusive:
        return False
    # end_date + 1 day > period_start, written without overflowing date.max
    if item.end_date is not None and item.end_date < period_start:
        return False
    return True


def due_date_in_period(item: Item, period: Period) -> Optional[date]:
    # a custom period can straddle two calendar months, so try both
    last_day = period.end_exclusive - timedelta(days=1)
    candidates = (
        pay_date_in_month(period.start.year, period.start.month, item.pay_day),
        pay_date_in_month(last_day.year, last_day.month, item.pay_day),
    )
    for candidate in candidates:
        if is_within(candidate, period.start, period.end_exclusive):
            return candidate
    return None
