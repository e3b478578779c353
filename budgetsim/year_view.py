from datetime import date
from typing import Iterable, List

from budgetsim.calc import has_usable_amount
from budgetsim.domain import CASHFLOW, FORECAST, INCOME, MONTHLY, ONE_TIME, YEARLY, Item
from budgetsim.periods import is_active


def month_bounds(year: int, month: int) -> tuple[date, date]:
    start = date(year, month, 1)
    end_exclusive = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return start, end_exclusive


def yearly_cashflow_month(item: Item) -> int:
    """Calendar month a yearly item is booked in under cashflow mode (January by default)."""
    return item.start_date.month if item.start_date is not None else 1


def totals_by_calendar_month(
    items: Iterable[Item], year: int, yearly_mode: str = FORECAST
) -> List[float]:
    """Unsigned totals for each calendar month of ``year``; index 0 is January.

    Unlike the period totals, forecast mode spreads a yearly item over every
    month it is active in, whether or not its due date falls there.
    """
    out = [0.0] * 12

    for item in items:
        if not has_usable_amount(item):
            continue

        if item.cycle == ONE_TIME:
            if item.pay_date is None or item.pay_date.year != year:
                continue
            out[item.pay_date.month - 1] += item.amount
            continue

        for month in range(1, 13):
            start, end_exclusive = month_bounds(year, month)
            if not is_active(item, start, end_exclusive):
                continue

            if item.cycle == MONTHLY:
                out[month - 1] += item.amount
            elif item.cycle == YEARLY:
                if yearly_mode == CASHFLOW:
                    if month == yearly_cashflow_month(item):
                        out[month - 1] += item.amount
                else:
                    out[month - 1] += item.amount / 12

    return out


def signed_totals_by_calendar_month(
    items: Iterable[Item], year: int, yearly_mode: str = FORECAST
) -> List[float]:
    """Income minus expenses for each calendar month of ``year``."""
    items = tuple(i for i in items if i is not None)
    income = totals_by_calendar_month((i for i in items if i.kind == INCOME), year, yearly_mode)
    expense = totals_by_calendar_month((i for i in items if i.kind != INCOME), year, yearly_mode)
    return [inc - exp for inc, exp in zip(income, expense)]
