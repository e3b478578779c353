"""Period totals for the custom month containing a reference date."""
import logging
import math
from typing import Iterable, Optional

from budgetsim.domain import (
    CASHFLOW,
    FORECAST,
    INCOME,
    MONTHLY,
    ONE_TIME,
    YEARLY,
    Item,
    Settings,
)
from budgetsim.periods import due_date_in_period, is_active, is_within, resolve_period

logger = logging.getLogger(__name__)


def has_usable_amount(item: Optional[Item]) -> bool:
    if item is None:
        return False
    amount = item.amount
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return False
    return math.isfinite(amount)


def total_for_period(items: Iterable[Item], settings: Settings, reference) -> float:
    """Sum of item amounts (unsigned) falling in the period around ``reference``.

    Callers filter by kind first, e.g. via ``expense_items``. A yearly item
    only counts in a period that holds its due date; in forecast mode it then
    contributes a twelfth of its amount.
    """
    period = resolve_period(reference, settings.month_start_day)
    mode = settings.yearly_mode or FORECAST

    total = 0.0
    for item in items:
        if not has_usable_amount(item):
            logger.debug("Skipping item without a numeric amount: %r", item)
            continue

        if item.cycle == ONE_TIME:
            if item.pay_date is None:
                logger.debug("Skipping one-time item %s without pay date", item.id)
                continue
            if is_within(item.pay_date, period.start, period.end_exclusive):
                total += item.amount
            continue

        if not is_active(item, period.start, period.end_exclusive):
            continue
        if due_date_in_period(item, period) is None:
            continue

        if item.cycle == MONTHLY:
            total += item.amount
        elif item.cycle == YEARLY:
            total += item.amount if mode == CASHFLOW else item.amount / 12

    return total


def expense_total_for_period(items: Iterable[Item], settings: Settings, reference) -> float:
    return total_for_period(
        (i for i in items if i is not None and i.kind != INCOME), settings, reference
    )


def income_total_for_period(items: Iterable[Item], settings: Settings, reference) -> float:
    return total_for_period(
        (i for i in items if i is not None and i.kind == INCOME), settings, reference
    )


def net_for_period(items: Iterable[Item], settings: Settings, reference) -> float:
    items = tuple(items)
    return income_total_for_period(items, settings, reference) - expense_total_for_period(
        items, settings, reference
    )
