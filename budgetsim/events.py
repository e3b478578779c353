from typing import Iterable, List

from budgetsim.calc import has_usable_amount
from budgetsim.domain import MONTHLY, ONE_TIME, YEARLY, CashEvent, Item, Settings
from budgetsim.periods import due_date_in_period, is_within, resolve_period


def _event(item: Item, day) -> CashEvent:
    return CashEvent(
        date=day,
        item_id=item.id,
        name=item.name,
        signed_amount=item.signed_amount,
        kind=item.kind,
    )


def events_in_period(items: Iterable[Item], settings: Settings, reference) -> List[CashEvent]:
    """Signed cash events due in the period around ``reference``, oldest first.

    Recurring items emit their full amount on the due date; yearly items are
    never amortised at this level. Same-day events keep input order.
    """
    period = resolve_period(reference, settings.month_start_day)
    out: List[CashEvent] = []

    for item in items:
        if not has_usable_amount(item):
            continue

        if item.cycle == ONE_TIME:
            if item.pay_date is not None and is_within(
                item.pay_date, period.start, period.end_exclusive
            ):
                out.append(_event(item, item.pay_date))
            continue

        if item.cycle not in (MONTHLY, YEARLY):
            continue

        # activity window is not consulted here, only the due date
        due = due_date_in_period(item, period)
        if due is not None:
            out.append(_event(item, due))

    return sorted(out, key=lambda e: e.date)
