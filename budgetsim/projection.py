"""Running balance over a period's cash events.

Two anchors are supported: a known balance at the start of the period, or a
known balance "as of today", in which case the start balance is derived by
backing out every event dated today or earlier.
"""
from datetime import date
from functools import reduce
from typing import Iterable, Optional, Sequence

from budgetsim.domain import CashEvent, Item, Projection, RunningBalanceRow, Settings
from budgetsim.events import events_in_period
from budgetsim.periods import to_date_only


def _row(event: CashEvent, balance: float) -> RunningBalanceRow:
    return RunningBalanceRow(
        date=event.date,
        item_id=event.item_id,
        name=event.name,
        signed_amount=event.signed_amount,
        kind=event.kind,
        balance=balance,
    )


def project_from_start_balance(events: Iterable[CashEvent], start_balance: float) -> Projection:
    """Fold events left to right from ``start_balance``.

    Events are walked in the order given (``events_in_period`` already sorts
    them). ``first_negative`` is the date of the first event that leaves the
    balance below zero, or ``None``.
    """

    def step(acc, event: CashEvent):
        rows, balance, lowest, first_negative = acc
        balance = balance + event.signed_amount
        if first_negative is None and balance < 0:
            first_negative = event.date
        return rows + (_row(event, balance),), balance, min(lowest, balance), first_negative

    rows, end_balance, lowest, first_negative = reduce(
        step, events, ((), start_balance, start_balance, None)
    )
    return Projection(
        start_balance=start_balance,
        rows=rows,
        min_balance=lowest,
        first_negative=first_negative,
        end_balance=end_balance,
    )


def start_balance_from_today(events: Iterable[CashEvent], today_balance: float, today) -> float:
    today = to_date_only(today)
    return today_balance - sum(e.signed_amount for e in events if e.date <= today)


def project_from_today_balance(
    events: Sequence[CashEvent], today_balance: float, today
) -> Projection:
    events = tuple(events)
    start = start_balance_from_today(events, today_balance, today)
    return project_from_start_balance(events, start)


def balance_on(projection: Projection, day) -> float:
    """Balance after every event dated on or before ``day``."""
    day = to_date_only(day)
    balance = projection.start_balance
    for row in projection.rows:
        if row.date > day:
            break
        balance = row.balance
    return balance


def project_period(
    items: Iterable[Item],
    settings: Settings,
    reference,
    *,
    start_balance: Optional[float] = None,
    today_balance: Optional[float] = None,
    today: Optional[date] = None,
) -> Projection:
    if (start_balance is None) == (today_balance is None):
        raise ValueError("pass exactly one of start_balance or today_balance")

    events = events_in_period(items, settings, reference)
    if start_balance is not None:
        return project_from_start_balance(events, start_balance)
    return project_from_today_balance(
        events, today_balance, today if today is not None else reference
    )
