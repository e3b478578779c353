from datetime import date, datetime

import pytest

from budgetsim.domain import EXPENSE, INCOME, CashEvent, Settings
from budgetsim.projection import (
    balance_on,
    project_from_start_balance,
    project_from_today_balance,
    project_period,
    start_balance_from_today,
)
from helpers import income, monthly, one_time


def ev(day, amount, name="x"):
    return CashEvent(date=day, item_id=name, name=name, signed_amount=amount,
                     kind=INCOME if amount > 0 else EXPENSE)


def test_single_expense_drives_balance_negative():
    p = project_from_start_balance([ev(date(2024, 3, 10), -1500, "rent")], 1000)
    assert p.min_balance == -500
    assert p.first_negative == date(2024, 3, 10)
    assert p.end_balance == -500
    assert [r.balance for r in p.rows] == [-500]
    assert p.rows[0].name == "rent"


def test_first_negative_recorded_once():
    events = [
        ev(date(2024, 3, 1), -1500),
        ev(date(2024, 3, 5), 1000),
        ev(date(2024, 3, 9), -1000),
    ]
    p = project_from_start_balance(events, 1000)
    assert [r.balance for r in p.rows] == [-500, 500, -500]
    assert p.first_negative == date(2024, 3, 1)
    assert p.min_balance == -500


def test_no_shortfall():
    p = project_from_start_balance([ev(date(2024, 3, 1), -100)], 1000)
    assert p.first_negative is None
    assert p.min_balance == 900


def test_no_events_keeps_start_balance():
    p = project_from_start_balance([], 250)
    assert p.rows == ()
    assert p.min_balance == 250
    assert p.end_balance == 250
    assert p.first_negative is None


def test_today_anchor_backs_out_past_events():
    events = [ev(date(2024, 3, 5), 500), ev(date(2024, 3, 20), -100)]
    p = project_from_today_balance(events, 2000, date(2024, 3, 10))
    assert p.start_balance == 1500
    assert [r.balance for r in p.rows] == [2000, 1900]
    assert p.end_balance == 1900


def test_event_dated_today_counts_as_past():
    events = [ev(date(2024, 3, 10), -300)]
    assert start_balance_from_today(events, 1000, datetime(2024, 3, 10, 8, 30)) == 1300


def test_balance_on():
    events = [ev(date(2024, 3, 5), 500), ev(date(2024, 3, 20), -100)]
    p = project_from_start_balance(events, 1500)
    assert balance_on(p, date(2024, 3, 1)) == 1500
    assert balance_on(p, date(2024, 3, 5)) == 2000
    assert balance_on(p, date(2024, 3, 19)) == 2000
    assert balance_on(p, date(2024, 4, 1)) == 1900


def test_project_period_from_items():
    items = [
        income("salary", 3000, pay_day=25),
        monthly("rent", 4000, pay_day=1),
        one_time("trip", 500, "2024-03-20"),
    ]
    settings = Settings(month_start_day=25)
    p = project_period(items, settings, date(2024, 3, 10), start_balance=600)
    # 2024-02-25 salary, 2024-03-01 rent, 2024-03-20 trip
    assert [r.balance for r in p.rows] == [3600, -400, -900]
    assert p.first_negative == date(2024, 3, 1)

    q = project_period(items, settings, date(2024, 3, 10), today_balance=-400, today=date(2024, 3, 10))
    assert q.start_balance == 600
    assert q.rows == p.rows


def test_project_period_needs_exactly_one_anchor():
    with pytest.raises(ValueError):
        project_period([], Settings(), date(2024, 3, 10))
    with pytest.raises(ValueError):
        project_period([], Settings(), date(2024, 3, 10), start_balance=1, today_balance=1)
