from datetime import date

import pytest

from budgetsim.calc import (
    expense_total_for_period,
    income_total_for_period,
    net_for_period,
    total_for_period,
)
from budgetsim.domain import CASHFLOW, FORECAST, INCOME, Item, Settings
from budgetsim.transforms import item_from_record
from helpers import income, monthly, one_time, yearly

SETTINGS = Settings(month_start_day=25, yearly_mode=FORECAST)
REF = date(2024, 3, 10)   # period 2024-02-25 .. 2024-03-25


def test_monthly_item_counted_once():
    assert total_for_period([monthly("rent", 500, pay_day=15)], SETTINGS, REF) == 500


def test_one_time_inside_and_outside_period():
    items = [
        one_time("in", 100, "2024-02-25"),
        one_time("last", 10, "2024-03-24"),
        one_time("out", 1000, "2024-03-25"),
        one_time("before", 1000, "2024-02-24"),
    ]
    assert total_for_period(items, SETTINGS, REF) == 110


def test_inactive_recurring_item_is_skipped():
    ended = monthly("gym", 80, pay_day=1, end_date=date(2024, 2, 20))
    not_started = monthly("loan", 300, pay_day=1, start_date=date(2024, 3, 25))
    assert total_for_period([ended, not_started], SETTINGS, REF) == 0


def test_item_active_for_part_of_period_counts():
    item = monthly("phone", 50, pay_day=28, end_date=date(2024, 3, 1))
    assert total_for_period([item], SETTINGS, REF) == 50


def test_yearly_forecast_and_cashflow():
    item = yearly("insurance", 1200, pay_day=1)
    forecast = total_for_period([item], Settings(1, FORECAST), REF)
    cashflow = total_for_period([item], Settings(1, CASHFLOW), REF)
    assert forecast == pytest.approx(100)
    assert cashflow == pytest.approx(1200)


def test_missing_yearly_mode_means_forecast():
    item = yearly("insurance", 1200, pay_day=1)
    assert total_for_period([item], Settings(1, None), REF) == pytest.approx(100)


def test_malformed_items_are_skipped():
    items = [
        None,
        Item(id="a", name="no amount", amount=None),
        Item(id="b", name="text", amount="100"),
        Item(id="c", name="nan", amount=float("nan")),
        Item(id="d", name="inf", amount=float("inf")),
        Item(id="e", name="one-time without date", amount=10, cycle="one_time"),
        monthly("ok", 7, pay_day=1),
    ]
    assert total_for_period(items, SETTINGS, REF) == 7


def test_kind_totals_and_net():
    items = [
        monthly("rent", 500, pay_day=15),
        income("salary", 3000, pay_day=25),
        Item(id="legacy", name="legacy", amount=40, pay_day=1),
    ]
    assert expense_total_for_period(items, SETTINGS, REF) == 540
    assert income_total_for_period(items, SETTINGS, REF) == 3000
    assert net_for_period(iter(items), SETTINGS, REF) == 2460


def test_totals_are_unsigned():
    items = [monthly("rent", 500, pay_day=15), income("salary", 3000, pay_day=25)]
    assert total_for_period(items, SETTINGS, REF) == 3500


def test_same_input_same_output():
    items = (monthly("rent", 500, pay_day=15), yearly("tax", 600, pay_day=3, kind=INCOME))
    assert total_for_period(items, SETTINGS, REF) == total_for_period(items, SETTINGS, REF)


def test_record_without_cycle_adds_nothing():
    legacy = item_from_record({"id": "old", "name": "old", "amount": 80, "payDay": 1})
    assert total_for_period([legacy], SETTINGS, REF) == 0
