from datetime import date

from budgetsim.breakdown import UNCATEGORIZED, category_totals_for_period, top_categories
from budgetsim.domain import Settings
from helpers import income, monthly, one_time

SETTINGS = Settings(25)
REF = date(2024, 3, 10)
ITEMS = [
    monthly("rent", 80000, pay_day=27, category="Housing"),
    monthly("power", 6000, pay_day=10, category="Utilities"),
    monthly("water", 3000, pay_day=20, category="Utilities"),
    one_time("gift", 5000, "2024-03-03"),
    one_time("later", 9999, "2024-05-01", category="Travel"),
    income("salary", 250000, pay_day=25, category="Work"),
]


def test_category_totals_skip_empty_categories():
    totals = category_totals_for_period(ITEMS, SETTINGS, REF)
    assert totals == {
        "Housing": 80000,
        "Utilities": 9000,
        UNCATEGORIZED: 5000,
        "Work": 250000,
    }


def test_top_categories_only_expenses_largest_first():
    assert list(top_categories(ITEMS, SETTINGS, REF, 2)) == [("Housing", 80000), ("Utilities", 9000)]
    assert list(top_categories(ITEMS, SETTINGS, REF, 0)) == []
