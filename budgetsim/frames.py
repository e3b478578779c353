"""pandas views of items and computed results, for tables and charts."""
import calendar
from typing import Iterable

import numpy as np
import pandas as pd

from budgetsim.domain import FORECAST, INCOME, Item, Projection
from budgetsim.transforms import expense_items, income_items, item_to_record
from budgetsim.year_view import totals_by_calendar_month

ITEM_COLUMNS = ["id", "kind", "name", "amount", "category", "cycle", "payDate", "payDay", "startDate", "endDate"]
YEAR_COLUMNS = ["month", "expense", "income", "net", "cumulative"]
PROJECTION_COLUMNS = ["date", "name", "kind", "signed_amount", "balance"]


def items_frame(items: Iterable[Item]) -> pd.DataFrame:
    rows = [item_to_record(i) for i in items if i is not None]
    df = pd.DataFrame(rows, columns=ITEM_COLUMNS)
    df["amount"] = pd.to_numeric(df["amount"], errors="coerce")
    df["signed"] = np.where(df["kind"] == INCOME, df["amount"], -df["amount"])
    return df


def year_frame(items: Iterable[Item], year: int, yearly_mode: str = FORECAST) -> pd.DataFrame:
    items = tuple(i for i in items if i is not None)
    expense = np.array(totals_by_calendar_month(expense_items(items), year, yearly_mode))
    income = np.array(totals_by_calendar_month(income_items(items), year, yearly_mode))
    net = income - expense
    return pd.DataFrame({
        "month": [calendar.month_abbr[m] for m in range(1, 13)],
        "expense": expense,
        "income": income,
        "net": net,
        "cumulative": np.cumsum(net),
    }, columns=YEAR_COLUMNS)


def projection_frame(projection: Projection) -> pd.DataFrame:
    df = pd.DataFrame(
        [
            {
                "date": pd.Timestamp(r.date),
                "name": r.name,
                "kind": r.kind,
                "signed_amount": r.signed_amount,
                "balance": r.balance,
            }
            for r in projection.rows
        ],
        columns=PROJECTION_COLUMNS,
    )
    df["shortfall"] = df["balance"] < 0
    return df
