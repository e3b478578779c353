from datetime import date

from budgetsim.charts import balance_figure, year_figure
from budgetsim.domain import CASHFLOW, Settings
from budgetsim.frames import (
    ITEM_COLUMNS,
    PROJECTION_COLUMNS,
    YEAR_COLUMNS,
    items_frame,
    projection_frame,
    year_frame,
)
from budgetsim.projection import project_period
from helpers import income, monthly, yearly

ITEMS = (income("salary", 3000, pay_day=25), monthly("rent", 1000, pay_day=1), yearly("ins", 1200))


def test_items_frame_has_signed_column():
    df = items_frame(ITEMS)
    assert list(df.columns) == ITEM_COLUMNS + ["signed"]
    assert df["signed"].tolist() == [3000, -1000, -1200]


def test_empty_frames_keep_columns():
    assert items_frame([]).empty
    assert "signed" in items_frame([]).columns
    assert list(projection_frame(project_period([], Settings(), date(2024, 1, 1), start_balance=0)).columns) == \
        PROJECTION_COLUMNS + ["shortfall"]


def test_year_frame_cashflow():
    df = year_frame(ITEMS, 2024, CASHFLOW)
    assert list(df.columns) == YEAR_COLUMNS
    assert df.loc[0, "expense"] == 2200
    assert df.loc[1, "expense"] == 1000
    assert df.loc[0, "net"] == 800
    assert df["cumulative"].iloc[-1] == 800 + 11 * 2000
    assert df.loc[0, "month"] == "Jan"


def test_projection_frame_flags_shortfall():
    p = project_period(ITEMS, Settings(25), date(2024, 3, 10), start_balance=0)
    df = projection_frame(p)
    assert df["balance"].tolist() == [3000, 2000, 800]
    assert not df["shortfall"].any()


def test_figures():
    assert len(year_figure(year_frame(ITEMS, 2024)).data) == 3

    p = project_period(ITEMS, Settings(25), date(2024, 3, 10), start_balance=-5000)
    fig = balance_figure(p, date(2024, 2, 25))
    names = [trace.name for trace in fig.data]
    assert names == ["Balance", "First shortfall"]
    assert len(fig.data[0].x) == len(p.rows) + 1
