import asyncio
from typing import Dict, Iterable, List

from budgetsim.calc import expense_total_for_period, income_total_for_period
from budgetsim.domain import FORECAST, Item, Settings
from budgetsim.year_view import signed_totals_by_calendar_month


async def year_tables(
    items: Iterable[Item], years: List[int], yearly_mode: str = FORECAST
) -> Dict[int, List[float]]:
    """Signed 12-month tables for several years, computed concurrently.

    Returns mapping year -> list of 12 monthly net amounts (income positive).
    """
    items = tuple(items)

    async def one_year(year: int) -> tuple[int, List[float]]:
        table = signed_totals_by_calendar_month(items, year, yearly_mode)
        await asyncio.sleep(0)  # cooperate
        return year, table

    results = await asyncio.gather(*(one_year(y) for y in years))
    return {k: v for k, v in results}


async def period_totals(
    items: Iterable[Item], settings: Settings, references: list
) -> List[Dict[str, float]]:
    """Expense and income totals for the period around each reference date, in order."""
    items = tuple(items)

    async def one_period(reference) -> Dict[str, float]:
        expense = expense_total_for_period(items, settings, reference)
        income = income_total_for_period(items, settings, reference)
        await asyncio.sleep(0)
        return {"expense": expense, "income": income, "net": income - expense}

    return list(await asyncio.gather(*(one_period(r) for r in references)))
