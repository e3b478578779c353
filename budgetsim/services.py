from typing import Any, Callable, Dict, Iterable, Sequence

from budgetsim.calc import expense_total_for_period, income_total_for_period
from budgetsim.domain import Item, Settings
from budgetsim.functional import validate_item
from budgetsim.periods import resolve_period
from budgetsim.year_view import signed_totals_by_calendar_month


def expense_total(items, settings, reference, acc=None) -> Dict[str, Any]:
    return {"expense_total": expense_total_for_period(items, settings, reference)}


def income_total(items, settings, reference, acc=None) -> Dict[str, Any]:
    return {"income_total": income_total_for_period(items, settings, reference)}


def net_total(items, settings, reference, acc=None) -> Dict[str, Any]:
    acc = acc or {}
    if "income_total" not in acc or "expense_total" not in acc:
        return {}
    return {"net": acc["income_total"] - acc["expense_total"]}


def year_table(items, settings, reference, acc=None) -> Dict[str, Any]:
    year = resolve_period(reference, settings.month_start_day).start.year
    return {"year": year, "year_net": signed_totals_by_calendar_month(items, year, settings.yearly_mode)}


def item_problems(items, settings, reference) -> Sequence[str]:
    """Messages for items the calculations will skip or misread."""
    checked = (validate_item(i) for i in items if i is not None)
    return [c.get_error()["message"] for c in checked if c.is_left()]


DEFAULT_VALIDATORS = (item_problems,)
DEFAULT_CALCULATORS = (expense_total, income_total, net_total)


class BudgetService:
    """Facade running injected validators and calculators over one period.

    validators: functions taking (items, settings, reference) -> Sequence[str]
    calculators: functions taking (items, settings, reference, acc) -> dict (partial results)
    """

    def __init__(
        self,
        validators: Sequence[Callable[..., Sequence[str]]] = DEFAULT_VALIDATORS,
        calculators: Sequence[Callable[..., Dict[str, Any]]] = DEFAULT_CALCULATORS,
    ):
        self.validators = validators
        self.calculators = calculators

    def period_report(self, items: Iterable[Item], settings: Settings, reference) -> Dict[str, Any]:
        """Run validators and calculators and return the report with intermediate steps."""
        items = tuple(items)
        period = resolve_period(reference, settings.month_start_day)
        report = {
            "period": {"start": period.start, "end_exclusive": period.end_exclusive},
            "validation": [],
            "steps": [],
            "result": {},
        }

        for v in self.validators:
            try:
                msgs = v(items, settings, reference)
            except Exception as e:
                msgs = [f"validator_error: {e}"]
            report["validation"].append({"validator": getattr(v, "__name__", str(v)), "messages": list(msgs)})

        acc: Dict[str, Any] = {}
        for calc in self.calculators:
            out = calc(items, settings, reference, acc)
            report["steps"].append({"calculator": getattr(calc, "__name__", str(calc)), "output": out})
            if isinstance(out, dict):
                acc.update(out)

        report["result"] = acc
        return report
