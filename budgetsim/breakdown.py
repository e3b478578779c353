from collections import defaultdict
from typing import Dict, Iterable, Iterator, Tuple

from budgetsim.calc import total_for_period
from budgetsim.domain import Item, Settings
from budgetsim.transforms import expense_items

UNCATEGORIZED = "Uncategorized"


def category_totals_for_period(
    items: Iterable[Item], settings: Settings, reference
) -> Dict[str, float]:
    by_category: Dict[str, list] = defaultdict(list)
    for item in items:
        if item is not None:
            by_category[item.category or UNCATEGORIZED].append(item)

    totals = {cat: total_for_period(group, settings, reference) for cat, group in by_category.items()}
    return {cat: total for cat, total in totals.items() if total}


def top_categories(
    items: Iterable[Item], settings: Settings, reference, k: int
) -> Iterator[Tuple[str, float]]:
    """Yield the ``k`` biggest expense categories of the period, largest first."""
    totals = category_totals_for_period(expense_items(i for i in items if i is not None), settings, reference)
    ordered = sorted(totals.items(), key=lambda item: item[1], reverse=True)

    for name, total in ordered[: max(0, k)]:
        yield name, total
