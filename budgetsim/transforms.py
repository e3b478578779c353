import math
from typing import Any, Dict, Iterable, Optional, Tuple

from budgetsim.domain import EXPENSE, INCOME, Item
from budgetsim.periods import parse_iso_date


def _amount(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _pay_day(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        day = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(day):
        return None
    return min(31, max(1, int(day)))


def item_from_record(record: Dict[str, Any]) -> Item:
    """Build an Item from the stored (camelCase) record shape."""
    return Item(
        id=str(record.get("id") or ""),
        name=str(record.get("name", "")),
        amount=_amount(record.get("amount")),
        cycle=record.get("cycle") or "",
        kind=record.get("kind") or EXPENSE,
        category=str(record.get("category") or ""),
        pay_date=parse_iso_date(record.get("payDate")),
        pay_day=_pay_day(record.get("payDay")),
        start_date=parse_iso_date(record.get("startDate")),
        end_date=parse_iso_date(record.get("endDate")),
    )


def item_to_record(item: Item) -> Dict[str, Any]:
    def iso(d):
        return d.isoformat() if d is not None else None

    return {
        "id": item.id,
        "kind": item.kind,
        "name": item.name,
        "amount": item.amount,
        "category": item.category,
        "cycle": item.cycle,
        "payDate": iso(item.pay_date),
        "payDay": item.pay_day,
        "startDate": iso(item.start_date),
        "endDate": iso(item.end_date),
    }


def items_from_records(records: Iterable[Any]) -> Tuple[Item, ...]:
    return tuple(item_from_record(r) for r in records if isinstance(r, dict))


def add_item(items: Tuple[Item, ...], item: Item) -> Tuple[Item, ...]:
    return items + (item,)


def update_item(items: Tuple[Item, ...], item: Item) -> Tuple[Item, ...]:
    return tuple(item if i.id == item.id else i for i in items)


def remove_item(items: Tuple[Item, ...], item_id: str) -> Tuple[Item, ...]:
    return tuple(filter(lambda i: i.id != item_id, items))


def merge_items(existing: Tuple[Item, ...], incoming: Iterable[Item]) -> Tuple[Item, ...]:
    """Imported items replace same-id items in place; unknown ids are appended."""
    incoming_by_id = {i.id: i for i in incoming}
    merged = tuple(incoming_by_id.pop(i.id, i) for i in existing)
    return merged + tuple(incoming_by_id.values())


def expense_items(items: Iterable[Item]) -> Tuple[Item, ...]:
    return tuple(filter(lambda i: i.kind != INCOME, items))


def income_items(items: Iterable[Item]) -> Tuple[Item, ...]:
    return tuple(filter(lambda i: i.kind == INCOME, items))
