"""JSON persistence of the item list and settings, plus item import/export."""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Iterable, Tuple
from uuid import uuid4

from budgetsim import config
from budgetsim.domain import Item, Settings
from budgetsim.functional import Either, Left, Right
from budgetsim.settings import settings_from_record, settings_to_record
from budgetsim.transforms import item_to_record, items_from_records

logger = logging.getLogger(__name__)


def load_state(path: Path | None = None) -> Tuple[Tuple[Item, ...], Settings]:
    target = path or config.STATE_PATH
    if not target.exists():
        return (), settings_from_record({})
    try:
        with target.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Could not read state from %s: %s", target, exc)
        return (), settings_from_record({})
    if not isinstance(data, dict):
        logger.warning("Ignoring state file %s: expected an object", target)
        return (), settings_from_record({})

    records = data.get("items") or []
    if not isinstance(records, list):
        records = []
    settings = data.get("settings") or {}
    if not isinstance(settings, dict):
        settings = {}
    return items_from_records(records), settings_from_record(settings)


def save_state(items: Iterable[Item], settings: Settings, path: Path | None = None) -> None:
    target = path or config.STATE_PATH
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "items": [item_to_record(i) for i in items],
        "settings": settings_to_record(settings),
    }
    with target.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, ensure_ascii=False)


def export_items_json(items: Iterable[Item]) -> str:
    return json.dumps([item_to_record(i) for i in items], indent=2, ensure_ascii=False)


def import_items_json(text) -> Either[dict, Tuple[Item, ...]]:
    """Parse exported items (str or UTF-8 bytes); accepts a bare list or a full state object."""
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as exc:
            return Left({"error": "invalid_encoding", "message": f"File is not UTF-8 text: {exc}"})
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as exc:
        return Left({"error": "invalid_json", "message": f"Could not parse JSON: {exc}"})

    if isinstance(data, dict):
        data = data.get("items")
    if not isinstance(data, list):
        return Left({
            "error": "invalid_format",
            "message": "Expected a list of items or an object with an 'items' list",
        })
    items = tuple(
        i if i.id else replace(i, id=uuid4().hex) for i in items_from_records(data)
    )
    return Right(items)
