"""Settings coercion done before values reach the engine."""
import math
from typing import Any, Dict

from budgetsim import config
from budgetsim.domain import CASHFLOW, FORECAST, Settings


def clamp_month_start_day(value: Any) -> int:
    """Truncate toward zero and clamp to 1..28; anything non-numeric becomes 1."""
    if isinstance(value, bool):
        return 1
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 1
    if not math.isfinite(number):
        return 1
    return min(28, max(1, int(number)))


def normalize_yearly_mode(value: Any) -> str:
    return CASHFLOW if value == CASHFLOW else FORECAST


def settings_from_record(record: Dict[str, Any]) -> Settings:
    record = record or {}
    return Settings(
        month_start_day=clamp_month_start_day(
            record.get("monthStartDay", config.DEFAULT_MONTH_START_DAY)
        ),
        yearly_mode=normalize_yearly_mode(record.get("yearlyMode", config.DEFAULT_YEARLY_MODE)),
    )


def settings_to_record(settings: Settings) -> Dict[str, Any]:
    return {"monthStartDay": settings.month_start_day, "yearlyMode": settings.yearly_mode}
