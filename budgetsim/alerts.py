from datetime import datetime
from typing import Callable, Dict, List, NamedTuple

from budgetsim.config import format_money
from budgetsim.domain import Projection

SHORTFALL_DETECTED = "SHORTFALL_DETECTED"
LOW_BALANCE = "LOW_BALANCE"


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Callable[[Event, dict], dict]]] = {}

    def subscribe(self, name: str, handler: Callable[[Event, dict], dict]) -> None:
        self._subscribers.setdefault(name, []).append(handler)

    def publish(self, name: str, payload: dict) -> List[dict]:
        if name not in self._subscribers:
            return []

        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload)
        return [handler(event, payload) for handler in self._subscribers[name]]

    def unsubscribe(self, name: str, handler: Callable[[Event, dict], dict]) -> None:
        if handler in self._subscribers.get(name, []):
            self._subscribers[name].remove(handler)


def shortfall_handler(event: Event, payload: dict) -> dict:
    day = payload["first_negative"]
    return {
        "alert": f"Balance goes negative on {day.isoformat()} "
                 f"(lowest {format_money(payload['min_balance'])})",
        "first_negative": day,
        "min_balance": payload["min_balance"],
    }


def low_balance_handler(event: Event, payload: dict) -> dict:
    return {
        "alert": f"Balance drops to {format_money(payload['min_balance'])}, "
                 f"below threshold {format_money(payload['threshold'])}",
        "min_balance": payload["min_balance"],
        "threshold": payload["threshold"],
    }


def default_bus() -> EventBus:
    bus = EventBus()
    bus.subscribe(SHORTFALL_DETECTED, shortfall_handler)
    bus.subscribe(LOW_BALANCE, low_balance_handler)
    return bus


def publish_projection_alerts(bus: EventBus, projection: Projection, threshold: float = 0) -> List[dict]:
    """Publish shortfall / low-balance events for a projection and collect handler results."""
    results: List[dict] = []
    if projection.first_negative is not None:
        results += bus.publish(SHORTFALL_DETECTED, {
            "first_negative": projection.first_negative,
            "min_balance": projection.min_balance,
        })
    elif threshold > 0 and projection.min_balance < threshold:
        results += bus.publish(LOW_BALANCE, {
            "min_balance": projection.min_balance,
            "threshold": threshold,
        })
    return results
