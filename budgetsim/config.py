"""Configuration for the budget simulator.

Paths and display defaults, each overridable through an environment
variable. The calculation modules never read this; only the app and the
storage helpers do.
"""

from __future__ import annotations

import os
from pathlib import Path

_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

DATA_DIR = Path(os.getenv("BUDGETSIM_DATA_DIR", _PROJECT_ROOT / "data"))
STATE_PATH = Path(os.getenv("BUDGETSIM_STATE_PATH", DATA_DIR / "state.json")).resolve()

CURRENCY = os.getenv("BUDGETSIM_CURRENCY", "JPY")
LOG_LEVEL = os.getenv("BUDGETSIM_LOG_LEVEL", "INFO").upper()

DEFAULT_MONTH_START_DAY = 1
DEFAULT_YEARLY_MODE = "forecast"


def ensure_data_dir() -> None:
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def format_money(value: float) -> str:
    return f"{value:,.0f} {CURRENCY}"
