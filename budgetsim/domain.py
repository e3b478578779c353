from dataclasses import dataclass
from datetime import date
from typing import Optional

EXPENSE = "expense"
INCOME = "income"

ONE_TIME = "one_time"
MONTHLY = "monthly"
YEARLY = "yearly"

FORECAST = "forecast"
CASHFLOW = "cashflow"

KINDS = (EXPENSE, INCOME)
CYCLES = (ONE_TIME, MONTHLY, YEARLY)
YEARLY_MODES = (FORECAST, CASHFLOW)


@dataclass(frozen=True)
class Item:
    id: str
    name: str
    amount: Optional[float]           # magnitude, sign comes from kind
    cycle: str = MONTHLY
    kind: str = EXPENSE               # older records have no kind
    category: str = ""
    pay_date: Optional[date] = None   # one_time only
    pay_day: Optional[int] = None     # monthly / yearly, None means day 1
    start_date: Optional[date] = None
    end_date: Optional[date] = None   # inclusive

    @property
    def sign(self) -> int:
        return 1 if self.kind == INCOME else -1

    @property
    def signed_amount(self) -> float:
        return self.sign * (self.amount or 0)


@dataclass(frozen=True)
class Settings:
    month_start_day: int = 1   # 1..28
    yearly_mode: str = FORECAST


@dataclass(frozen=True)
class Period:
    start: date
    end_exclusive: date


@dataclass(frozen=True)
class CashEvent:
    date: date
    item_id: str
    name: str
    signed_amount: float
    kind: str


@dataclass(frozen=True)
class RunningBalanceRow:
    date: date
    item_id: str
    name: str
    signed_amount: float
    kind: str
    balance: float


@dataclass(frozen=True)
class Projection:
    start_balance: float
    rows: tuple[RunningBalanceRow, ...]
    min_balance: float
    first_negative: Optional[date]
    end_balance: float
