from abc import ABC, abstractmethod
from typing import Callable, Generic, Iterable, TypeVar

from budgetsim.domain import CYCLES, KINDS, ONE_TIME, Item
from budgetsim.calc import has_usable_amount

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')


class Maybe(Generic[T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_some(self) -> bool:
        pass

    def is_none(self) -> bool:
        return not self.is_some()


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Some(f(self._value))

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_some(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Nothing()

    def get_or_else(self, default: T) -> T:
        return default

    def is_some(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


class Either(Generic[E, T], ABC):

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_right(self) -> bool:
        pass

    def is_left(self) -> bool:
        return not self.is_right()


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_right(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return self

    def get_or_else(self, default: T) -> T:
        return default

    def is_right(self) -> bool:
        return False

    def get_error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


def safe_item(items: Iterable[Item], item_id: str) -> Maybe[Item]:
    for item in items:
        if item.id == item_id:
            return Some(item)
    return Nothing()


def _check_amount(item: Item) -> Either[dict, Item]:
    if not has_usable_amount(item) or item.amount < 0:
        return Left({
            "error": "invalid_amount",
            "message": f"Amount for {item.name or item.id} must be a non-negative number",
            "amount": item.amount,
        })
    return Right(item)


def _check_kind_and_cycle(item: Item) -> Either[dict, Item]:
    if item.kind not in KINDS:
        return Left({
            "error": "unknown_kind",
            "message": f"Kind must be one of {', '.join(KINDS)}",
            "kind": item.kind,
        })
    if item.cycle not in CYCLES:
        return Left({
            "error": "unknown_cycle",
            "message": f"Cycle must be one of {', '.join(CYCLES)}",
            "cycle": item.cycle,
        })
    return Right(item)


def _check_schedule(item: Item) -> Either[dict, Item]:
    if item.cycle == ONE_TIME:
        if item.pay_date is None:
            return Left({
                "error": "missing_pay_date",
                "message": f"One-time item {item.name or item.id} needs a pay date",
            })
        return Right(item)

    if item.pay_day is not None and not 1 <= item.pay_day <= 31:
        return Left({
            "error": "invalid_pay_day",
            "message": "Pay day must be between 1 and 31",
            "pay_day": item.pay_day,
        })
    if item.start_date and item.end_date and item.end_date < item.start_date:
        return Left({
            "error": "invalid_date_range",
            "message": "End date is before start date",
            "start_date": item.start_date.isoformat(),
            "end_date": item.end_date.isoformat(),
        })
    return Right(item)


def validate_item(item: Item) -> Either[dict, Item]:
    """Check a user-entered item before it is added to the list."""
    return Right(item).bind(_check_amount).bind(_check_kind_and_cycle).bind(_check_schedule)

