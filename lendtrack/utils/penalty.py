# lendtrack/utils/penalty.py
"""
Ödünç durumu ve gecikme cezası hesapları.

Tüm fonksiyonlar saf (pure): saat okumazlar, veritabanına dokunmazlar.
`as_of` verilmezse sınırda `date.today()` kullanılır.

Gün farkı her zaman takvim günü üzerinden alınır: girdiler önce `date`'e
indirgenir, sonra `(a - b).days` hesaplanır. Böylece ceza ve etiket aynı gün
için hiçbir zaman çelişmez.
"""
from __future__ import annotations

import math
from datetime import date, datetime
from enum import Enum
from typing import NamedTuple

FIRST_TIER_DAYS = 5
FIRST_TIER_RATE = 5
LATER_RATE = 10
DUE_SOON_DAYS = 3

CURRENCY_SYMBOL = "₹"

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


class InvalidInputError(ValueError):
    pass


class LendingState(str, Enum):
    BORROWED = "borrowed"
    RETURNED = "returned"


class StatusLabel(str, Enum):
    BORROWED = "Borrowed"
    DUE_SOON = "Due Soon"
    OVERDUE = "Overdue"
    RETURNED = "Returned"


class Severity(str, Enum):
    DEFAULT = "default"
    SUCCESS = "success"
    WARNING = "warning"
    DESTRUCTIVE = "destructive"


class BookStatus(NamedTuple):
    label: StatusLabel
    severity: Severity


def parse_date(value) -> date:
    """
    date / datetime / ISO-8601 string -> date.
    Datetime girdilerinde saat kısmı atılır.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidInputError(f"Invalid date: {value!r}")

    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise InvalidInputError(f"Invalid date: {value!r}") from None


def parse_state(status) -> LendingState:
    if isinstance(status, LendingState):
        return status
    try:
        return LendingState(str(status).strip().lower())
    except ValueError:
        raise InvalidInputError(f"Invalid status: {status!r}") from None


def _as_of(as_of) -> date:
    return date.today() if as_of is None else parse_date(as_of)


def _days_until_due(deadline, as_of) -> int:
    return (parse_date(deadline) - _as_of(as_of)).days


def calculate_penalty(deadline, as_of=None, status=LendingState.BORROWED) -> int:
    """
    Kademeli gecikme cezası:
    ilk 5 gün için günlük 5, sonrası için günlük 10 birim.
    İade edilmiş kitap için her zaman 0.
    """
    due = parse_date(deadline)
    if parse_state(status) is LendingState.RETURNED:
        return 0

    days_overdue = (_as_of(as_of) - due).days
    if days_overdue <= 0:
        return 0

    first_tier = min(days_overdue, FIRST_TIER_DAYS)
    remaining = max(0, days_overdue - FIRST_TIER_DAYS)
    return first_tier * FIRST_TIER_RATE + remaining * LATER_RATE


def get_book_status(deadline, status, as_of=None) -> BookStatus:
    if parse_state(status) is LendingState.RETURNED:
        return BookStatus(StatusLabel.RETURNED, Severity.SUCCESS)

    days_until_due = _days_until_due(deadline, as_of)
    if days_until_due < 0:
        return BookStatus(StatusLabel.OVERDUE, Severity.DESTRUCTIVE)
    if days_until_due <= DUE_SOON_DAYS:
        return BookStatus(StatusLabel.DUE_SOON, Severity.WARNING)
    return BookStatus(StatusLabel.BORROWED, Severity.DEFAULT)


def _days(n: int) -> str:
    return f"{n} day" if n == 1 else f"{n} days"


def get_days_display(deadline, status, as_of=None) -> str:
    if parse_state(status) is LendingState.RETURNED:
        return "Returned"

    days_until_due = _days_until_due(deadline, as_of)
    if days_until_due < 0:
        return f"Overdue by {_days(-days_until_due)}"
    return f"{_days(days_until_due)} left"


def format_date(value) -> str:
    """'2024-01-10' -> '10 Jan 2024' (en-IN kısa ay formatı, locale'den bağımsız)."""
    d = parse_date(value)
    return f"{d.day} {_MONTHS[d.month - 1]} {d.year}"


def format_amount(units: int) -> str:
    return f"{CURRENCY_SYMBOL}{units}"


def loan_progress(borrowed_date, deadline, status, as_of=None) -> int:
    """Ödünç süresinin yüzde kaçı geçti (0-100)."""
    start = parse_date(borrowed_date)
    due = parse_date(deadline)
    if parse_state(status) is LendingState.RETURNED:
        return 100

    today = _as_of(as_of)
    total_days = (due - start).days
    if total_days <= 0:
        return 100 if today >= due else 0

    elapsed = (today - start).days
    # yarım değerler yukarı yuvarlanır (12.5 -> 13)
    return math.floor(min(100.0, max(0.0, elapsed / total_days * 100)) + 0.5)
