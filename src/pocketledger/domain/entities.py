"""Domain model entities for pocketledger.

These are pure data classes representing business concepts, independent of
database schema. Monetary values are always ``Decimal``; summing binary floats
would drift by cents across many transactions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional


class TransactionType(str, Enum):
    """Kind of ledger entry."""

    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


class Frequency(str, Enum):
    """Cadence of a recurring transaction."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class ColumnRole(str, Enum):
    """Role a spreadsheet column plays during import."""

    IGNORE = "ignore"
    DATE = "date"
    PAYEE = "payee"
    AMOUNT = "amount"
    CATEGORY = "category"


class RecurringState(str, Enum):
    """Lifecycle state of a recurring transaction relative to "now"."""

    SCHEDULED = "scheduled"
    DUE = "due"
    MATERIALIZED = "materialized"
    ENDED = "ended"


@dataclass(frozen=True)
class Account:
    """Account that owns transactions."""

    id: int
    name: str
    account_type: str
    created_at: datetime


@dataclass(frozen=True)
class Payee:
    """Counterparty of a transaction."""

    id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Spending or income category."""

    id: int
    name: str
    is_income: bool = False
    exclude_from_budget: bool = False
    exclude_from_totals: bool = False
    order: int = 0
    archived: bool = False
    archived_on: Optional[datetime] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Transaction:
    """Ledger entry with a single signed amount."""

    id: int
    account_id: int
    date: date
    amount: Decimal
    type: TransactionType
    description: str = ""
    currency: str = "USD"
    category_id: Optional[int] = None
    payee_id: Optional[int] = None
    transfer_account_id: Optional[int] = None
    notes: Optional[str] = None
    recurring_id: Optional[int] = None
    occurrence_date: Optional[date] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class RecurringTransaction:
    """Template that produces dated transactions on a fixed cadence."""

    id: int
    description: str
    amount: Decimal
    frequency: Frequency
    start_date: date
    account_id: int
    currency: str = "USD"
    end_date: Optional[date] = None
    is_active: bool = True
    category_id: Optional[int] = None
    payee_id: Optional[int] = None
    next_occurrence: Optional[date] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class MappedRow:
    """Import row after column mapping and type inference."""

    payee: str
    amount: str
    date: str
    category: Optional[str]
    type: TransactionType


@dataclass(frozen=True)
class RejectedRow:
    """Import row that failed validation."""

    row_index: int
    reason: str


@dataclass(frozen=True)
class ImportResult:
    """Outcome of mapping an import table."""

    accepted: tuple[MappedRow, ...] = ()
    rejected: tuple[RejectedRow, ...] = ()


@dataclass(frozen=True, order=True)
class YearMonth:
    """Calendar month bucket."""

    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"Invalid month {self.month}")

    @classmethod
    def of(cls, value: date) -> YearMonth:
        return cls(value.year, value.month)

    @classmethod
    def parse(cls, text: str) -> YearMonth:
        """Parse ``YYYY-MM``."""
        try:
            year_str, month_str = text.strip().split("-")
            return cls(int(year_str), int(month_str))
        except ValueError:
            raise ValueError(f"Invalid month '{text}', expected YYYY-MM")

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class Period:
    """Reporting period made of (year, month) buckets, contiguous or not."""

    buckets: frozenset[YearMonth] = field(default_factory=frozenset)

    @classmethod
    def of(cls, *months: YearMonth | tuple[int, int]) -> Period:
        return cls(
            frozenset(
                m if isinstance(m, YearMonth) else YearMonth(*m) for m in months
            )
        )

    @classmethod
    def from_range(cls, start: date, end: date) -> Period:
        """Every month touched by the inclusive date range."""
        if end < start:
            raise ValueError("Start date must be before end date")
        buckets = set()
        year, month = start.year, start.month
        while (year, month) <= (end.year, end.month):
            buckets.add(YearMonth(year, month))
            month += 1
            if month > 12:
                year, month = year + 1, 1
        return cls(frozenset(buckets))

    def contains(self, value: date) -> bool:
        return YearMonth.of(value) in self.buckets

    def months(self) -> list[YearMonth]:
        return sorted(self.buckets)

    def bounds(self) -> Optional[tuple[date, date]]:
        """First and last day covered by the period, or None when empty."""
        if not self.buckets:
            return None
        first, last = min(self.buckets), max(self.buckets)
        if last.month == 12:
            end = date(last.year, 12, 31)
        else:
            end = date(last.year, last.month + 1, 1) - date.resolution
        return date(first.year, first.month, 1), end

    def filter(self, transactions: Iterable[Transaction]) -> list[Transaction]:
        return [txn for txn in transactions if self.contains(txn.date)]


@dataclass(frozen=True)
class BudgetRow:
    """Planned vs actual figures for one category in a period."""

    category_id: Optional[int]
    category_name: str
    planned: Decimal
    actual: Decimal
    variance: Decimal


@dataclass(frozen=True)
class PeriodTotals:
    """Income, expenses and savings for a period."""

    income: Decimal
    expenses: Decimal
    net_income: Decimal
    savings_rate: Decimal
