"""Tests for domain entities."""

import pytest
from dataclasses import FrozenInstanceError
from datetime import datetime, date, UTC
from decimal import Decimal

from pocketledger.domain.entities import (
    Account,
    Category,
    Period,
    Transaction,
    TransactionType,
    YearMonth,
)


class TestAccount:
    """Tests for Account entity."""

    def test_create_account(self):
        account = Account(
            id=1,
            name="Test Account",
            account_type="savings",
            created_at=datetime.now(UTC),
        )
        assert account.id == 1
        assert account.name == "Test Account"
        assert account.account_type == "savings"

    def test_account_immutability(self):
        """Test that Account entities are immutable."""
        account = Account(id=1, name="Test Account", account_type="checking", created_at=None)
        with pytest.raises(FrozenInstanceError):
            account.name = "New Name"


class TestCategory:
    """Tests for Category entity."""

    def test_category_defaults(self):
        category = Category(id=1, name="Groceries")
        assert category.is_income is False
        assert category.exclude_from_budget is False
        assert category.exclude_from_totals is False
        assert category.archived is False
        assert category.archived_on is None


class TestTransaction:
    """Tests for Transaction entity."""

    def test_create_transaction(self):
        txn = Transaction(
            id=1,
            account_id=1,
            date=date(2024, 1, 15),
            amount=Decimal("-50.00"),
            type=TransactionType.EXPENSE,
            description="Grocery store",
        )
        assert txn.amount == Decimal("-50.00")
        assert txn.currency == "USD"
        assert txn.category_id is None
        assert txn.recurring_id is None

    def test_transaction_immutability(self):
        txn = Transaction(
            id=1,
            account_id=1,
            date=date(2024, 1, 15),
            amount=Decimal("-50.00"),
            type=TransactionType.EXPENSE,
        )
        with pytest.raises(FrozenInstanceError):
            txn.amount = Decimal("100")


class TestYearMonth:
    def test_parse(self):
        assert YearMonth.parse("2024-03") == YearMonth(2024, 3)

    def test_str_is_zero_padded(self):
        assert str(YearMonth(2024, 3)) == "2024-03"

    def test_rejects_invalid_month(self):
        with pytest.raises(ValueError):
            YearMonth(2024, 13)

    def test_parse_rejects_garbage(self):
        with pytest.raises(ValueError, match="expected YYYY-MM"):
            YearMonth.parse("March")

    def test_ordering_follows_calendar(self):
        assert YearMonth(2023, 12) < YearMonth(2024, 1)


class TestPeriod:
    def test_contains_only_its_months(self):
        period = Period.of((2024, 1), (2024, 3))
        assert period.contains(date(2024, 1, 31))
        assert not period.contains(date(2024, 2, 15))
        assert period.contains(date(2024, 3, 1))

    def test_from_range_spans_year_boundary(self):
        period = Period.from_range(date(2023, 11, 20), date(2024, 2, 3))
        assert [str(m) for m in period.months()] == [
            "2023-11",
            "2023-12",
            "2024-01",
            "2024-02",
        ]

    def test_from_range_rejects_reversed_dates(self):
        with pytest.raises(ValueError):
            Period.from_range(date(2024, 2, 1), date(2024, 1, 1))

    def test_bounds_cover_first_and_last_day(self):
        period = Period.of((2024, 2), (2023, 12))
        assert period.bounds() == (date(2023, 12, 1), date(2024, 2, 29))

    def test_empty_period_has_no_bounds(self):
        assert Period().bounds() is None

    def test_filter_drops_transactions_outside(self):
        inside = Transaction(1, 1, date(2024, 1, 5), Decimal("-1"), TransactionType.EXPENSE)
        outside = Transaction(2, 1, date(2024, 2, 5), Decimal("-1"), TransactionType.EXPENSE)
        assert Period.of((2024, 1)).filter([inside, outside]) == [inside]
