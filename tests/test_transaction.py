"""Tests for transaction service."""

import pytest
from datetime import date
from decimal import Decimal

from pocketledger.domain.entities import Category, TransactionType
from pocketledger.domain.errors import NotFoundError, ValidationError
from pocketledger.domain.transaction import infer_transaction_type


class TestInferTransactionType:
    def test_sign_decides_without_category(self):
        assert infer_transaction_type(Decimal("-1")) == TransactionType.EXPENSE
        assert infer_transaction_type(Decimal("1")) == TransactionType.INCOME

    def test_category_decides_over_sign(self):
        refunds = Category(id=1, name="Refunds", is_income=True)
        assert infer_transaction_type(Decimal("-1"), refunds) == TransactionType.INCOME


class TestCreateTransaction:
    def test_create_expense(self, transaction_service, sample_account):
        transaction_id = transaction_service.create_transaction(
            account_id=sample_account.id,
            date=date(2024, 1, 15),
            amount=Decimal("-50.00"),
            description=" Grocery store ",
        )
        txn = transaction_service.get_transaction(transaction_id)
        assert txn.amount == Decimal("-50.00")
        assert txn.type == TransactionType.EXPENSE
        assert txn.description == "Grocery store"
        assert txn.currency == "USD"

    def test_configured_currency_is_the_default(self, temp_db, sample_account):
        from pocketledger.domain.transaction import TransactionService

        service = TransactionService(temp_db, default_currency="EUR")
        transaction_id = service.create_transaction(
            account_id=sample_account.id, date=date(2024, 1, 15), amount=Decimal("5")
        )
        assert service.get_transaction(transaction_id).currency == "EUR"

    def test_income_category_makes_income(self, transaction_service, category_service, sample_account):
        salary = category_service.create_category("Salary", is_income=True)
        transaction_id = transaction_service.create_transaction(
            account_id=sample_account.id,
            date=date(2024, 1, 15),
            amount=Decimal("3000"),
            category_id=salary,
        )
        assert transaction_service.get_transaction(transaction_id).type == TransactionType.INCOME

    def test_sub_cent_amount_is_rejected(self, transaction_service, sample_account):
        with pytest.raises(ValidationError, match="more than 2 decimal places"):
            transaction_service.create_transaction(
                account_id=sample_account.id, date=date(2024, 1, 15), amount=Decimal("-10.125")
            )
        assert transaction_service.list_transactions() == []

    def test_payee_created_by_name_after_validation(self, transaction_service, payee_service, sample_account):
        with pytest.raises(ValidationError):
            transaction_service.create_transaction(
                account_id=sample_account.id,
                date=date(2024, 1, 15),
                amount=Decimal("-1"),
                transfer_account_id=sample_account.id,
                payee_name="Corner Shop",
            )
        assert payee_service.list_payees() == []

        transaction_id = transaction_service.create_transaction(
            account_id=sample_account.id,
            date=date(2024, 1, 15),
            amount=Decimal("-1"),
            payee_name="Corner Shop",
        )
        payee = payee_service.list_payees()[0]
        assert transaction_service.get_transaction(transaction_id).payee_id == payee.id

    def test_unknown_account(self, transaction_service):
        with pytest.raises(NotFoundError):
            transaction_service.create_transaction(
                account_id=999, date=date(2024, 1, 15), amount=Decimal("-1")
            )

    def test_unknown_category(self, transaction_service, sample_account):
        with pytest.raises(NotFoundError):
            transaction_service.create_transaction(
                account_id=sample_account.id,
                date=date(2024, 1, 15),
                amount=Decimal("-1"),
                category_id=999,
            )

    def test_transfer_between_accounts(self, transaction_service, account_service, sample_account):
        savings = account_service.create_account("Savings", account_type="savings")
        transaction_id = transaction_service.create_transaction(
            account_id=sample_account.id,
            date=date(2024, 1, 15),
            amount=Decimal("-500"),
            transfer_account_id=savings,
        )
        txn = transaction_service.get_transaction(transaction_id)
        assert txn.type == TransactionType.TRANSFER
        assert txn.transfer_account_id == savings

    def test_transfer_requires_counter_account(self, transaction_service, sample_account):
        with pytest.raises(ValidationError, match="transfer account"):
            transaction_service.create_transaction(
                account_id=sample_account.id,
                date=date(2024, 1, 15),
                amount=Decimal("-500"),
                type=TransactionType.TRANSFER,
            )

    def test_transfer_to_same_account(self, transaction_service, sample_account):
        with pytest.raises(ValidationError, match="same account"):
            transaction_service.create_transaction(
                account_id=sample_account.id,
                date=date(2024, 1, 15),
                amount=Decimal("-500"),
                transfer_account_id=sample_account.id,
            )

    def test_counter_account_only_for_transfers(self, transaction_service, account_service, sample_account):
        savings = account_service.create_account("Savings")
        with pytest.raises(ValidationError, match="Only transfers"):
            transaction_service.create_transaction(
                account_id=sample_account.id,
                date=date(2024, 1, 15),
                amount=Decimal("-500"),
                type=TransactionType.EXPENSE,
                transfer_account_id=savings,
            )


class TestUpdateTransaction:
    def test_changing_sign_reinfers_type(self, transaction_service, sample_account):
        transaction_id = transaction_service.create_transaction(
            account_id=sample_account.id, date=date(2024, 1, 15), amount=Decimal("-20")
        )
        transaction_service.update_transaction(transaction_id, amount=Decimal("20"))
        txn = transaction_service.get_transaction(transaction_id)
        assert txn.amount == Decimal("20")
        assert txn.type == TransactionType.INCOME

    def test_clear_category(self, transaction_service, category_service, sample_account):
        groceries = category_service.create_category("Groceries")
        transaction_id = transaction_service.create_transaction(
            account_id=sample_account.id,
            date=date(2024, 1, 15),
            amount=Decimal("-20"),
            category_id=groceries,
        )
        transaction_service.update_transaction(transaction_id, clear_category=True)
        assert transaction_service.get_transaction(transaction_id).category_id is None

    def test_keep_archived_category_when_editing_other_fields(
        self, transaction_service, category_service, sample_account
    ):
        groceries = category_service.create_category("Groceries")
        transaction_id = transaction_service.create_transaction(
            account_id=sample_account.id,
            date=date(2024, 1, 15),
            amount=Decimal("-20"),
            category_id=groceries,
        )
        category_service.archive(groceries)
        transaction_service.update_transaction(
            transaction_id, description="Farmers market", category_id=groceries
        )
        txn = transaction_service.get_transaction(transaction_id)
        assert txn.description == "Farmers market"
        assert txn.category_id == groceries

    def test_update_missing_transaction(self, transaction_service):
        with pytest.raises(NotFoundError):
            transaction_service.update_transaction(999, description="x")


class TestListAndDelete:
    def test_list_filters_by_date_and_type(self, transaction_service, sample_account):
        for day, amount in [(5, "-10"), (15, "100"), (25, "-30")]:
            transaction_service.create_transaction(
                account_id=sample_account.id,
                date=date(2024, 1, day),
                amount=Decimal(amount),
            )
        expenses = transaction_service.list_transactions(
            start_date=date(2024, 1, 10), type=TransactionType.EXPENSE
        )
        assert [t.date for t in expenses] == [date(2024, 1, 25)]

    def test_list_is_newest_first(self, transaction_service, sample_account):
        for day in (3, 1, 2):
            transaction_service.create_transaction(
                account_id=sample_account.id,
                date=date(2024, 1, day),
                amount=Decimal("-1"),
            )
        assert [t.date.day for t in transaction_service.list_transactions()] == [3, 2, 1]

    def test_delete(self, transaction_service, sample_account):
        transaction_id = transaction_service.create_transaction(
            account_id=sample_account.id, date=date(2024, 1, 15), amount=Decimal("-1")
        )
        transaction_service.delete_transaction(transaction_id)
        assert transaction_service.get_transaction(transaction_id) is None

    def test_delete_missing(self, transaction_service):
        with pytest.raises(NotFoundError):
            transaction_service.delete_transaction(999)
