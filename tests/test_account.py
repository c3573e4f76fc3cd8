"""Tests for accounts and payees."""

import pytest
from datetime import date
from decimal import Decimal

from pocketledger.cli.main import cli
from pocketledger.domain.errors import ConflictError, NotFoundError, ValidationError


def test_account_create(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "create", "Joint Checking"]
    )

    assert result.exit_code == 0
    assert "Created account 'Joint Checking'" in result.output
    assert "ID:" in result.output


def test_account_list_empty(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "list"]
    )

    assert result.exit_code == 0
    assert "No accounts found" in result.output


def test_account_list_with_data(cli_runner, temp_db, sample_account):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "list"]
    )

    assert result.exit_code == 0
    assert "Test Account" in result.output
    assert "checking" in result.output


def test_account_create_duplicate(cli_runner, temp_db):
    result1 = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "create", "Visa", "--type", "credit"]
    )
    assert result1.exit_code == 0

    result2 = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "create", "Visa"]
    )

    assert result2.exit_code == 1
    assert "already exists" in result2.output.lower()


def test_account_rename_by_name(cli_runner, temp_db, sample_account):
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "account", "rename", "Test Account", "Everyday"],
    )
    assert result.exit_code == 0

    listing = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "account", "list"])
    assert "Everyday" in listing.output
    assert "Test Account" not in listing.output


def test_account_delete_unknown(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "delete", "Nope"]
    )

    assert result.exit_code == 1
    assert "not found" in result.output


class TestAccountService:
    def test_blank_name(self, account_service):
        with pytest.raises(ValidationError):
            account_service.create_account("  ")

    def test_resolve_by_name_or_id(self, account_service, sample_account):
        assert account_service.resolve("Test Account") == sample_account.id
        assert account_service.resolve(str(sample_account.id)) == sample_account.id
        assert account_service.resolve(sample_account.id) == sample_account.id

    def test_delete_blocked_while_transactions_exist(self, account_service, transaction_service, sample_account):
        transaction_service.create_transaction(
            account_id=sample_account.id, date=date(2024, 1, 1), amount=Decimal("-1")
        )
        with pytest.raises(ConflictError, match="1 transaction"):
            account_service.delete_account(sample_account.id)

    def test_delete_unused_account(self, account_service, sample_account):
        account_service.delete_account(sample_account.id)
        assert account_service.get_account(sample_account.id) is None


class TestPayeeService:
    def test_get_or_create_matches_case_insensitively(self, payee_service):
        first = payee_service.get_or_create("Landlord")
        assert payee_service.get_or_create("landlord ") == first
        assert len(payee_service.list_payees()) == 1

    def test_duplicate_payee(self, payee_service):
        payee_service.create_payee("Landlord")
        with pytest.raises(ConflictError):
            payee_service.create_payee("LANDLORD")

    def test_blank_payee(self, payee_service):
        with pytest.raises(ValidationError):
            payee_service.create_payee("")

    def test_delete_blocked_by_references(self, payee_service, transaction_service, sample_account):
        payee_id = payee_service.create_payee("Landlord")
        transaction_service.create_transaction(
            account_id=sample_account.id,
            date=date(2024, 1, 1),
            amount=Decimal("-1"),
            payee_id=payee_id,
        )
        with pytest.raises(ConflictError):
            payee_service.delete_payee(payee_id)

    def test_delete_unknown_payee(self, payee_service):
        with pytest.raises(NotFoundError):
            payee_service.delete_payee(999)
