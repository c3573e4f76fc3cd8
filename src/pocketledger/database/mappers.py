"""Mapper functions to convert between domain models and SQLAlchemy models."""

from decimal import Decimal

from pocketledger.domain import entities as domain
from pocketledger.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    Payee as ORMPayee,
    RecurringTransaction as ORMRecurringTransaction,
    Transaction as ORMTransaction,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        account_type=orm_account.account_type,
        created_at=orm_account.created_at,
    )


def payee_to_domain(orm_payee: ORMPayee) -> domain.Payee:
    """Convert SQLAlchemy Payee model to domain Payee entity."""
    return domain.Payee(
        id=orm_payee.id,
        name=orm_payee.name,
        created_at=orm_payee.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        is_income=orm_category.is_income,
        exclude_from_budget=orm_category.exclude_from_budget,
        exclude_from_totals=orm_category.exclude_from_totals,
        order=orm_category.order,
        archived=orm_category.archived,
        archived_on=orm_category.archived_on,
        description=orm_category.description,
        created_at=orm_category.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        date=orm_transaction.date,
        amount=Decimal(orm_transaction.amount),
        type=domain.TransactionType(orm_transaction.type),
        description=orm_transaction.description or "",
        currency=orm_transaction.currency,
        category_id=orm_transaction.category_id,
        payee_id=orm_transaction.payee_id,
        transfer_account_id=orm_transaction.transfer_account_id,
        notes=orm_transaction.notes,
        recurring_id=orm_transaction.recurring_id,
        occurrence_date=orm_transaction.occurrence_date,
        created_at=orm_transaction.created_at,
    )


def recurring_to_domain(
    orm_recurring: ORMRecurringTransaction,
) -> domain.RecurringTransaction:
    """Convert SQLAlchemy RecurringTransaction model to domain entity."""
    return domain.RecurringTransaction(
        id=orm_recurring.id,
        description=orm_recurring.description,
        amount=Decimal(orm_recurring.amount),
        frequency=domain.Frequency(orm_recurring.frequency),
        start_date=orm_recurring.start_date,
        account_id=orm_recurring.account_id,
        currency=orm_recurring.currency,
        end_date=orm_recurring.end_date,
        is_active=orm_recurring.is_active,
        category_id=orm_recurring.category_id,
        payee_id=orm_recurring.payee_id,
        next_occurrence=orm_recurring.next_occurrence,
        created_at=orm_recurring.created_at,
    )
