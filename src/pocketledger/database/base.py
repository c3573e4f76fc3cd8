"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from pocketledger.domain.entities import (
    Account,
    Category,
    Payee,
    RecurringTransaction,
    Transaction,
    TransactionType,
)


class Database(ABC):
    """Abstract database interface for pocketledger."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(self, name: str, account_type: str) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts."""
        pass

    @abstractmethod
    def update_account(
        self, account_id: int, name: str, account_type: Optional[str] = None
    ) -> None:
        """Rename an account and optionally change its type."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account."""
        pass

    @abstractmethod
    def count_account_references(self, account_id: int) -> tuple[int, int]:
        """Count (transactions, recurring definitions) referencing an account."""
        pass

    # Payee operations
    @abstractmethod
    def create_payee(self, name: str) -> int:
        """Create a payee. Returns payee ID."""
        pass

    @abstractmethod
    def get_payee(self, payee_id: int) -> Optional[Payee]:
        """Get payee by ID."""
        pass

    @abstractmethod
    def get_payee_by_name(self, name: str) -> Optional[Payee]:
        """Get payee by name, case-insensitive."""
        pass

    @abstractmethod
    def list_payees(self) -> list[Payee]:
        """List payees ordered by name."""
        pass

    @abstractmethod
    def delete_payee(self, payee_id: int) -> None:
        """Delete a payee."""
        pass

    @abstractmethod
    def count_payee_references(self, payee_id: int) -> int:
        """Count transactions and recurring definitions referencing a payee."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self,
        name: str,
        is_income: bool = False,
        exclude_from_budget: bool = False,
        exclude_from_totals: bool = False,
        order: int = 0,
        description: Optional[str] = None,
    ) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def list_categories(self, archived: Optional[bool] = None) -> list[Category]:
        """List categories ordered by (order, id), optionally by archived flag."""
        pass

    @abstractmethod
    def update_category(self, category_id: int, **fields) -> None:
        """Update category columns given as keyword arguments."""
        pass

    @abstractmethod
    def set_category_orders(self, orders: dict[int, int]) -> None:
        """Assign order values to several categories in one unit of work."""
        pass

    @abstractmethod
    def delete_category(self, category_id: int) -> None:
        """Delete a category and its budget value."""
        pass

    @abstractmethod
    def count_category_references(self, category_id: int) -> tuple[int, int]:
        """Count (transactions, recurring definitions) referencing a category."""
        pass

    # Budget operations
    @abstractmethod
    def get_budget(self, category_id: int) -> Optional[Decimal]:
        """Get planned amount for a category."""
        pass

    @abstractmethod
    def set_budget(self, category_id: int, amount: Decimal) -> None:
        """Insert or replace the planned amount for a category."""
        pass

    @abstractmethod
    def delete_budget(self, category_id: int) -> None:
        """Remove the planned amount for a category."""
        pass

    @abstractmethod
    def list_budgets(self) -> dict[int, Decimal]:
        """Snapshot of all planned amounts keyed by category ID."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        account_id: int,
        date: date,
        amount: Decimal,
        type: TransactionType,
        description: str = "",
        currency: str = "USD",
        category_id: Optional[int] = None,
        payee_id: Optional[int] = None,
        transfer_account_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def update_transaction(self, transaction_id: int, **fields) -> None:
        """Update transaction columns given as keyword arguments."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def query_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[int] = None,
        account_id: Optional[int] = None,
        type: Optional[TransactionType] = None,
        recurring_id: Optional[int] = None,
    ) -> list[Transaction]:
        """List transactions matching the filters, newest first."""
        pass

    # Recurring transaction operations
    @abstractmethod
    def create_recurring(
        self,
        description: str,
        amount: Decimal,
        frequency: str,
        start_date: date,
        account_id: int,
        currency: str = "USD",
        end_date: Optional[date] = None,
        category_id: Optional[int] = None,
        payee_id: Optional[int] = None,
    ) -> int:
        """Create a recurring definition. Returns its ID."""
        pass

    @abstractmethod
    def get_recurring(self, recurring_id: int) -> Optional[RecurringTransaction]:
        """Get recurring definition by ID."""
        pass

    @abstractmethod
    def list_recurring(self, active_only: bool = False) -> list[RecurringTransaction]:
        """List recurring definitions, newest first."""
        pass

    @abstractmethod
    def update_recurring(self, recurring_id: int, **fields) -> None:
        """Update recurring columns given as keyword arguments."""
        pass

    @abstractmethod
    def delete_recurring(self, recurring_id: int) -> None:
        """Delete a definition, keeping its materialized transactions."""
        pass

    @abstractmethod
    def materialize_recurring(
        self,
        recurring_id: int,
        occurrence_date: date,
        next_cursor: date,
        type: TransactionType,
    ) -> Optional[int]:
        """Insert the transaction for one occurrence and advance the cursor.

        Both happen in one unit of work. Returns the new transaction ID, or None
        when the occurrence was already materialized.
        """
        pass
