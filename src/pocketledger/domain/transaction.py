"""Transaction domain service."""

from typing import Optional
from datetime import date
from decimal import Decimal

from pocketledger.database.base import Database
from pocketledger.domain.entities import (
    Category,
    Transaction as TransactionEntity,
    TransactionType,
)
from pocketledger.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    category_archived,
    category_not_found,
    payee_not_found,
    transaction_not_found,
)
from pocketledger.domain.payee import PayeeService
from pocketledger.utils.amount_parser import require_cents


def infer_transaction_type(
    amount: Decimal, category: Optional[Category] = None
) -> TransactionType:
    """Classify an entry as income or expense.

    The category's income flag wins when a category is given; otherwise a
    negative amount is an expense and anything else is income. This is the
    same precedence the import mapper applies.
    """
    if category is not None:
        return TransactionType.INCOME if category.is_income else TransactionType.EXPENSE
    return TransactionType.EXPENSE if amount < 0 else TransactionType.INCOME


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db: Database, default_currency: str = "USD"):
        """Initialize transaction service.

        Args:
            db: Database instance
            default_currency: Currency used when none is given
        """
        self.db = db
        self.default_currency = default_currency

    def create_transaction(
        self,
        account_id: int,
        date: date,
        amount: Decimal,
        description: str = "",
        type: Optional[TransactionType] = None,
        category_id: Optional[int] = None,
        payee_id: Optional[int] = None,
        transfer_account_id: Optional[int] = None,
        notes: Optional[str] = None,
        currency: Optional[str] = None,
        payee_name: Optional[str] = None,
    ) -> int:
        """Create a transaction.

        Args:
            account_id: Owning account ID
            date: Transaction date
            amount: Signed amount (negative is an outflow)
            description: Optional description
            type: income, expense or transfer; inferred when omitted
            category_id: Optional category ID (must not be archived)
            payee_id: Optional payee ID
            transfer_account_id: Counter account, required for transfers only
            notes: Optional notes
            currency: ISO code, defaults to the configured currency
            payee_name: Payee looked up or created by name once the other
                fields are valid; used when payee_id is None

        Returns:
            Transaction ID

        Raises:
            NotFoundError: If a referenced account, category or payee doesn't exist
            ValidationError: If the transfer fields are inconsistent, the
                category is archived or the amount has sub-cent digits
        """
        self._require_account(account_id)
        require_cents(amount)
        category = self._assignable_category(category_id)
        self._check_payee(payee_id)

        if type is None:
            type = (
                TransactionType.TRANSFER
                if transfer_account_id is not None
                else infer_transaction_type(amount, category)
            )
        type = self._validate_transfer(TransactionType(type), account_id, transfer_account_id)
        if payee_id is None and payee_name:
            payee_id = PayeeService(self.db).get_or_create(payee_name)

        return self.db.create_transaction(
            account_id=account_id,
            date=date,
            amount=amount,
            type=type,
            description=(description or "").strip(),
            currency=(currency or self.default_currency).upper(),
            category_id=category_id,
            payee_id=payee_id,
            transfer_account_id=transfer_account_id,
            notes=notes,
        )

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def update_transaction(
        self,
        transaction_id: int,
        account_id: Optional[int] = None,
        date: Optional[date] = None,
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
        type: Optional[TransactionType] = None,
        category_id: Optional[int] = None,
        payee_id: Optional[int] = None,
        transfer_account_id: Optional[int] = None,
        notes: Optional[str] = None,
        clear_category: bool = False,
    ) -> None:
        """Update transaction fields; None leaves a field unchanged.

        The type is re-inferred when the amount or category changes and no
        explicit type is given, using the same rule as creation.

        Raises:
            NotFoundError: If the transaction or a referenced entity doesn't exist
            ValidationError: If the result violates the transfer invariant
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        if clear_category and category_id is not None:
            raise ValidationError("Cannot set both category_id and clear_category")

        fields = {}
        if account_id is not None:
            self._require_account(account_id)
            fields["account_id"] = account_id
        if date is not None:
            fields["date"] = date
        if amount is not None:
            fields["amount"] = require_cents(amount)
        if description is not None:
            fields["description"] = description.strip()
        if notes is not None:
            fields["notes"] = notes
        if payee_id is not None:
            self._check_payee(payee_id)
            fields["payee_id"] = payee_id
        if clear_category:
            fields["category_id"] = None
        elif category_id is not None and category_id != txn.category_id:
            self._assignable_category(category_id)
            fields["category_id"] = category_id
        if transfer_account_id is not None:
            fields["transfer_account_id"] = transfer_account_id

        new_amount = fields.get("amount", txn.amount)
        new_category_id = fields.get("category_id", txn.category_id)
        new_transfer = fields.get("transfer_account_id", txn.transfer_account_id)
        if type is not None:
            new_type = TransactionType(type)
            if new_type != TransactionType.TRANSFER and transfer_account_id is None:
                new_transfer = None
                fields["transfer_account_id"] = None
        elif txn.type == TransactionType.TRANSFER or new_transfer is not None:
            new_type = TransactionType.TRANSFER
        elif "amount" in fields or "category_id" in fields:
            category = (
                self.db.get_category(new_category_id)
                if new_category_id is not None
                else None
            )
            new_type = infer_transaction_type(new_amount, category)
        else:
            new_type = txn.type

        fields["type"] = self._validate_transfer(
            new_type, fields.get("account_id", txn.account_id), new_transfer
        )
        self.db.update_transaction(transaction_id, **fields)

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        self.db.delete_transaction(transaction_id)

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[int] = None,
        account_id: Optional[int] = None,
        type: Optional[TransactionType] = None,
    ) -> list[TransactionEntity]:
        """List transactions with filters, newest first."""
        return self.db.query_transactions(
            start_date=start_date,
            end_date=end_date,
            category_id=category_id,
            account_id=account_id,
            type=type,
        )

    def _require_account(self, account_id: int) -> None:
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

    def _assignable_category(self, category_id: Optional[int]) -> Optional[Category]:
        if category_id is None:
            return None
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        if category.archived:
            raise ValidationError(category_archived(category_id))
        return category

    def _check_payee(self, payee_id: Optional[int]) -> None:
        if payee_id is not None and self.db.get_payee(payee_id) is None:
            raise NotFoundError(payee_not_found(payee_id))

    def _validate_transfer(
        self,
        type: TransactionType,
        account_id: int,
        transfer_account_id: Optional[int],
    ) -> TransactionType:
        if type == TransactionType.TRANSFER:
            if transfer_account_id is None:
                raise ValidationError("Transfers require a transfer account")
            if transfer_account_id == account_id:
                raise ValidationError("Cannot transfer to the same account")
            self._require_account(transfer_account_id)
        elif transfer_account_id is not None:
            raise ValidationError("Only transfers may set a transfer account")
        return type
