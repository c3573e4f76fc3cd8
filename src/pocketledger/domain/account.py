"""Account domain service."""

from typing import Optional
from pocketledger.database.base import Database
from pocketledger.domain.entities import Account as AccountEntity
from pocketledger.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    account_delete_blocked,
    account_not_found,
)


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(self, name: str, account_type: str = "checking") -> int:
        """Create a new account.

        Args:
            name: Account name
            account_type: Free-form kind, e.g. checking, savings, credit

        Returns:
            Account ID

        Raises:
            ValidationError: If the name is blank
            ConflictError: If account name already exists
        """
        name = self._check_name(name)
        return self.db.create_account(name=name, account_type=account_type)

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID, or None if not found."""
        return self.db.get_account(account_id)

    def require_account(self, account_id: int) -> AccountEntity:
        """Get account by ID.

        Raises:
            NotFoundError: If the account doesn't exist
        """
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts ordered by name."""
        return self.db.list_accounts()

    def resolve(self, account: str | int) -> int:
        """Resolve an account name or ID to an account ID.

        Raises:
            NotFoundError: If no account matches
        """
        if isinstance(account, int):
            return self.require_account(account).id
        text = str(account).strip()
        if text.isdigit():
            return self.require_account(int(text)).id
        for acc in self.db.list_accounts():
            if acc.name == text:
                return acc.id
        raise NotFoundError(f"Account '{text}' not found")

    def rename_account(
        self, account_id: int, name: str, account_type: Optional[str] = None
    ) -> None:
        """Rename an account.

        Raises:
            NotFoundError: If account not found
            ConflictError: If name already exists
        """
        self.require_account(account_id)
        name = self._check_name(name, exclude_id=account_id)
        self.db.update_account(account_id=account_id, name=name, account_type=account_type)

    def delete_account(self, account_id: int) -> None:
        """Delete an account nothing references.

        Raises:
            NotFoundError: If account not found
            ConflictError: If transactions or recurring definitions use it
        """
        self.require_account(account_id)
        transaction_count, recurring_count = self.db.count_account_references(account_id)
        if transaction_count > 0 or recurring_count > 0:
            raise ConflictError(
                account_delete_blocked(account_id, transaction_count, recurring_count)
            )
        self.db.delete_account(account_id)

    def _check_name(self, name: str, exclude_id: Optional[int] = None) -> str:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Account name cannot be empty")
        for acc in self.db.list_accounts():
            if acc.id != exclude_id and acc.name == name:
                raise ConflictError(f"Account with name '{name}' already exists")
        return name
