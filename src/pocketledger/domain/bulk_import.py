"""Persist mapped import rows as transactions."""

import logging
from typing import Any, Optional, Sequence

from pocketledger.database.base import Database
from pocketledger.domain.account import AccountService
from pocketledger.domain.category import CategoryService
from pocketledger.domain.entities import MappedRow
from pocketledger.domain.errors import DomainError
from pocketledger.domain.transaction import TransactionService
from pocketledger.utils.amount_parser import parse_amount
from pocketledger.utils.date_parser import parse_date

logger = logging.getLogger(__name__)


class BulkImportService:
    """Service for storing accepted import rows."""

    def __init__(self, db: Database, default_currency: str = "USD"):
        """Initialize bulk import service.

        Args:
            db: Database instance
            default_currency: Currency used when none is given
        """
        self.db = db
        self.account_service = AccountService(db)
        self.category_service = CategoryService(db)
        self.transaction_service = TransactionService(db, default_currency)

    def import_rows(
        self,
        account_id: int,
        rows: Sequence[MappedRow],
        currency: Optional[str] = None,
    ) -> dict[str, Any]:
        """Create one transaction per mapped row.

        Payees are matched by name (and created when new); categories are
        matched against active category names, and unknown names leave the
        transaction uncategorized.

        Args:
            account_id: Account receiving the transactions
            rows: Accepted rows from the import mapper
            currency: Optional ISO code for every row

        Returns:
            Dict with import statistics:
            - imported: number of transactions created
            - transaction_ids: IDs of the created transactions
            - errors: "Row N: reason" messages, N being the 1-based row position

        Raises:
            NotFoundError: If the account doesn't exist
        """
        self.account_service.require_account(account_id)
        categories = {
            c.name.strip().lower(): c for c in self.category_service.list_active()
        }

        transaction_ids = []
        errors = []
        for row_num, row in enumerate(rows, start=1):
            try:
                txn_date = parse_date(row.date)
                amount = parse_amount(row.amount)
                category = (
                    categories.get(row.category.strip().lower())
                    if row.category
                    else None
                )
                transaction_ids.append(
                    self.transaction_service.create_transaction(
                        account_id=account_id,
                        date=txn_date,
                        amount=amount,
                        description=row.payee,
                        type=row.type,
                        category_id=category.id if category else None,
                        currency=currency,
                        payee_name=row.payee,
                    )
                )
            except DomainError as e:
                errors.append(f"Row {row_num}: {e}")

        logger.info(
            "Imported %d of %d row(s) into account %s",
            len(transaction_ids),
            len(rows),
            account_id,
        )
        return {
            "imported": len(transaction_ids),
            "transaction_ids": transaction_ids,
            "errors": errors,
        }
