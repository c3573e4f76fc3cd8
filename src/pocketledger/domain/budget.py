"""Budget ledger domain service."""

import logging
from decimal import Decimal
from typing import Optional

from pocketledger.database.base import Database
from pocketledger.domain.errors import NotFoundError, ValidationError, category_not_found
from pocketledger.utils.amount_parser import parse_amount, require_cents

logger = logging.getLogger(__name__)


class BudgetService:
    """One planned amount per category, independent of actuals."""

    def __init__(self, db: Database):
        """Initialize budget service.

        Args:
            db: Database instance
        """
        self.db = db

    def get(self, category_id: int) -> Optional[Decimal]:
        """Planned amount for a category, or None when unset."""
        return self.db.get_budget(category_id)

    def set(self, category_id: int, amount: Decimal | str | int) -> Decimal:
        """Replace the planned amount for a category.

        Budgets may be set on categories excluded from budgeting; aggregation
        ignores them.

        Args:
            category_id: Category ID
            amount: Non-negative planned amount

        Returns:
            The stored amount

        Raises:
            NotFoundError: If the category doesn't exist
            ValidationError: If the amount is negative or not a number
        """
        if self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))

        if isinstance(amount, str):
            amount = parse_amount(amount)
        elif isinstance(amount, int) and not isinstance(amount, bool):
            amount = Decimal(amount)
        elif not isinstance(amount, Decimal):
            raise ValidationError("Budget amount must be a decimal value")
        require_cents(amount)
        if amount < 0:
            raise ValidationError("Budget amount must be greater than or equal to 0")

        self.db.set_budget(category_id, amount)
        logger.info("Budget for category %s set to %s", category_id, amount)
        return amount

    def clear(self, category_id: int) -> None:
        """Remove the planned amount for a category."""
        self.db.delete_budget(category_id)

    def snapshot(self) -> dict[int, Decimal]:
        """All planned amounts, read once for a single aggregation."""
        return self.db.list_budgets()
