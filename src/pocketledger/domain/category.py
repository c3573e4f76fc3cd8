"""Category domain service."""

import logging
from datetime import datetime, UTC
from typing import Optional, Sequence

from pocketledger.database.base import Database
from pocketledger.domain.entities import Category
from pocketledger.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    category_delete_blocked,
    category_not_found,
    duplicate_category_name,
)

logger = logging.getLogger(__name__)


def normalize_name(name: str) -> str:
    """Key used for case-insensitive category name matching."""
    return name.strip().lower()


class CategoryService:
    """Registry of spending and income categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_active(self) -> list[Category]:
        """Categories that are not archived, by order then ID."""
        return self.db.list_categories(archived=False)

    def list_archived(self) -> list[Category]:
        """Archived categories, by order then ID."""
        return self.db.list_categories(archived=True)

    def list_all(self) -> list[Category]:
        """Active and archived categories, for reporting over history."""
        return self.db.list_categories()

    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID, or None if not found."""
        return self.db.get_category(category_id)

    def require_category(self, category_id: int) -> Category:
        """Get category by ID.

        Raises:
            NotFoundError: If the category doesn't exist
        """
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        return category

    def find_active_by_name(self, name: str) -> Optional[Category]:
        """Find an active category by name, ignoring case and padding."""
        key = normalize_name(name)
        for category in self.list_active():
            if normalize_name(category.name) == key:
                return category
        return None

    def category_type_lookup(self) -> dict[str, bool]:
        """Map normalized active category names to their income flag."""
        return {normalize_name(c.name): c.is_income for c in self.list_active()}

    def create_category(
        self,
        name: str,
        is_income: bool = False,
        exclude_from_budget: bool = False,
        exclude_from_totals: bool = False,
        description: Optional[str] = None,
    ) -> int:
        """Create a category at the end of the active ordering.

        Args:
            name: Category name, unique among active categories
            is_income: Whether the category classifies inflows
            exclude_from_budget: Track actuals but never count toward a budget
            exclude_from_totals: Leave out of aggregate totals entirely
            description: Optional free text

        Returns:
            Category ID

        Raises:
            ValidationError: If the name is blank or already used
        """
        clean_name = self._validate_name(name)
        active = self.list_active()
        order = max((c.order for c in active), default=-1) + 1

        return self.db.create_category(
            name=clean_name,
            is_income=is_income,
            exclude_from_budget=exclude_from_budget,
            exclude_from_totals=exclude_from_totals,
            order=order,
            description=description,
        )

    def update_category(
        self,
        category_id: int,
        name: Optional[str] = None,
        is_income: Optional[bool] = None,
        exclude_from_budget: Optional[bool] = None,
        exclude_from_totals: Optional[bool] = None,
        description: Optional[str] = None,
    ) -> None:
        """Update category name or flags; None leaves a field unchanged.

        Raises:
            NotFoundError: If the category doesn't exist
            ValidationError: If the new name is blank or already used
        """
        category = self.require_category(category_id)
        fields = {}
        if name is not None:
            fields["name"] = self._validate_name(
                name, exclude_id=category_id, check_active=not category.archived
            )
        if is_income is not None:
            fields["is_income"] = is_income
        if exclude_from_budget is not None:
            fields["exclude_from_budget"] = exclude_from_budget
        if exclude_from_totals is not None:
            fields["exclude_from_totals"] = exclude_from_totals
        if description is not None:
            fields["description"] = description
        if fields:
            self.db.update_category(category_id, **fields)

    def archive(self, category_id: int, archived: bool = True) -> None:
        """Archive or restore a category.

        Archiving stamps archived_on; restoring clears it and places the
        category last in the active ordering.

        Raises:
            NotFoundError: If the category doesn't exist
            ValidationError: If restoring would duplicate an active name
        """
        category = self.require_category(category_id)
        if archived:
            self.db.update_category(
                category_id, archived=True, archived_on=datetime.now(UTC)
            )
            logger.info("Archived category %s (%s)", category_id, category.name)
            return

        if not category.archived:
            return
        self._validate_name(category.name, exclude_id=category_id)
        order = max((c.order for c in self.list_active()), default=-1) + 1
        self.db.update_category(
            category_id, archived=False, archived_on=None, order=order
        )
        logger.info("Restored category %s (%s)", category_id, category.name)

    def delete(self, category_id: int) -> None:
        """Delete a category that no transaction or recurring definition references.

        Raises:
            NotFoundError: If the category doesn't exist
            ConflictError: If transactions or recurring definitions still
                reference the category
        """
        self.require_category(category_id)
        transaction_count, recurring_count = self.db.count_category_references(
            category_id
        )
        if transaction_count > 0 or recurring_count > 0:
            raise ConflictError(
                category_delete_blocked(category_id, transaction_count, recurring_count)
            )
        self.db.delete_category(category_id)
        logger.info("Deleted category %s", category_id)

    def reorder(self, ordered_ids: Sequence[int]) -> None:
        """Reassign order values to follow the given sequence of active IDs.

        Raises:
            ValidationError: If the IDs are not exactly the active category IDs
        """
        ordered_ids = list(ordered_ids)
        active_ids = {c.id for c in self.list_active()}
        if len(set(ordered_ids)) != len(ordered_ids):
            raise ValidationError("Category order contains duplicate IDs")

        missing = active_ids - set(ordered_ids)
        extra = set(ordered_ids) - active_ids
        if missing or extra:
            details = []
            if missing:
                details.append(f"missing {sorted(missing)}")
            if extra:
                details.append(f"unknown or archived {sorted(extra)}")
            raise ValidationError(
                f"Category order must list every active category exactly once ({'; '.join(details)})"
            )

        self.db.set_category_orders(
            {category_id: index for index, category_id in enumerate(ordered_ids)}
        )

    def _validate_name(
        self,
        name: str,
        exclude_id: Optional[int] = None,
        check_active: bool = True,
    ) -> str:
        clean_name = (name or "").strip()
        if not clean_name:
            raise ValidationError("Category name cannot be empty")
        if check_active:
            key = normalize_name(clean_name)
            for category in self.list_active():
                if category.id != exclude_id and normalize_name(category.name) == key:
                    raise ValidationError(duplicate_category_name(clean_name))
        return clean_name
