"""Tests for the category registry."""

import pytest
from datetime import date
from decimal import Decimal

from pocketledger.domain.errors import ConflictError, NotFoundError, ValidationError


class TestCreate:
    def test_new_categories_go_last(self, category_service):
        first = category_service.create_category("Housing")
        second = category_service.create_category("Groceries")
        assert [c.id for c in category_service.list_active()] == [first, second]
        assert category_service.get_category(second).order > category_service.get_category(first).order

    def test_name_is_trimmed(self, category_service):
        category_id = category_service.create_category("  Dining  ")
        assert category_service.get_category(category_id).name == "Dining"

    def test_blank_name_is_rejected(self, category_service):
        with pytest.raises(ValidationError, match="empty"):
            category_service.create_category("   ")

    def test_duplicate_name_ignores_case(self, category_service):
        category_service.create_category("Groceries")
        with pytest.raises(ValidationError, match="already exists"):
            category_service.create_category("groceries ")

    def test_archived_name_can_be_reused(self, category_service):
        old = category_service.create_category("Groceries")
        category_service.archive(old)
        new = category_service.create_category("Groceries")
        assert new != old

    def test_flags_are_stored(self, category_service):
        category_id = category_service.create_category(
            "Card Payments",
            exclude_from_budget=True,
            exclude_from_totals=True,
            description="Paying off the card",
        )
        category = category_service.get_category(category_id)
        assert category.exclude_from_budget is True
        assert category.exclude_from_totals is True
        assert category.is_income is False
        assert category.description == "Paying off the card"


class TestArchive:
    def test_archive_hides_from_active_listing(self, category_service):
        category_id = category_service.create_category("Groceries")
        category_service.archive(category_id)

        assert category_service.list_active() == []
        [archived] = category_service.list_archived()
        assert archived.id == category_id
        assert archived.archived is True
        assert archived.archived_on is not None

    def test_restore_moves_category_last(self, category_service):
        a = category_service.create_category("A")
        b = category_service.create_category("B")
        category_service.archive(a)
        category_service.archive(a, False)

        assert [c.id for c in category_service.list_active()] == [b, a]
        assert category_service.get_category(a).archived_on is None

    def test_restore_blocked_by_active_duplicate(self, category_service):
        old = category_service.create_category("Groceries")
        category_service.archive(old)
        category_service.create_category("Groceries")
        with pytest.raises(ValidationError):
            category_service.archive(old, False)

    def test_restoring_active_category_is_a_no_op(self, category_service):
        a = category_service.create_category("A")
        b = category_service.create_category("B")
        category_service.archive(a, False)
        assert [c.id for c in category_service.list_active()] == [a, b]

    def test_archive_unknown_category(self, category_service):
        with pytest.raises(NotFoundError):
            category_service.archive(999)

    def test_archived_category_cannot_be_assigned(self, category_service, transaction_service, sample_account):
        category_id = category_service.create_category("Groceries")
        category_service.archive(category_id)
        with pytest.raises(ValidationError, match="archived"):
            transaction_service.create_transaction(
                account_id=sample_account.id,
                date=date(2024, 1, 1),
                amount=Decimal("-5"),
                category_id=category_id,
            )


class TestDelete:
    def test_delete_unused_category(self, category_service):
        category_id = category_service.create_category("Groceries")
        category_service.delete(category_id)
        assert category_service.get_category(category_id) is None

    def test_delete_blocked_by_transactions(self, category_service, transaction_service, sample_account):
        category_id = category_service.create_category("Groceries")
        transaction_service.create_transaction(
            account_id=sample_account.id,
            date=date(2024, 1, 1),
            amount=Decimal("-5"),
            category_id=category_id,
        )
        with pytest.raises(ConflictError, match="1 transaction"):
            category_service.delete(category_id)

    def test_delete_blocked_by_recurring_definition(self, category_service, recurring_service, sample_account):
        category_id = category_service.create_category("Rent")
        recurring_id = recurring_service.create_recurring(
            description="Rent",
            amount=Decimal("-1500"),
            frequency="monthly",
            start_date=date(2024, 1, 1),
            account_id=sample_account.id,
            category_id=category_id,
        )

        with pytest.raises(ConflictError, match="1 recurring transaction"):
            category_service.delete(category_id)

        assert category_service.get_category(category_id) is not None
        recurring_service.update_recurring(recurring_id, description="Rent flat")
        assert recurring_service.get_recurring(recurring_id).category_id == category_id

    def test_delete_unknown_category(self, category_service):
        with pytest.raises(NotFoundError):
            category_service.delete(999)


class TestReorder:
    def test_reorder_sets_listing_order(self, category_service):
        a = category_service.create_category("A")
        b = category_service.create_category("B")
        c = category_service.create_category("C")
        category_service.reorder([c, a, b])
        assert [cat.id for cat in category_service.list_active()] == [c, a, b]

    def test_reorder_must_list_every_active_category(self, category_service):
        a = category_service.create_category("A")
        category_service.create_category("B")
        with pytest.raises(ValidationError, match="missing"):
            category_service.reorder([a])

    def test_reorder_rejects_duplicates(self, category_service):
        a = category_service.create_category("A")
        with pytest.raises(ValidationError, match="duplicate"):
            category_service.reorder([a, a])

    def test_reorder_rejects_archived_ids(self, category_service):
        a = category_service.create_category("A")
        b = category_service.create_category("B")
        category_service.archive(b)
        with pytest.raises(ValidationError, match="archived"):
            category_service.reorder([a, b])


class TestUpdate:
    def test_rename(self, category_service):
        category_id = category_service.create_category("Food")
        category_service.update_category(category_id, name="Groceries")
        assert category_service.get_category(category_id).name == "Groceries"

    def test_rename_to_existing_name(self, category_service):
        category_service.create_category("Groceries")
        category_id = category_service.create_category("Food")
        with pytest.raises(ValidationError):
            category_service.update_category(category_id, name="GROCERIES")

    def test_rename_to_own_name_in_other_case(self, category_service):
        category_id = category_service.create_category("food")
        category_service.update_category(category_id, name="Food")
        assert category_service.get_category(category_id).name == "Food"

    def test_toggle_flags(self, category_service):
        category_id = category_service.create_category("Refunds")
        category_service.update_category(category_id, is_income=True, exclude_from_budget=True)
        category = category_service.get_category(category_id)
        assert category.is_income is True
        assert category.exclude_from_budget is True


def test_type_lookup_uses_active_categories(category_service):
    category_service.create_category("Salary", is_income=True)
    old = category_service.create_category("Old")
    category_service.archive(old)
    category_service.create_category("Groceries")
    assert category_service.category_type_lookup() == {"salary": True, "groceries": False}
