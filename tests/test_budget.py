"""Tests for the budget ledger."""

import pytest
from decimal import Decimal

from pocketledger.domain.errors import NotFoundError, ValidationError


def test_set_and_get(budget_service, category_service):
    groceries = category_service.create_category("Groceries")
    stored = budget_service.set(groceries, "450.00")
    assert stored == Decimal("450.00")
    assert budget_service.get(groceries) == Decimal("450.00")


def test_unset_budget_is_none(budget_service, category_service):
    groceries = category_service.create_category("Groceries")
    assert budget_service.get(groceries) is None


def test_set_replaces_previous_value(budget_service, category_service):
    groceries = category_service.create_category("Groceries")
    budget_service.set(groceries, 400)
    budget_service.set(groceries, Decimal("425.50"))
    assert budget_service.get(groceries) == Decimal("425.50")
    assert budget_service.snapshot() == {groceries: Decimal("425.50")}


def test_zero_is_allowed(budget_service, category_service):
    groceries = category_service.create_category("Groceries")
    assert budget_service.set(groceries, "0") == Decimal("0")


def test_negative_amount_is_rejected(budget_service, category_service):
    groceries = category_service.create_category("Groceries")
    with pytest.raises(ValidationError, match="greater than or equal to 0"):
        budget_service.set(groceries, "-1")


def test_non_numeric_amount_is_rejected(budget_service, category_service):
    groceries = category_service.create_category("Groceries")
    with pytest.raises(ValidationError):
        budget_service.set(groceries, "lots")
    with pytest.raises(ValidationError):
        budget_service.set(groceries, 10.5)


def test_sub_cent_amount_is_rejected(budget_service, category_service):
    groceries = category_service.create_category("Groceries")
    with pytest.raises(ValidationError, match="more than 2 decimal places"):
        budget_service.set(groceries, "450.005")
    assert budget_service.get(groceries) is None


def test_unknown_category(budget_service):
    with pytest.raises(NotFoundError):
        budget_service.set(999, "10")


def test_excluded_category_may_still_hold_a_budget(budget_service, category_service):
    savings = category_service.create_category("Savings", exclude_from_budget=True)
    budget_service.set(savings, "200")
    assert budget_service.get(savings) == Decimal("200")


def test_clear_removes_value(budget_service, category_service):
    groceries = category_service.create_category("Groceries")
    budget_service.set(groceries, "10")
    budget_service.clear(groceries)
    assert budget_service.get(groceries) is None


def test_deleting_category_drops_its_budget(budget_service, category_service):
    groceries = category_service.create_category("Groceries")
    budget_service.set(groceries, "10")
    category_service.delete(groceries)
    assert budget_service.snapshot() == {}
