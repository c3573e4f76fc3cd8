"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class MappingError(ValidationError):
    """Import column assignment is incomplete, ambiguous or unknown."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Operation would violate a uniqueness or referential invariant."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def category_name_not_found(name: str) -> str:
    """Return message for missing category by name."""
    return f"Category '{name}' not found"


def payee_not_found(payee_id: int) -> str:
    """Return message for missing payee."""
    return f"Payee {payee_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def recurring_not_found(recurring_id: int) -> str:
    """Return message for missing recurring transaction."""
    return f"Recurring transaction {recurring_id} not found"


def duplicate_category_name(name: str) -> str:
    """Return message for an active category name collision."""
    return f"An active category named '{name}' already exists"


def category_archived(category_id: int) -> str:
    """Return message when an archived category is assigned."""
    return f"Category {category_id} is archived and cannot be assigned"


def category_delete_blocked(
    category_id: int, transaction_count: int, recurring_count: int = 0
) -> str:
    """Return message when a category still has transactions or recurring items."""
    parts = []
    if transaction_count > 0:
        parts.append(
            f"{transaction_count} transaction{'s' if transaction_count != 1 else ''}"
        )
    if recurring_count > 0:
        parts.append(
            f"{recurring_count} recurring transaction{'s' if recurring_count != 1 else ''}"
        )
    return (
        f"Cannot delete category {category_id}: it is used by {', '.join(parts)}. "
        "Please reassign them first."
    )


def account_delete_blocked(
    account_id: int, transaction_count: int, recurring_count: int
) -> str:
    """Return message when account has dependent transactions or recurring items."""
    parts = []
    if transaction_count > 0:
        parts.append(
            f"{transaction_count} transaction{'s' if transaction_count != 1 else ''}"
        )
    if recurring_count > 0:
        parts.append(
            f"{recurring_count} recurring transaction{'s' if recurring_count != 1 else ''}"
        )
    return (
        f"Cannot delete account {account_id}: it has {', '.join(parts)}. "
        "Please reassign or delete them first."
    )
