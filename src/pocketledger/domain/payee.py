"""Payee domain service."""

from typing import Optional

from pocketledger.database.base import Database
from pocketledger.domain.entities import Payee
from pocketledger.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    payee_not_found,
)


class PayeeService:
    """Service for managing payees."""

    def __init__(self, db: Database):
        self.db = db

    def create_payee(self, name: str) -> int:
        """Create a payee.

        Raises:
            ValidationError: If the name is blank
            ConflictError: If a payee with the same name (any case) exists
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Payee name cannot be empty")
        if self.db.get_payee_by_name(name) is not None:
            raise ConflictError(f"Payee '{name}' already exists")
        return self.db.create_payee(name)

    def get_or_create(self, name: str) -> int:
        """ID of the payee with this name, creating it when missing."""
        existing = self.db.get_payee_by_name(name)
        if existing is not None:
            return existing.id
        return self.create_payee(name)

    def get_payee(self, payee_id: int) -> Optional[Payee]:
        return self.db.get_payee(payee_id)

    def list_payees(self) -> list[Payee]:
        return self.db.list_payees()

    def delete_payee(self, payee_id: int) -> None:
        """Delete an unreferenced payee.

        Raises:
            NotFoundError: If the payee doesn't exist
            ConflictError: If transactions or recurring definitions use it
        """
        if self.db.get_payee(payee_id) is None:
            raise NotFoundError(payee_not_found(payee_id))
        references = self.db.count_payee_references(payee_id)
        if references:
            raise ConflictError(
                f"Cannot delete payee {payee_id}: it is used by {references} record(s)"
            )
        self.db.delete_payee(payee_id)
