"""Recurring transaction scheduling and materialization.

Every occurrence is computed from the anchor (the start date) rather than from
the previous occurrence, so month-end clamping never accumulates: a definition
anchored on Jan 31 falls on Feb 28, then Mar 31, then Apr 30.
"""

import dataclasses
import logging
from datetime import date, timedelta
from decimal import Decimal
from itertools import count
from typing import Iterator, Optional

from dateutil.relativedelta import relativedelta

from pocketledger.database.base import Database
from pocketledger.domain.entities import (
    Frequency,
    RecurringState,
    RecurringTransaction,
    Transaction,
    TransactionType,
)
from pocketledger.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    category_archived,
    category_not_found,
    payee_not_found,
    recurring_not_found,
)
from pocketledger.domain.payee import PayeeService
from pocketledger.domain.transaction import infer_transaction_type
from pocketledger.utils.amount_parser import parse_amount, require_cents

logger = logging.getLogger(__name__)

MONTHS_PER_STEP = {
    Frequency.MONTHLY: 1,
    Frequency.QUARTERLY: 3,
    Frequency.YEARLY: 12,
}


def add_months(anchor: date, months: int) -> date:
    """Add calendar months, clamping to the last day of a shorter month.

    Jan 31 + 1 month is Feb 28 (Feb 29 in leap years); Feb 29 + 12 months is
    Feb 28 when the target year is not a leap year.
    """
    return anchor + relativedelta(months=months)


def occurrence_at(anchor: date, frequency: Frequency, index: int) -> date:
    """The index-th occurrence (0 is the anchor itself)."""
    frequency = Frequency(frequency)
    if frequency == Frequency.WEEKLY:
        return anchor + timedelta(weeks=index)
    return add_months(anchor, MONTHS_PER_STEP[frequency] * index)


def _first_index_on_or_after(anchor: date, frequency: Frequency, from_date: date) -> int:
    if from_date <= anchor:
        return 0
    frequency = Frequency(frequency)
    if frequency == Frequency.WEEKLY:
        return -(-(from_date - anchor).days // 7)

    step = MONTHS_PER_STEP[frequency]
    months_between = (from_date.year - anchor.year) * 12 + from_date.month - anchor.month
    index = max(months_between // step, 0)
    while occurrence_at(anchor, frequency, index) < from_date:
        index += 1
    return index


def next_occurrence(anchor: date, frequency: Frequency, from_date: date) -> date:
    """Smallest date on or after from_date that lies on the anchor's cadence."""
    index = _first_index_on_or_after(anchor, frequency, from_date)
    return occurrence_at(anchor, frequency, index)


def occurrences(
    anchor: date, frequency: Frequency, start: Optional[date] = None
) -> Iterator[date]:
    """Endless iterator over the cadence, beginning at the first date >= start."""
    first = 0 if start is None else _first_index_on_or_after(anchor, frequency, start)
    for index in count(first):
        yield occurrence_at(anchor, frequency, index)


def following_occurrence(recurring: RecurringTransaction, occurrence_date: date) -> date:
    """Cadence date strictly after occurrence_date."""
    return next_occurrence(
        recurring.start_date,
        recurring.frequency,
        occurrence_date + timedelta(days=1),
    )


def cursor_of(recurring: RecurringTransaction) -> date:
    """Next occurrence that has not been materialized yet."""
    if recurring.next_occurrence is not None:
        return next_occurrence(
            recurring.start_date, recurring.frequency, recurring.next_occurrence
        )
    return recurring.start_date


def recurring_state(recurring: RecurringTransaction, now: date) -> RecurringState:
    """Where a definition stands relative to now."""
    cursor = cursor_of(recurring)
    if not recurring.is_active:
        return RecurringState.ENDED
    if recurring.end_date is not None and cursor > recurring.end_date:
        return RecurringState.ENDED
    if cursor <= now:
        return RecurringState.DUE
    return RecurringState.SCHEDULED


def collect_due_occurrences(recurring: RecurringTransaction, now: date) -> Iterator[date]:
    """Lazily yield occurrence dates from the cursor through now, inclusive.

    Stops at end_date when one is set. Yields nothing for inactive definitions.
    """
    if not recurring.is_active:
        return
    for occurrence in occurrences(
        recurring.start_date, recurring.frequency, cursor_of(recurring)
    ):
        if occurrence > now:
            return
        if recurring.end_date is not None and occurrence > recurring.end_date:
            return
        yield occurrence


def project_due(recurring: RecurringTransaction, now: date) -> list[date]:
    """Due occurrence dates as a list; has no side effects."""
    return list(collect_due_occurrences(recurring, now))


def advance_cursor(
    recurring: RecurringTransaction, occurrence_date: date
) -> RecurringTransaction:
    """Copy of the definition whose cursor sits past occurrence_date."""
    return dataclasses.replace(
        recurring, next_occurrence=following_occurrence(recurring, occurrence_date)
    )


class RecurringService:
    """Service for managing recurring transactions."""

    def __init__(self, db: Database, default_currency: str = "USD"):
        """Initialize recurring service.

        Args:
            db: Database instance
            default_currency: Currency used when none is given
        """
        self.db = db
        self.default_currency = default_currency

    def create_recurring(
        self,
        description: str,
        amount: Decimal | str,
        frequency: Frequency | str,
        start_date: date,
        account_id: int,
        end_date: Optional[date] = None,
        category_id: Optional[int] = None,
        payee_id: Optional[int] = None,
        currency: Optional[str] = None,
        payee_name: Optional[str] = None,
    ) -> int:
        """Create a recurring transaction.

        Args:
            description: What the obligation is
            amount: Signed amount, at most 2 decimal places
            frequency: weekly, monthly, quarterly or yearly
            start_date: Anchor date of the cadence
            account_id: Owning account
            end_date: Optional last date an occurrence may fall on
            category_id: Optional category
            payee_id: Optional payee
            currency: ISO code, defaults to the configured currency
            payee_name: Payee looked up or created by name once the other
                fields are valid; used when payee_id is None

        Returns:
            Recurring transaction ID

        Raises:
            ValidationError: If fields are invalid
            NotFoundError: If account, category or payee doesn't exist
        """
        fields = self._validate(
            description=description,
            amount=amount,
            frequency=frequency,
            start_date=start_date,
            end_date=end_date,
            account_id=account_id,
            category_id=category_id,
            payee_id=payee_id,
        )
        if payee_id is None and payee_name:
            fields["payee_id"] = PayeeService(self.db).get_or_create(payee_name)
        recurring_id = self.db.create_recurring(
            currency=(currency or self.default_currency).upper(),
            **fields,
        )
        logger.info(
            "Created recurring transaction %s (%s, %s)",
            recurring_id,
            fields["description"],
            fields["frequency"].value,
        )
        return recurring_id

    def update_recurring(self, recurring_id: int, **changes) -> None:
        """Update a recurring transaction.

        Changing the anchor or frequency restarts the cursor at the first
        cadence date after the last materialized occurrence.

        Raises:
            NotFoundError: If the definition doesn't exist
            ValidationError: If the resulting definition is invalid
        """
        current = self.require_recurring(recurring_id)
        merged = {
            "description": current.description,
            "amount": current.amount,
            "frequency": current.frequency,
            "start_date": current.start_date,
            "end_date": current.end_date,
            "account_id": current.account_id,
            "category_id": current.category_id,
            "payee_id": current.payee_id,
        }
        extra = {}
        for name, value in changes.items():
            if name in merged:
                merged[name] = value
            elif name in ("currency", "is_active"):
                extra[name] = value
            else:
                raise ValidationError(f"Unknown recurring field '{name}'")

        fields = self._validate(**merged, current_category_id=current.category_id)
        if "currency" in extra:
            extra["currency"] = extra["currency"].upper()
        if (
            fields["start_date"] != current.start_date
            or fields["frequency"] != current.frequency
        ):
            materialized = self.db.query_transactions(recurring_id=recurring_id)
            fields["next_occurrence"] = None
            if materialized:
                last = max(t.occurrence_date or t.date for t in materialized)
                fields["next_occurrence"] = last + timedelta(days=1)
        self.db.update_recurring(recurring_id, **fields, **extra)

    def get_recurring(self, recurring_id: int) -> Optional[RecurringTransaction]:
        """Get recurring transaction by ID."""
        return self.db.get_recurring(recurring_id)

    def require_recurring(self, recurring_id: int) -> RecurringTransaction:
        recurring = self.db.get_recurring(recurring_id)
        if recurring is None:
            raise NotFoundError(recurring_not_found(recurring_id))
        return recurring

    def list_recurring(self, active_only: bool = False) -> list[RecurringTransaction]:
        """List recurring transactions, newest first."""
        return self.db.list_recurring(active_only=active_only)

    def cancel(self, recurring_id: int) -> None:
        """Deactivate a definition; materialized transactions are kept."""
        self.require_recurring(recurring_id)
        self.db.update_recurring(recurring_id, is_active=False)
        logger.info("Cancelled recurring transaction %s", recurring_id)

    def delete(self, recurring_id: int) -> None:
        """Delete a definition; materialized transactions are kept."""
        self.require_recurring(recurring_id)
        self.db.delete_recurring(recurring_id)
        logger.info("Deleted recurring transaction %s", recurring_id)

    def due(self, now: date) -> dict[int, list[date]]:
        """Pending occurrence dates per active definition, without side effects."""
        pending = {}
        for recurring in self.db.list_recurring(active_only=True):
            dates = project_due(recurring, now)
            if dates:
                pending[recurring.id] = dates
        return pending

    def materialize_due(
        self, now: date, recurring_id: Optional[int] = None
    ) -> list[Transaction]:
        """Create a transaction for every due occurrence.

        Each occurrence is inserted together with the cursor advance; an
        occurrence that already has a transaction is skipped, so repeated or
        concurrent runs with the same ``now`` create nothing new.

        Args:
            now: Reference date; occurrences on or before it are due
            recurring_id: Limit the run to one definition

        Returns:
            Newly created transactions, in materialization order
        """
        if recurring_id is not None:
            definitions = [self.require_recurring(recurring_id)]
        else:
            definitions = self.db.list_recurring(active_only=True)

        created: list[Transaction] = []
        for recurring in definitions:
            txn_type = self._transaction_type(recurring)
            for occurrence in collect_due_occurrences(recurring, now):
                transaction_id = self.db.materialize_recurring(
                    recurring.id,
                    occurrence,
                    following_occurrence(recurring, occurrence),
                    txn_type,
                )
                if transaction_id is None:
                    logger.debug(
                        "Occurrence %s of recurring %s already materialized",
                        occurrence,
                        recurring.id,
                    )
                    continue
                created.append(self.db.get_transaction(transaction_id))

            refreshed = self.db.get_recurring(recurring.id)
            if (
                refreshed.is_active
                and recurring_state(refreshed, now) == RecurringState.ENDED
            ):
                self.db.update_recurring(recurring.id, is_active=False)
                logger.info("Recurring transaction %s reached its end date", recurring.id)

        if created:
            logger.info("Materialized %d recurring occurrence(s)", len(created))
        return created

    def _transaction_type(self, recurring: RecurringTransaction) -> TransactionType:
        category = None
        if recurring.category_id is not None:
            category = self.db.get_category(recurring.category_id)
        return infer_transaction_type(recurring.amount, category)

    def _validate(
        self,
        description: str,
        amount: Decimal | str,
        frequency: Frequency | str,
        start_date: date,
        end_date: Optional[date],
        account_id: int,
        category_id: Optional[int],
        payee_id: Optional[int],
        current_category_id: Optional[int] = None,
    ) -> dict:
        description = (description or "").strip()
        if not description:
            raise ValidationError("Description is required")

        if isinstance(amount, str):
            amount = parse_amount(amount)
        elif not isinstance(amount, Decimal):
            raise ValidationError("Amount must be a decimal value")
        require_cents(amount)

        try:
            frequency = Frequency(frequency)
        except ValueError:
            valid = ", ".join(f.value for f in Frequency)
            raise ValidationError(
                f"Invalid frequency '{frequency}'. Must be one of: {valid}"
            )

        if end_date is not None and end_date < start_date:
            raise ValidationError("End date cannot be before start date")

        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        if category_id is not None:
            category = self.db.get_category(category_id)
            if category is None:
                raise NotFoundError(category_not_found(category_id))
            if category.archived and category_id != current_category_id:
                raise ValidationError(category_archived(category_id))
        if payee_id is not None and self.db.get_payee(payee_id) is None:
            raise NotFoundError(payee_not_found(payee_id))

        return {
            "description": description,
            "amount": amount,
            "frequency": frequency,
            "start_date": start_date,
            "end_date": end_date,
            "account_id": account_id,
            "category_id": category_id,
            "payee_id": payee_id,
        }
