"""Budget-vs-actual aggregation."""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Sequence

from pocketledger.database.base import Database
from pocketledger.domain.entities import (
    BudgetRow,
    Category,
    Period,
    PeriodTotals,
    Transaction,
    TransactionType,
)
from pocketledger.domain.errors import ValidationError

UNCATEGORIZED = "Uncategorized"
ZERO = Decimal("0")


def _report_type(type: TransactionType | str) -> TransactionType:
    try:
        type = TransactionType(type)
    except ValueError:
        type = None
    if type not in (TransactionType.INCOME, TransactionType.EXPENSE):
        raise ValidationError("Aggregation type must be 'income' or 'expense'")
    return type


def aggregate(
    period: Period,
    type: TransactionType | str,
    categories: Sequence[Category],
    budgets: Mapping[int, Decimal],
    transactions: Iterable[Transaction],
) -> list[BudgetRow]:
    """Compute planned, actual and variance per category for a period.

    Args:
        period: Month buckets to include
        type: income or expense
        categories: Every known category, archived ones included
        budgets: Planned amount per category ID (one consistent snapshot)
        transactions: Candidate transactions; those outside the period are skipped

    Returns:
        Rows ordered by category order then ID, followed by an Uncategorized
        row when transactions of this type have no known category

    Raises:
        ValidationError: If type is not income or expense
    """
    type = _report_type(type)
    wants_income = type == TransactionType.INCOME
    known_ids = {c.id for c in categories}

    sums: dict[Optional[int], Decimal] = defaultdict(lambda: ZERO)
    for txn in transactions:
        if txn.type != type or not period.contains(txn.date):
            continue
        group_id = txn.category_id if txn.category_id in known_ids else None
        sums[group_id] += txn.amount

    reported = sorted(
        (
            c
            for c in categories
            if c.is_income == wants_income and not c.exclude_from_totals
        ),
        key=lambda c: (c.order, c.id),
    )

    rows = []
    for category in reported:
        actual = abs(sums.get(category.id, ZERO))
        if category.exclude_from_budget:
            planned = ZERO
        else:
            planned = budgets.get(category.id, ZERO)
        rows.append(
            BudgetRow(
                category_id=category.id,
                category_name=category.name,
                planned=planned,
                actual=actual,
                variance=planned - actual,
            )
        )

    if None in sums:
        actual = abs(sums[None])
        rows.append(
            BudgetRow(
                category_id=None,
                category_name=UNCATEGORIZED,
                planned=ZERO,
                actual=actual,
                variance=-actual,
            )
        )
    return rows


def period_totals(
    period: Period,
    categories: Sequence[Category],
    transactions: Iterable[Transaction],
) -> PeriodTotals:
    """Income, expenses, net income and savings rate for a period.

    Transfers are left out, as are transactions in categories excluded from
    totals.
    """
    excluded = {c.id for c in categories if c.exclude_from_totals}
    income = ZERO
    expenses = ZERO
    for txn in transactions:
        if not period.contains(txn.date) or txn.category_id in excluded:
            continue
        if txn.type == TransactionType.INCOME:
            income += txn.amount
        elif txn.type == TransactionType.EXPENSE:
            expenses += txn.amount

    expenses = abs(expenses)
    net_income = income - expenses
    savings_rate = net_income / income if income > 0 else ZERO
    return PeriodTotals(
        income=income,
        expenses=expenses,
        net_income=net_income,
        savings_rate=savings_rate,
    )


class AggregationService:
    """Feeds the aggregation functions from the database."""

    def __init__(self, db: Database):
        """Initialize aggregation service.

        Args:
            db: Database instance
        """
        self.db = db

    def _period_transactions(self, period: Period) -> list[Transaction]:
        bounds = period.bounds()
        if bounds is None:
            return []
        start_date, end_date = bounds
        return period.filter(
            self.db.query_transactions(start_date=start_date, end_date=end_date)
        )

    def budget_report(
        self, period: Period, type: TransactionType | str
    ) -> list[BudgetRow]:
        """Budget rows for a period from stored categories, budgets and transactions."""
        return aggregate(
            period,
            type,
            self.db.list_categories(),
            self.db.list_budgets(),
            self._period_transactions(period),
        )

    def totals(self, period: Period) -> PeriodTotals:
        """Period totals from stored categories and transactions."""
        return period_totals(
            period, self.db.list_categories(), self._period_transactions(period)
        )
