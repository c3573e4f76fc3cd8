"""Column mapping and type inference for spreadsheet imports.

Turns a table whose columns are unknown in advance into canonical
``MappedRow`` candidates. Nothing here touches the database; persisting the
accepted rows is the job of ``BulkImportService``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Mapping, Optional, Sequence, Union

from pocketledger.domain.entities import (
    ColumnRole,
    ImportResult,
    MappedRow,
    RejectedRow,
    TransactionType,
)
from pocketledger.domain.errors import MappingError, ValidationError
from pocketledger.utils.amount_parser import parse_amount, require_cents

REQUIRED_ROLES = (ColumnRole.DATE, ColumnRole.PAYEE, ColumnRole.AMOUNT)
OPTIONAL_ROLES = (ColumnRole.CATEGORY,)


def _to_role(header: str, role: Union[ColumnRole, str]) -> ColumnRole:
    if isinstance(role, ColumnRole):
        return role
    try:
        return ColumnRole(str(role).strip().lower())
    except ValueError:
        valid = ", ".join(r.value for r in ColumnRole)
        raise MappingError(
            f"Unknown role '{role}' for column '{header}'. Must be one of: {valid}"
        )


class ColumnMapping:
    """Validated assignment of column headers to import roles.

    Exactly one header must carry each of date, payee and amount; category is
    optional but may appear at most once; any number of columns may be ignored.
    """

    def __init__(self, mapping: Mapping[str, Union[ColumnRole, str]]):
        self.roles: dict[str, ColumnRole] = {
            header: _to_role(header, role) for header, role in mapping.items()
        }

        by_role: dict[ColumnRole, list[str]] = {}
        for header, role in self.roles.items():
            by_role.setdefault(role, []).append(header)

        missing = [r.value for r in REQUIRED_ROLES if r not in by_role]
        if missing:
            raise MappingError(f"No column mapped to: {', '.join(missing)}")

        for role in REQUIRED_ROLES + OPTIONAL_ROLES:
            headers = by_role.get(role, [])
            if len(headers) > 1:
                raise MappingError(
                    f"Role '{role.value}' is mapped more than once: {', '.join(headers)}"
                )

        self._by_role = {
            role: headers[0]
            for role, headers in by_role.items()
            if role != ColumnRole.IGNORE
        }

    def header_for(self, role: ColumnRole) -> Optional[str]:
        """Header mapped to a role, or None."""
        return self._by_role.get(role)

    def mapped_headers(self) -> list[str]:
        """Headers carrying a role other than ignore."""
        return list(self._by_role.values())

    def __repr__(self) -> str:
        pairs = ", ".join(f"{h!r}: {r.value}" for h, r in self.roles.items())
        return f"ColumnMapping({{{pairs}}})"


def normalize_lookup(lookup: Optional[Mapping[str, bool]]) -> dict[str, bool]:
    """Key a category-type lookup by trimmed, lowercased name."""
    if not lookup:
        return {}
    return {name.strip().lower(): bool(flag) for name, flag in lookup.items()}


def infer_type(
    amount: Decimal,
    category: Optional[str],
    category_type_lookup: Mapping[str, bool],
) -> TransactionType:
    """Classify a row as income or expense.

    A known category decides first; only when the category is absent or
    unknown does the sign of the amount decide.
    """
    if category is not None:
        key = category.strip().lower()
        if key in category_type_lookup:
            if category_type_lookup[key]:
                return TransactionType.INCOME
            return TransactionType.EXPENSE
    return TransactionType.EXPENSE if amount < 0 else TransactionType.INCOME


def _cell(row: Mapping[str, Optional[str]], header: Optional[str]) -> str:
    if header is None:
        return ""
    value = row.get(header)
    return "" if value is None else str(value).strip()


def map_import(
    headers: Sequence[str],
    rows: Sequence[Mapping[str, Optional[str]]],
    mapping: Union[ColumnMapping, Mapping[str, Union[ColumnRole, str]]],
    category_type_lookup: Optional[Mapping[str, bool]] = None,
) -> ImportResult:
    """Map raw rows to import candidates.

    Args:
        headers: Column headers in file order
        rows: Row mappings from header to raw cell text
        mapping: Header to role assignment
        category_type_lookup: Category name to is-income flag

    Returns:
        ImportResult with accepted rows and per-row rejections (row_index is the
        0-based position in ``rows``)

    Raises:
        MappingError: If the mapping is incomplete, ambiguous, or names a
            column that is not in ``headers``
    """
    if not isinstance(mapping, ColumnMapping):
        mapping = ColumnMapping(mapping)

    unknown = [h for h in mapping.mapped_headers() if h not in headers]
    if unknown:
        raise MappingError(f"Mapped columns not found in file: {', '.join(unknown)}")

    lookup = normalize_lookup(category_type_lookup)
    date_header = mapping.header_for(ColumnRole.DATE)
    payee_header = mapping.header_for(ColumnRole.PAYEE)
    amount_header = mapping.header_for(ColumnRole.AMOUNT)
    category_header = mapping.header_for(ColumnRole.CATEGORY)

    accepted: list[MappedRow] = []
    rejected: list[RejectedRow] = []

    for index, row in enumerate(rows):
        date_value = _cell(row, date_header)
        payee = _cell(row, payee_header)
        amount = _cell(row, amount_header)
        category = _cell(row, category_header) or None

        if not date_value:
            rejected.append(RejectedRow(index, "Missing date"))
            continue
        if not payee:
            rejected.append(RejectedRow(index, "Missing payee"))
            continue
        if not amount:
            rejected.append(RejectedRow(index, "Missing amount"))
            continue

        try:
            parsed_amount = require_cents(parse_amount(amount))
        except ValidationError as e:
            rejected.append(RejectedRow(index, str(e)))
            continue

        accepted.append(
            MappedRow(
                payee=payee,
                amount=amount,
                date=date_value,
                category=category,
                type=infer_type(parsed_amount, category, lookup),
            )
        )

    return ImportResult(accepted=tuple(accepted), rejected=tuple(rejected))


@dataclass
class ImportSession:
    """Staging state for one import, owned by the caller.

    Holds the parsed table, the column assignment being edited and the last
    mapping result, so nothing about an in-progress import lives in
    module-level state.
    """

    headers: list[str]
    rows: list[dict[str, str]]
    category_type_lookup: dict[str, bool] = field(default_factory=dict)
    assignments: dict[str, ColumnRole] = field(default_factory=dict)
    result: Optional[ImportResult] = None

    def assign(self, header: str, role: Union[ColumnRole, str]) -> None:
        """Assign a role to one column; validation happens on run()."""
        if header not in self.headers:
            raise MappingError(f"Column '{header}' is not in the file")
        self.assignments[header] = _to_role(header, role)
        self.result = None

    def mapping(self) -> ColumnMapping:
        return ColumnMapping(self.assignments)

    def preview(self, limit: int = 5) -> list[dict[str, str]]:
        return self.rows[:limit]

    def run(self) -> ImportResult:
        """Map the staged rows with the current assignments."""
        self.result = map_import(
            self.headers, self.rows, self.mapping(), self.category_type_lookup
        )
        return self.result
