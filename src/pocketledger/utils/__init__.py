"""Utility functions for pocketledger."""

from pocketledger.utils.date_parser import parse_date, resolve_period, parse_months
from pocketledger.utils.amount_parser import parse_amount, require_cents
from pocketledger.utils.csv_reader import read_csv_table

__all__ = [
    "parse_date",
    "resolve_period",
    "parse_months",
    "parse_amount",
    "require_cents",
    "read_csv_table",
]
