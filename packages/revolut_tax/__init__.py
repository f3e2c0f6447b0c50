"""Public interface for the ``revolut_tax`` package.

Re-exports the entry point, the record/amount types and the error hierarchy
as the stable import surface. There is no runtime logic here.
"""

from .amounts import Currency, CurrencyAmount, parse_amount
from .api import parse_many, parse_transactions, summarize
from .assembler import Transaction, assemble_transactions
from .dates import normalize_investment_date, normalize_savings_date
from .errors import (
    MalformedDateError,
    MalformedTableError,
    MissingColumnError,
    RowAlignmentError,
    StatementError,
    StatementIOError,
    UnparsableAmountError,
    UnsupportedSchemaError,
)
from .schema import StatementVariant, detect_variant
from .table import Table, load_table, read_table

__all__ = [
    # API
    "parse_transactions",
    "parse_many",
    "summarize",
    # Pipeline stages
    "load_table",
    "read_table",
    "detect_variant",
    "normalize_savings_date",
    "normalize_investment_date",
    "parse_amount",
    "assemble_transactions",
    # Models / types
    "Currency",
    "CurrencyAmount",
    "StatementVariant",
    "Table",
    "Transaction",
    # Errors
    "StatementError",
    "StatementIOError",
    "MalformedTableError",
    "UnsupportedSchemaError",
    "MissingColumnError",
    "MalformedDateError",
    "UnparsableAmountError",
    "RowAlignmentError",
]
