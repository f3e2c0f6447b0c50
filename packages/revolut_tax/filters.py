"""Row selection for each statement layout.

Both filters compute a boolean mask from a projection of the table and apply
it to the *unprojected* table, so the mask and the kept rows share one row
index space and the full row survives for later stages.
"""

from __future__ import annotations

from .logging_setup import get_logger
from .schema import (
    COMPLETED_DATE,
    DATE,
    DESCRIPTION,
    MONEY_IN,
    TOTAL_AMOUNT,
    TYPE,
    StatementVariant,
)
from .table import Cell, Table

# Interest credit descriptions in the Polish and English exports.
INTEREST_PHRASES: tuple[str, ...] = ("Odsetki brutto", "Gross interest")
INTEREST_MARKER = "odsetki"

INVESTMENT_TYPES: frozenset[str] = frozenset({"DIVIDEND", "CUSTODY FEE"})

SAVINGS_COLUMNS = (COMPLETED_DATE, DESCRIPTION, MONEY_IN)
INVESTMENT_COLUMNS = (DATE, TYPE, TOTAL_AMOUNT)

_logger = get_logger("revolut_tax.filters")


def interest_marker(description: Cell) -> str | None:
    if description is None:
        return None
    if any(phrase in description for phrase in INTEREST_PHRASES):
        return INTEREST_MARKER
    return None


def extract_interest_rows(table: Table) -> Table:
    """Keep Savings rows whose description is a gross-interest credit."""

    projected = table.select(SAVINGS_COLUMNS)
    markers = [interest_marker(d) for d in projected.column(DESCRIPTION)]
    projected = projected.with_column(DESCRIPTION, markers)
    mask = [m == INTEREST_MARKER for m in projected.column(DESCRIPTION)]
    return table.filter(mask)


def extract_dividend_and_fee_rows(table: Table) -> Table:
    """Keep Investment rows typed exactly ``DIVIDEND`` or ``CUSTODY FEE``."""

    projected = table.select(INVESTMENT_COLUMNS)
    mask = [t in INVESTMENT_TYPES for t in projected.column(TYPE)]
    return table.filter(mask)


def filter_rows(table: Table, variant: StatementVariant) -> Table:
    if variant is StatementVariant.SAVINGS:
        filtered = extract_interest_rows(table)
    else:
        filtered = extract_dividend_and_fee_rows(table)
    _logger.info("Filtered %s rows of interest: %d of %d", variant, len(filtered), len(table))
    return filtered


__all__ = [
    "INTEREST_MARKER",
    "INTEREST_PHRASES",
    "INVESTMENT_COLUMNS",
    "INVESTMENT_TYPES",
    "SAVINGS_COLUMNS",
    "extract_dividend_and_fee_rows",
    "extract_interest_rows",
    "filter_rows",
    "interest_marker",
]
