"""Statement layouts and header-based layout detection.

Two export layouts are recognized. Detection only looks at column presence
and runs the rules below in order; the first rule whose columns are all
present wins, so a header carrying both column sets is a Savings statement.

Savings (interest-bearing account):
    ``Completed Date, Description, Money in`` (plus other columns)

Investment (brokerage account):
    detected by ``Type, Price per share``; the data-bearing columns are
    ``Date, Type, Total Amount``
"""

from __future__ import annotations

from enum import StrEnum
from typing import NamedTuple

from .errors import UnsupportedSchemaError
from .table import Table

# Column names exactly as exported (case-sensitive).
COMPLETED_DATE = "Completed Date"
DESCRIPTION = "Description"
MONEY_IN = "Money in"

DATE = "Date"
TYPE = "Type"
PRICE_PER_SHARE = "Price per share"
TOTAL_AMOUNT = "Total Amount"


class StatementVariant(StrEnum):
    SAVINGS = "savings"
    INVESTMENT = "investment"


class DetectionRule(NamedTuple):
    variant: StatementVariant
    required: tuple[str, ...]


DETECTION_RULES: tuple[DetectionRule, ...] = (
    DetectionRule(StatementVariant.SAVINGS, (COMPLETED_DATE, DESCRIPTION, MONEY_IN)),
    DetectionRule(StatementVariant.INVESTMENT, (TYPE, PRICE_PER_SHARE)),
)


def detect_variant(table: Table) -> StatementVariant:
    """Classify ``table`` by its header.

    Raises :class:`UnsupportedSchemaError` when no rule matches.
    """

    for rule in DETECTION_RULES:
        if table.has_columns(rule.required):
            return rule.variant
    raise UnsupportedSchemaError(table.columns)


__all__ = [
    "COMPLETED_DATE",
    "DATE",
    "DESCRIPTION",
    "DETECTION_RULES",
    "DetectionRule",
    "MONEY_IN",
    "PRICE_PER_SHARE",
    "StatementVariant",
    "TOTAL_AMOUNT",
    "TYPE",
    "detect_variant",
]
