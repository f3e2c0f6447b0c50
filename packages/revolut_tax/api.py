"""Public API: statement file in, ordered ``(date, amount)`` records out.

``parse_transactions`` is a straight-line batch transform over one file:

    load → detect layout → filter rows → normalize dates / parse amounts → pair

Every stage fails fast; a call either returns all qualifying records of the
file or raises a :class:`~revolut_tax.errors.StatementError`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from os import PathLike
from typing import NamedTuple

from .amounts import Currency, parse_amounts
from .assembler import Transaction, assemble_transactions
from .dates import normalize_dates, normalize_investment_date, normalize_savings_date
from .filters import filter_rows
from .logging_setup import get_logger
from .schema import COMPLETED_DATE, DATE, MONEY_IN, TOTAL_AMOUNT, StatementVariant, detect_variant
from .table import load_table

_logger = get_logger("revolut_tax.api")


class LayoutRules(NamedTuple):
    date_column: str
    normalize_date: Callable[[str], str]
    amount_column: str


LAYOUT_RULES: dict[StatementVariant, LayoutRules] = {
    StatementVariant.SAVINGS: LayoutRules(COMPLETED_DATE, normalize_savings_date, MONEY_IN),
    StatementVariant.INVESTMENT: LayoutRules(DATE, normalize_investment_date, TOTAL_AMOUNT),
}


def parse_transactions(path: str | PathLike[str], *, strict: bool = False) -> list[Transaction]:
    """Extract interest, dividend and custody-fee records from one statement.

    Parameters
    ----------
    path:
        UTF-8, comma-separated statement export with a header row.
    strict:
        Raise :class:`~revolut_tax.errors.RowAlignmentError` instead of
        truncating when the date and amount columns yield different counts.

    Returns
    -------
    list[Transaction]
        Records in original row order.
    """

    table = load_table(path)
    variant = detect_variant(table)
    _logger.info("Detected %s account statement: %s", variant, path)

    filtered = filter_rows(table, variant)
    rules = LAYOUT_RULES[variant]

    dates = normalize_dates(filtered, rules.date_column, rules.normalize_date)
    _logger.info("Dates: %s", dates)
    amounts = parse_amounts(filtered, rules.amount_column)
    _logger.info("Amounts: %s", [str(a) for a in amounts])

    return assemble_transactions(dates, amounts, strict=strict)


def parse_many(
    paths: Iterable[str | PathLike[str]], *, strict: bool = False
) -> list[Transaction]:
    """Parse several statements and concatenate their records in argument order."""

    out: list[Transaction] = []
    for path in paths:
        out.extend(parse_transactions(path, strict=strict))
    return out


def summarize(transactions: Iterable[Transaction]) -> dict[Currency, float]:
    """Total the amounts per currency, rounded to cents.

    Currencies appear in order of first occurrence.
    """

    totals: dict[Currency, float] = {}
    for tx in transactions:
        cur = tx.amount.currency
        totals[cur] = totals.get(cur, 0.0) + tx.amount.value
    return {cur: round(value, 2) for cur, value in totals.items()}


__all__ = ["LAYOUT_RULES", "LayoutRules", "parse_many", "parse_transactions", "summarize"]
