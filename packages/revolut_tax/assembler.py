"""Pairing of normalized dates with parsed amounts."""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple

from .amounts import CurrencyAmount
from .errors import RowAlignmentError
from .logging_setup import get_logger

_logger = get_logger("revolut_tax.assembler")


class Transaction(NamedTuple):
    """One qualifying statement row: canonical ``MM/DD/YY`` date and amount."""

    date: str
    amount: CurrencyAmount


def assemble_transactions(
    dates: Sequence[str],
    amounts: Sequence[CurrencyAmount],
    *,
    strict: bool = False,
) -> list[Transaction]:
    """Zip ``dates`` and ``amounts`` by position.

    Both sequences come from the same filtered table, so index ``i`` of each
    derives from filtered row ``i``. When their lengths differ (a null date
    next to a present amount, or the reverse) the unmatched tail is dropped
    with a warning; ``strict=True`` raises :class:`RowAlignmentError` instead.
    """

    if len(dates) != len(amounts):
        if strict:
            raise RowAlignmentError(len(dates), len(amounts))
        _logger.warning(
            "Dates (%d) and amounts (%d) differ in length; keeping the first %d pair(s)",
            len(dates),
            len(amounts),
            min(len(dates), len(amounts)),
        )
    return [Transaction(d, a) for d, a in zip(dates, amounts, strict=False)]


__all__ = ["Transaction", "assemble_transactions"]
