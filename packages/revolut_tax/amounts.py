"""Signed multi-currency amount parsing.

Amount cells come in three lexical shapes, told apart only by their currency
markers:

==========  ======================  ==================
Currency    Shape                   Example
==========  ======================  ==================
EUR         ``+€<number>``          ``+€6,000.45``
PLN         ``+<number><c>PLN``     ``+4,000 PLN``
USD         ``[-]$<number>``        ``-$0.51``
==========  ======================  ==================

``<c>`` is one separator character other than a digit or dot (a space in
practice). The numeral is always unsigned; a USD amount is negative only
when a ``-`` precedes the ``$``.

Every comma is removed before matching. This relies on none of the supported
shapes using a comma as the decimal separator; a currency written with a
decimal comma must not be added to :data:`AMOUNT_GRAMMARS` without changing
that step.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import NamedTuple

from .errors import UnparsableAmountError
from .logging_setup import get_logger
from .table import Table

_logger = get_logger("revolut_tax.amounts")


class Currency(StrEnum):
    EUR = "EUR"
    USD = "USD"
    PLN = "PLN"


@dataclass(frozen=True, slots=True)
class CurrencyAmount:
    """A signed amount tagged with the currency it was written in."""

    currency: Currency
    value: float

    @classmethod
    def eur(cls, value: float) -> CurrencyAmount:
        return cls(Currency.EUR, value)

    @classmethod
    def usd(cls, value: float) -> CurrencyAmount:
        return cls(Currency.USD, value)

    @classmethod
    def pln(cls, value: float) -> CurrencyAmount:
        return cls(Currency.PLN, value)

    def __str__(self) -> str:
        return f"{self.value:.2f} {self.currency}"


# Unsigned floating literal: "600", "0.07", "6000.", ".5", "1e3".
_NUMBER = r"(?P<number>(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)"


class AmountGrammar(NamedTuple):
    name: str
    pattern: re.Pattern[str]
    build: Callable[[re.Match[str]], CurrencyAmount]


def _eur(m: re.Match[str]) -> CurrencyAmount:
    return CurrencyAmount.eur(float(m["number"]))


def _pln(m: re.Match[str]) -> CurrencyAmount:
    return CurrencyAmount.pln(float(m["number"]))


def _usd(m: re.Match[str]) -> CurrencyAmount:
    value = float(m["number"])
    return CurrencyAmount.usd(-value if m["sign"] else value)


# Tried in order; the first grammar matching a prefix of the cell wins.
AMOUNT_GRAMMARS: tuple[AmountGrammar, ...] = (
    AmountGrammar("eur", re.compile(r"\+€" + _NUMBER), _eur),
    AmountGrammar("pln", re.compile(r"\+" + _NUMBER + r"[^\d.]PLN"), _pln),
    AmountGrammar("usd", re.compile(r"(?P<sign>-)?\$" + _NUMBER), _usd),
)


def strip_thousands_separators(raw: str) -> str:
    return raw.replace(",", "")


def parse_amount(raw: str) -> CurrencyAmount:
    """Parse one amount cell.

    Text after the matched amount is ignored, so ``"+€0.07 extra"`` reads as
    EUR 0.07. Raises :class:`UnparsableAmountError` when no grammar matches
    the start of the cell.
    """

    text = strip_thousands_separators(raw).lstrip()
    for grammar in AMOUNT_GRAMMARS:
        m = grammar.pattern.match(text)
        if m is not None:
            return grammar.build(m)
    raise UnparsableAmountError(raw)


def parse_amounts(table: Table, column: str) -> list[CurrencyAmount]:
    """Parse every non-null cell of ``column`` in row order (fail-fast)."""

    cells = table.column(column)
    _logger.debug("Amount cells in %r: %s", column, [c for c in cells if c is not None])
    return [parse_amount(cell) for cell in cells if cell is not None]


__all__ = [
    "AMOUNT_GRAMMARS",
    "AmountGrammar",
    "Currency",
    "CurrencyAmount",
    "parse_amount",
    "parse_amounts",
    "strip_thousands_separators",
]
