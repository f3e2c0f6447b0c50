"""Error types raised while turning a statement export into transactions.

Every failure in the ingestion pipeline is terminal for the file being
processed. Callers can catch :class:`StatementError` to handle all of them in
one place; the concrete subclasses also derive from the closest builtin
exception (``csv.Error``, ``LookupError``, ``ValueError``) so generic handlers
keep working.
"""

from __future__ import annotations

import csv
from collections.abc import Iterable
from os import PathLike


class StatementError(Exception):
    """Base class for every error raised by :mod:`revolut_tax`."""


class StatementIOError(StatementError):
    """The statement file could not be opened or read."""

    def __init__(self, path: str | PathLike[str], reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"cannot read statement {self.path!r}: {reason}")


class MalformedTableError(StatementError, csv.Error):
    """The delimited text is empty or its rows disagree on the column count."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class UnsupportedSchemaError(StatementError):
    """The header matches none of the known statement layouts."""

    def __init__(self, columns: Iterable[str]) -> None:
        self.columns = tuple(columns)
        super().__init__(
            "unsupported statement layout; columns: " + ", ".join(self.columns or ("<none>",))
        )


class MissingColumnError(StatementError, LookupError):
    """One or more required columns are absent from a table."""

    def __init__(self, missing: Iterable[str]) -> None:
        self.missing = tuple(missing)
        super().__init__("missing columns: " + ", ".join(self.missing))


class MalformedDateError(StatementError, ValueError):
    """A date cell does not follow the layout's date grammar."""

    def __init__(self, value: str, expected: str) -> None:
        self.value = value
        self.expected = expected
        super().__init__(f"malformed date {value!r}; expected {expected}")


class UnparsableAmountError(StatementError, ValueError):
    """An amount cell matches none of the supported currency grammars."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"unparsable amount {value!r}")


class RowAlignmentError(StatementError):
    """Dates and amounts of a filtered table differ in length."""

    def __init__(self, n_dates: int, n_amounts: int) -> None:
        self.n_dates = n_dates
        self.n_amounts = n_amounts
        super().__init__(
            f"cannot pair {n_dates} date(s) with {n_amounts} amount(s); "
            "null cells are not symmetric between the two columns"
        )


__all__ = [
    "MalformedDateError",
    "MalformedTableError",
    "MissingColumnError",
    "RowAlignmentError",
    "StatementError",
    "StatementIOError",
    "UnparsableAmountError",
    "UnsupportedSchemaError",
]
