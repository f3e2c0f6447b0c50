"""Date cell normalization.

Each layout writes dates differently; both are normalized to the canonical
``MM/DD/YY`` string used by the tax collaborators (e.g. ``"08/25/23"``).

- Savings: ``"<day> <month> <year>"`` with an unpadded day, e.g.
  ``"1 Sep 2023"``. Month names are English abbreviations (full names are
  accepted too) resolved through a fixed table, independent of the process
  locale.
- Investment: UTC ISO-8601 timestamps with a ``T`` separator, optional
  fractional seconds and a trailing ``Z``, e.g. ``"2023-12-08T14:30:08.150Z"``.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date, datetime

from .errors import MalformedDateError
from .table import Table

CANONICAL_DATE_FORMAT = "%m/%d/%y"

_MONTHS: dict[str, int] = {
    name: number
    for number, names in enumerate(
        (
            ("jan", "january"),
            ("feb", "february"),
            ("mar", "march"),
            ("apr", "april"),
            ("may",),
            ("jun", "june"),
            ("jul", "july"),
            ("aug", "august"),
            ("sep", "september"),
            ("oct", "october"),
            ("nov", "november"),
            ("dec", "december"),
        ),
        start=1,
    )
    for name in names
}

_SAVINGS_RE = re.compile(r" ?(?P<day>\d{1,2}) (?P<month>[A-Za-z]{3,9}) (?P<year>\d{4})")
_INVESTMENT_RE = re.compile(
    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"T(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})(?:\.\d{1,9})?Z"
)

_SAVINGS_EXPECTED = "'<day> <Mon> <YYYY>' (e.g. '25 Aug 2023')"
_INVESTMENT_EXPECTED = "'YYYY-MM-DDTHH:MM:SS[.fff]Z' (e.g. '2023-12-08T14:30:08.150Z')"


def canonical_date(d: date) -> str:
    return d.strftime(CANONICAL_DATE_FORMAT)


def parse_canonical_date(value: str) -> date:
    """Parse a canonical ``MM/DD/YY`` string back into a :class:`date`."""

    try:
        return datetime.strptime(value, CANONICAL_DATE_FORMAT).date()
    except ValueError as exc:
        raise MalformedDateError(value, "'MM/DD/YY'") from exc


def normalize_savings_date(value: str) -> str:
    m = _SAVINGS_RE.fullmatch(value)
    month = _MONTHS.get(m["month"].lower()) if m else None
    if m is None or month is None:
        raise MalformedDateError(value, _SAVINGS_EXPECTED)
    try:
        d = date(int(m["year"]), month, int(m["day"]))
    except ValueError as exc:
        raise MalformedDateError(value, _SAVINGS_EXPECTED) from exc
    return canonical_date(d)


def normalize_investment_date(value: str) -> str:
    m = _INVESTMENT_RE.fullmatch(value)
    if m is None:
        raise MalformedDateError(value, _INVESTMENT_EXPECTED)
    try:
        # Validates the time of day as well, even though only the date is kept.
        dt = datetime(
            int(m["year"]),
            int(m["month"]),
            int(m["day"]),
            int(m["hour"]),
            int(m["minute"]),
            int(m["second"]),
        )
    except ValueError as exc:
        raise MalformedDateError(value, _INVESTMENT_EXPECTED) from exc
    return canonical_date(dt.date())


def normalize_dates(table: Table, column: str, normalizer: Callable[[str], str]) -> list[str]:
    """Normalize every non-null cell of ``column`` in row order.

    Null cells are skipped; the first malformed cell aborts the whole column.
    """

    return [normalizer(cell) for cell in table.column(column) if cell is not None]


__all__ = [
    "CANONICAL_DATE_FORMAT",
    "canonical_date",
    "normalize_dates",
    "normalize_investment_date",
    "normalize_savings_date",
    "parse_canonical_date",
]
