"""In-memory table loaded from a delimited statement export.

A :class:`Table` is an ordered set of named, equal-length columns of text
cells. Empty CSV fields are stored as ``None`` (null cells) so downstream
parsers can tell "absent" from "present but malformed". The row index is the
only key correlating cells across columns; projection and filtering always
preserve row order.

Parsing follows RFC 4180 rules via the stdlib :mod:`csv` module (UTF-8,
quoted fields with embedded commas and newlines, doubled quotes).
"""

from __future__ import annotations

import csv
from collections import Counter
from collections.abc import Iterable, Iterator, Mapping, Sequence
from io import StringIO
from os import PathLike
from pathlib import Path
from typing import TypeAlias

from .errors import MalformedTableError, MissingColumnError, StatementIOError
from .logging_setup import get_logger

Cell: TypeAlias = str | None

_logger = get_logger("revolut_tax.table")


class Table:
    """Immutable, column-oriented view over one statement file."""

    __slots__ = ("_columns", "_height")

    def __init__(self, columns: Mapping[str, Sequence[Cell]]) -> None:
        cols = {name: tuple(values) for name, values in columns.items()}
        heights = {len(values) for values in cols.values()}
        if len(heights) > 1:
            raise MalformedTableError(
                "columns differ in length: "
                + ", ".join(f"{name}={len(values)}" for name, values in cols.items())
            )
        self._columns: dict[str, tuple[Cell, ...]] = cols
        self._height = heights.pop() if heights else 0

    # -- shape ---------------------------------------------------------------

    @property
    def columns(self) -> tuple[str, ...]:
        return tuple(self._columns)

    @property
    def width(self) -> int:
        return len(self._columns)

    def __len__(self) -> int:
        return self._height

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Table):
            return NotImplemented
        return list(self._columns.items()) == list(other._columns.items())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Table(columns={list(self.columns)!r}, rows={len(self)})"

    # -- access --------------------------------------------------------------

    def has_columns(self, names: Iterable[str]) -> bool:
        return all(name in self._columns for name in names)

    def column(self, name: str) -> tuple[Cell, ...]:
        """Return the cells of ``name`` or raise :class:`MissingColumnError`."""

        try:
            return self._columns[name]
        except KeyError:
            raise MissingColumnError([name]) from None

    def row(self, index: int) -> dict[str, Cell]:
        if not 0 <= index < self._height:
            raise IndexError(f"row {index} out of range for table of {self._height} rows")
        return {name: values[index] for name, values in self._columns.items()}

    def rows(self) -> Iterator[dict[str, Cell]]:
        for i in range(self._height):
            yield self.row(i)

    # -- derivation ----------------------------------------------------------

    def select(self, names: Sequence[str]) -> Table:
        """Project onto ``names`` (in that order).

        All missing names are reported together in one
        :class:`MissingColumnError`.
        """

        missing = [name for name in names if name not in self._columns]
        if missing:
            raise MissingColumnError(missing)
        return Table({name: self._columns[name] for name in names})

    def with_column(self, name: str, values: Sequence[Cell]) -> Table:
        """Return a copy with ``name`` replaced (or appended) by ``values``."""

        cols: dict[str, Sequence[Cell]] = dict(self._columns)
        cols[name] = values
        return Table(cols)

    def filter(self, mask: Sequence[bool]) -> Table:
        """Keep rows where ``mask`` is true, preserving their order."""

        if len(mask) != self._height:
            raise ValueError(f"mask length {len(mask)} does not match table height {self._height}")
        keep = [i for i, flag in enumerate(mask) if flag]
        return Table(
            {name: [values[i] for i in keep] for name, values in self._columns.items()}
        )


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def _cell(value: str) -> Cell:
    return value if value != "" else None


def _table_from_reader(reader: Iterator[list[str]]) -> Table:
    header: list[str] | None = None
    records: list[list[str]] = []
    for fields in reader:
        if not fields:
            continue
        if header is None:
            header = fields
            continue
        if len(fields) != len(header):
            raise MalformedTableError(
                f"expected {len(header)} fields, found {len(fields)}",
                line=getattr(reader, "line_num", None),
            )
        records.append(fields)

    if header is None:
        raise MalformedTableError("no header row; the file is empty")

    # A UTF-8 BOM survives decoding when the file was not opened with utf-8-sig.
    header[0] = header[0].removeprefix("\ufeff")
    dupes = sorted(name for name, n in Counter(header).items() if n > 1)
    if dupes:
        raise MalformedTableError("duplicate column names: " + ", ".join(dupes), line=1)

    return Table(
        {name: [_cell(rec[i]) for rec in records] for i, name in enumerate(header)}
    )


def read_table(text: str) -> Table:
    """Parse delimited ``text`` (first row = header) into a :class:`Table`."""

    with StringIO(text, newline="") as f:
        try:
            return _table_from_reader(csv.reader(f))
        except MalformedTableError:
            raise
        except csv.Error as exc:
            raise MalformedTableError(str(exc)) from exc


def load_table(path: str | PathLike[str]) -> Table:
    """Read the statement at ``path`` into a :class:`Table`.

    Raises
    ------
    StatementIOError
        The file is missing, unreadable, or not valid UTF-8.
    MalformedTableError
        The file is empty or its rows disagree on the column count.
    """

    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as exc:
        raise StatementIOError(p, f"not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise StatementIOError(p, exc.strerror or exc.__class__.__name__) from exc

    table = read_table(text)
    _logger.debug("Loaded %s: %d row(s), columns=%s", p, len(table), list(table.columns))
    return table


__all__ = ["Cell", "Table", "load_table", "read_table"]
