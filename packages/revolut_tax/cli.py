# ruff: noqa: I001
"""CLI for the ``revolut_tax`` package.

This module exposes callable command handlers (``cmd_transactions``,
``cmd_detect``) and a Typer-based console interface. Environment variables
(e.g., ``REVOLUT_TAX_LOG_LEVEL``) are loaded from a local ``.env`` using
``python-dotenv`` before delegating to command logic. Parsing lives in
``revolut_tax.api``.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from typer.models import ArgumentInfo

from .assembler import Transaction
from .errors import StatementError
from .logging_setup import configure_logging


def _print_records(transactions: Sequence[Transaction], *, as_table: bool) -> None:
    if not as_table:
        # One line per record: "<date>\t<currency>\t<amount>"
        for tx in transactions:
            print(f"{tx.date}\t{tx.amount.currency}\t{tx.amount.value:.2f}")
        return

    from rich.console import Console
    from rich.table import Table as RichTable

    table = RichTable("Date", "Currency", "Amount", title="Transactions")
    for tx in transactions:
        table.add_row(tx.date, str(tx.amount.currency), f"{tx.amount.value:.2f}")
    Console().print(table)


def cmd_transactions(
    csv_paths: Sequence[str],
    *,
    strict: bool = False,
    as_table: bool = False,
    summary: bool = False,
) -> int:
    """Parse statements and print their records to stdout.

    Records of all files are printed in argument order. With ``summary``, a
    ``TOTAL<TAB><currency><TAB><amount>`` line per currency follows.

    Errors are written to stderr and the function returns ``1``; nothing is
    printed for any file when one of them fails.
    """

    from .api import parse_many, summarize

    try:
        transactions = parse_many(csv_paths, strict=strict)
    except StatementError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    _print_records(transactions, as_table=as_table)

    if summary:
        for currency, total in summarize(transactions).items():
            print(f"TOTAL\t{currency}\t{total:.2f}")
    return 0


def cmd_detect(csv_path: str) -> int:
    """Print the detected statement layout (``savings`` or ``investment``)."""

    from .schema import detect_variant
    from .table import load_table

    try:
        variant = detect_variant(load_table(csv_path))
    except StatementError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(variant)
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Extract interest, dividend and custody-fee records from bank statement CSVs.",
)

# Module-level argument objects to satisfy ruff B008 (no calls in parameter
# defaults).
CSV_PATHS_ARGUMENT: ArgumentInfo = typer.Argument(
    ...,
    help="Statement CSV export(s)",
    dir_okay=False,
    file_okay=True,
    exists=False,  # the handler reports missing files itself
)
CSV_PATH_ARGUMENT: ArgumentInfo = typer.Argument(
    ..., help="Statement CSV export", dir_okay=False, file_okay=True, exists=False
)


def _exit(code: int) -> None:
    if code:
        raise typer.Exit(code)


@app.command("transactions")
def transactions_cmd(
    csv_paths: Annotated[list[Path], CSV_PATHS_ARGUMENT],
    *,
    strict: bool = typer.Option(
        False, help="Fail when date and amount counts differ instead of truncating."
    ),
    table: bool = typer.Option(False, "--table", help="Render records as a table."),
    summary: bool = typer.Option(False, "--summary", help="Print per-currency totals."),
) -> None:
    """Print qualifying records of one or more statements."""

    _exit(
        cmd_transactions(
            [str(p) for p in csv_paths], strict=strict, as_table=table, summary=summary
        )
    )


@app.command("detect")
def detect_cmd(csv_path: Annotated[Path, CSV_PATH_ARGUMENT]) -> None:
    """Print which statement layout a CSV uses."""

    _exit(cmd_detect(str(csv_path)))


@app.callback()
def _root(
    log_level: str | None = typer.Option(
        None, help="Log level (falls back to REVOLUT_TAX_LOG_LEVEL, then INFO)."
    ),
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables) and configures logging.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level)


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
