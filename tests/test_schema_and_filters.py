from __future__ import annotations

import pytest

from revolut_tax.errors import MissingColumnError, UnsupportedSchemaError
from revolut_tax.filters import (
    extract_dividend_and_fee_rows,
    extract_interest_rows,
    filter_rows,
    interest_marker,
)
from revolut_tax.schema import StatementVariant, detect_variant
from revolut_tax.table import Table


def _savings_table() -> Table:
    return Table(
        {
            "Completed Date": ["24 Aug 2023", "24 Aug 2023", "25 Aug 2023", "26 Aug 2023"],
            "Description": [
                "Gross interest",
                "Service fee",
                "Odsetki brutto za dzień",
                None,
            ],
            "Money in": ["+€0.05", None, "+0.07 PLN", "+€9"],
            "Balance": ["+€1", "+€1", "+€1", "+€10"],
        }
    )


def _investment_table() -> Table:
    return Table(
        {
            "Date": [
                "2023-12-01T05:31:02.183Z",
                "2023-12-02T05:31:02.183Z",
                "2023-12-14T14:30:08.150Z",
                "2023-12-15T14:30:08.150Z",
                "2023-12-16T14:30:08.150Z",
            ],
            "Type": ["CUSTODY FEE", "BUY - MARKET", "DIVIDEND", "dividend", "DIVIDEND TAX"],
            "Price per share": [None, "$171.30", None, None, None],
            "Total Amount": ["-$0.51", "$342.60", "$2.94", "$1", "-$0.44"],
        }
    )


# ---- detection ----------------------------------------------------------------


def test_detect_savings():
    assert detect_variant(_savings_table()) is StatementVariant.SAVINGS


def test_detect_investment():
    assert detect_variant(_investment_table()) is StatementVariant.INVESTMENT


def test_savings_wins_when_both_column_sets_are_present():
    table = Table(
        {
            name: []
            for name in ("Completed Date", "Description", "Money in", "Type", "Price per share")
        }
    )
    assert detect_variant(table) is StatementVariant.SAVINGS


def test_investment_detection_needs_price_per_share():
    table = Table({"Date": [], "Type": [], "Total Amount": []})
    with pytest.raises(UnsupportedSchemaError) as exc_info:
        detect_variant(table)
    assert exc_info.value.columns == ("Date", "Type", "Total Amount")


def test_column_names_are_case_sensitive():
    with pytest.raises(UnsupportedSchemaError):
        detect_variant(Table({"completed date": [], "description": [], "money in": []}))


# ---- filtering ------------------------------------------------------------------


def test_interest_marker():
    assert interest_marker("Gross interest") == "odsetki"
    assert interest_marker("Odsetki brutto") == "odsetki"
    assert interest_marker("Monthly Gross interest payout") == "odsetki"
    assert interest_marker("gross interest") is None
    assert interest_marker(None) is None


def test_extract_interest_rows_keeps_full_rows_in_order():
    kept = extract_interest_rows(_savings_table())
    assert kept.columns == ("Completed Date", "Description", "Money in", "Balance")
    assert kept.column("Completed Date") == ("24 Aug 2023", "25 Aug 2023")
    # The original description text survives; only the mask used the marker.
    assert kept.column("Description") == ("Gross interest", "Odsetki brutto za dzień")


def test_extract_dividend_and_fee_rows_exact_match_only():
    kept = extract_dividend_and_fee_rows(_investment_table())
    assert kept.column("Type") == ("CUSTODY FEE", "DIVIDEND")
    assert kept.column("Total Amount") == ("-$0.51", "$2.94")
    assert "Price per share" in kept.columns


def test_filter_rows_dispatches_on_variant():
    assert len(filter_rows(_savings_table(), StatementVariant.SAVINGS)) == 2
    assert len(filter_rows(_investment_table(), StatementVariant.INVESTMENT)) == 2


def test_projection_reports_missing_columns():
    # Detection for Investment does not require "Total Amount"; projection does.
    table = Table({"Date": ["x"], "Type": ["DIVIDEND"], "Price per share": [None]})
    assert detect_variant(table) is StatementVariant.INVESTMENT
    with pytest.raises(MissingColumnError) as exc_info:
        filter_rows(table, StatementVariant.INVESTMENT)
    assert exc_info.value.missing == ("Total Amount",)
