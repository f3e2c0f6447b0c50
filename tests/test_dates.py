from __future__ import annotations

from datetime import date

import pytest

from revolut_tax.dates import (
    canonical_date,
    normalize_dates,
    normalize_investment_date,
    normalize_savings_date,
    parse_canonical_date,
)
from revolut_tax.errors import MalformedDateError
from revolut_tax.table import Table


def test_savings_date_examples():
    assert normalize_savings_date("25 Aug 2023") == "08/25/23"
    assert normalize_savings_date("1 Sep 2023") == "09/01/23"
    assert normalize_savings_date("01 Sep 2023") == "09/01/23"
    assert normalize_savings_date(" 5 Aug 2023") == "08/05/23"


def test_savings_month_names_are_case_insensitive_and_locale_free():
    assert normalize_savings_date("31 DEC 2023") == "12/31/23"
    assert normalize_savings_date("5 march 2024") == "03/05/24"


@pytest.mark.parametrize(
    "raw",
    [
        "2023-08-25",
        "25 Sie 2023",  # Polish month abbreviation
        "32 Aug 2023",
        "29 Feb 2023",
        "25 Aug 23",
        "25  Aug 2023",
        "Aug 25 2023",
        "",
    ],
)
def test_savings_date_rejects_other_forms(raw: str):
    with pytest.raises(MalformedDateError) as exc_info:
        normalize_savings_date(raw)
    assert exc_info.value.value == raw


def test_investment_date_examples():
    assert normalize_investment_date("2023-12-08T14:30:08.150Z") == "12/08/23"
    assert normalize_investment_date("2023-09-09T05:35:43.253726Z") == "09/09/23"
    assert normalize_investment_date("2024-02-29T00:00:00Z") == "02/29/24"


@pytest.mark.parametrize(
    "raw",
    [
        "2023-12-08",
        "2023-12-08T14:30:08.150",  # no trailing Z
        "2023-12-08 14:30:08.150Z",
        "2023-13-08T14:30:08.150Z",
        "2023-12-08T25:30:08.150Z",
        "2023-12-08T14:30:08.Z",
        "08 Dec 2023",
    ],
)
def test_investment_date_rejects_other_forms(raw: str):
    with pytest.raises(MalformedDateError):
        normalize_investment_date(raw)


def test_canonical_round_trip_helpers():
    assert canonical_date(date(2023, 8, 5)) == "08/05/23"
    assert parse_canonical_date("08/05/23") == date(2023, 8, 5)
    with pytest.raises(MalformedDateError):
        parse_canonical_date("2023-08-05")


def test_normalize_dates_skips_nulls_in_row_order():
    table = Table({"Completed Date": ["25 Aug 2023", None, "1 Sep 2023"]})
    assert normalize_dates(table, "Completed Date", normalize_savings_date) == [
        "08/25/23",
        "09/01/23",
    ]


def test_normalize_dates_fails_fast():
    table = Table({"Date": ["2023-12-08T14:30:08.150Z", "yesterday", "also bad"]})
    with pytest.raises(MalformedDateError) as exc_info:
        normalize_dates(table, "Date", normalize_investment_date)
    assert exc_info.value.value == "yesterday"
