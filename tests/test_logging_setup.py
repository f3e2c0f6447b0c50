from __future__ import annotations

import io
import logging

import pytest

from revolut_tax.logging_setup import configure_logging, get_logger


def test_get_logger_is_silent_until_configured():
    get_logger("revolut_tax.test")
    pkg = logging.getLogger("revolut_tax")
    assert any(isinstance(h, logging.NullHandler) for h in pkg.handlers)


def test_configure_logging_attaches_one_handler_once():
    stream = io.StringIO()
    configure_logging("DEBUG", fmt="%(levelname)s %(message)s", stream=stream)
    configure_logging("ERROR", stream=io.StringIO())  # no-op

    pkg = logging.getLogger("revolut_tax")
    assert [type(h) for h in pkg.handlers] == [logging.StreamHandler]
    assert pkg.propagate is False

    get_logger("revolut_tax.table").debug("loaded %d rows", 3)
    assert stream.getvalue() == "DEBUG loaded 3 rows\n"


def test_level_falls_back_to_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("REVOLUT_TAX_LOG_LEVEL", "warning")
    configure_logging(stream=io.StringIO())
    assert logging.getLogger("revolut_tax").level == logging.WARNING


def test_unknown_level_defaults_to_info(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("REVOLUT_TAX_LOG_LEVEL", "chatty")
    configure_logging("verbose", stream=io.StringIO())
    assert logging.getLogger("revolut_tax").level == logging.INFO


def test_numeric_level_strings():
    configure_logging("15", stream=io.StringIO())
    assert logging.getLogger("revolut_tax").level == 15
