"""Pytest configuration for test isolation.

Makes the workspace ``packages/`` directory importable without an install and
keeps each test hermetic with respect to logging configuration and the
environment variables the package reads (log level, rate service URL,
proxies). The CLI configures the package logger once per process; resetting
it after each test prevents a handler bound to a previous test's captured
stream from leaking into the next one.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

_ROOT = Path(__file__).resolve().parents[1]
_PKG_DIR = _ROOT / "packages"
sys.path[:0] = [p for p in [str(_PKG_DIR), str(_ROOT)] if p not in sys.path]

from revolut_tax.logging_setup import reset_logging  # noqa: E402

DATA_DIR = _ROOT / "tests" / "data"

_ENV_VARS = (
    "REVOLUT_TAX_LOG_LEVEL",
    "REVOLUT_TAX_RATES_URL",
    "http_proxy",
    "https_proxy",
)


@pytest.fixture(autouse=True)
def _isolate_env_and_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes ``text`` to a fresh CSV file under ``tmp_path``."""

    counter = iter(range(1_000_000))

    def _write(text: str, *, name: str | None = None) -> Path:
        path = tmp_path / (name or f"statement_{next(counter)}.csv")
        path.write_text(text, encoding="utf-8")
        return path

    return _write
