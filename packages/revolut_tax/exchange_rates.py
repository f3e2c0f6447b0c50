"""Historical exchange-rate lookup for tax residencies.

A :class:`Residency` turns ``(date, gross, tax)`` triples into
:class:`DetailedTransaction` records carrying the exchange rate in effect the
day before each transaction. Rates come from a rate-lookup web service,
one non-streaming GET per triple, keyed by
``(from_currency, to_currency, date - 1 day)``:

    ``<base>/<FROM>/<TO>/<MM-DD-YYYY>/?format=json``

The response body format belongs to the residency: each subclass supplies
:meth:`Residency.parse_exchange_rates`. There are no retries. Proxies are taken
from the ``http_proxy`` and ``https_proxy`` environment variables only.
"""

from __future__ import annotations

import os
import urllib.error
import urllib.request
from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import timedelta
from typing import TypeAlias

from pydantic import BaseModel, ConfigDict, field_validator

from .dates import parse_canonical_date
from .logging_setup import get_logger

DEFAULT_RATES_URL = "https://www.exchange-rates.org/Rate"
RATES_URL_ENV = "REVOLUT_TAX_RATES_URL"

_logger = get_logger("revolut_tax.exchange_rates")

# (transaction date "MM/DD/YY", gross amount, tax amount)
TaxTriple: TypeAlias = tuple[str, float, float]


class ExchangeRateError(RuntimeError):
    """The rate-lookup service could not be reached or answered with an error."""


class DetailedTransaction(BaseModel):
    """A taxable transaction with the exchange rate used to convert it."""

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    transaction_date: str
    gross: float
    tax: float
    exchange_rate_date: str
    exchange_rate: float

    @field_validator("transaction_date")
    @classmethod
    def _canonical_date(cls, v: str) -> str:
        parse_canonical_date(v)
        return v

    @field_validator("exchange_rate")
    @classmethod
    def _positive_rate(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("exchange_rate must be positive")
        return v


def _rates_base_url() -> str:
    base = os.getenv(RATES_URL_ENV)
    if base and base.strip():
        return base.strip().rstrip("/")
    return DEFAULT_RATES_URL


def exchange_rate_url(
    transaction_date: str, from_currency: str, to_currency: str, *, base_url: str | None = None
) -> str:
    """Build the lookup URL for the day preceding ``transaction_date``."""

    rate_date = parse_canonical_date(transaction_date) - timedelta(days=1)
    base = (base_url or _rates_base_url()).rstrip("/")
    return f"{base}/{from_currency}/{to_currency}/{rate_date:%m-%d-%Y}/?format=json"


def build_opener_from_env() -> urllib.request.OpenerDirector:
    """Return an opener routed through ``http_proxy``/``https_proxy`` when set.

    Other proxy variables (upper-case names, ``no_proxy``) are ignored.
    """

    proxies: dict[str, str] = {}
    for scheme in ("http", "https"):
        value = os.environ.get(f"{scheme}_proxy")
        if value:
            proxies[scheme] = value
            _logger.debug("Using %s proxy %s", scheme, value)
    return urllib.request.build_opener(urllib.request.ProxyHandler(proxies))


def _fetch(opener: urllib.request.OpenerDirector, url: str) -> str:
    try:
        with opener.open(url) as resp:
            body = resp.read()
    except urllib.error.HTTPError as e:
        raise ExchangeRateError(f"exchange rate lookup failed: {e.code} {e.reason}: {url}") from e
    except urllib.error.URLError as e:
        raise ExchangeRateError(f"exchange rate lookup failed: {e.reason}: {url}") from e
    return body.decode("utf-8", errors="replace")


class Residency(ABC):
    """Tax residency: converts foreign income and presents the tax result."""

    @abstractmethod
    def present_result(self, gross: float, tax: float) -> None: ...

    @abstractmethod
    def get_exchange_rates(
        self, transactions: Sequence[TaxTriple]
    ) -> list[DetailedTransaction]: ...

    def parse_exchange_rates(self, body: str) -> tuple[float, str]:
        """Extract ``(rate, rate_date)`` from a lookup response body.

        Residencies that call :meth:`get_currency_exchange_rates` must
        override this.
        """

        raise NotImplementedError(
            f"{type(self).__name__} does not parse exchange-rate responses"
        )

    def get_currency_exchange_rates(
        self,
        transactions: Sequence[TaxTriple],
        from_currency: str,
        to_currency: str,
        *,
        opener: urllib.request.OpenerDirector | None = None,
    ) -> list[DetailedTransaction]:
        """Look up one rate per triple, in order.

        A failed request aborts the whole call with :class:`ExchangeRateError`.
        A body that :meth:`parse_exchange_rates` rejects with ``ValueError``, or
        a parsed rate that fails validation (e.g. not positive), is logged and
        its triple is left out of the result.
        """

        opener = opener or build_opener_from_env()
        detailed: list[DetailedTransaction] = []
        for transaction_date, gross, tax in transactions:
            url = exchange_rate_url(transaction_date, from_currency, to_currency)
            body = _fetch(opener, url)
            _logger.info("Exchange rate response from %s: %s", url, body)
            try:
                rate, rate_date = self.parse_exchange_rates(body)
                # pydantic.ValidationError is a ValueError: a bad rate skips too.
                row = DetailedTransaction(
                    transaction_date=transaction_date,
                    gross=gross,
                    tax=tax,
                    exchange_rate_date=rate_date,
                    exchange_rate=rate,
                )
            except ValueError as exc:
                _logger.warning("Skipping %s: cannot parse exchange rate (%s)", transaction_date, exc)
                continue
            detailed.append(row)
        return detailed


__all__ = [
    "DEFAULT_RATES_URL",
    "DetailedTransaction",
    "ExchangeRateError",
    "RATES_URL_ENV",
    "Residency",
    "TaxTriple",
    "build_opener_from_env",
    "exchange_rate_url",
]
