"""Yahoo Finance split history source."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import date
from decimal import Decimal
from fractions import Fraction
from typing import Any

import pandas as pd
import yfinance as yf

from portfolio_ledger.domain import SplitEvent, domain_normalize_ticker, domain_split_ratio

from .interfaces import SplitSourcePort

logger = logging.getLogger(__name__)

_ADAPTER_MAX_SPLIT_DENOMINATOR = 1000


class YahooFinanceSplitSource(SplitSourcePort):
    """Fetch split history per ticker from Yahoo Finance.

    Lookups are best effort: a ticker whose history cannot be fetched is
    logged and contributes no splits, so one delisted symbol does not abort
    the whole run.
    """

    def __init__(self, ticker_factory: Callable[[str], Any] | None = None):
        """Initialize split source.

        Args:
            ticker_factory: Builds a ticker handle exposing a `splits` series;
                defaults to `yfinance.Ticker`.

        Returns:
            None: Initializer does not return values.

        Raises:
            RuntimeError: This initializer does not raise runtime errors.
        """

        self._ticker_factory = ticker_factory or yf.Ticker

    def adapter_source_name(self) -> str:
        return "yahoo"

    def adapter_fetch_splits(self, tickers: Iterable[str], start_date: date) -> list[SplitEvent]:
        """Fetch splits on or after `start_date` for each requested ticker.

        Args:
            tickers: Ticker symbols, normalized before lookup.
            start_date: Earliest split date of interest.

        Returns:
            list[SplitEvent]: Splits grouped by ticker in request order, dated ascending.

        Raises:
            RuntimeError: This method does not raise for per-ticker lookup failures.
        """

        requested_tickers = list(dict.fromkeys(domain_normalize_ticker(ticker) for ticker in tickers if ticker.strip()))
        logger.info("fetching split history for %s tickers", len(requested_tickers))

        splits: list[SplitEvent] = []
        for ticker in requested_tickers:
            try:
                history = self._ticker_factory(ticker).splits
            except Exception as error:
                logger.warning("split lookup failed for %s: %s", ticker, error)
                continue
            splits.extend(adapter_split_events_from_series(ticker, history, start_date))
        return splits


def adapter_split_events_from_series(ticker: str, history: pd.Series, start_date: date) -> list[SplitEvent]:
    """Convert a Yahoo split-ratio series into split events.

    Ratios are recovered as `numerator / denominator` fractions, e.g. `0.25`
    becomes `1/4`. Non-positive and missing ratios are skipped.

    Args:
        ticker: Normalized ticker the series belongs to.
        history: Series of float ratios indexed by split timestamp.
        start_date: Earliest split date kept.

    Returns:
        list[SplitEvent]: Split events dated ascending.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if history is None or history.empty:
        return []

    events: list[SplitEvent] = []
    for timestamp, raw_ratio in history.sort_index().items():
        split_date = pd.Timestamp(timestamp).date()
        if split_date < start_date:
            continue
        if pd.isna(raw_ratio) or float(raw_ratio) <= 0:
            logger.debug("skipping split for %s on %s with ratio=%s", ticker, split_date, raw_ratio)
            continue
        fraction = Fraction(str(raw_ratio)).limit_denominator(_ADAPTER_MAX_SPLIT_DENOMINATOR)
        numerator = Decimal(fraction.numerator)
        denominator = Decimal(fraction.denominator)
        events.append(
            SplitEvent(
                date=split_date,
                ticker=ticker,
                numerator=numerator,
                denominator=denominator,
                ratio=domain_split_ratio(numerator, denominator),
            )
        )
    return events


__all__ = ["YahooFinanceSplitSource", "adapter_split_events_from_series"]
