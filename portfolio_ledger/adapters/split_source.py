"""File-backed split history source."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from pathlib import Path

from portfolio_ledger.domain import SplitEvent, domain_normalize_ticker

from .config_files import adapter_read_splits
from .interfaces import SplitSourcePort


class StaticFileSplitSource(SplitSourcePort):
    """Serve split history from a JSON export instead of a live quote service."""

    def __init__(self, splits_path: str | Path):
        """Initialize split source.

        Args:
            splits_path: JSON split history file path.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when the path is blank.
        """

        if not str(splits_path).strip():
            raise ValueError("splits_path must not be blank")
        self._splits_path = Path(splits_path)

    def adapter_source_name(self) -> str:
        return f"file:{self._splits_path}"

    def adapter_fetch_splits(self, tickers: Iterable[str], start_date: date) -> list[SplitEvent]:
        """Return file splits matching the requested tickers and start date.

        Args:
            tickers: Ticker symbols, normalized before matching.
            start_date: Earliest split date of interest.

        Returns:
            list[SplitEvent]: Matching split events in file order.

        Raises:
            LedgerInputError: Raised when the split file is malformed.
        """

        requested_tickers = {domain_normalize_ticker(ticker) for ticker in tickers if ticker.strip()}
        if not requested_tickers:
            return []
        return [
            split
            for split in adapter_read_splits(self._splits_path)
            if split.ticker in requested_tickers and split.date >= start_date
        ]
