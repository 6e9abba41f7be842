"""Typed interfaces for adapter-layer responsibilities."""

from collections.abc import Iterable
from datetime import date
from typing import Protocol

from portfolio_ledger.domain import SplitEvent


class SplitSourcePort(Protocol):
    """Port definition for historical split lookups keyed by normalized ticker."""

    def adapter_source_name(self) -> str:
        """Return split source identifier for diagnostics.

        Returns:
            str: Human-readable split source identifier.

        Raises:
            RuntimeError: Raised when source metadata is unavailable.
        """

    def adapter_fetch_splits(self, tickers: Iterable[str], start_date: date) -> list[SplitEvent]:
        """Fetch split events for the given tickers on or after `start_date`.

        Args:
            tickers: Normalized ticker symbols.
            start_date: Earliest split date of interest.

        Returns:
            list[SplitEvent]: Split events in source order.

        Raises:
            LedgerInputError: Raised when split history cannot be read.
        """
