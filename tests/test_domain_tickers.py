"""Regression tests for ticker normalization and rename resolution."""

from __future__ import annotations

import pytest

from portfolio_ledger.domain import domain_apply_ticker_rename, domain_normalize_ticker


@pytest.mark.parametrize(
    ("raw_symbol", "expected"),
    [
        ("petr4", "PETR4.SA"),
        ("  vale3  ", "VALE3.SA"),
        ("ITUB4F", "ITUB4.SA"),
        ("ALUP11F", "ALUP11.SA"),
        ("BBAS3.SA", "BBAS3.SA"),
        ("bbas3.sa", "BBAS3.SA"),
        ("ABCF", "ABCF.SA"),
        ("GOLF3", "GOLF3.SA"),
    ],
)
def test_domain_normalize_ticker_applies_market_rules(raw_symbol: str, expected: str) -> None:
    """Normalize case, whitespace, fractional qualifier and market suffix.

    Args:
        raw_symbol: Raw input symbol.
        expected: Expected normalized ticker.

    Returns:
        None: Assertions validate normalization output.

    Raises:
        AssertionError: Raised when normalization deviates from market rules.
    """

    assert domain_normalize_ticker(raw_symbol) == expected


def test_domain_normalize_ticker_is_idempotent() -> None:
    """Return normalized tickers unchanged on repeated normalization."""

    normalized = domain_normalize_ticker("itub4f")

    assert domain_normalize_ticker(normalized) == normalized


def test_domain_apply_ticker_rename_resolves_base_symbol_through_map() -> None:
    """Resolve renamed base symbols and keep other tickers normalized.

    Returns:
        None: Assertions validate rename resolution.

    Raises:
        AssertionError: Raised when rename mapping is not applied.
    """

    renames = {"VVAR3": "VIIA3", "BIDI11": "INBR32"}

    assert domain_apply_ticker_rename("vvar3", renames) == "VIIA3.SA"
    assert domain_apply_ticker_rename("BIDI11F", renames) == "INBR32.SA"
    assert domain_apply_ticker_rename("PETR4", renames) == "PETR4.SA"
