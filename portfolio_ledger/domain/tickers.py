"""Ticker symbol normalization helpers for B3 listed assets."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

DOMAIN_MARKET_SUFFIX: Final[str] = ".SA"

# Fractional-market qualifier, e.g. ITUB4F -> ITUB4.
_DOMAIN_FRACTIONAL_QUALIFIER: Final[str] = "F"
_DOMAIN_BASE_SYMBOL_MAX_LENGTH: Final[int] = 4


def domain_normalize_ticker(symbol: str) -> str:
    """Normalize one raw ticker symbol into its market-qualified form.

    Args:
        symbol: Raw ticker symbol from an input file or operator config.

    Returns:
        str: Uppercase symbol carrying the market suffix.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    clean_symbol = symbol.strip().upper()
    if clean_symbol.endswith(DOMAIN_MARKET_SUFFIX):
        return clean_symbol

    if clean_symbol.endswith(_DOMAIN_FRACTIONAL_QUALIFIER) and len(clean_symbol) > _DOMAIN_BASE_SYMBOL_MAX_LENGTH:
        clean_symbol = clean_symbol[:-1]
    return f"{clean_symbol}{DOMAIN_MARKET_SUFFIX}"


def domain_strip_market_suffix(ticker: str) -> str:
    """Return the base symbol without the market suffix."""

    if ticker.endswith(DOMAIN_MARKET_SUFFIX):
        return ticker[: -len(DOMAIN_MARKET_SUFFIX)]
    return ticker


def domain_apply_ticker_rename(symbol: str, renames: Mapping[str, str]) -> str:
    """Normalize one symbol and resolve it through the configured rename map.

    Args:
        symbol: Raw ticker symbol.
        renames: Base symbol to replacement symbol mapping.

    Returns:
        str: Normalized renamed ticker, or the normalized input when not renamed.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    ticker = domain_normalize_ticker(symbol)
    replacement = renames.get(domain_strip_market_suffix(ticker))
    if replacement:
        return domain_normalize_ticker(replacement)
    return ticker
