"""Holdings compilation from a reconciled ledger."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal
from typing import Final

from portfolio_ledger.domain import LedgerItem, PositionSummary, TransactionType, domain_decimal_context

_LEDGER_INCREASING_TYPES: Final[frozenset[TransactionType]] = frozenset(
    {TransactionType.BUY, TransactionType.SPLIT, TransactionType.MERGER_IN}
)
_LEDGER_DECREASING_TYPES: Final[frozenset[TransactionType]] = frozenset(
    {
        TransactionType.SELL,
        TransactionType.REVERSE_SPLIT,
        TransactionType.MERGER_OUT,
        TransactionType.FORCED_SALE,
    }
)


def ledger_quantity_delta(item: LedgerItem) -> Decimal:
    """Return the signed holdings change implied by one ledger row.

    Args:
        item: Ledger row.

    Returns:
        Decimal: Positive for increasing types, negative for decreasing types.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if item.type in _LEDGER_INCREASING_TYPES:
        return item.quantity
    if item.type in _LEDGER_DECREASING_TYPES:
        return -item.quantity
    return Decimal("0")


def ledger_holdings_trajectory(ledger: Iterable[LedgerItem]) -> list[dict[str, Decimal]]:
    """Replay a ledger and capture the holdings map after every row.

    Args:
        ledger: Ledger rows in emitted order.

    Returns:
        list[dict[str, Decimal]]: One holdings snapshot per ledger row.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    holdings: dict[str, Decimal] = {}
    trajectory: list[dict[str, Decimal]] = []
    with domain_decimal_context():
        for item in ledger:
            holdings[item.ticker] = holdings.get(item.ticker, Decimal("0")) + ledger_quantity_delta(item)
            trajectory.append(dict(holdings))
    return trajectory


def ledger_replay_holdings(ledger: Iterable[LedgerItem]) -> dict[str, Decimal]:
    """Replay a ledger and return the final signed quantity per ticker."""

    holdings: dict[str, Decimal] = {}
    with domain_decimal_context():
        for item in ledger:
            holdings[item.ticker] = holdings.get(item.ticker, Decimal("0")) + ledger_quantity_delta(item)
    return holdings


def ledger_active_positions(ledger: Iterable[LedgerItem]) -> list[PositionSummary]:
    """Compile open positions with positive quantity, ordered by ticker.

    Args:
        ledger: Ledger rows in emitted order.

    Returns:
        list[PositionSummary]: Positive positions sorted by ticker.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    holdings = ledger_replay_holdings(ledger)
    with domain_decimal_context():
        return [
            PositionSummary(ticker=ticker, quantity=quantity)
            for ticker, quantity in sorted(holdings.items())
            if quantity > Decimal("0")
        ]


__all__ = [
    "ledger_quantity_delta",
    "ledger_holdings_trajectory",
    "ledger_replay_holdings",
    "ledger_active_positions",
]
