"""Ledger reconciliation engine replaying trades and corporate actions."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import Decimal
from typing import Final

from portfolio_ledger.domain import (
    ForcedExitEvent,
    LedgerItem,
    MergerEvent,
    SplitEvent,
    Transaction,
    TransactionType,
    domain_decimal_context,
    domain_normalize_ticker,
)

from .timeline import TimelineEventKind, ledger_build_timeline

LEDGER_SOURCE_GENERATED_SPLIT: Final[str] = "GENERATED_SPLIT"
LEDGER_SOURCE_GENERATED_MERGER: Final[str] = "GENERATED_MERGER"
LEDGER_SOURCE_GENERATED_EXIT: Final[str] = "GENERATED_EXIT"

_ZERO = Decimal("0")
_ONE = Decimal("1")

logger = logging.getLogger(__name__)


def ledger_reconcile(
    transactions: Sequence[Transaction],
    splits: Sequence[SplitEvent],
    mergers: Sequence[MergerEvent],
    exits: Sequence[ForcedExitEvent],
) -> list[LedgerItem]:
    """Build the unified ledger from trades and corporate-action events.

    The timeline is replayed once while a transient holdings map tracks the
    running quantity per ticker. Corporate actions only produce virtual rows
    when they hit a positive position; otherwise they are skipped. Non-finite
    ratios, prices or quantities propagate as NaN or infinity: NaN comparisons
    are false and overflowing products become infinite.

    Args:
        transactions: Recorded BUY/SELL trades with normalized tickers.
        splits: Split events with normalized tickers.
        mergers: Merger events with raw tickers.
        exits: Forced-exit events with raw tickers.

    Returns:
        list[LedgerItem]: Real and virtual ledger rows in replay order.

    Raises:
        TypeError: Raised when event dates are not mutually comparable.
    """

    ledger: list[LedgerItem] = []
    holdings: dict[str, Decimal] = {}

    with domain_decimal_context():
        for event in ledger_build_timeline(transactions, splits, mergers, exits):
            if event.kind is TimelineEventKind.TX:
                _ledger_apply_transaction(event.payload, ledger, holdings)
            elif event.kind is TimelineEventKind.SPLIT:
                _ledger_apply_split(event.payload, ledger, holdings)
            elif event.kind is TimelineEventKind.MERGER:
                _ledger_apply_merger(event.payload, ledger, holdings)
            elif event.kind is TimelineEventKind.EXIT:
                _ledger_apply_forced_exit(event.payload, ledger, holdings)

    logger.debug(
        "reconciled ledger rows=%s virtual_rows=%s tickers=%s",
        len(ledger),
        sum(1 for item in ledger if item.is_virtual),
        len(holdings),
    )
    return ledger


def _ledger_apply_transaction(
    transaction: Transaction,
    ledger: list[LedgerItem],
    holdings: dict[str, Decimal],
) -> None:
    ledger.append(LedgerItem.from_transaction(transaction))

    quantity_change = _ZERO
    if transaction.type == TransactionType.BUY:
        quantity_change = transaction.quantity
    elif transaction.type == TransactionType.SELL:
        quantity_change = -transaction.quantity
    # Other types never come from raw files; holdings stay untouched.

    holdings[transaction.ticker] = holdings.get(transaction.ticker, _ZERO) + quantity_change


def _ledger_apply_split(
    split: SplitEvent,
    ledger: list[LedgerItem],
    holdings: dict[str, Decimal],
) -> None:
    current_quantity = holdings.get(split.ticker, _ZERO)
    if current_quantity <= _ZERO:
        return

    new_quantity = current_quantity * split.ratio
    adjustment = new_quantity - current_quantity
    if adjustment == _ZERO:
        return

    ledger.append(
        LedgerItem(
            date=split.date,
            type=TransactionType.SPLIT if split.ratio > _ONE else TransactionType.REVERSE_SPLIT,
            ticker=split.ticker,
            quantity=abs(adjustment),
            unit_price=_ZERO,
            total_value=_ZERO,
            source_file=LEDGER_SOURCE_GENERATED_SPLIT,
            is_virtual=True,
        )
    )
    holdings[split.ticker] = new_quantity


def _ledger_apply_merger(
    merger: MergerEvent,
    ledger: list[LedgerItem],
    holdings: dict[str, Decimal],
) -> None:
    old_ticker = domain_normalize_ticker(merger.old_ticker)
    new_ticker = domain_normalize_ticker(merger.new_ticker)

    old_quantity = holdings.get(old_ticker, _ZERO)
    if old_quantity <= _ZERO:
        return

    new_quantity = old_quantity * merger.ratio

    ledger.append(
        LedgerItem(
            date=merger.date,
            type=TransactionType.MERGER_OUT,
            ticker=old_ticker,
            quantity=old_quantity,
            unit_price=_ZERO,
            total_value=_ZERO,
            source_file=LEDGER_SOURCE_GENERATED_MERGER,
            is_virtual=True,
        )
    )
    holdings[old_ticker] = _ZERO

    ledger.append(
        LedgerItem(
            date=merger.date,
            type=TransactionType.MERGER_IN,
            ticker=new_ticker,
            quantity=new_quantity,
            unit_price=_ZERO,
            total_value=_ZERO,
            source_file=LEDGER_SOURCE_GENERATED_MERGER,
            is_virtual=True,
        )
    )
    # Additive: one ticker may absorb several source tickers.
    holdings[new_ticker] = holdings.get(new_ticker, _ZERO) + new_quantity


def _ledger_apply_forced_exit(
    forced_exit: ForcedExitEvent,
    ledger: list[LedgerItem],
    holdings: dict[str, Decimal],
) -> None:
    ticker = domain_normalize_ticker(forced_exit.ticker)
    current_quantity = holdings.get(ticker, _ZERO)
    if current_quantity <= _ZERO:
        return

    ledger.append(
        LedgerItem(
            date=forced_exit.date,
            type=TransactionType.FORCED_SALE,
            ticker=ticker,
            quantity=current_quantity,
            unit_price=forced_exit.price,
            total_value=current_quantity * forced_exit.price,
            source_file=LEDGER_SOURCE_GENERATED_EXIT,
            is_virtual=True,
        )
    )
    holdings[ticker] = _ZERO


__all__ = [
    "LEDGER_SOURCE_GENERATED_SPLIT",
    "LEDGER_SOURCE_GENERATED_MERGER",
    "LEDGER_SOURCE_GENERATED_EXIT",
    "ledger_reconcile",
]
