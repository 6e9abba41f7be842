"""Typed domain models shared across runtime layers.

This module provides the immutable record contracts consumed by the ledger
reconciliation engine and produced by the input adapters.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date
from decimal import Decimal
from enum import Enum


class TransactionType(str, Enum):
    """Ledger row action types.

    Raw input files only ever produce `BUY` and `SELL`. The remaining values are
    reserved for virtual rows synthesized from corporate actions.
    """

    BUY = "BUY"
    SELL = "SELL"
    SPLIT = "SPLIT"
    REVERSE_SPLIT = "REVERSE_SPLIT"
    MERGER_OUT = "MERGER_OUT"
    MERGER_IN = "MERGER_IN"
    FORCED_SALE = "FORCED_SALE"


@dataclass(frozen=True)
class AppMetadata:
    """Static application metadata for runtime identification.

    Attributes:
        application_name: Human-readable app name.
        environment_name: Runtime environment label.
    """

    application_name: str
    environment_name: str


@dataclass(frozen=True)
class Transaction:
    """One recorded trade read from a broker movement file.

    Attributes:
        date: Trade calendar date.
        type: Trade action type.
        ticker: Normalized asset symbol.
        quantity: Non-negative traded quantity.
        unit_price: Unit price as read from the source file.
        total_value: Total traded value as read from the source file.
        source_file: Provenance label, usually the input file name.
        transaction_id: Optional upstream row identifier.
    """

    date: date
    type: TransactionType
    ticker: str
    quantity: Decimal
    unit_price: Decimal
    total_value: Decimal
    source_file: str | None = None
    transaction_id: str | None = None


@dataclass(frozen=True)
class LedgerItem(Transaction):
    """One output ledger row, either a real trade or a synthesized adjustment.

    Attributes:
        is_virtual: Whether the row was generated from a corporate action.
    """

    is_virtual: bool = False

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> "LedgerItem":
        """Wrap one real transaction as a non-virtual ledger row.

        Args:
            transaction: Source transaction record.

        Returns:
            LedgerItem: Ledger row carrying the same field values.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        values = {field.name: getattr(transaction, field.name) for field in fields(Transaction)}
        return cls(**values, is_virtual=False)


@dataclass(frozen=True)
class SplitEvent:
    """Stock split or reverse split discovered for one ticker.

    Attributes:
        date: Effective split date.
        ticker: Normalized asset symbol.
        numerator: Split numerator.
        denominator: Split denominator.
        ratio: `numerator / denominator`; above one is a forward split.
    """

    date: date
    ticker: str
    numerator: Decimal
    denominator: Decimal
    ratio: Decimal


@dataclass(frozen=True)
class MergerEvent:
    """Ticker conversion or corporate merger supplied by operator configuration.

    Attributes:
        date: Effective conversion date.
        old_ticker: Source symbol, not yet normalized.
        new_ticker: Target symbol, not yet normalized.
        ratio: Shares of the new ticker received per share of the old ticker.
    """

    date: date
    old_ticker: str
    new_ticker: str
    ratio: Decimal


@dataclass(frozen=True)
class ForcedExitEvent:
    """Involuntary full liquidation such as a delisting.

    Attributes:
        date: Effective liquidation date.
        ticker: Asset symbol, not yet normalized.
        price: Settlement price used to value the forced sale.
    """

    date: date
    ticker: str
    price: Decimal


@dataclass(frozen=True)
class PositionSummary:
    """Open position compiled from a reconciled ledger.

    Attributes:
        ticker: Normalized asset symbol.
        quantity: Positive net quantity.
    """

    ticker: str
    quantity: Decimal
