"""Request contracts for ledger API endpoints."""

import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from portfolio_ledger.domain import (
    ForcedExitEvent,
    MergerEvent,
    SplitEvent,
    Transaction,
    TransactionType,
    domain_normalize_ticker,
    domain_split_ratio,
)


class TransactionPayload(BaseModel):
    """One raw BUY/SELL trade submitted for reconciliation."""

    date: datetime.date
    type: Literal["BUY", "SELL"]
    ticker: str = Field(min_length=1)
    quantity: Decimal = Field(ge=0)
    unit_price: Decimal = Decimal("0")
    total_value: Decimal = Decimal("0")
    source_file: str | None = None
    transaction_id: str | None = None

    def to_domain(self) -> Transaction:
        return Transaction(
            date=self.date,
            type=TransactionType(self.type),
            ticker=domain_normalize_ticker(self.ticker),
            quantity=self.quantity,
            unit_price=self.unit_price,
            total_value=self.total_value,
            source_file=self.source_file,
            transaction_id=self.transaction_id,
        )


class SplitPayload(BaseModel):
    """One split event; the ratio is derived from numerator and denominator."""

    date: datetime.date
    ticker: str = Field(min_length=1)
    numerator: Decimal = Field(gt=0)
    denominator: Decimal = Field(gt=0)

    def to_domain(self) -> SplitEvent:
        return SplitEvent(
            date=self.date,
            ticker=domain_normalize_ticker(self.ticker),
            numerator=self.numerator,
            denominator=self.denominator,
            ratio=domain_split_ratio(self.numerator, self.denominator),
        )


class MergerPayload(BaseModel):
    """One merger or ticker-conversion event with raw tickers."""

    date: datetime.date
    old_ticker: str = Field(min_length=1)
    new_ticker: str = Field(min_length=1)
    ratio: Decimal

    def to_domain(self) -> MergerEvent:
        return MergerEvent(date=self.date, old_ticker=self.old_ticker, new_ticker=self.new_ticker, ratio=self.ratio)


class ForcedExitPayload(BaseModel):
    """One forced liquidation event with a raw ticker."""

    date: datetime.date
    ticker: str = Field(min_length=1)
    price: Decimal

    def to_domain(self) -> ForcedExitEvent:
        return ForcedExitEvent(date=self.date, ticker=self.ticker, price=self.price)


class ReconcileRequest(BaseModel):
    """Full reconciliation input: trades plus corporate-action streams."""

    transactions: list[TransactionPayload] = Field(default_factory=list)
    splits: list[SplitPayload] = Field(default_factory=list)
    mergers: list[MergerPayload] = Field(default_factory=list)
    exits: list[ForcedExitPayload] = Field(default_factory=list)

    def total_event_count(self) -> int:
        return len(self.transactions) + len(self.splits) + len(self.mergers) + len(self.exits)


class NormalizeTickerRequest(BaseModel):
    """Raw symbol to normalize."""

    ticker: str

    @field_validator("ticker")
    @classmethod
    def _validate_ticker(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("ticker must not be blank")
        return value
