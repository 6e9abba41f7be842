"""Domain models used across application layer boundaries."""

from .models import (
    AppMetadata,
    ForcedExitEvent,
    LedgerItem,
    MergerEvent,
    PositionSummary,
    SplitEvent,
    Transaction,
    TransactionType,
)
from .numbers import domain_decimal_context, domain_split_ratio
from .tickers import (
    DOMAIN_MARKET_SUFFIX,
    domain_apply_ticker_rename,
    domain_normalize_ticker,
    domain_strip_market_suffix,
)
from .timeline import (
    DOMAIN_STAGE_STATUS_COMPLETED,
    DOMAIN_STAGE_STATUS_FAILED,
    DOMAIN_STAGE_STATUS_STARTED,
    domain_build_stage_event,
)

__all__ = [
    "AppMetadata",
    "TransactionType",
    "Transaction",
    "LedgerItem",
    "SplitEvent",
    "MergerEvent",
    "ForcedExitEvent",
    "PositionSummary",
    "DOMAIN_MARKET_SUFFIX",
    "domain_normalize_ticker",
    "domain_strip_market_suffix",
    "domain_apply_ticker_rename",
    "DOMAIN_STAGE_STATUS_STARTED",
    "DOMAIN_STAGE_STATUS_COMPLETED",
    "DOMAIN_STAGE_STATUS_FAILED",
    "domain_build_stage_event",
    "domain_decimal_context",
    "domain_split_ratio",
]
