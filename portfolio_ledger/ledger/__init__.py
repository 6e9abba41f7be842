"""Ledger layer package for timeline replay and holdings compilation."""

from .holdings import (
    ledger_active_positions,
    ledger_holdings_trajectory,
    ledger_quantity_delta,
    ledger_replay_holdings,
)
from .reconciliation_engine import (
    LEDGER_SOURCE_GENERATED_EXIT,
    LEDGER_SOURCE_GENERATED_MERGER,
    LEDGER_SOURCE_GENERATED_SPLIT,
    ledger_reconcile,
)
from .timeline import LEDGER_TIMELINE_KIND_PRIORITY, TimelineEvent, TimelineEventKind, ledger_build_timeline

__all__ = [
	"LEDGER_SOURCE_GENERATED_SPLIT",
	"LEDGER_SOURCE_GENERATED_MERGER",
	"LEDGER_SOURCE_GENERATED_EXIT",
	"LEDGER_TIMELINE_KIND_PRIORITY",
	"TimelineEvent",
	"TimelineEventKind",
	"ledger_build_timeline",
	"ledger_reconcile",
	"ledger_quantity_delta",
	"ledger_holdings_trajectory",
	"ledger_replay_holdings",
	"ledger_active_positions",
]
