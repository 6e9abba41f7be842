"""Adapter layer package for reconciliation input files and split sources."""

from .config_files import (
    adapter_parse_decimal,
    adapter_parse_iso_date,
    adapter_read_forced_exits,
    adapter_read_mergers,
    adapter_read_renames,
    adapter_read_splits,
)
from .errors import LedgerInputError, LedgerInputFileError, LedgerInputRowError
from .interfaces import SplitSourcePort
from .split_source import StaticFileSplitSource
from .transaction_files import (
    adapter_list_input_files,
    adapter_parse_localized_number,
    adapter_parse_movement_date,
    adapter_read_transactions_csv,
    adapter_read_transactions_excel,
    adapter_read_transactions_file,
)
from .yahoo_split_source import YahooFinanceSplitSource, adapter_split_events_from_series

__all__ = [
    "LedgerInputError",
    "LedgerInputFileError",
    "LedgerInputRowError",
    "SplitSourcePort",
    "StaticFileSplitSource",
    "YahooFinanceSplitSource",
    "adapter_split_events_from_series",
    "adapter_read_renames",
    "adapter_read_mergers",
    "adapter_read_forced_exits",
    "adapter_read_splits",
    "adapter_parse_iso_date",
    "adapter_parse_decimal",
    "adapter_list_input_files",
    "adapter_read_transactions_file",
    "adapter_read_transactions_csv",
    "adapter_read_transactions_excel",
    "adapter_parse_localized_number",
    "adapter_parse_movement_date",
]
