"""Regression tests for corporate-action configuration file readers."""

from __future__ import annotations

import json
from datetime import date
from decimal import Decimal

import pytest

from portfolio_ledger.adapters import (
    LedgerInputFileError,
    LedgerInputRowError,
    StaticFileSplitSource,
    adapter_read_forced_exits,
    adapter_read_mergers,
    adapter_read_renames,
    adapter_read_splits,
)
from portfolio_ledger.domain import ForcedExitEvent, MergerEvent


def test_adapters_missing_config_files_yield_empty_configuration(tmp_path) -> None:
    """Treat absent configuration files as empty configuration.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate empty defaults.

    Raises:
        AssertionError: Raised when missing files raise or return data.
    """

    assert adapter_read_renames(tmp_path / "renames.json") == {}
    assert adapter_read_mergers(tmp_path / "mergers.json") == []
    assert adapter_read_forced_exits(tmp_path / "forced_exits.csv") == []
    assert adapter_read_splits(tmp_path / "splits.json") == []


def test_adapters_read_mergers_parses_camel_and_snake_case_entries(tmp_path) -> None:
    """Parse merger entries in file order with raw tickers kept intact.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate merger parsing.

    Raises:
        AssertionError: Raised when merger entries are parsed incorrectly.
    """

    mergers_path = tmp_path / "config_mergers.json"
    mergers_path.write_text(
        json.dumps(
            [
                {"date": "2023-08-30", "oldTicker": "VIIA3", "newTicker": "BHIA3", "ratio": 0.1},
                {"date": "2021-02-01T00:00:00", "old_ticker": "bidi11", "new_ticker": "INBR32", "ratio": "0.333"},
            ]
        ),
        encoding="utf-8",
    )

    assert adapter_read_mergers(mergers_path) == [
        MergerEvent(date=date(2023, 8, 30), old_ticker="VIIA3", new_ticker="BHIA3", ratio=Decimal("0.1")),
        MergerEvent(date=date(2021, 2, 1), old_ticker="bidi11", new_ticker="INBR32", ratio=Decimal("0.333")),
    ]


def test_adapters_read_mergers_rejects_entry_without_ratio(tmp_path) -> None:
    """Raise a row error with row context when a required field is missing."""

    mergers_path = tmp_path / "config_mergers.json"
    mergers_path.write_text(json.dumps([{"date": "2023-08-30", "oldTicker": "A", "newTicker": "B"}]), encoding="utf-8")

    with pytest.raises(LedgerInputRowError) as error_info:
        adapter_read_mergers(mergers_path)

    assert error_info.value.row_number == 1
    assert error_info.value.source_path == str(mergers_path)


def test_adapters_read_renames_rejects_non_object_payload(tmp_path) -> None:
    """Raise a file error when the renames file is not a JSON object."""

    renames_path = tmp_path / "config_renames.json"
    renames_path.write_text("[]", encoding="utf-8")

    with pytest.raises(LedgerInputFileError):
        adapter_read_renames(renames_path)


def test_adapters_read_renames_uppercases_symbols(tmp_path) -> None:
    """Normalize rename keys and values to uppercase base symbols."""

    renames_path = tmp_path / "config_renames.json"
    renames_path.write_text(json.dumps({"vvar3": " viia3 "}), encoding="utf-8")

    assert adapter_read_renames(renames_path) == {"VVAR3": "VIIA3"}


def test_adapters_read_forced_exits_normalizes_tickers(tmp_path) -> None:
    """Parse forced-exit CSV rows and normalize their tickers.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate forced-exit parsing.

    Raises:
        AssertionError: Raised when forced exits are parsed incorrectly.
    """

    exits_path = tmp_path / "forced_exits.csv"
    exits_path.write_text("Date, Ticker, Price\n2022-11-04, oibr3, 0.21\n\n", encoding="utf-8")

    assert adapter_read_forced_exits(exits_path) == [
        ForcedExitEvent(date=date(2022, 11, 4), ticker="OIBR3.SA", price=Decimal("0.21")),
    ]


def test_adapters_read_splits_computes_ratio_and_rejects_zero_denominator(tmp_path) -> None:
    """Compute split ratio from numerator and denominator.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate split parsing and validation.

    Raises:
        AssertionError: Raised when ratio or validation deviates.
    """

    splits_path = tmp_path / "splits.json"
    splits_path.write_text(
        json.dumps([{"date": "2022-04-14", "ticker": "petr4", "numerator": 2, "denominator": 1}]),
        encoding="utf-8",
    )

    [split] = adapter_read_splits(splits_path)
    assert split.ticker == "PETR4.SA"
    assert split.ratio == Decimal("2")

    splits_path.write_text(
        json.dumps([{"date": "2022-04-14", "ticker": "petr4", "numerator": 2, "denominator": 0}]),
        encoding="utf-8",
    )
    with pytest.raises(LedgerInputRowError):
        adapter_read_splits(splits_path)


def test_adapters_static_split_source_filters_by_ticker_and_start_date(tmp_path) -> None:
    """Return only splits for requested tickers on or after the start date.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate split filtering.

    Raises:
        AssertionError: Raised when unrelated or older splits are returned.
    """

    splits_path = tmp_path / "splits.json"
    splits_path.write_text(
        json.dumps(
            [
                {"date": "2019-05-02", "ticker": "PETR4", "numerator": 2, "denominator": 1},
                {"date": "2022-04-14", "ticker": "PETR4.SA", "numerator": 2, "denominator": 1},
                {"date": "2022-04-14", "ticker": "VALE3", "numerator": 1, "denominator": 10},
            ]
        ),
        encoding="utf-8",
    )
    split_source = StaticFileSplitSource(splits_path=splits_path)

    splits = split_source.adapter_fetch_splits(["PETR4.SA"], date(2020, 1, 1))

    assert [(split.ticker, split.date) for split in splits] == [("PETR4.SA", date(2022, 4, 14))]
    assert split_source.adapter_fetch_splits([], date(2020, 1, 1)) == []
    assert split_source.adapter_source_name().startswith("file:")
