"""Operator-supplied corporate-action configuration file readers.

Missing configuration files are treated as empty configuration. Present but
malformed files raise typed input errors so the job layer can record them.
"""

from __future__ import annotations

import csv
import json
import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from portfolio_ledger.domain import ForcedExitEvent, MergerEvent, SplitEvent, domain_normalize_ticker, domain_split_ratio

from .errors import LedgerInputFileError, LedgerInputRowError

logger = logging.getLogger(__name__)


def adapter_read_renames(path: str | Path) -> dict[str, str]:
    """Read the base-symbol rename map.

    Args:
        path: JSON file holding an object of `OLD: NEW` base symbols.

    Returns:
        dict[str, str]: Uppercase base symbol to replacement symbol mapping.

    Raises:
        LedgerInputFileError: Raised when the file is not a JSON object of strings.
    """

    payload = _adapter_load_json(path)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise LedgerInputFileError("renames config must be a JSON object", source_path=str(path))

    renames: dict[str, str] = {}
    for old_symbol, new_symbol in payload.items():
        if not isinstance(new_symbol, str) or not new_symbol.strip():
            raise LedgerInputFileError(
                f"renames config value for {old_symbol} must be a non-empty string",
                source_path=str(path),
            )
        renames[str(old_symbol).strip().upper()] = new_symbol.strip().upper()
    return renames


def adapter_read_mergers(path: str | Path) -> list[MergerEvent]:
    """Read configured merger and ticker-conversion events.

    Each entry carries `date`, `oldTicker`, `newTicker` and `ratio`. Snake-case
    keys are accepted as well. Tickers are kept raw; the engine normalizes them.

    Args:
        path: JSON file holding a list of merger objects.

    Returns:
        list[MergerEvent]: Merger events in file order.

    Raises:
        LedgerInputFileError: Raised when the file is not a JSON list.
        LedgerInputRowError: Raised when one entry is malformed.
    """

    payload = _adapter_load_json(path)
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise LedgerInputFileError("mergers config must be a JSON list", source_path=str(path))

    mergers: list[MergerEvent] = []
    for row_number, entry in enumerate(payload, start=1):
        if not isinstance(entry, dict):
            raise LedgerInputRowError("merger entry must be an object", source_path=str(path), row_number=row_number)
        mergers.append(
            MergerEvent(
                date=adapter_parse_iso_date(_adapter_require(entry, ("date",), path, row_number), path, row_number),
                old_ticker=str(_adapter_require(entry, ("oldTicker", "old_ticker"), path, row_number)),
                new_ticker=str(_adapter_require(entry, ("newTicker", "new_ticker"), path, row_number)),
                ratio=adapter_parse_decimal(_adapter_require(entry, ("ratio",), path, row_number), path, row_number),
            )
        )
    return mergers


def adapter_read_forced_exits(path: str | Path) -> list[ForcedExitEvent]:
    """Read configured forced-exit events from CSV.

    Args:
        path: CSV file with `Date`, `Ticker` and `Price` headers.

    Returns:
        list[ForcedExitEvent]: Forced-exit events with normalized tickers.

    Raises:
        LedgerInputFileError: Raised when the file cannot be read or lacks headers.
        LedgerInputRowError: Raised when one row is malformed.
    """

    source_path = Path(path)
    if not source_path.exists():
        return []

    try:
        with source_path.open("r", encoding="utf-8", newline="") as handle:
            rows = list(csv.DictReader(handle, skipinitialspace=True))
    except (OSError, UnicodeDecodeError, csv.Error) as error:
        raise LedgerInputFileError(f"failed to read forced exits: {error}", source_path=str(path)) from error

    exits: list[ForcedExitEvent] = []
    for row_number, row in enumerate(rows, start=1):
        normalized_row = {str(key).strip(): (value or "").strip() for key, value in row.items() if key is not None}
        if not any(normalized_row.values()):
            continue
        exits.append(
            ForcedExitEvent(
                date=adapter_parse_iso_date(_adapter_require(normalized_row, ("Date",), path, row_number), path, row_number),
                ticker=domain_normalize_ticker(str(_adapter_require(normalized_row, ("Ticker",), path, row_number))),
                price=adapter_parse_decimal(_adapter_require(normalized_row, ("Price",), path, row_number), path, row_number),
            )
        )
    return exits


def adapter_read_splits(path: str | Path) -> list[SplitEvent]:
    """Read historical split events exported from a quote service.

    Args:
        path: JSON file holding a list of `{date, ticker, numerator, denominator}`.

    Returns:
        list[SplitEvent]: Split events with normalized tickers and computed ratio.

    Raises:
        LedgerInputFileError: Raised when the file is not a JSON list.
        LedgerInputRowError: Raised when one entry is malformed.
    """

    payload = _adapter_load_json(path)
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise LedgerInputFileError("splits file must be a JSON list", source_path=str(path))

    splits: list[SplitEvent] = []
    for row_number, entry in enumerate(payload, start=1):
        if not isinstance(entry, dict):
            raise LedgerInputRowError("split entry must be an object", source_path=str(path), row_number=row_number)
        numerator = adapter_parse_decimal(_adapter_require(entry, ("numerator",), path, row_number), path, row_number)
        denominator = adapter_parse_decimal(_adapter_require(entry, ("denominator",), path, row_number), path, row_number)
        if denominator == Decimal("0"):
            raise LedgerInputRowError("split denominator must not be zero", source_path=str(path), row_number=row_number)
        splits.append(
            SplitEvent(
                date=adapter_parse_iso_date(_adapter_require(entry, ("date",), path, row_number), path, row_number),
                ticker=domain_normalize_ticker(str(_adapter_require(entry, ("ticker",), path, row_number))),
                numerator=numerator,
                denominator=denominator,
                ratio=domain_split_ratio(numerator, denominator),
            )
        )
    return splits


def adapter_parse_iso_date(value: Any, path: str | Path | None = None, row_number: int | None = None) -> date:
    """Parse an ISO date or timestamp into a calendar date.

    Args:
        value: ISO `YYYY-MM-DD` date or ISO-8601 timestamp.
        path: Optional source path for error context.
        row_number: Optional row number for error context.

    Returns:
        date: Parsed calendar date.

    Raises:
        LedgerInputRowError: Raised when the value is not a supported ISO value.
    """

    text_value = str(value).strip()
    try:
        return date.fromisoformat(text_value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text_value).date()
    except ValueError as error:
        raise LedgerInputRowError(
            f"invalid ISO date={text_value}",
            source_path=None if path is None else str(path),
            row_number=row_number,
        ) from error


def adapter_parse_decimal(value: Any, path: str | Path | None = None, row_number: int | None = None) -> Decimal:
    """Parse a finite decimal value from JSON or CSV text.

    Args:
        value: Numeric JSON value or numeric text.
        path: Optional source path for error context.
        row_number: Optional row number for error context.

    Returns:
        Decimal: Parsed finite value.

    Raises:
        LedgerInputRowError: Raised when the value is not a finite number.
    """

    if isinstance(value, bool):
        raise LedgerInputRowError(
            f"invalid numeric value={value}",
            source_path=None if path is None else str(path),
            row_number=row_number,
        )
    try:
        parsed_value = Decimal(str(value).strip())
    except InvalidOperation as error:
        raise LedgerInputRowError(
            f"invalid numeric value={value}",
            source_path=None if path is None else str(path),
            row_number=row_number,
        ) from error
    if not parsed_value.is_finite():
        raise LedgerInputRowError(
            f"numeric value must be finite, got {value}",
            source_path=None if path is None else str(path),
            row_number=row_number,
        )
    return parsed_value


def _adapter_load_json(path: str | Path) -> Any:
    source_path = Path(path)
    if not source_path.exists():
        logger.debug("config file %s not found, using empty configuration", source_path)
        return None
    try:
        return json.loads(source_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as error:
        raise LedgerInputFileError(f"failed to read JSON config: {error}", source_path=str(path)) from error


def _adapter_require(entry: dict[str, Any], keys: tuple[str, ...], path: str | Path, row_number: int) -> Any:
    for key in keys:
        value = entry.get(key)
        if value is not None and value != "":
            return value
    raise LedgerInputRowError(
        f"missing required field {keys[0]}",
        source_path=str(path),
        row_number=row_number,
    )


__all__ = [
    "adapter_read_renames",
    "adapter_read_mergers",
    "adapter_read_forced_exits",
    "adapter_read_splits",
    "adapter_parse_iso_date",
    "adapter_parse_decimal",
]
