"""B3 movement-file readers producing raw transaction records.

This module centralizes pt-BR number, date and movement-type parsing so CSV and
spreadsheet inputs map into the same `Transaction` contract.
"""

from __future__ import annotations

import csv
import logging
import numbers
import re
import zipfile
from collections.abc import Mapping
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import pandas as pd

from portfolio_ledger.domain import Transaction, TransactionType, domain_apply_ticker_rename

from .errors import LedgerInputFileError, LedgerInputRowError

logger = logging.getLogger(__name__)

_ADAPTER_COLUMN_DATE = "Data"
_ADAPTER_COLUMN_TYPE = "Tipo de Movimentação"
_ADAPTER_COLUMN_TICKER = "Ativo"
_ADAPTER_COLUMN_QUANTITY = "Quantidade"
_ADAPTER_COLUMN_VALUE = "Valor"
_ADAPTER_COLUMN_PRICE = "Preço"

_ADAPTER_REQUIRED_COLUMNS = (
    _ADAPTER_COLUMN_DATE,
    _ADAPTER_COLUMN_TYPE,
    _ADAPTER_COLUMN_TICKER,
    _ADAPTER_COLUMN_QUANTITY,
    _ADAPTER_COLUMN_VALUE,
)

_ADAPTER_BUY_PATTERN = re.compile(r"compra", re.IGNORECASE)
_ADAPTER_SELL_PATTERN = re.compile(r"venda", re.IGNORECASE)
_ADAPTER_EMPTY_NUMBER_SENTINELS = frozenset({"", "-", "--"})
_ADAPTER_EXCLUDED_FILE_PREFIX = "forced_exits"
_ADAPTER_LOCK_FILE_PREFIX = "~$"
_ADAPTER_CSV_SUFFIX = ".csv"
_ADAPTER_SPREADSHEET_SUFFIXES = frozenset({".xlsx", ".xls"})
# Spreadsheet serial day 0; valid for every serial after February 1900.
_ADAPTER_SPREADSHEET_EPOCH = date(1899, 12, 30)


def adapter_list_input_files(inputs_dir: str | Path) -> list[Path]:
    """List broker movement files in the inputs directory.

    Args:
        inputs_dir: Directory holding movement files.

    Returns:
        list[Path]: CSV and spreadsheet files sorted by file name; empty when the
        directory is missing.

    Raises:
        LedgerInputFileError: Raised when the directory cannot be listed.
    """

    directory = Path(inputs_dir)
    if not directory.exists():
        logger.warning("inputs directory %s does not exist", directory)
        return []

    try:
        candidates = sorted(directory.iterdir(), key=lambda candidate: candidate.name)
    except OSError as error:
        raise LedgerInputFileError(f"failed to list inputs directory: {error}", source_path=str(directory)) from error

    input_files: list[Path] = []
    for candidate in candidates:
        if not candidate.is_file():
            continue
        if candidate.name.startswith((_ADAPTER_EXCLUDED_FILE_PREFIX, _ADAPTER_LOCK_FILE_PREFIX)):
            continue
        suffix = candidate.suffix.lower()
        if suffix == _ADAPTER_CSV_SUFFIX or suffix in _ADAPTER_SPREADSHEET_SUFFIXES:
            input_files.append(candidate)
    return input_files


def adapter_read_transactions_file(path: str | Path, renames: Mapping[str, str] | None = None) -> list[Transaction]:
    """Read one movement file, dispatching on its extension.

    Args:
        path: `.csv`, `.xlsx` or `.xls` movement file path.
        renames: Optional base-symbol rename mapping.

    Returns:
        list[Transaction]: BUY/SELL transactions in file order; empty for other extensions.

    Raises:
        LedgerInputFileError: Raised when the file cannot be read or lacks columns.
        LedgerInputRowError: Raised when one row has an invalid date or number.
    """

    suffix = Path(path).suffix.lower()
    if suffix == _ADAPTER_CSV_SUFFIX:
        return adapter_read_transactions_csv(path, renames=renames)
    if suffix in _ADAPTER_SPREADSHEET_SUFFIXES:
        return adapter_read_transactions_excel(path, renames=renames)
    logger.warning("skipping %s: unsupported movement file extension", path)
    return []


def adapter_read_transactions_csv(path: str | Path, renames: Mapping[str, str] | None = None) -> list[Transaction]:
    """Read one B3 movement CSV file into transactions.

    Args:
        path: CSV file path, comma or semicolon delimited.
        renames: Optional base-symbol rename mapping.

    Returns:
        list[Transaction]: BUY/SELL transactions in file order.

    Raises:
        LedgerInputFileError: Raised when the file cannot be read or lacks columns.
        LedgerInputRowError: Raised when one row has an invalid date or number.
    """

    source_path = Path(path)
    try:
        content = source_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as error:
        raise LedgerInputFileError(f"failed to read movement file: {error}", source_path=str(source_path)) from error

    lines = content.splitlines()
    if not lines:
        return []

    delimiter = ";" if lines[0].count(";") > lines[0].count(",") else ","
    try:
        reader = csv.DictReader(lines, delimiter=delimiter)
        header = [column.strip() for column in (reader.fieldnames or [])]
        rows = list(reader)
    except csv.Error as error:
        raise LedgerInputFileError(f"malformed CSV: {error}", source_path=str(source_path)) from error

    _adapter_require_columns(header, source_path)

    normalized_rows = [
        {str(key).strip(): (value or "").strip() for key, value in row.items() if key is not None} for row in rows
    ]
    return _adapter_map_rows(normalized_rows, source_path, renames or {})


def adapter_read_transactions_excel(path: str | Path, renames: Mapping[str, str] | None = None) -> list[Transaction]:
    """Read the first sheet of one B3 movement spreadsheet into transactions.

    Cells keep their native types: numeric cells are used as-is, date cells as
    calendar dates, and numeric `Data` cells as spreadsheet serial days.

    Args:
        path: `.xlsx` or `.xls` file path.
        renames: Optional base-symbol rename mapping.

    Returns:
        list[Transaction]: BUY/SELL transactions in sheet order.

    Raises:
        LedgerInputFileError: Raised when the workbook cannot be read or lacks columns.
        LedgerInputRowError: Raised when one row has an invalid date or number.
    """

    source_path = Path(path)
    try:
        frame = pd.read_excel(source_path, sheet_name=0, dtype=object)
    except (OSError, ValueError, zipfile.BadZipFile) as error:
        raise LedgerInputFileError(f"failed to read movement spreadsheet: {error}", source_path=str(source_path)) from error

    header = [str(column).strip() for column in frame.columns]
    if not header:
        logger.warning("empty movement spreadsheet %s", source_path.name)
        return []
    _adapter_require_columns(header, source_path)

    normalized_rows = [
        {str(key).strip(): _adapter_normalize_cell(value) for key, value in record.items()}
        for record in frame.to_dict(orient="records")
    ]
    return _adapter_map_rows(normalized_rows, source_path, renames or {})


def adapter_parse_localized_number(value: Any) -> Decimal:
    """Parse a pt-BR or US formatted number.

    The right-most of `,` and `.` is treated as the decimal separator; the other
    one is a thousands separator. A lone comma is always decimal. Native numeric
    cell values are converted directly.

    Args:
        value: Number text, optionally prefixed with `R$`, or a numeric cell value.

    Returns:
        Decimal: Parsed value; blank and dash placeholders parse as zero.

    Raises:
        ValueError: Raised when the value is not numeric.
    """

    if isinstance(value, bool):
        raise ValueError(f"invalid number={value}")
    if isinstance(value, (numbers.Real, Decimal)):
        text_value = str(value)
    else:
        text_value = str(value).strip().replace("R$", "").replace(" ", "").replace("\u00a0", "")
        if text_value in _ADAPTER_EMPTY_NUMBER_SENTINELS:
            return Decimal("0")

        last_dot = text_value.rfind(".")
        last_comma = text_value.rfind(",")
        if last_comma > last_dot:
            text_value = text_value.replace(".", "").replace(",", ".")
        elif last_dot > last_comma:
            text_value = text_value.replace(",", "")

    try:
        parsed_value = Decimal(text_value)
    except InvalidOperation as error:
        raise ValueError(f"invalid number={value}") from error
    if not parsed_value.is_finite():
        raise ValueError(f"invalid number={value}")
    return parsed_value


def adapter_parse_movement_date(value: Any) -> date:
    """Parse a movement date cell.

    Accepts date and datetime values, spreadsheet serial day numbers, pt-BR
    `DD/MM/YYYY` text and ISO `YYYY-MM-DD` text.

    Raises:
        ValueError: Raised when the value matches no supported form.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        try:
            return _ADAPTER_SPREADSHEET_EPOCH + timedelta(days=int(value))
        except (OverflowError, ValueError) as error:
            raise ValueError(f"invalid movement date serial={value}") from error

    text_value = str(value).strip()
    for supported_format in ("%d/%m/%Y", "%Y-%m-%d"):
        try:
            return datetime.strptime(text_value, supported_format).date()
        except ValueError:
            continue
    raise ValueError(f"invalid movement date={value}")


def _adapter_require_columns(header: list[str], source_path: Path) -> None:
    missing_columns = [column for column in _ADAPTER_REQUIRED_COLUMNS if column not in header]
    if missing_columns:
        raise LedgerInputFileError(
            f"movement file missing columns: {', '.join(missing_columns)}",
            source_path=str(source_path),
        )


def _adapter_normalize_cell(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    if value is None or pd.isna(value):
        return ""
    return value


def _adapter_map_rows(
    rows: list[dict[str, Any]],
    source_path: Path,
    renames: Mapping[str, str],
) -> list[Transaction]:
    transactions: list[Transaction] = []
    for row_number, row in enumerate(rows, start=1):
        if not any(value != "" for value in row.values()):
            continue
        transactions.append(
            _adapter_map_row_to_transaction(row=row, source_path=source_path, renames=renames, row_number=row_number)
        )
    return transactions


def _adapter_map_row_to_transaction(
    row: Mapping[str, Any],
    source_path: Path,
    renames: Mapping[str, str],
    row_number: int,
) -> Transaction:
    file_name = source_path.name
    try:
        trade_date = adapter_parse_movement_date(row[_ADAPTER_COLUMN_DATE])
        quantity = adapter_parse_localized_number(row[_ADAPTER_COLUMN_QUANTITY])
        total_value = adapter_parse_localized_number(row[_ADAPTER_COLUMN_VALUE])
        unit_price = adapter_parse_localized_number(row.get(_ADAPTER_COLUMN_PRICE, ""))
    except ValueError as error:
        raise LedgerInputRowError(str(error), source_path=str(source_path), row_number=row_number) from error

    raw_type = str(row[_ADAPTER_COLUMN_TYPE])
    if _ADAPTER_BUY_PATTERN.search(raw_type):
        transaction_type = TransactionType.BUY
    elif _ADAPTER_SELL_PATTERN.search(raw_type):
        transaction_type = TransactionType.SELL
    else:
        transaction_type = TransactionType.BUY
        logger.warning("unknown movement type '%s' in %s row %s, defaulting to BUY", raw_type, file_name, row_number)

    return Transaction(
        date=trade_date,
        type=transaction_type,
        ticker=domain_apply_ticker_rename(str(row[_ADAPTER_COLUMN_TICKER]), renames),
        quantity=quantity,
        unit_price=unit_price,
        total_value=total_value,
        source_file=file_name,
    )


__all__ = [
    "adapter_list_input_files",
    "adapter_read_transactions_file",
    "adapter_read_transactions_csv",
    "adapter_read_transactions_excel",
    "adapter_parse_localized_number",
    "adapter_parse_movement_date",
]
