"""Regression tests for B3 movement-file parsing."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pandas as pd
import pytest

from portfolio_ledger.adapters import (
    LedgerInputFileError,
    LedgerInputRowError,
    adapter_list_input_files,
    adapter_parse_localized_number,
    adapter_parse_movement_date,
    adapter_read_transactions_csv,
    adapter_read_transactions_excel,
    adapter_read_transactions_file,
)
from portfolio_ledger.domain import TransactionType

_HEADER = "Data;Tipo de Movimentação;Ativo;Quantidade;Valor;Preço\n"


@pytest.mark.parametrize(
    ("raw_value", "expected"),
    [
        ("1.234,56", Decimal("1234.56")),
        ("1,234.56", Decimal("1234.56")),
        ("R$ 12,50", Decimal("12.50")),
        ("100", Decimal("100")),
        ("-", Decimal("0")),
        ("", Decimal("0")),
    ],
)
def test_adapters_parse_localized_number_supports_br_and_us_formats(raw_value: str, expected: Decimal) -> None:
    """Parse pt-BR and US separators plus empty placeholders.

    Args:
        raw_value: Raw number text.
        expected: Expected decimal value.

    Returns:
        None: Assertions validate number parsing.

    Raises:
        AssertionError: Raised when parsed value deviates.
    """

    assert adapter_parse_localized_number(raw_value) == expected


def test_adapters_read_transactions_csv_maps_movements_and_applies_renames(tmp_path) -> None:
    """Map Compra/Venda rows into BUY/SELL transactions with renamed tickers.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate row mapping.

    Raises:
        AssertionError: Raised when mapping deviates from expected contract.
    """

    movement_path = tmp_path / "movimentacao-2023.csv"
    movement_path.write_text(
        _HEADER
        + "15/03/2023;Compra;VVAR3F;10;R$ 35,00;R$ 3,50\n"
        + "20/03/2023;Venda;PETR4;1000;25.500,00;25,50\n",
        encoding="utf-8",
    )

    transactions = adapter_read_transactions_csv(movement_path, renames={"VVAR3": "VIIA3"})

    assert [(item.type, item.ticker, item.quantity) for item in transactions] == [
        (TransactionType.BUY, "VIIA3.SA", Decimal("10")),
        (TransactionType.SELL, "PETR4.SA", Decimal("1000")),
    ]
    assert transactions[0].date == date(2023, 3, 15)
    assert transactions[0].unit_price == Decimal("3.50")
    assert transactions[1].total_value == Decimal("25500.00")
    assert {item.source_file for item in transactions} == {"movimentacao-2023.csv"}


def test_adapters_read_transactions_csv_defaults_unknown_type_to_buy(tmp_path, caplog) -> None:
    """Default unrecognized movement types to BUY and log a warning.

    Args:
        tmp_path: Pytest temporary directory fixture.
        caplog: Pytest log capture fixture.

    Returns:
        None: Assertions validate defaulting and warning.

    Raises:
        AssertionError: Raised when unknown rows are dropped or not logged.
    """

    movement_path = tmp_path / "movimentacao.csv"
    movement_path.write_text(
        "Data,Tipo de Movimentação,Ativo,Quantidade,Valor\n01/02/2023,Bonificação,ITSA4,5,0\n",
        encoding="utf-8",
    )

    with caplog.at_level("WARNING"):
        [transaction] = adapter_read_transactions_csv(movement_path)

    assert transaction.type == TransactionType.BUY
    assert transaction.unit_price == Decimal("0")
    assert "Bonificação" in caplog.text


def test_adapters_read_transactions_csv_rejects_missing_columns(tmp_path) -> None:
    """Raise a file error when required columns are absent."""

    movement_path = tmp_path / "movimentacao.csv"
    movement_path.write_text("Data;Ativo\n01/02/2023;ITSA4\n", encoding="utf-8")

    with pytest.raises(LedgerInputFileError):
        adapter_read_transactions_csv(movement_path)


def test_adapters_read_transactions_csv_reports_row_number_for_bad_date(tmp_path) -> None:
    """Raise a row error carrying the data row number for invalid dates."""

    movement_path = tmp_path / "movimentacao.csv"
    movement_path.write_text(
        _HEADER + "01/02/2023;Compra;ITSA4;5;50;10\n31/31/2023;Compra;ITSA4;5;50;10\n",
        encoding="utf-8",
    )

    with pytest.raises(LedgerInputRowError) as error_info:
        adapter_read_transactions_csv(movement_path)

    assert error_info.value.row_number == 2
    assert error_info.value.source_path == str(movement_path)


def test_adapters_list_input_files_skips_forced_exits_and_lock_files(tmp_path) -> None:
    """List CSV and spreadsheet movement files sorted by name.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate input discovery.

    Raises:
        AssertionError: Raised when non-movement files are listed.
    """

    for file_name in ("b.csv", "a.CSV", "forced_exits.csv", "c.xlsx", "d.xls", "~$c.xlsx", "notes.txt"):
        (tmp_path / file_name).write_text("", encoding="utf-8")

    assert [path.name for path in adapter_list_input_files(tmp_path)] == ["a.CSV", "b.csv", "c.xlsx", "d.xls"]
    assert adapter_list_input_files(tmp_path / "missing") == []


@pytest.mark.parametrize(
    ("raw_value", "expected"),
    [
        (45292, date(2024, 1, 1)),
        (45292.75, date(2024, 1, 1)),
        (datetime(2024, 2, 1, 10, 30), date(2024, 2, 1)),
        (date(2024, 2, 2), date(2024, 2, 2)),
        ("15/01/2024", date(2024, 1, 15)),
        ("2024-01-16", date(2024, 1, 16)),
    ],
)
def test_adapters_parse_movement_date_supports_cells_serials_and_text(raw_value, expected: date) -> None:
    assert adapter_parse_movement_date(raw_value) == expected


def test_adapters_read_transactions_excel_maps_native_cells_and_applies_renames(tmp_path) -> None:
    """Map spreadsheet rows with serial, text and native date cells.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate spreadsheet row mapping.

    Raises:
        AssertionError: Raised when mapping deviates from the CSV contract.
    """

    movement_path = tmp_path / "movimentacao-2024.xlsx"
    pd.DataFrame(
        {
            "Data": [45293, "15/01/2024", datetime(2024, 2, 1)],
            "Tipo de Movimentação": ["Compra", "Compra", "Venda"],
            "Ativo": ["PETR4", "VVAR3F", "PETR4"],
            "Quantidade": [100, "1.234,5", 40],
            "Valor": [3050.5, "R$ 12.345,00", 1220],
            "Preço": [30.505, None, 30.5],
        }
    ).to_excel(movement_path, index=False)

    transactions = adapter_read_transactions_file(movement_path, renames={"VVAR3": "VIIA3"})

    assert [(item.date, item.type, item.ticker, item.quantity) for item in transactions] == [
        (date(2024, 1, 2), TransactionType.BUY, "PETR4.SA", Decimal("100")),
        (date(2024, 1, 15), TransactionType.BUY, "VIIA3.SA", Decimal("1234.5")),
        (date(2024, 2, 1), TransactionType.SELL, "PETR4.SA", Decimal("40")),
    ]
    assert transactions[0].total_value == Decimal("3050.5")
    assert transactions[0].unit_price == Decimal("30.505")
    assert transactions[1].total_value == Decimal("12345.00")
    assert transactions[1].unit_price == Decimal("0")
    assert {item.source_file for item in transactions} == {"movimentacao-2024.xlsx"}


def test_adapters_read_transactions_excel_rejects_missing_columns_and_corrupt_files(tmp_path) -> None:
    """Raise file errors carrying the full path for unusable workbooks."""

    partial_path = tmp_path / "partial.xlsx"
    pd.DataFrame({"Data": [45293], "Ativo": ["PETR4"]}).to_excel(partial_path, index=False)
    corrupt_path = tmp_path / "corrupt.xlsx"
    corrupt_path.write_text("not a workbook", encoding="utf-8")

    with pytest.raises(LedgerInputFileError) as partial_error:
        adapter_read_transactions_excel(partial_path)
    with pytest.raises(LedgerInputFileError) as corrupt_error:
        adapter_read_transactions_excel(corrupt_path)

    assert partial_error.value.source_path == str(partial_path)
    assert corrupt_error.value.source_path == str(corrupt_path)
