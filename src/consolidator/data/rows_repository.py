"""Readers that turn uploaded shipment files into row dictionaries."""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Iterable

from openpyxl import load_workbook

SHIPMENT_COLUMN = "Shipment"
CONSIGNMENT_COLUMN = "Consignment"
AMBIENT_COLUMN = "Completed Totes - Ambient"
CHILLED_COLUMN = "Completed Totes - Chilled"
FREEZER_COLUMN = "Completed Totes - Freezer"

SUPPORTED_SUFFIXES = {".csv", ".xlsx"}

Row = dict[str, str]


def _cell_to_str(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _read_csv(content: bytes) -> list[Row]:
    text = content.decode("utf-8-sig")
    reader = csv.DictReader(io.StringIO(text))
    if not reader.fieldnames:
        raise ValueError("Shipment file is missing a header row.")
    rows: list[Row] = []
    for row in reader:
        if not any((value or "").strip() for value in row.values() if isinstance(value, str)):
            continue  # skip empty lines
        rows.append({key: (value or "") for key, value in row.items() if key is not None})
    return rows


def _read_xlsx(content: bytes) -> list[Row]:
    workbook = load_workbook(filename=io.BytesIO(content), read_only=True, data_only=True)
    sheet = workbook.active
    values = sheet.iter_rows(min_row=1, values_only=True)
    header = next(values, None)
    if header is None:
        raise ValueError("Shipment workbook is empty.")

    columns = [_cell_to_str(cell).strip() for cell in header]
    rows: list[Row] = []
    for record in values:
        if record is None or all(cell is None for cell in record):
            continue
        rows.append(
            {
                name: _cell_to_str(record[idx]) if idx < len(record) else ""
                for idx, name in enumerate(columns)
                if name
            }
        )
    return rows


def read_rows(content: bytes, suffix: str) -> list[Row]:
    """Decode a CSV or Excel payload into string-valued rows keyed by header."""
    normalized = suffix.lower()
    if normalized not in SUPPORTED_SUFFIXES:
        raise ValueError(f"Unsupported file type '{suffix}'. Only .csv and .xlsx files are supported.")
    rows = _read_csv(content) if normalized == ".csv" else _read_xlsx(content)
    logging.info(f"Read {len(rows)} rows from {normalized} payload")
    return rows


def load_rows(source: Path) -> list[Row]:
    """Read rows from a CSV or Excel file on disk."""
    if not source.exists():
        raise FileNotFoundError(f"Shipment file not found: {source}")
    return read_rows(source.read_bytes(), source.suffix)


def filter_consignment_rows(rows: Iterable[Row]) -> list[Row]:
    """Drop rows without a consignment code; the planner never sees them."""
    return [row for row in rows if str(row.get(CONSIGNMENT_COLUMN) or "").strip()]
