"""Workbook bytes -> raw header-keyed rows."""

import io
import logging
from typing import Any

from openpyxl import load_workbook

from .errors import ParseError
from .models import RawRow, is_blank

logger = logging.getLogger(__name__)

HEADER_ROW = 1


def read_workbook(data: bytes) -> list[RawRow]:
    """
    Parse the first sheet of a workbook into RawRows.

    Row 1 is the header. Data rows keep their source row number (the first
    data row is row 2) and fully blank rows are skipped.

    Raises:
        ParseError: the bytes are not a workbook or it has no sheets.
    """
    if not data:
        raise ParseError("Failed to parse Excel file: file is empty")

    try:
        wb = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    except Exception as e:
        raise ParseError(f"Failed to parse Excel file: {e}") from e

    try:
        if not wb.worksheets:
            raise ParseError("Failed to parse Excel file: workbook has no sheets")
        ws = wb.worksheets[0]
        rows = _sheet_rows(ws)
    finally:
        wb.close()

    logger.debug(f"Read {len(rows)} data rows from sheet '{ws.title}'")
    return rows


def _sheet_rows(ws) -> list[RawRow]:
    # Stored dimensions are unreliable in files from other spreadsheet tools
    ws.reset_dimensions()
    raw_rows = ws.iter_rows(min_row=HEADER_ROW, values_only=True)

    header_cells = next(raw_rows, None)
    if header_cells is None:
        return []

    columns = _header_columns(header_cells)

    rows = []
    for offset, cells in enumerate(raw_rows):
        row_number = HEADER_ROW + 1 + offset
        values = {}
        for index, header in columns:
            value = cells[index] if index < len(cells) else None
            values[header] = _clean_cell(value)

        if all(is_blank(v) for v in values.values()):
            continue

        rows.append(RawRow(row_number=row_number, values=values))

    return rows


def _header_columns(header_cells: tuple[Any, ...]) -> list[tuple[int, str]]:
    """Map column index to header label, keeping the first of any duplicates."""
    columns = []
    seen = set()
    for index, cell in enumerate(header_cells):
        if is_blank(cell):
            continue
        label = str(cell).strip()
        if label in seen:
            logger.warning(f"Duplicate header '{label}' in column {index + 1} ignored")
            continue
        seen.add(label)
        columns.append((index, label))
    return columns


def _clean_cell(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value
