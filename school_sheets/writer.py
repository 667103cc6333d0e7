"""Records -> header-keyed rows -> workbook bytes."""

import io
import logging
from dataclasses import asdict
from datetime import date
from typing import Any

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from .models import ColumnType, DomainRecord, EntitySchema, EntityType

logger = logging.getLogger(__name__)

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

DEFAULT_WIDTHS = {"min": 10, "max": 40}


def record_to_row(schema: EntitySchema, record: DomainRecord) -> dict[str, Any]:
    """
    Map a record onto the schema's header labels (inverse of the reader).

    Lists are joined with ', ', characters a worksheet cannot hold are
    dropped and empty values become empty cells.
    """
    fields = asdict(record)
    row = {}
    for column in schema.columns:
        value = fields.get(column.field)
        if column.type is ColumnType.LIST:
            value = ", ".join(value or ())
        if isinstance(value, str):
            value = ILLEGAL_CHARACTERS_RE.sub("", value)
        if value == "":
            value = None
        row[column.header] = value
    return row


def write_workbook(
    schema: EntitySchema,
    rows: list[dict[str, Any]],
    sheet_title: str | None = None,
    widths: dict[str, int] | None = None
) -> bytes:
    """
    Serialize header-keyed rows into a single-sheet workbook.

    Args:
        schema: Column order and header labels
        rows: Mappings keyed by header label; missing keys become empty cells
        sheet_title: Defaults to the schema's sheet name
        widths: Optional {'min', 'max'} column width bounds

    Returns:
        The .xlsx file contents
    """
    widths = widths or DEFAULT_WIDTHS
    headers = schema.headers

    wb = Workbook()
    ws = wb.active
    ws.title = sheet_title or schema.sheet_name

    header_font = Font(bold=True)
    for col_idx, header in enumerate(headers, 1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = header_font

    for row_idx, row in enumerate(rows, 2):
        for col_idx, header in enumerate(headers, 1):
            value = row.get(header)
            cell = ws.cell(row=row_idx, column=col_idx, value=value)
            # Text such as "=Asthma inhaler" stays text, not a formula
            if isinstance(value, str) and value.startswith("="):
                cell.data_type = "s"

    # Adjust column widths
    for col_idx, header in enumerate(headers, 1):
        longest = max(
            [len(header)] + [len(str(r[header])) for r in rows if r.get(header) is not None]
        )
        width = min(max(longest + 2, widths["min"]), widths["max"])
        ws.column_dimensions[get_column_letter(col_idx)].width = width

    buffer = io.BytesIO()
    wb.save(buffer)
    logger.info(f"Wrote {len(rows)} row(s) to sheet '{ws.title}'")
    return buffer.getvalue()


def export_filename(
    entity_type: EntityType,
    on: date | None = None,
    date_format: str = "%Y-%m-%d"
) -> str:
    """'<entity>_<date>.xlsx', e.g. 'student_2024-01-10.xlsx'."""
    on = on or date.today()
    return f"{entity_type.value}_{on.strftime(date_format)}.xlsx"
