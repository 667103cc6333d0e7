"""Import/export entry points.

Each call is self-contained: bytes in, a complete ImportResult out (or
records in, workbook bytes out). Nothing is shared between calls.
"""

import logging
from datetime import date
from pathlib import Path
from typing import BinaryIO, Iterable

from .builders import build_records
from .config_schema import DEFAULT_CONFIG
from .models import DomainRecord, EntityType, GradingSystem, ImportResult
from .reader import read_workbook
from .schemas import get_schema
from .validators import validate_rows
from .writer import export_filename, record_to_row, write_workbook

logger = logging.getLogger(__name__)


def import_workbook(data: bytes, entity_type: EntityType | str) -> ImportResult:
    """
    Read, validate and build records from workbook bytes.

    Raises:
        ConfigurationError: unknown entity type
        ParseError: the bytes are not a readable workbook
    """
    schema = get_schema(entity_type)
    rows = read_workbook(data)
    validation, accepted = validate_rows(schema, rows)
    records = build_records(schema, accepted)

    logger.info(
        f"Imported {schema.entity_type.value}: {validation.valid_row_count} of "
        f"{validation.total_row_count} rows accepted, {len(validation.errors)} error(s)"
    )
    return ImportResult(
        entity_type=schema.entity_type,
        records=tuple(records),
        validation=validation,
    )


def import_file(source: str | Path | BinaryIO, entity_type: EntityType | str) -> ImportResult:
    """Import from a path or an open binary stream. I/O errors propagate."""
    if isinstance(source, (str, Path)):
        data = Path(source).read_bytes()
    else:
        data = source.read()
    return import_workbook(data, entity_type)


def import_grading_system(data: bytes, name: str | None = None) -> tuple[GradingSystem, ImportResult]:
    """Import grade bands and wrap the admitted ones in a named GradingSystem."""
    result = import_workbook(data, EntityType.GRADING_SYSTEM)
    system = result.as_grading_system(name or DEFAULT_CONFIG["grading_system_name"])
    return system, result


def export_records(
    records: Iterable[DomainRecord],
    entity_type: EntityType | str,
    on: date | None = None,
    config: dict | None = None
) -> tuple[str, bytes]:
    """
    Write records to a workbook named '<entity>_<date>.xlsx'.

    Returns:
        (file name, workbook bytes)
    """
    config = config or DEFAULT_CONFIG
    schema = get_schema(entity_type)
    rows = [record_to_row(schema, record) for record in records]
    data = write_workbook(schema, rows, widths=config["column_width"])
    filename = export_filename(schema.entity_type, on, config["export_date_format"])
    return filename, data


def export_grading_system(
    system: GradingSystem,
    on: date | None = None,
    config: dict | None = None
) -> tuple[str, bytes]:
    """Export a grading system's bands, lowest first."""
    return export_records(system.sorted_ranges(), EntityType.GRADING_SYSTEM, on, config)
