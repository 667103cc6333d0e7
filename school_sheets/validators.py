"""Row validation against an entity schema."""

import logging
from typing import Any, Callable

from .models import (
    ColumnSchema,
    ColumnType,
    EntitySchema,
    EntityType,
    RawRow,
    ValidationError,
    ValidationResult,
    is_blank,
)
from .normalizers import is_valid_email, normalize_role, parse_date, parse_int, parse_number

logger = logging.getLogger(__name__)

SCORE_RANGE_FIELD = "Score Range"

RowCheck = Callable[[RawRow, EntitySchema], tuple[list[ValidationError], bool]]
BatchCheck = Callable[[list[RawRow], EntitySchema], list[ValidationError]]


def validate_rows(
    schema: EntitySchema,
    rows: list[RawRow]
) -> tuple[ValidationResult, list[RawRow]]:
    """
    Validate every row and decide which ones may become records.

    A row is admitted when all of its required columns (and any row-level
    invariant for the entity) passed. Errors on optional columns are
    reported but do not block admission. Every row is checked; nothing
    short-circuits on the first error.

    Returns:
        The ValidationResult and the admitted rows, in source order.
    """
    errors: list[ValidationError] = []
    accepted: list[RawRow] = []

    for row in rows:
        row_errors, admitted = validate_row(schema, row)
        errors.extend(row_errors)
        if admitted:
            accepted.append(row)
        else:
            logger.debug(f"Row {row.row_number} rejected: {len(row_errors)} error(s)")

    # Cross-row checks depend on the complete set of admitted rows
    errors.extend(BATCH_CHECKS[schema.entity_type](accepted, schema))

    result = ValidationResult(
        errors=tuple(errors),
        valid_row_count=len(accepted),
        total_row_count=len(rows),
    )
    return result, accepted


def validate_row(schema: EntitySchema, row: RawRow) -> tuple[list[ValidationError], bool]:
    """Check one row column by column, in schema order."""
    errors = []
    admitted = True

    for column in schema.columns:
        header, raw = row.lookup(column)
        column_errors = check_cell(column, header, raw, row.row_number)
        errors.extend(column_errors)
        if column_errors and column.required:
            admitted = False

    invariant_errors, invariant_ok = ROW_CHECKS[schema.entity_type](row, schema)
    errors.extend(invariant_errors)

    return errors, admitted and invariant_ok


def check_cell(column: ColumnSchema, header: str, raw: Any, row_number: int) -> list[ValidationError]:
    """Return the errors for a single cell (at most one)."""
    if is_blank(raw):
        if column.required:
            return [ValidationError(row_number, header, f"{header} is required")]
        return []

    message = None

    if column.type is ColumnType.CHOICE:
        if not matches_choice(raw, column.choices):
            message = f"{header} must be one of: {', '.join(column.choices)}"

    elif column.type is ColumnType.INTEGER:
        message = _check_bounds(header, parse_int(raw), column, "a whole number")

    elif column.type is ColumnType.NUMBER:
        message = _check_bounds(header, parse_number(raw), column, "a number")

    elif column.type is ColumnType.DATE:
        if not parse_date(raw):
            message = f"{header} is not a valid date"

    elif column.type is ColumnType.EMAIL:
        if not is_valid_email(raw):
            message = "Invalid email format"

    if message is None:
        return []
    return [ValidationError(row_number, header, message, raw)]


def matches_choice(raw: Any, choices: tuple[str, ...]) -> bool:
    """Case-insensitive match; spaces and hyphens count as underscores."""
    key = normalize_role(raw)
    return any(key == normalize_role(choice) for choice in choices)


def _check_bounds(header: str, number: float | None, column: ColumnSchema, kind: str) -> str | None:
    low, high = column.minimum, column.maximum

    if number is None:
        return f"{header} must be {kind}"

    if low is not None and high is not None:
        if not low <= number <= high:
            return f"{header} must be between {low:g} and {high:g}"
    elif low is not None and number < low:
        if low == 1 and column.type is ColumnType.INTEGER:
            return f"{header} must be a positive number"
        return f"{header} must be at least {low:g}"
    elif high is not None and number > high:
        return f"{header} must be at most {high:g}"

    return None


# --- Entity-specific invariants ---

def _no_row_check(row: RawRow, schema: EntitySchema) -> tuple[list[ValidationError], bool]:
    return [], True


def _no_batch_check(rows: list[RawRow], schema: EntitySchema) -> list[ValidationError]:
    return []


def _score_bounds(row: RawRow, schema: EntitySchema) -> tuple[float | None, float | None]:
    _, raw_min = row.lookup(schema.column("min_score"))
    _, raw_max = row.lookup(schema.column("max_score"))
    return parse_number(raw_min), parse_number(raw_max)


def check_score_range(row: RawRow, schema: EntitySchema) -> tuple[list[ValidationError], bool]:
    """Min Score must be strictly below Max Score; an equal or inverted pair blocks the row."""
    min_score, max_score = _score_bounds(row, schema)
    if min_score is None or max_score is None:
        # Missing or unreadable scores are already reported per column
        return [], True

    if min_score >= max_score:
        error = ValidationError(
            row.row_number,
            SCORE_RANGE_FIELD,
            "Min Score must be less than Max Score",
            f"{min_score:g}-{max_score:g}",
        )
        return [error], False

    return [], True


def check_range_overlaps(rows: list[RawRow], schema: EntitySchema) -> list[ValidationError]:
    """
    Sort admitted ranges by Min Score and flag adjacent pairs that overlap.

    Touching bands (one ends where the next starts) are allowed. An overlap
    is reported at the source row of the later band of the pair and the
    message names both rows.
    """
    bands = []
    for row in rows:
        min_score, max_score = _score_bounds(row, schema)
        bands.append((min_score, max_score, row.row_number))
    bands.sort(key=lambda band: band[0])

    errors = []
    for (lo_a, hi_a, row_a), (lo_b, hi_b, row_b) in zip(bands, bands[1:]):
        if hi_a > lo_b:
            errors.append(ValidationError(
                row_b,
                SCORE_RANGE_FIELD,
                f"Overlapping score ranges detected (rows {row_a} and {row_b})",
                f"{lo_a:g}-{hi_a:g} overlaps with {lo_b:g}-{hi_b:g}",
            ))
    return errors


ROW_CHECKS: dict[EntityType, RowCheck] = {
    EntityType.STUDENT: _no_row_check,
    EntityType.CLASS: _no_row_check,
    EntityType.TEACHER: _no_row_check,
    EntityType.GRADING_SYSTEM: check_score_range,
}

BATCH_CHECKS: dict[EntityType, BatchCheck] = {
    EntityType.STUDENT: _no_batch_check,
    EntityType.CLASS: _no_batch_check,
    EntityType.TEACHER: _no_batch_check,
    EntityType.GRADING_SYSTEM: check_range_overlaps,
}
