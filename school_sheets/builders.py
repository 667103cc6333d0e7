"""Accepted raw rows -> immutable domain records."""

from typing import Any, Callable

from .models import (
    DomainRecord,
    EntitySchema,
    EntityType,
    GradeRange,
    RawRow,
    SchoolClass,
    Student,
    Teacher,
)

RECORD_TYPES: dict[EntityType, Callable[..., DomainRecord]] = {
    EntityType.STUDENT: Student,
    EntityType.CLASS: SchoolClass,
    EntityType.TEACHER: Teacher,
    EntityType.GRADING_SYSTEM: GradeRange,
}


def normalized_fields(schema: EntitySchema, row: RawRow) -> dict[str, Any]:
    """Run every column's normalizer over the row, keyed by record field."""
    fields = {}
    for column in schema.columns:
        _, raw = row.lookup(column)
        fields[column.field] = column.normalizer(raw)
    return fields


def build_record(schema: EntitySchema, row: RawRow) -> DomainRecord:
    """
    Build the record for a row the validator admitted.

    Optional text fields come back as empty strings, absent enrollment or
    joined dates as today's date.
    """
    record_type = RECORD_TYPES[schema.entity_type]
    return record_type(**normalized_fields(schema, row))


def build_records(schema: EntitySchema, rows: list[RawRow]) -> list[DomainRecord]:
    return [build_record(schema, row) for row in rows]
