"""Schema, row, diagnostic and record types."""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Callable


class EntityType(str, Enum):
    """The closed set of importable/exportable record types."""

    STUDENT = "student"
    CLASS = "class"
    TEACHER = "teacher"
    GRADING_SYSTEM = "grading_system"


class ColumnType(str, Enum):
    TEXT = "text"
    INTEGER = "integer"
    NUMBER = "number"
    DATE = "date"
    EMAIL = "email"
    CHOICE = "choice"
    LIST = "list"


@dataclass(frozen=True)
class ColumnSchema:
    """One spreadsheet column and the record field it feeds."""

    header: str
    field: str
    required: bool
    type: ColumnType
    normalizer: Callable[[Any], Any]
    aliases: tuple[str, ...] = ()
    choices: tuple[str, ...] = ()
    minimum: float | None = None
    maximum: float | None = None

    @property
    def labels(self) -> tuple[str, ...]:
        return (self.header, *self.aliases)


@dataclass(frozen=True)
class EntitySchema:
    """Ordered column definitions for one entity type."""

    entity_type: EntityType
    sheet_name: str
    columns: tuple[ColumnSchema, ...]
    template_filename: str

    @property
    def headers(self) -> list[str]:
        return [c.header for c in self.columns]

    @property
    def required_headers(self) -> list[str]:
        return [c.header for c in self.columns if c.required]

    def column(self, field_name: str) -> ColumnSchema:
        for col in self.columns:
            if col.field == field_name:
                return col
        raise KeyError(field_name)


def is_blank(value: Any) -> bool:
    """True for empty cells: None or whitespace-only strings."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


@dataclass(frozen=True)
class RawRow:
    """Unvalidated cell values keyed by header, addressed by source row number.

    The header occupies row 1, so the first data row is row 2.
    """

    row_number: int
    values: dict[str, Any]

    def lookup(self, column: ColumnSchema) -> tuple[str, Any]:
        """
        Find the cell for a column, honouring header aliases.

        Returns:
            (header label present in the sheet, raw value). When none of the
            column's labels is present the primary header and None are returned.
        """
        for label in column.labels:
            if label in self.values:
                return label, self.values[label]
        return column.header, None


@dataclass(frozen=True)
class ValidationError:
    """A single row/field diagnostic. Accumulated, never raised."""

    row: int
    field: str
    message: str
    value: Any = None

    def to_dict(self) -> dict[str, Any]:
        data = {"row": self.row, "field": self.field, "message": self.message}
        if self.value is not None:
            data["value"] = self.value
        return data


@dataclass(frozen=True)
class ValidationResult:
    """Complete diagnostic output of one import call."""

    errors: tuple[ValidationError, ...]
    valid_row_count: int
    total_row_count: int

    @property
    def valid(self) -> bool:
        return not self.errors

    def errors_for_row(self, row: int) -> list[ValidationError]:
        return [e for e in self.errors if e.row == row]


# --- Domain records ---

@dataclass(frozen=True)
class Student:
    first_name: str
    last_name: str
    date_of_birth: str
    gender: str
    grade_level: int
    enrollment_date: str
    student_id: str = ""
    stream: str = ""
    guardian_name: str = ""
    guardian_phone: str = ""
    guardian_email: str = ""
    address: str = ""
    medical_info: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class SchoolClass:
    class_name: str
    grade_level: int
    capacity: int
    stream: str = ""
    teacher_name: str = ""
    subjects: tuple[str, ...] = ()
    room_number: str = ""
    schedule: str = ""


@dataclass(frozen=True)
class Teacher:
    first_name: str
    last_name: str
    email: str
    role: str
    gender: str
    joined_date: str
    phone: str = ""
    ts_number: str = ""
    nrc: str = ""
    date_of_birth: str = ""
    address: str = ""
    qualifications: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class GradeRange:
    min_score: float
    max_score: float
    letter_grade: str
    pass_fail: str = "Pass"
    grade_point: float | None = None
    description: str = ""

    def contains(self, score: float) -> bool:
        return self.min_score <= score <= self.max_score


@dataclass(frozen=True)
class GradingSystem:
    """A named, ordered partition of the 0-100 score axis."""

    name: str
    ranges: tuple[GradeRange, ...] = ()

    def sorted_ranges(self) -> list[GradeRange]:
        return sorted(self.ranges, key=lambda r: r.min_score)

    def grade_for(self, score: float) -> GradeRange | None:
        """Return the band containing ``score``, highest band first."""
        for grade_range in reversed(self.sorted_ranges()):
            if grade_range.contains(score):
                return grade_range
        return None


DomainRecord = Student | SchoolClass | Teacher | GradeRange


@dataclass(frozen=True)
class ImportResult:
    """Records admitted by one import call plus its diagnostics."""

    entity_type: EntityType
    records: tuple[DomainRecord, ...]
    validation: ValidationResult = field(repr=False)

    def as_grading_system(self, name: str) -> GradingSystem:
        if self.entity_type is not EntityType.GRADING_SYSTEM:
            raise TypeError(f"{self.entity_type.value} import is not a grading system")
        return GradingSystem(name=name, ranges=tuple(self.records))

    def records_as_dicts(self) -> list[dict[str, Any]]:
        return [asdict(r) for r in self.records]
