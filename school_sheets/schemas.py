"""Static column definitions for every entity type."""

from types import MappingProxyType
from typing import Any

from .errors import ConfigurationError
from .models import ColumnSchema, ColumnType, EntitySchema, EntityType
from .normalizers import (
    clean_text,
    normalize_gender,
    normalize_letter_grade,
    normalize_pass_fail,
    normalize_role,
    parse_date,
    parse_date_or_today,
    parse_int,
    parse_number,
    parse_optional_number,
    split_list,
)

GENDERS = ("M", "F", "Male", "Female")
PASS_FAIL = ("Pass", "Fail")

# School-level staff roles a teacher account may hold
TEACHER_ROLES = (
    "head_teacher",
    "deputy_head",
    "senior_teacher",
    "career_guidance_teacher",
    "social_welfare_teacher",
    "class_teacher",
    "subject_teacher",
    "house_tutor",
    "school_accountant",
    "boarding_teacher",
)


def _text(header: str, field: str, required: bool = False, **kwargs: Any) -> ColumnSchema:
    return ColumnSchema(header, field, required, ColumnType.TEXT, clean_text, **kwargs)


def _date(header: str, field: str, required: bool = False, default_today: bool = False) -> ColumnSchema:
    normalizer = parse_date_or_today if default_today else parse_date
    return ColumnSchema(header, field, required, ColumnType.DATE, normalizer)


def _gender(required: bool = True) -> ColumnSchema:
    return ColumnSchema(
        "Gender", "gender", required, ColumnType.CHOICE, normalize_gender, choices=GENDERS
    )


def _grade_level(header: str, aliases: tuple[str, ...] = ()) -> ColumnSchema:
    return ColumnSchema(
        header, "grade_level", True, ColumnType.INTEGER, parse_int,
        aliases=aliases, minimum=1, maximum=12,
    )


STUDENT_SCHEMA = EntitySchema(
    entity_type=EntityType.STUDENT,
    sheet_name="Students",
    template_filename="student_import_template.xlsx",
    columns=(
        _text("Student ID", "student_id"),
        _text("First Name", "first_name", required=True),
        _text("Last Name", "last_name", required=True),
        _date("Date of Birth", "date_of_birth", required=True),
        _gender(),
        _grade_level("Grade", aliases=("Grade Level",)),
        _text("Stream", "stream"),
        _text("Guardian Name", "guardian_name"),
        _text("Guardian Phone", "guardian_phone"),
        ColumnSchema("Guardian Email", "guardian_email", False, ColumnType.EMAIL, clean_text),
        _text("Address", "address"),
        _text("Medical Info", "medical_info"),
        _date("Enrollment Date", "enrollment_date", default_today=True),
    ),
)

CLASS_SCHEMA = EntitySchema(
    entity_type=EntityType.CLASS,
    sheet_name="Classes",
    template_filename="class_import_template.xlsx",
    columns=(
        _text("Class Name", "class_name", required=True),
        _grade_level("Grade Level"),
        _text("Stream", "stream"),
        ColumnSchema("Capacity", "capacity", True, ColumnType.INTEGER, parse_int, minimum=1),
        _text("Teacher Name", "teacher_name"),
        ColumnSchema("Subjects", "subjects", False, ColumnType.LIST, split_list),
        _text("Room Number", "room_number"),
        _text("Schedule", "schedule"),
    ),
)

TEACHER_SCHEMA = EntitySchema(
    entity_type=EntityType.TEACHER,
    sheet_name="Teachers",
    template_filename="teacher_import_template.xlsx",
    columns=(
        _text("First Name", "first_name", required=True),
        _text("Last Name", "last_name", required=True),
        ColumnSchema("Email", "email", True, ColumnType.EMAIL, clean_text),
        _text("Phone", "phone"),
        ColumnSchema("Role", "role", True, ColumnType.CHOICE, normalize_role, choices=TEACHER_ROLES),
        _text("TS Number", "ts_number"),
        _text("NRC", "nrc"),
        _date("Date of Birth", "date_of_birth"),
        _gender(),
        _text("Address", "address"),
        _text("Qualifications", "qualifications"),
        _date("Joined Date", "joined_date", default_today=True),
    ),
)

GRADING_SYSTEM_SCHEMA = EntitySchema(
    entity_type=EntityType.GRADING_SYSTEM,
    sheet_name="Grading System",
    template_filename="grading_system_template.xlsx",
    columns=(
        ColumnSchema("Min Score", "min_score", True, ColumnType.NUMBER, parse_number, minimum=0, maximum=100),
        ColumnSchema("Max Score", "max_score", True, ColumnType.NUMBER, parse_number, minimum=0, maximum=100),
        ColumnSchema("Letter Grade", "letter_grade", True, ColumnType.TEXT, normalize_letter_grade),
        ColumnSchema("Grade Point", "grade_point", False, ColumnType.NUMBER, parse_optional_number, minimum=0),
        _text("Description", "description"),
        ColumnSchema("Pass/Fail", "pass_fail", False, ColumnType.CHOICE, normalize_pass_fail, choices=PASS_FAIL),
    ),
)

SCHEMAS: MappingProxyType = MappingProxyType({
    EntityType.STUDENT: STUDENT_SCHEMA,
    EntityType.CLASS: CLASS_SCHEMA,
    EntityType.TEACHER: TEACHER_SCHEMA,
    EntityType.GRADING_SYSTEM: GRADING_SYSTEM_SCHEMA,
})

# Accepted spellings for each entity type
_ALIASES = {
    "student": EntityType.STUDENT,
    "students": EntityType.STUDENT,
    "class": EntityType.CLASS,
    "classes": EntityType.CLASS,
    "teacher": EntityType.TEACHER,
    "teachers": EntityType.TEACHER,
    "grading": EntityType.GRADING_SYSTEM,
    "grading_system": EntityType.GRADING_SYSTEM,
    "grading-system": EntityType.GRADING_SYSTEM,
}


def resolve_entity_type(entity_type: EntityType | str) -> EntityType:
    """Turn an EntityType or one of its accepted names into an EntityType."""
    if isinstance(entity_type, EntityType):
        return entity_type
    if isinstance(entity_type, str):
        key = entity_type.strip().lower()
        if key in _ALIASES:
            return _ALIASES[key]
    raise ConfigurationError(f"Unknown entity type: {entity_type!r}")


def get_schema(entity_type: EntityType | str) -> EntitySchema:
    """Return the column definitions for an entity type."""
    return SCHEMAS[resolve_entity_type(entity_type)]
