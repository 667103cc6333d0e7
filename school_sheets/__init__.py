"""Bulk import/export of school records through spreadsheets."""

from .config_schema import DEFAULT_CONFIG, get_default_config, load_config, merge_config, validate_config
from .engine import export_grading_system, export_records, import_file, import_grading_system, import_workbook
from .errors import ConfigurationError, ParseError, SheetError
from .models import (
    EntityType,
    GradeRange,
    GradingSystem,
    ImportResult,
    SchoolClass,
    Student,
    Teacher,
    ValidationError,
    ValidationResult,
)
from .normalizers import is_valid_email, normalize_gender, parse_date
from .schemas import SCHEMAS, get_schema
from .templates import generate_template

__all__ = [
    "DEFAULT_CONFIG",
    "get_default_config",
    "load_config",
    "merge_config",
    "validate_config",
    "export_grading_system",
    "export_records",
    "import_file",
    "import_grading_system",
    "import_workbook",
    "ConfigurationError",
    "ParseError",
    "SheetError",
    "EntityType",
    "GradeRange",
    "GradingSystem",
    "ImportResult",
    "SchoolClass",
    "Student",
    "Teacher",
    "ValidationError",
    "ValidationResult",
    "is_valid_email",
    "normalize_gender",
    "parse_date",
    "SCHEMAS",
    "get_schema",
    "generate_template",
]
