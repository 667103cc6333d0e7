"""Downloadable import templates with one exemplar row per entity.

The exemplar rows are fixed data, not derived from live records. Every
required column is filled so the template doubles as documentation of the
expected formats, and each template must import without errors.
"""

from types import MappingProxyType
from typing import Any

from .models import EntityType
from .schemas import get_schema
from .writer import write_workbook

TEMPLATE_ROWS: MappingProxyType = MappingProxyType({
    EntityType.STUDENT: (
        {
            "Student ID": "S001",
            "First Name": "John",
            "Last Name": "Doe",
            "Date of Birth": "2010-01-15",
            "Gender": "M",
            "Grade": 5,
            "Stream": "A",
            "Guardian Name": "Jane Doe",
            "Guardian Phone": "+260 97 1234567",
            "Guardian Email": "jane.doe@example.com",
            "Address": "123 Main Street, Lusaka",
            "Medical Info": "None",
            "Enrollment Date": "2024-01-10",
        },
    ),
    EntityType.CLASS: (
        {
            "Class Name": "Grade 5A",
            "Grade Level": 5,
            "Stream": "A",
            "Capacity": 40,
            "Teacher Name": "Mr. Smith",
            "Subjects": "Mathematics, English, Science, Social Studies",
            "Room Number": "R101",
            "Schedule": "Monday-Friday 08:00-14:00",
        },
    ),
    EntityType.TEACHER: (
        {
            "First Name": "Mary",
            "Last Name": "Banda",
            "Email": "mary.banda@example.com",
            "Phone": "+260 96 7654321",
            "Role": "class_teacher",
            "TS Number": "TS/2019/0456",
            "NRC": "123456/10/1",
            "Date of Birth": "1988-03-22",
            "Gender": "F",
            "Address": "45 Independence Avenue, Lusaka",
            "Qualifications": "B.Ed Mathematics",
            "Joined Date": "2019-01-07",
        },
    ),
    EntityType.GRADING_SYSTEM: (
        {"Min Score": 90, "Max Score": 100, "Letter Grade": "A+", "Grade Point": 4.0, "Description": "Excellent", "Pass/Fail": "Pass"},
        {"Min Score": 80, "Max Score": 89, "Letter Grade": "A", "Grade Point": 3.7, "Description": "Very Good", "Pass/Fail": "Pass"},
        {"Min Score": 70, "Max Score": 79, "Letter Grade": "B", "Grade Point": 3.0, "Description": "Good", "Pass/Fail": "Pass"},
        {"Min Score": 60, "Max Score": 69, "Letter Grade": "C", "Grade Point": 2.0, "Description": "Satisfactory", "Pass/Fail": "Pass"},
        {"Min Score": 50, "Max Score": 59, "Letter Grade": "D", "Grade Point": 1.0, "Description": "Pass", "Pass/Fail": "Pass"},
        {"Min Score": 0, "Max Score": 49, "Letter Grade": "F", "Grade Point": 0.0, "Description": "Fail", "Pass/Fail": "Fail"},
    ),
})


def template_rows(entity_type: EntityType | str) -> list[dict[str, Any]]:
    schema = get_schema(entity_type)
    return [dict(row) for row in TEMPLATE_ROWS[schema.entity_type]]


def generate_template(
    entity_type: EntityType | str,
    widths: dict[str, int] | None = None
) -> tuple[str, bytes]:
    """
    Build the import template workbook for an entity type.

    Returns:
        (fixed file name, workbook bytes)
    """
    schema = get_schema(entity_type)
    data = write_workbook(
        schema,
        template_rows(schema.entity_type),
        sheet_title=f"{schema.sheet_name} Template",
        widths=widths,
    )
    return schema.template_filename, data
