# tests/conftest.py

import io

import pytest
from openpyxl import Workbook

from school_sheets.models import GradeRange, GradingSystem, SchoolClass, Student, Teacher

STUDENT_HEADERS = [
    "Student ID", "First Name", "Last Name", "Date of Birth", "Gender", "Grade",
    "Stream", "Guardian Name", "Guardian Phone", "Guardian Email", "Address",
    "Medical Info", "Enrollment Date",
]

GRADING_HEADERS = ["Min Score", "Max Score", "Letter Grade", "Grade Point", "Description", "Pass/Fail"]


def build_workbook(headers, rows, sheets=1) -> bytes:
    """Write a header row plus data rows (lists) to .xlsx bytes."""
    wb = Workbook()
    ws = wb.active
    ws.append(headers)
    for row in rows:
        ws.append(row)
    for i in range(1, sheets):
        wb.create_sheet(title=f"Extra {i}").append(["ignored"])
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def student_row(**overrides):
    values = {
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
    }
    values.update(overrides)
    return [values[h] for h in STUDENT_HEADERS]


@pytest.fixture
def make_workbook():
    return build_workbook


@pytest.fixture
def make_student_row():
    return student_row


@pytest.fixture
def sample_students():
    return [
        Student(
            student_id="S001",
            first_name="John",
            last_name="Doe",
            date_of_birth="2010-01-15",
            gender="M",
            grade_level=5,
            stream="A",
            guardian_name="Jane Doe",
            guardian_phone="+260 97 1234567",
            guardian_email="jane.doe@example.com",
            address="123 Main Street, Lusaka",
            medical_info="None",
            enrollment_date="2024-01-10",
        ),
        Student(
            first_name="Chipo",
            last_name="Mwale",
            date_of_birth="2011-07-02",
            gender="F",
            grade_level=4,
            enrollment_date="2023-01-09",
        ),
    ]


@pytest.fixture
def sample_classes():
    return [
        SchoolClass(
            class_name="Grade 5A",
            grade_level=5,
            capacity=40,
            stream="A",
            teacher_name="Mr. Smith",
            subjects=("Mathematics", "English", "Science"),
            room_number="R101",
            schedule="Monday-Friday 08:00-14:00",
        ),
        SchoolClass(class_name="Grade 12B", grade_level=12, capacity=1),
    ]


@pytest.fixture
def sample_teachers():
    return [
        Teacher(
            first_name="Mary",
            last_name="Banda",
            email="mary.banda@example.com",
            role="class_teacher",
            gender="F",
            joined_date="2019-01-07",
            phone="+260 96 7654321",
            ts_number="TS/2019/0456",
            nrc="123456/10/1",
            date_of_birth="1988-03-22",
            address="45 Independence Avenue, Lusaka",
            qualifications="B.Ed Mathematics",
        ),
        Teacher(
            first_name="Peter",
            last_name="Phiri",
            email="p.phiri@example.com",
            role="head_teacher",
            gender="M",
            joined_date="2015-05-04",
        ),
    ]


@pytest.fixture
def sample_grading_system():
    return GradingSystem(
        name="Secondary",
        ranges=(
            GradeRange(75, 100, "A", "Pass", 4.0, "Distinction"),
            GradeRange(50, 75, "C", "Pass", 2.0, "Credit"),
            GradeRange(0, 50, "F", "Fail", 0.0, "Fail"),
        ),
    )


@pytest.fixture
def student_headers():
    return list(STUDENT_HEADERS)


@pytest.fixture
def grading_headers():
    return list(GRADING_HEADERS)
