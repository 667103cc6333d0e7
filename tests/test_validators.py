# tests/test_validators.py

from school_sheets.models import EntityType, RawRow
from school_sheets.schemas import get_schema
from school_sheets.validators import SCORE_RANGE_FIELD, check_cell, matches_choice, validate_rows

STUDENT = get_schema(EntityType.STUDENT)
CLASS = get_schema(EntityType.CLASS)
TEACHER = get_schema(EntityType.TEACHER)
GRADING = get_schema(EntityType.GRADING_SYSTEM)


def student(row_number, **overrides):
    values = {
        "First Name": "John",
        "Last Name": "Doe",
        "Date of Birth": "2010-01-15",
        "Gender": "M",
        "Grade": 5,
    }
    values.update(overrides)
    return RawRow(row_number, values)


def grade_band(row_number, low, high, letter, **overrides):
    values = {"Min Score": low, "Max Score": high, "Letter Grade": letter}
    values.update(overrides)
    return RawRow(row_number, values)


def fields(result):
    return [(e.row, e.field) for e in result.errors]


def test_valid_rows_are_all_admitted():
    result, accepted = validate_rows(STUDENT, [student(2), student(3)])

    assert result.valid
    assert result.valid_row_count == 2
    assert result.total_row_count == 2
    assert [r.row_number for r in accepted] == [2, 3]


def test_missing_first_name_blocks_row():
    result, accepted = validate_rows(STUDENT, [student(2, **{"First Name": None})])

    assert fields(result) == [(2, "First Name")]
    assert result.errors[0].message == "First Name is required"
    assert accepted == []
    assert not result.valid


def test_absent_required_column_is_reported_with_primary_header():
    row = RawRow(2, {"First Name": "John", "Last Name": "Doe", "Date of Birth": "2010-01-15", "Gender": "M"})

    result, accepted = validate_rows(STUDENT, [row])

    assert fields(result) == [(2, "Grade")]
    assert accepted == []


def test_grade_out_of_range_blocks_row_even_when_everything_else_is_valid():
    result, accepted = validate_rows(STUDENT, [student(2, Grade="13")])

    assert fields(result) == [(2, "Grade")]
    assert result.errors[0].value == "13"
    assert result.errors[0].message == "Grade must be between 1 and 12"
    assert accepted == []


def test_grade_level_alias_reports_the_header_used_in_the_sheet():
    row = student(2)
    values = dict(row.values)
    values["Grade Level"] = values.pop("Grade")
    values["Grade Level"] = 0

    result, _ = validate_rows(STUDENT, [RawRow(2, values)])

    assert fields(result) == [(2, "Grade Level")]


def test_non_numeric_grade():
    result, _ = validate_rows(STUDENT, [student(2, Grade="five")])

    assert result.errors[0].message == "Grade must be a whole number"


def test_invalid_gender_is_an_error_carrying_the_raw_value():
    result, accepted = validate_rows(STUDENT, [student(2, Gender="X")])

    assert fields(result) == [(2, "Gender")]
    assert result.errors[0].value == "X"
    assert accepted == []


def test_gender_match_is_case_insensitive():
    result, _ = validate_rows(STUDENT, [student(2, Gender="male"), student(3, Gender="FEMALE")])

    assert result.valid


def test_bad_guardian_email_is_reported_but_does_not_block():
    result, accepted = validate_rows(STUDENT, [student(2, **{"Guardian Email": "not-an-email"})])

    assert fields(result) == [(2, "Guardian Email")]
    assert result.errors[0].message == "Invalid email format"
    assert len(accepted) == 1
    assert result.valid_row_count == 1
    assert not result.valid


def test_unparseable_required_date_blocks_row():
    result, accepted = validate_rows(STUDENT, [student(2, **{"Date of Birth": "someday"})])

    assert fields(result) == [(2, "Date of Birth")]
    assert accepted == []


def test_unparseable_optional_date_does_not_block():
    result, accepted = validate_rows(STUDENT, [student(2, **{"Enrollment Date": "soon"})])

    assert fields(result) == [(2, "Enrollment Date")]
    assert len(accepted) == 1


def test_all_errors_in_a_row_are_collected_in_schema_order():
    row = student(2, **{"First Name": None, "Gender": "?", "Grade": 0, "Guardian Email": "x"})

    result, _ = validate_rows(STUDENT, [row])

    assert [e.field for e in result.errors] == ["First Name", "Gender", "Grade", "Guardian Email"]


def test_errors_from_other_rows_do_not_affect_admission():
    rows = [student(2), student(3, **{"Last Name": None}), student(4)]

    result, accepted = validate_rows(STUDENT, rows)

    assert result.valid_row_count == 2
    assert result.total_row_count == 3
    assert [r.row_number for r in accepted] == [2, 4]


def test_class_capacity_must_be_positive():
    base = {"Class Name": "Grade 5A", "Grade Level": 5}
    rows = [
        RawRow(2, {**base, "Capacity": 0}),
        RawRow(3, {**base, "Capacity": "forty"}),
        RawRow(4, {**base, "Capacity": 40.5}),
        RawRow(5, {**base, "Capacity": "40"}),
    ]

    result, accepted = validate_rows(CLASS, rows)

    assert fields(result) == [(2, "Capacity"), (3, "Capacity"), (4, "Capacity")]
    assert result.errors[0].message == "Capacity must be a positive number"
    assert [r.row_number for r in accepted] == [5]


def test_teacher_role_and_email_are_required_and_checked():
    base = {"First Name": "Mary", "Last Name": "Banda", "Gender": "F"}
    rows = [
        RawRow(2, {**base, "Email": "mary@example.com", "Role": "Head Teacher"}),
        RawRow(3, {**base, "Email": "mary@example.com", "Role": "janitor"}),
        RawRow(4, {**base, "Email": "mary.example.com", "Role": "class_teacher"}),
    ]

    result, accepted = validate_rows(TEACHER, rows)

    assert fields(result) == [(3, "Role"), (4, "Email")]
    assert [r.row_number for r in accepted] == [2]


def test_score_range_min_must_be_below_max():
    rows = [grade_band(2, 50, 50, "D"), grade_band(3, 60, 40, "C")]

    result, accepted = validate_rows(GRADING, rows)

    assert fields(result) == [(2, SCORE_RANGE_FIELD), (3, SCORE_RANGE_FIELD)]
    assert result.errors[1].value == "60-40"
    assert accepted == []


def test_scores_outside_zero_to_hundred():
    result, accepted = validate_rows(GRADING, [grade_band(2, -5, 101, "A")])

    assert fields(result) == [(2, "Min Score"), (2, "Max Score")]
    assert accepted == []


def test_zero_min_score_counts_as_present():
    result, accepted = validate_rows(GRADING, [grade_band(2, 0, 49, "F")])

    assert result.valid
    assert len(accepted) == 1


def test_overlapping_ranges_are_reported_after_the_scan():
    rows = [grade_band(2, 0, 49, "F"), grade_band(3, 50, 59, "D"), grade_band(4, 55, 100, "C")]

    result, accepted = validate_rows(GRADING, rows)

    assert not result.valid
    assert fields(result) == [(4, SCORE_RANGE_FIELD)]
    assert "rows 3 and 4" in result.errors[0].message
    assert result.errors[0].value == "50-59 overlaps with 55-100"
    # Overlapping bands stay admitted; the error flags the system as invalid
    assert result.valid_row_count == 3


def test_overlap_is_attributed_to_later_band_in_sorted_order():
    rows = [grade_band(2, 55, 100, "C"), grade_band(3, 0, 49, "F"), grade_band(4, 50, 59, "D")]

    result, _ = validate_rows(GRADING, rows)

    assert fields(result) == [(2, SCORE_RANGE_FIELD)]


def test_touching_ranges_do_not_overlap():
    rows = [grade_band(2, 0, 50, "F"), grade_band(3, 50, 100, "P")]

    result, _ = validate_rows(GRADING, rows)

    assert result.valid


def test_invalid_pass_fail_and_grade_point_do_not_block():
    rows = [grade_band(2, 0, 49, "F", **{"Pass/Fail": "maybe", "Grade Point": -1})]

    result, accepted = validate_rows(GRADING, rows)

    assert fields(result) == [(2, "Grade Point"), (2, "Pass/Fail")]
    assert len(accepted) == 1


def test_check_cell_ignores_blank_optional_values():
    column = STUDENT.column("guardian_email")

    assert check_cell(column, "Guardian Email", None, 2) == []
    assert check_cell(column, "Guardian Email", "  ", 2) == []


def test_matches_choice():
    assert matches_choice("pass", ("Pass", "Fail"))
    assert matches_choice("Senior Teacher", ("senior_teacher",))
    assert not matches_choice("", ("Pass", "Fail"))


def test_errors_for_row_filters_diagnostics():
    rows = [student(2, Grade=13), student(3, Gender="X", **{"Last Name": None})]

    result, _ = validate_rows(STUDENT, rows)

    assert [e.field for e in result.errors_for_row(2)] == ["Grade"]
    assert [e.field for e in result.errors_for_row(3)] == ["Last Name", "Gender"]
    assert result.errors_for_row(4) == []
