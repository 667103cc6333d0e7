# tests/test_cli.py

import json

import sheets
from school_sheets.engine import import_file


def test_template_command_writes_file(tmp_path, capsys):
    exit_code = sheets.main(["template", "teacher", "-o", str(tmp_path)])

    assert exit_code == 0
    assert (tmp_path / "teacher_import_template.xlsx").exists()
    assert "Saved template" in capsys.readouterr().out


def test_validate_command_reports_errors(tmp_path, capsys, make_workbook, make_student_row, student_headers):
    path = tmp_path / "students.xlsx"
    path.write_bytes(make_workbook(student_headers, [make_student_row(), make_student_row(Grade=13)]))

    exit_code = sheets.main(["validate", "student", str(path)])

    out = capsys.readouterr().out
    assert exit_code == 1
    assert "1 of 2 rows can be imported" in out
    assert "Row 3, Grade" in out


def test_validate_command_respects_display_limit(tmp_path, capsys, make_workbook, make_student_row, student_headers):
    path = tmp_path / "students.xlsx"
    rows = [make_student_row(**{"First Name": None}) for _ in range(4)]
    path.write_bytes(make_workbook(student_headers, rows))
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"error_display_limit": 2}))

    sheets.main(["--config", str(config_path), "validate", "student", str(path)])

    assert "+2 more" in capsys.readouterr().out


def test_clean_command_exports_valid_rows(tmp_path, make_workbook, make_student_row, student_headers):
    source = tmp_path / "students.xlsx"
    source.write_bytes(make_workbook(student_headers, [make_student_row(), make_student_row(Gender="X")]))
    output = tmp_path / "clean.xlsx"

    exit_code = sheets.main(["clean", "student", str(source), "-o", str(output)])

    result = import_file(output, "student")
    assert exit_code == 0
    assert result.validation.valid
    assert result.validation.total_row_count == 1


def test_unreadable_file_exits_with_error(tmp_path, capsys):
    path = tmp_path / "students.xlsx"
    path.write_bytes(b"not a workbook")

    exit_code = sheets.main(["validate", "student", str(path)])

    assert exit_code == 2
    assert "Failed to parse Excel file" in capsys.readouterr().err


def test_missing_file_exits_with_error(tmp_path, capsys):
    exit_code = sheets.main(["validate", "class", str(tmp_path / "nope.xlsx")])

    assert exit_code == 2
    assert "not found" in capsys.readouterr().err
