"""Stateless value-coercion helpers for spreadsheet cells.

Every function here accepts whatever openpyxl hands back for a cell
(str, int, float, datetime, date or None) and never raises.
"""

import re
from datetime import date, datetime
from typing import Any

import pandas as pd
from openpyxl.utils.datetime import from_excel

from .models import is_blank

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
DMY_DATE_PATTERN = re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$")
DATE_SEPARATOR_PATTERN = re.compile(r"[-/.,\s]")

GENDER_CODES = {"M": "M", "MALE": "M", "F": "F", "FEMALE": "F"}
PASS_FAIL_VALUES = {"PASS": "Pass", "FAIL": "Fail"}


def clean_text(value: Any) -> str:
    """Render a cell as trimmed text; whole-number floats lose their '.0'."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip()


def normalize_gender(value: Any) -> str:
    """Map M/Male and F/Female (any case) to 'M'/'F'.

    Unrecognized input falls back to 'M'. Callers that need to reject bad
    values check ``gender_code`` first.
    """
    return gender_code(value) or "M"


def gender_code(value: Any) -> str | None:
    return GENDER_CODES.get(clean_text(value).upper())


def normalize_role(value: Any) -> str:
    """'Head Teacher', 'head-teacher' and 'HEAD_TEACHER' all become 'head_teacher'."""
    text = clean_text(value).lower()
    return re.sub(r"[\s\-]+", "_", text)


def normalize_pass_fail(value: Any) -> str:
    if is_blank(value):
        return "Pass"
    return PASS_FAIL_VALUES.get(clean_text(value).upper(), "Pass")


def normalize_letter_grade(value: Any) -> str:
    return clean_text(value).upper()


def is_valid_email(value: Any) -> bool:
    """Syntactic check only; says nothing about deliverability."""
    if is_blank(value):
        return False
    return EMAIL_PATTERN.match(clean_text(value)) is not None


def parse_int(value: Any) -> int | None:
    """Parse a whole number from 5, 5.0 or '5'. Returns None otherwise."""
    number = parse_number(value)
    if number is None or not float(number).is_integer():
        return None
    return int(number)


def parse_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return None
    if number != number or number in (float("inf"), float("-inf")):
        return None
    return number


def parse_optional_number(value: Any) -> float | None:
    if is_blank(value):
        return None
    return parse_number(value)


def split_list(value: Any) -> tuple[str, ...]:
    """Split a comma-separated cell into trimmed, non-empty items."""
    text = clean_text(value)
    if not text:
        return ()
    return tuple(part.strip() for part in text.split(",") if part.strip())


def parse_date(value: Any) -> str:
    """
    Normalize a date cell to an ISO 'YYYY-MM-DD' string.

    Accepts ISO strings, DD/MM/YYYY strings, native numeric date serials,
    datetime/date objects and, as a last resort, anything pandas can parse.

    Returns:
        The ISO date, or an empty string when the value cannot be read.
    """
    if is_blank(value) or isinstance(value, bool):
        return ""

    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    if isinstance(value, (int, float)):
        return _from_serial(value)

    text = str(value).strip()

    if ISO_DATE_PATTERN.match(text):
        try:
            date.fromisoformat(text)
        except ValueError:
            return ""
        return text

    if DMY_DATE_PATTERN.match(text):
        try:
            return datetime.strptime(text, "%d/%m/%Y").date().isoformat()
        except ValueError:
            return ""

    # A bare number such as "2010" is not a date
    if not DATE_SEPARATOR_PATTERN.search(text):
        return ""

    try:
        parsed = pd.to_datetime(text, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return ""
    if pd.isna(parsed):
        return ""
    return parsed.date().isoformat()


def _from_serial(serial: float) -> str:
    # Values below 1 are pure times of day in the 1900 date system
    if serial < 1:
        return ""
    try:
        converted = from_excel(serial)
    except (ValueError, OverflowError):
        return ""
    if isinstance(converted, datetime):
        return converted.date().isoformat()
    return ""


def parse_date_or_today(value: Any) -> str:
    return parse_date(value) or date.today().isoformat()
