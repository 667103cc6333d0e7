"""Presentation helpers for hosts: DataFrames and truncated error summaries.

The engine always returns the full error list; cutting it down for display
happens here, on the caller side.
"""

from dataclasses import asdict

import pandas as pd

from .models import DomainRecord, ValidationError, ValidationResult

ERROR_COLUMNS = ["row", "field", "message", "value"]


def records_to_frame(records: list[DomainRecord] | tuple[DomainRecord, ...]) -> pd.DataFrame:
    """One row per record, one column per record field."""
    rows = []
    for record in records:
        data = asdict(record)
        for key, value in data.items():
            if isinstance(value, tuple):
                data[key] = ", ".join(value)
        rows.append(data)
    return pd.DataFrame(rows)


def errors_to_frame(errors: list[ValidationError] | tuple[ValidationError, ...]) -> pd.DataFrame:
    return pd.DataFrame([e.to_dict() for e in errors], columns=ERROR_COLUMNS)


def summarize_errors(errors: list[ValidationError] | tuple[ValidationError, ...], limit: int = 20) -> list[str]:
    """
    Format the first ``limit`` errors, plus a '+N more' line when truncated.
    """
    lines = []
    for error in errors[:limit]:
        line = f"Row {error.row}, {error.field}: {error.message}"
        if error.value is not None:
            line += f" (value: {error.value})"
        lines.append(line)

    hidden = len(errors) - limit
    if hidden > 0:
        lines.append(f"+{hidden} more")
    return lines


def result_summary(result: ValidationResult) -> str:
    status = "valid" if result.valid else f"{len(result.errors)} error(s)"
    return f"{result.valid_row_count} of {result.total_row_count} rows can be imported ({status})"
