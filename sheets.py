#!/usr/bin/env python3
"""
School Sheets command line

Writes import templates, checks filled-in workbooks and re-exports the rows
that pass validation.

Usage:
    python sheets.py template student -o templates/
    python sheets.py validate student students.xlsx
    python sheets.py clean grading grades.xlsx -o grading_clean.xlsx
"""

import argparse
import logging
import sys
from pathlib import Path

from school_sheets import ConfigurationError, SheetError, get_default_config, load_config
from school_sheets.config_schema import ensure_valid
from school_sheets.engine import export_records, import_file
from school_sheets.reporting import result_summary, summarize_errors
from school_sheets.templates import generate_template

ENTITY_CHOICES = ["student", "class", "teacher", "grading"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="school-sheets", description="Import templates and workbook checks for school records.")
    parser.add_argument("--config", help="JSON configuration file")
    parser.add_argument("-v", "--verbose", action="store_true", help="log per-row decisions")
    sub = parser.add_subparsers(dest="command", required=True)

    template = sub.add_parser("template", help="write an import template")
    template.add_argument("entity", choices=ENTITY_CHOICES)
    template.add_argument("-o", "--output-dir", default=".")

    validate = sub.add_parser("validate", help="check a workbook without importing it")
    validate.add_argument("entity", choices=ENTITY_CHOICES)
    validate.add_argument("file")

    clean = sub.add_parser("clean", help="re-export only the rows that pass validation")
    clean.add_argument("entity", choices=ENTITY_CHOICES)
    clean.add_argument("file")
    clean.add_argument("-o", "--output", help="output path (default: <entity>_<date>.xlsx)")

    return parser


def configure_logging(config: dict, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, str(config["log_level"]).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def cmd_template(args, config: dict) -> int:
    filename, data = generate_template(args.entity, widths=config["column_width"])
    output_path = Path(args.output_dir) / filename
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(data)
    print(f"✓ Saved template to {output_path}")
    return 0


def print_validation(result, config: dict) -> None:
    validation = result.validation
    print(f"📋 {result_summary(validation)}")
    for line in summarize_errors(validation.errors, config["error_display_limit"]):
        print(f"   {line}")


def cmd_validate(args, config: dict) -> int:
    result = import_file(args.file, args.entity)
    print_validation(result, config)
    return 0 if result.validation.valid else 1


def cmd_clean(args, config: dict) -> int:
    result = import_file(args.file, args.entity)
    print_validation(result, config)

    if not result.records:
        print("❌ No valid rows to export")
        return 1

    filename, data = export_records(result.records, result.entity_type, config=config)
    output_path = Path(args.output or filename)
    output_path.write_bytes(data)
    print(f"✓ Saved {len(result.records)} record(s) to {output_path}")
    return 0


COMMANDS = {
    "template": cmd_template,
    "validate": cmd_validate,
    "clean": cmd_clean,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else get_default_config()
        ensure_valid(config)
    except (ConfigurationError, OSError) as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 2

    configure_logging(config, args.verbose)

    try:
        return COMMANDS[args.command](args, config)
    except FileNotFoundError as e:
        print(f"❌ Error: {e.filename} not found!", file=sys.stderr)
        return 2
    except SheetError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        print("   Check that the file is an .xlsx workbook and try again.", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
