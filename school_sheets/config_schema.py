"""Configuration schema and defaults for import/export hosts."""

from typing import Any
import copy
import json
import logging
from pathlib import Path

from .errors import ConfigurationError

DEFAULT_CONFIG: dict[str, Any] = {
    "grading_system_name": "Imported Grading System",
    "error_display_limit": 20,
    "export_date_format": "%Y-%m-%d",
    "column_width": {
        "min": 10,
        "max": 40
    },
    "log_level": "INFO"
}


def get_default_config() -> dict[str, Any]:
    """Return a deep copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


def merge_config(user_config: dict[str, Any]) -> dict[str, Any]:
    """
    Merge user configuration with defaults.

    User config values override defaults. Missing keys use default values.
    """
    result = get_default_config()

    if "column_width" in user_config:
        result["column_width"].update(user_config["column_width"])

    for key in ("grading_system_name", "error_display_limit", "export_date_format", "log_level"):
        if key in user_config:
            result[key] = user_config[key]

    return result


def load_config(config_path: str | Path) -> dict[str, Any]:
    """Load a JSON configuration file and merge it over the defaults."""
    try:
        with open(config_path, "r") as f:
            user_config = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {config_path}: {e}") from e

    if not isinstance(user_config, dict):
        raise ConfigurationError(f"{config_path} must contain a JSON object")

    return merge_config(user_config)


def validate_config(config: dict[str, Any]) -> list[dict[str, str]]:
    """
    Validate configuration and return list of issues.

    Returns:
        List of dicts with 'type' (error/warning) and 'message'.
    """
    issues = []

    limit = config.get("error_display_limit")
    if not isinstance(limit, int) or isinstance(limit, bool) or limit < 1:
        issues.append({
            "type": "error",
            "message": f"error_display_limit must be a positive integer (got {limit!r})"
        })

    widths = config.get("column_width", {})
    width_min = widths.get("min", 0)
    width_max = widths.get("max", 0)
    if width_min > width_max:
        issues.append({
            "type": "error",
            "message": f"column_width min ({width_min}) is larger than max ({width_max})"
        })

    if not str(config.get("grading_system_name", "")).strip():
        issues.append({
            "type": "warning",
            "message": "grading_system_name is empty; imported grading systems will be unnamed"
        })

    level = str(config.get("log_level", "INFO")).upper()
    if not isinstance(logging.getLevelName(level), int):
        issues.append({
            "type": "warning",
            "message": f"Unknown log_level '{level}', falling back to INFO"
        })

    return issues


def ensure_valid(config: dict[str, Any]) -> dict[str, Any]:
    """Raise ConfigurationError if the config has any error-level issue."""
    errors = [i["message"] for i in validate_config(config) if i["type"] == "error"]
    if errors:
        raise ConfigurationError("; ".join(errors))
    return config
