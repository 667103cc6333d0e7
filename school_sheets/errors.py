"""Exceptions raised for structural failures.

Row-level data problems are never raised; they are collected as
``ValidationError`` records in a ``ValidationResult``.
"""


class SheetError(Exception):
    """Base class for all engine failures."""


class ConfigurationError(SheetError):
    """Unknown entity type or an unusable configuration."""


class ParseError(SheetError):
    """The supplied bytes are not a readable workbook."""
