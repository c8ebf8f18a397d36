"""Exception types raised at the I/O boundary of the classifier.

Training and prediction never raise on well-formed input. Errors only come
from reading or writing files, and from data that does not match the
expected shape.
"""

from __future__ import annotations


class TextClassifierError(Exception):
    """Base class for all errors raised by ``text_classifier``."""


class SchemaError(TextClassifierError, ValueError):
    """Tabular input is missing one or more required columns."""

    def __init__(self, path: str, missing: list[str]) -> None:
        self.path = path
        self.missing = missing
        columns = ", ".join(f"'{name}'" for name in missing)
        super().__init__(f"{path}: CSV header must contain {columns} column(s)")


class DataFileError(TextClassifierError, OSError):
    """A data or model file could not be read or written."""


class ModelFormatError(TextClassifierError, ValueError):
    """A persisted model is not valid JSON or violates model invariants."""
