"""CSV input and output.

Training and test files need a header with ``category`` and ``text``
columns; files to classify need only ``text``. Header names are matched
case-insensitively and may appear in any order alongside other columns.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable
from pathlib import Path

from .exceptions import DataFileError, SchemaError
from .models import ClassificationRecord, LabeledExample

logger = logging.getLogger(__name__)

CLASSIFICATION_HEADER = ["text", "predicted_category", "confidence"]


def _read_rows(path: Path) -> tuple[list[str], list[list[str]]]:
    """Return the header and data rows of a CSV file."""
    try:
        # utf-8-sig drops a leading BOM written by spreadsheet tools
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            rows = list(csv.reader(f))
    except (OSError, UnicodeDecodeError) as exc:
        raise DataFileError(f"Cannot read {path}: {exc}") from exc
    except csv.Error as exc:
        raise DataFileError(f"Malformed CSV in {path}: {exc}") from exc

    if not rows:
        return [], []
    return rows[0], rows[1:]


def _column_indices(header: list[str], path: Path, required: list[str]) -> list[int]:
    """Map each required column to its index; a repeated name uses the last occurrence."""
    positions = {name.strip().lower(): i for i, name in enumerate(header)}
    missing = [name for name in required if name not in positions]
    if missing:
        raise SchemaError(str(path), missing)
    return [positions[name] for name in required]


def load_training_data(path: str | Path) -> list[LabeledExample]:
    """Load labeled examples from a CSV file.

    Rows too short to hold both columns are skipped.

    Raises:
        SchemaError: If the header lacks ``category`` or ``text``.
        DataFileError: If the file cannot be read.
    """
    path = Path(path)
    header, rows = _read_rows(path)
    category_idx, text_idx = _column_indices(header, path, ["category", "text"])
    needed = max(category_idx, text_idx)

    examples = []
    skipped = 0
    for row in rows:
        if len(row) <= needed:
            skipped += 1
            continue
        examples.append(LabeledExample(text=row[text_idx], category=row[category_idx]))

    if skipped:
        logger.debug("Skipped %d short row(s) in %s", skipped, path)
    logger.info("Loaded %d labeled example(s) from %s", len(examples), path)
    return examples


def load_texts(path: str | Path) -> list[str]:
    """Load the ``text`` column of a CSV file.

    Raises:
        SchemaError: If the header lacks ``text``.
        DataFileError: If the file cannot be read.
    """
    path = Path(path)
    header, rows = _read_rows(path)
    (text_idx,) = _column_indices(header, path, ["text"])

    texts = [row[text_idx] for row in rows if len(row) > text_idx]
    logger.info("Loaded %d text(s) from %s", len(texts), path)
    return texts


def write_classifications(
    path: str | Path,
    records: Iterable[ClassificationRecord],
) -> Path:
    """Write batch classification results to a CSV file.

    Raises:
        DataFileError: If the file cannot be written.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(CLASSIFICATION_HEADER)
            for record in records:
                writer.writerow(record.to_row())
    except OSError as exc:
        raise DataFileError(f"Cannot write {path}: {exc}") from exc
    return path


def write_rows(path: str | Path, rows: Iterable[list[str]]) -> Path:
    """Write arbitrary rows to a CSV file.

    Raises:
        DataFileError: If the file cannot be written.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            csv.writer(f).writerows(rows)
    except OSError as exc:
        raise DataFileError(f"Cannot write {path}: {exc}") from exc
    return path
