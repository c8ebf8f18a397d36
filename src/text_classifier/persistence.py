"""JSON persistence for trained models.

Models are written to a temporary file next to the destination and then
moved into place, so a reader never sees a partially written model.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from .exceptions import DataFileError, ModelFormatError
from .models import NaiveBayesModel

logger = logging.getLogger(__name__)


def save_model(model: NaiveBayesModel, path: str | Path) -> Path:
    """Write *model* to *path* as indented JSON.

    Args:
        model: The model to persist.
        path: Destination file. Parent directories are created.

    Returns:
        The destination path.

    Raises:
        DataFileError: If the file cannot be written.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(model.to_dict(), f, indent=2)
                f.write("\n")
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as exc:
        raise DataFileError(f"Cannot write model to {path}: {exc}") from exc

    logger.info(
        "Saved model to %s (%d categories, %d tokens)",
        path,
        len(model.categories),
        model.vocabulary_size,
    )
    return path


def load_model(path: str | Path) -> NaiveBayesModel:
    """Load and validate a model written by :func:`save_model`.

    Raises:
        DataFileError: If the file cannot be read.
        ModelFormatError: If the content is not a valid model.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise ModelFormatError(f"{path} is not valid JSON: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise ModelFormatError(f"Cannot read {path} as UTF-8: {exc}") from exc
    except OSError as exc:
        raise DataFileError(f"Cannot read model from {path}: {exc}") from exc

    model = NaiveBayesModel.from_dict(data)
    model.validate()
    logger.info("Loaded model from %s (%d documents)", path, model.total_documents)
    return model
