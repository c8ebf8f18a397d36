"""Runtime settings read from the environment.

A ``.env`` file in the working directory is loaded first, so defaults can
be set per project without exporting variables::

    TEXT_CLASSIFIER_MODEL_PATH=models/news.json
    TEXT_CLASSIFIER_LOG_LEVEL=INFO
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "TEXT_CLASSIFIER_"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class Settings:
    """Default file locations and log level used by the CLI."""

    model_path: Path = Path("model.json")
    classifications_path: Path = Path("classifications.csv")
    confusion_matrix_path: Path = Path("confusion_matrix.csv")
    log_level: str = "WARNING"


def parse_log_level(value: str) -> str:
    """Normalize a log level name.

    Raises:
        ValueError: If *value* is not a standard level name.
    """
    level = value.strip().upper()
    if level not in _LOG_LEVELS:
        raise ValueError(f"Invalid log level '{value}'. Choose from: {', '.join(_LOG_LEVELS)}")
    return level


def load_settings(dotenv: bool = True) -> Settings:
    """Build settings from ``TEXT_CLASSIFIER_*`` environment variables.

    Args:
        dotenv: Load a ``.env`` file before reading the environment.
            Variables already set in the environment take precedence.
    """
    if dotenv:
        load_dotenv(find_dotenv(usecwd=True))

    defaults = Settings()

    def get(name: str, default: object) -> str:
        return os.getenv(f"{ENV_PREFIX}{name}", str(default))

    return Settings(
        model_path=Path(get("MODEL_PATH", defaults.model_path)),
        classifications_path=Path(get("CLASSIFICATIONS_PATH", defaults.classifications_path)),
        confusion_matrix_path=Path(get("CONFUSION_MATRIX_PATH", defaults.confusion_matrix_path)),
        log_level=parse_log_level(get("LOG_LEVEL", defaults.log_level)),
    )
