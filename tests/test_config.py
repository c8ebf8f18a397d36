"""Tests for environment-based settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from text_classifier.config import Settings, load_settings, parse_log_level

_VARS = [
    "TEXT_CLASSIFIER_MODEL_PATH",
    "TEXT_CLASSIFIER_CLASSIFICATIONS_PATH",
    "TEXT_CLASSIFIER_CONFUSION_MATRIX_PATH",
    "TEXT_CLASSIFIER_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path: Path):
    # setenv first so variables loaded from .env files are removed on teardown
    for name in _VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


class TestLoadSettings:
    def test_defaults(self):
        settings = load_settings(dotenv=False)
        assert settings == Settings()
        assert settings.model_path == Path("model.json")
        assert settings.classifications_path == Path("classifications.csv")
        assert settings.confusion_matrix_path == Path("confusion_matrix.csv")
        assert settings.log_level == "WARNING"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("TEXT_CLASSIFIER_MODEL_PATH", "models/news.json")
        monkeypatch.setenv("TEXT_CLASSIFIER_LOG_LEVEL", "debug")
        settings = load_settings(dotenv=False)
        assert settings.model_path == Path("models/news.json")
        assert settings.log_level == "DEBUG"

    def test_dotenv_file(self, tmp_path: Path):
        (tmp_path / ".env").write_text(
            "TEXT_CLASSIFIER_CONFUSION_MATRIX_PATH=reports/cm.csv\n", encoding="utf-8"
        )
        settings = load_settings()
        assert settings.confusion_matrix_path == Path("reports/cm.csv")

    def test_environment_beats_dotenv(self, monkeypatch, tmp_path: Path):
        (tmp_path / ".env").write_text("TEXT_CLASSIFIER_MODEL_PATH=from_file.json\n", encoding="utf-8")
        monkeypatch.setenv("TEXT_CLASSIFIER_MODEL_PATH", "from_env.json")
        assert load_settings().model_path == Path("from_env.json")

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("TEXT_CLASSIFIER_LOG_LEVEL", "LOUD")
        with pytest.raises(ValueError, match="Invalid log level"):
            load_settings(dotenv=False)


class TestParseLogLevel:
    @pytest.mark.parametrize("value,expected", [
        ("info", "INFO"),
        (" Warning ", "WARNING"),
        ("DEBUG", "DEBUG"),
    ])
    def test_valid(self, value, expected):
        assert parse_log_level(value) == expected

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_log_level("verbose")
