"""Shared test fixtures for text-classifier tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from text_classifier.classifier import train
from text_classifier.models import LabeledExample, NaiveBayesModel

SPORTS_DOCS = [
    "The team won the championship game in overtime",
    "Our striker scored twice and the team won the match",
    "The coach praised the defense after the playoff game",
    "Fans cheered as the team lifted the championship trophy",
]

POLITICS_DOCS = [
    "The election results are in and the senator conceded",
    "Parliament passed the budget after a long debate",
    "The president signed the new healthcare bill into law",
    "Voters turned out in record numbers for the election",
]

TECH_DOCS = [
    "The new smartphone ships with a faster processor",
    "Developers released a security patch for the browser",
    "The startup launched a cloud database service",
    "Engineers improved battery life in the latest laptop",
]


@pytest.fixture
def corpus() -> list[LabeledExample]:
    """Labeled examples covering three categories."""
    return (
        [LabeledExample(text=t, category="sports") for t in SPORTS_DOCS]
        + [LabeledExample(text=t, category="politics") for t in POLITICS_DOCS]
        + [LabeledExample(text=t, category="tech") for t in TECH_DOCS]
    )


@pytest.fixture
def model(corpus: list[LabeledExample]) -> NaiveBayesModel:
    """Model trained on the full corpus."""
    return train(corpus)


@pytest.fixture
def two_doc_examples() -> list[LabeledExample]:
    """Minimal two-category training set."""
    return [
        LabeledExample(text="The team won the game", category="sports"),
        LabeledExample(text="The election results are in", category="politics"),
    ]


@pytest.fixture
def training_csv(tmp_path: Path) -> Path:
    """CSV training file with mixed-case headers and an extra column."""
    lines = ["id,Category,TEXT"]
    for i, text in enumerate(SPORTS_DOCS):
        lines.append(f'{i},sports,"{text}"')
    for i, text in enumerate(POLITICS_DOCS):
        lines.append(f'{i + 10},politics,"{text}"')
    for i, text in enumerate(TECH_DOCS):
        lines.append(f'{i + 20},tech,"{text}"')
    file = tmp_path / "train.csv"
    file.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return file


@pytest.fixture
def texts_csv(tmp_path: Path) -> Path:
    """CSV file with only a text column."""
    file = tmp_path / "input.csv"
    file.write_text(
        "text\n"
        '"The team won the final game"\n'
        '"Senators debated the election law"\n'
        '"A faster processor for the laptop"\n',
        encoding="utf-8",
    )
    return file
