"""Model evaluation against labeled test data.

Runs the predictor over each test example and aggregates accuracy, a
confusion matrix (rows are actual categories, columns predicted ones) and
per-category precision and recall.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from rich.markup import escape
from rich.table import Table

from .classifier import predict
from .data import write_rows
from .models import LabeledExample, NaiveBayesModel

logger = logging.getLogger(__name__)

MATRIX_CORNER = "Actual\\Predicted"


@dataclass
class EvaluationReport:
    """Aggregated evaluation results.

    Attributes:
        categories: Row/column labels of the confusion matrix, in model
            order followed by any labels only seen in the test data.
        confusion_matrix: ``{actual: {predicted: count}}`` over
            ``categories``.
        total: Number of test examples.
        correct: Number of examples predicted correctly.
    """

    categories: list[str] = field(default_factory=list)
    confusion_matrix: dict[str, dict[str, int]] = field(default_factory=dict)
    total: int = 0
    correct: int = 0

    @property
    def is_empty(self) -> bool:
        """True when no test examples were evaluated."""
        return self.total == 0

    @property
    def accuracy(self) -> Optional[float]:
        """Fraction of correct predictions, or ``None`` for an empty test set."""
        if self.total == 0:
            return None
        return self.correct / self.total

    @property
    def per_category(self) -> dict[str, dict[str, float]]:
        """Precision, recall and support for each category."""
        cm = self.confusion_matrix
        result: dict[str, dict[str, float]] = {}
        for cat in self.categories:
            tp = cm[cat][cat]
            predicted = sum(cm[actual][cat] for actual in self.categories)
            support = sum(cm[cat].values())
            result[cat] = {
                "precision": tp / predicted if predicted else 0.0,
                "recall": tp / support if support else 0.0,
                "support": support,
            }
        return result

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "correct": self.correct,
            "accuracy": round(self.accuracy, 4) if self.accuracy is not None else None,
            "categories": self.categories,
            "confusion_matrix": self.confusion_matrix,
        }

    def to_rows(self) -> list[list[str]]:
        """Confusion matrix as CSV rows, header first."""
        rows = [[MATRIX_CORNER, *self.categories]]
        for actual in self.categories:
            rows.append(
                [actual, *(str(self.confusion_matrix[actual][p]) for p in self.categories)]
            )
        return rows

    def summary(self) -> str:
        """Human-readable summary of the evaluation."""
        if self.is_empty:
            return "No test examples to evaluate."

        width = max([len(MATRIX_CORNER), *(len(c) for c in self.categories)]) + 2
        lines = [
            f"Accuracy: {self.accuracy:.2%} ({self.correct}/{self.total})",
            "",
            MATRIX_CORNER.ljust(width) + "".join(c.rjust(width) for c in self.categories),
        ]
        for actual in self.categories:
            counts = "".join(
                str(self.confusion_matrix[actual][p]).rjust(width) for p in self.categories
            )
            lines.append(actual.ljust(width) + counts)
        return "\n".join(lines)


def evaluate(
    model: NaiveBayesModel,
    examples: Iterable[LabeledExample],
) -> EvaluationReport:
    """Evaluate *model* on labeled *examples*.

    Only the predicted label of each example is used. An empty prediction
    (untrained model) is counted under the label ``""``.
    """
    categories = list(model.categories)
    pairs: list[tuple[str, str]] = []
    for example in examples:
        prediction = predict(example.text, model)
        predicted = prediction.category if prediction.category is not None else ""
        pairs.append((example.category, predicted))
        for label in (example.category, predicted):
            if label not in categories:
                categories.append(label)

    cm = {actual: {p: 0 for p in categories} for actual in categories}
    correct = 0
    for actual, predicted in pairs:
        cm[actual][predicted] += 1
        if actual == predicted:
            correct += 1

    report = EvaluationReport(
        categories=categories,
        confusion_matrix=cm,
        total=len(pairs),
        correct=correct,
    )
    logger.debug("Evaluated %d example(s), %d correct", report.total, report.correct)
    return report


def write_confusion_matrix(report: EvaluationReport, path: str | Path) -> Path:
    """Write the confusion matrix of *report* as CSV."""
    return write_rows(path, report.to_rows())


def render_confusion_matrix(report: EvaluationReport) -> Table:
    """Build a rich table of the confusion matrix."""
    table = Table(title="Confusion Matrix", show_lines=False)
    table.add_column(MATRIX_CORNER, style="cyan")
    for cat in report.categories:
        table.add_column(escape(cat), justify="right")

    for actual in report.categories:
        cells = []
        for predicted in report.categories:
            count = report.confusion_matrix[actual][predicted]
            style = "bold green" if actual == predicted and count else ""
            cells.append(f"[{style}]{count}[/]" if style else str(count))
        table.add_row(escape(actual), *cells)
    return table
