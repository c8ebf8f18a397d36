"""Data models for the Naive Bayes text classifier."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .exceptions import ModelFormatError

DEFAULT_SMOOTHING = 1.0
MODEL_FORMAT_VERSION = "1.0"


@dataclass(frozen=True)
class LabeledExample:
    """A single training or test example."""

    text: str
    category: str


@dataclass
class NaiveBayesModel:
    """Trained state of a multinomial Naive Bayes classifier.

    A model is built in one go by :func:`text_classifier.classifier.train`
    and is not modified afterwards; retraining produces a new instance.

    Attributes:
        categories: Category labels in first-seen training order. The order
            breaks ties between equally likely categories.
        category_document_counts: Number of training documents per category.
        word_counts: Per-category token occurrence counts.
        vocabulary: Token occurrence counts across all categories. Only the
            number of distinct tokens is used for smoothing.
        total_words_per_category: Sum of each category's ``word_counts``.
        total_documents: Number of training documents.
        smoothing: Additive (Laplace) smoothing constant.
    """

    categories: list[str] = field(default_factory=list)
    category_document_counts: dict[str, int] = field(default_factory=dict)
    word_counts: dict[str, dict[str, int]] = field(default_factory=dict, repr=False)
    vocabulary: dict[str, int] = field(default_factory=dict, repr=False)
    total_words_per_category: dict[str, int] = field(default_factory=dict)
    total_documents: int = 0
    smoothing: float = DEFAULT_SMOOTHING

    @property
    def vocabulary_size(self) -> int:
        """Number of distinct tokens seen during training."""
        return len(self.vocabulary)

    @property
    def is_trained(self) -> bool:
        """Whether the model can produce a prediction."""
        return self.total_documents > 0 and bool(self.categories)

    def prior(self, category: str) -> float:
        """Fraction of training documents labeled *category*."""
        if self.total_documents == 0:
            return 0.0
        return self.category_document_counts.get(category, 0) / self.total_documents

    def validate(self) -> None:
        """Check the structural invariants of the model.

        Raises:
            ModelFormatError: If any count is inconsistent.
        """
        if len(set(self.categories)) != len(self.categories):
            raise ModelFormatError("duplicate category labels")

        expected = set(self.categories)
        for name in ("category_document_counts", "word_counts", "total_words_per_category"):
            keys = set(getattr(self, name))
            if keys != expected:
                raise ModelFormatError(
                    f"{name} keys {sorted(keys)} do not match categories {sorted(expected)}"
                )

        for category in self.categories:
            if self.category_document_counts[category] <= 0:
                raise ModelFormatError(
                    f"category '{category}' has "
                    f"{self.category_document_counts[category]} documents"
                )
            if any(count < 0 for count in self.word_counts[category].values()):
                raise ModelFormatError(f"negative word count in '{category}'")
            total = sum(self.word_counts[category].values())
            if total != self.total_words_per_category[category]:
                raise ModelFormatError(
                    f"total words for '{category}' is "
                    f"{self.total_words_per_category[category]}, counted {total}"
                )

        documents = sum(self.category_document_counts.values())
        if documents != self.total_documents:
            raise ModelFormatError(
                f"total_documents is {self.total_documents}, counted {documents}"
            )

        if any(count < 0 for count in self.vocabulary.values()):
            raise ModelFormatError("negative vocabulary count")

        if self.smoothing <= 0:
            raise ModelFormatError(f"smoothing must be positive, got {self.smoothing}")

    def to_dict(self) -> dict[str, Any]:
        """Serialize the model to a JSON-compatible dictionary."""
        return {
            "version": MODEL_FORMAT_VERSION,
            "categories": list(self.categories),
            "category_counts": dict(self.category_document_counts),
            "word_counts": {c: dict(words) for c, words in self.word_counts.items()},
            "vocabulary": dict(self.vocabulary),
            "total_words": dict(self.total_words_per_category),
            "total_documents": self.total_documents,
            "smoothing": self.smoothing,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NaiveBayesModel":
        """Rebuild a model from :meth:`to_dict` output.

        Raises:
            ModelFormatError: If a required key is missing or has the
                wrong shape.
        """
        if not isinstance(data, dict):
            raise ModelFormatError("model data must be a JSON object")

        try:
            categories = [str(c) for c in data["categories"]]
            model = cls(
                categories=categories,
                category_document_counts={
                    str(c): int(n) for c, n in data["category_counts"].items()
                },
                word_counts={
                    str(c): {str(tok): int(n) for tok, n in words.items()}
                    for c, words in data["word_counts"].items()
                },
                vocabulary={str(tok): int(n) for tok, n in data["vocabulary"].items()},
                total_words_per_category={
                    str(c): int(n) for c, n in data["total_words"].items()
                },
                total_documents=int(data["total_documents"]),
                smoothing=float(data.get("smoothing", DEFAULT_SMOOTHING)),
            )
        except KeyError as exc:
            raise ModelFormatError(f"missing model field {exc}") from exc
        except (AttributeError, TypeError, ValueError) as exc:
            raise ModelFormatError(f"malformed model field: {exc}") from exc

        return model


@dataclass(frozen=True)
class Prediction:
    """Outcome of classifying one text.

    ``category`` is ``None`` (and ``probabilities`` empty) when the model
    has not been trained on any documents.
    """

    category: Optional[str]
    probabilities: dict[str, float] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        """True when no prediction was possible."""
        return self.category is None

    @property
    def confidence(self) -> float:
        """Probability assigned to the predicted category."""
        if self.category is None:
            return 0.0
        return self.probabilities.get(self.category, 0.0)

    def ranked(self) -> list[tuple[str, float]]:
        """Category/probability pairs, most probable first."""
        return sorted(self.probabilities.items(), key=lambda x: x[1], reverse=True)

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "confidence": round(self.confidence, 4),
            "probabilities": {k: round(v, 4) for k, v in self.ranked()},
        }


@dataclass(frozen=True)
class ClassificationRecord:
    """One row of batch classification output."""

    text: str
    predicted_category: str
    confidence: float

    def to_row(self) -> list[str]:
        return [self.text, self.predicted_category, f"{self.confidence:.4f}"]
