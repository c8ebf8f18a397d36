"""Multinomial Naive Bayes training and inference.

Provides the statistical core of the package in pure Python:

- :func:`train` counts tokens per category and builds a new model
- :func:`predict` scores a text against a model with Laplace smoothing and
  converts the log scores into a probability distribution
- :func:`classify_texts` runs :func:`predict` over a batch of texts
- :class:`NaiveBayesClassifier` holds a model for long-lived use and adds
  persistence and feature inspection

The score of category ``c`` for tokens ``t1..tn`` is::

    log P(c) + sum_i log((count(c, ti) + s) / (total(c) + |V| * s))

where ``|V|`` is the number of distinct tokens seen in training and ``s``
the smoothing constant.
"""

from __future__ import annotations

import logging
import math
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import Optional, Union

from .models import (
    ClassificationRecord,
    LabeledExample,
    NaiveBayesModel,
    Prediction,
)
from .persistence import load_model, save_model
from .preprocessing import tokenize

logger = logging.getLogger(__name__)

ExampleLike = Union[LabeledExample, tuple[str, str]]


def _as_example(item: ExampleLike) -> LabeledExample:
    if isinstance(item, LabeledExample):
        return item
    text, category = item
    return LabeledExample(text=text, category=category)


# ---------------------------------------------------------------------------
# Training
# ---------------------------------------------------------------------------


def train(examples: Iterable[ExampleLike]) -> NaiveBayesModel:
    """Build a model from labeled examples.

    Args:
        examples: ``LabeledExample`` objects or ``(text, category)`` tuples.

    Returns:
        A new, fully populated model. Training on no examples returns an
        empty model that yields empty predictions.
    """
    data = [_as_example(item) for item in examples]
    model = NaiveBayesModel()

    for example in data:
        if example.category not in model.category_document_counts:
            model.categories.append(example.category)
            model.category_document_counts[example.category] = 0
            model.word_counts[example.category] = {}
            model.total_words_per_category[example.category] = 0

    model.total_documents = len(data)

    for example in data:
        category = example.category
        model.category_document_counts[category] += 1
        counts = model.word_counts[category]
        for token in tokenize(example.text):
            counts[token] = counts.get(token, 0) + 1
            model.total_words_per_category[category] += 1
            model.vocabulary[token] = model.vocabulary.get(token, 0) + 1

    logger.debug(
        "Trained on %d documents: categories=%s vocabulary=%d",
        model.total_documents,
        model.categories,
        model.vocabulary_size,
    )
    return model


# ---------------------------------------------------------------------------
# Inference
# ---------------------------------------------------------------------------


def log_scores(text: str, model: NaiveBayesModel) -> dict[str, float]:
    """Compute the unnormalized log posterior of each category.

    Returns an empty dict for an untrained model.
    """
    if not model.is_trained:
        return {}

    tokens = tokenize(text)
    smoothing = model.smoothing
    vocab_term = model.vocabulary_size * smoothing

    scores: dict[str, float] = {}
    for category in model.categories:
        score = math.log(
            model.category_document_counts[category] / model.total_documents
        )
        counts = model.word_counts[category]
        denominator = model.total_words_per_category[category] + vocab_term
        for token in tokens:
            score += math.log((counts.get(token, 0) + smoothing) / denominator)
        scores[category] = score
    return scores


def predict(text: str, model: NaiveBayesModel) -> Prediction:
    """Classify *text* against *model*.

    The category with the strictly highest log score wins; on a tie the
    category seen first during training is kept. Probabilities are the
    log scores shifted by their maximum, exponentiated, and normalized to
    sum to one.

    Returns:
        A ``Prediction``. For an untrained model the prediction is empty
        (``category is None``) rather than an error.
    """
    scores = log_scores(text, model)
    if not scores:
        return Prediction(category=None, probabilities={})

    best_category: Optional[str] = None
    best_score = -math.inf
    for category, score in scores.items():
        if best_category is None or score > best_score:
            best_category = category
            best_score = score

    # Log-sum-exp shift
    max_score = max(scores.values())
    exp_scores = {c: math.exp(s - max_score) for c, s in scores.items()}
    total = sum(exp_scores.values())
    probabilities = {c: v / total for c, v in exp_scores.items()}

    return Prediction(category=best_category, probabilities=probabilities)


def classify_texts(
    texts: Iterable[str],
    model: NaiveBayesModel,
) -> list[ClassificationRecord]:
    """Predict a category for each text.

    Untrained models produce records with an empty category and zero
    confidence.
    """
    records = []
    for text in texts:
        prediction = predict(text, model)
        records.append(
            ClassificationRecord(
                text=text,
                predicted_category=prediction.category or "",
                confidence=prediction.confidence,
            )
        )
    return records


def summarize_records(
    records: list[ClassificationRecord],
) -> tuple[dict[str, int], float]:
    """Return per-category counts (first-seen order) and mean confidence."""
    counts: dict[str, int] = {}
    for record in records:
        counts[record.predicted_category] = counts.get(record.predicted_category, 0) + 1
    mean_confidence = (
        sum(r.confidence for r in records) / len(records) if records else 0.0
    )
    return counts, mean_confidence


# ---------------------------------------------------------------------------
# High-level classifier
# ---------------------------------------------------------------------------


class NaiveBayesClassifier:
    """Thread-safe holder for a trained model.

    Any number of threads may call :meth:`predict` while another retrains;
    readers keep using the previous model until the new one is published.

    Example::

        classifier = NaiveBayesClassifier()
        classifier.train([("The team won the game", "sports")])

        prediction = classifier.predict("a close game")
        print(prediction.category)     # "sports"
        print(prediction.confidence)   # 1.0

        classifier.save("model.json")
        loaded = NaiveBayesClassifier.load("model.json")

    Args:
        model: An already trained model (optional).
    """

    def __init__(self, model: Optional[NaiveBayesModel] = None) -> None:
        self._model = model if model is not None else NaiveBayesModel()
        self._write_lock = threading.Lock()

    @property
    def model(self) -> NaiveBayesModel:
        """The current model."""
        return self._model

    @property
    def is_trained(self) -> bool:
        return self._model.is_trained

    @property
    def categories(self) -> list[str]:
        return list(self._model.categories)

    def train(self, examples: Iterable[ExampleLike]) -> NaiveBayesModel:
        """Train a new model and replace the current one."""
        with self._write_lock:
            model = train(examples)
            self._model = model
        return model

    def predict(self, text: str) -> Prediction:
        return predict(text, self._model)

    def classify_batch(self, texts: Iterable[str]) -> list[ClassificationRecord]:
        return classify_texts(texts, self._model)

    def most_informative_tokens(
        self,
        category: str,
        top_n: int = 20,
    ) -> list[tuple[str, float]]:
        """Return the tokens most indicative of *category*.

        Scores each vocabulary token by its smoothed log likelihood under
        *category* minus the mean log likelihood under the other
        categories.

        Raises:
            ValueError: If *category* is not a known category.
        """
        model = self._model
        if category not in model.categories:
            raise ValueError(f"Unknown category: {category}. Known: {model.categories}")

        smoothing = model.smoothing
        vocab_term = model.vocabulary_size * smoothing

        def token_log_prob(cat: str, token: str) -> float:
            count = model.word_counts[cat].get(token, 0)
            return math.log(
                (count + smoothing) / (model.total_words_per_category[cat] + vocab_term)
            )

        others = [c for c in model.categories if c != category]
        ranked: list[tuple[str, float]] = []
        for token in model.vocabulary:
            score = token_log_prob(category, token)
            if others:
                score -= sum(token_log_prob(c, token) for c in others) / len(others)
            ranked.append((token, round(score, 4)))

        ranked.sort(key=lambda x: x[1], reverse=True)
        return ranked[:top_n]

    def save(self, path: str | Path) -> Path:
        """Persist the current model as JSON."""
        return save_model(self._model, path)

    @classmethod
    def load(cls, path: str | Path) -> "NaiveBayesClassifier":
        """Load a classifier from a model file written by :meth:`save`."""
        return cls(load_model(path))
