"""Text Classifier -- multinomial Naive Bayes text categorization."""

__version__ = "1.0.0"

from .classifier import (
    NaiveBayesClassifier,
    classify_texts,
    log_scores,
    predict,
    summarize_records,
    train,
)
from .evaluation import EvaluationReport, evaluate
from .exceptions import (
    DataFileError,
    ModelFormatError,
    SchemaError,
    TextClassifierError,
)
from .models import (
    ClassificationRecord,
    LabeledExample,
    NaiveBayesModel,
    Prediction,
)
from .persistence import load_model, save_model
from .preprocessing import STOP_WORDS, TextPreprocessor, tokenize

__all__ = [
    # Core
    "NaiveBayesClassifier",
    "NaiveBayesModel",
    "train",
    "predict",
    "log_scores",
    # Preprocessing
    "TextPreprocessor",
    "tokenize",
    "STOP_WORDS",
    # Data types
    "LabeledExample",
    "Prediction",
    "ClassificationRecord",
    # Batch classification
    "classify_texts",
    "summarize_records",
    # Evaluation
    "EvaluationReport",
    "evaluate",
    # Persistence
    "save_model",
    "load_model",
    # Errors
    "TextClassifierError",
    "SchemaError",
    "DataFileError",
    "ModelFormatError",
]
