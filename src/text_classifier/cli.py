"""Command-line interface for the Naive Bayes text classifier.

Provides ``train``, ``predict``, ``interactive``, and ``classify`` commands
with rich terminal output using the ``click`` and ``rich`` libraries.

Usage::

    text-classifier train training_data.csv model.json
    text-classifier predict model.json test_data.csv
    text-classifier interactive model.json
    text-classifier classify model.json input.csv classifications.csv
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .classifier import NaiveBayesClassifier, summarize_records
from .config import Settings, load_settings, parse_log_level
from .data import load_texts, load_training_data, write_classifications
from .evaluation import evaluate, render_confusion_matrix, write_confusion_matrix
from .exceptions import TextClassifierError
from .interactive import run_interactive

console = Console()


def _configure_logging(level: str) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _fail(message: str) -> NoReturn:
    console.print(f"[bold red]Error:[/] {escape(message)}", soft_wrap=True)
    sys.exit(1)


def _load_classifier(model_file: Path) -> NaiveBayesClassifier:
    try:
        classifier = NaiveBayesClassifier.load(model_file)
    except TextClassifierError as e:
        _fail(str(e))
    console.print(f"[dim]Model loaded from {escape(str(model_file))}[/]")
    return classifier


def _require_trained(classifier: NaiveBayesClassifier) -> None:
    if not classifier.is_trained:
        _fail("Model has no training data; no prediction possible.")


@click.group()
@click.version_option(package_name="text-classifier")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option("--log-level", default=None, help="Log level (overrides TEXT_CLASSIFIER_LOG_LEVEL).")
@click.pass_context
def main(ctx: click.Context, verbose: bool, log_level: Optional[str]) -> None:
    """Naive Bayes text classifier.

    Train a model from labeled CSV data, evaluate it, and classify new
    text interactively or in batch.
    """
    try:
        settings = load_settings()
        level = "DEBUG" if verbose else parse_log_level(log_level or settings.log_level)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--log-level") from e

    _configure_logging(level)
    ctx.obj = settings


@main.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("model_out", type=click.Path(dir_okay=False, path_type=Path), required=False)
@click.option("--show-features", "-f", type=int, default=0,
              help="Show the N most informative tokens per category.")
@click.pass_obj
def train(settings: Settings, input_file: Path, model_out: Optional[Path], show_features: int) -> None:
    """Train a model from a CSV file with 'category' and 'text' columns.

    Example: text-classifier train training_data.csv model.json
    """
    model_out = model_out or settings.model_path

    console.print(f"Loading training data from {escape(str(input_file))}...")
    try:
        examples = load_training_data(input_file)
    except TextClassifierError as e:
        _fail(str(e))

    if not examples:
        _fail("No training data found")
    console.print(f"Loaded {len(examples)} training examples")

    classifier = NaiveBayesClassifier()
    with console.status("[bold blue]Training model...", spinner="dots"):
        model = classifier.train(examples)

    console.print(Panel(
        f"Categories: {escape(', '.join(model.categories))}\n"
        f"Total documents: {model.total_documents}\n"
        f"Vocabulary size: {model.vocabulary_size}",
        title="Training completed",
        border_style="blue",
    ))

    if show_features > 0:
        _render_features(classifier, show_features)

    try:
        classifier.save(model_out)
    except TextClassifierError as e:
        _fail(str(e))
    console.print(f"Model saved to {escape(str(model_out))}")


@main.command()
@click.argument("model_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("test_input", type=click.Path(exists=True, dir_okay=False, path_type=Path),
                required=False)
@click.option("--matrix-out", "-m", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Where to write the confusion matrix CSV.")
@click.pass_obj
def predict(
    settings: Settings,
    model_file: Path,
    test_input: Optional[Path],
    matrix_out: Optional[Path],
) -> None:
    """Evaluate a model on labeled test data, or classify interactively.

    Example: text-classifier predict model.json test_data.csv
    """
    classifier = _load_classifier(model_file)

    if test_input is None:
        run_interactive(classifier, console=console)
        return

    try:
        examples = load_training_data(test_input)
    except TextClassifierError as e:
        _fail(str(e))
    _require_trained(classifier)

    console.print("\nEvaluating model...")
    report = evaluate(classifier.model, examples)
    if report.is_empty:
        console.print("[yellow]No test examples to evaluate.[/]")
        return

    console.print(
        f"Accuracy: [bold]{report.accuracy:.2%}[/] ({report.correct}/{report.total})"
    )
    console.print()
    console.print(render_confusion_matrix(report))

    matrix_out = matrix_out or settings.confusion_matrix_path
    try:
        write_confusion_matrix(report, matrix_out)
    except TextClassifierError as e:
        _fail(str(e))
    console.print(f"\nConfusion matrix saved to {escape(str(matrix_out))}")


@main.command()
@click.argument("model_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def interactive(model_file: Path) -> None:
    """Classify text typed at the prompt.

    Example: text-classifier interactive model.json
    """
    classifier = _load_classifier(model_file)
    run_interactive(classifier, console=console)


@main.command()
@click.argument("model_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("output_file", type=click.Path(dir_okay=False, path_type=Path), required=False)
@click.pass_obj
def classify(
    settings: Settings,
    model_file: Path,
    input_file: Path,
    output_file: Optional[Path],
) -> None:
    """Classify every row of a CSV file with a 'text' column.

    Writes text, predicted_category and confidence to OUTPUT_FILE.

    Example: text-classifier classify model.json input.csv results.csv
    """
    classifier = _load_classifier(model_file)
    _require_trained(classifier)
    output_file = output_file or settings.classifications_path

    console.print(f"Loading text data from {escape(str(input_file))}...")
    try:
        texts = load_texts(input_file)
    except TextClassifierError as e:
        _fail(str(e))

    if not texts:
        _fail("No text data found")
    console.print(f"Loaded {len(texts)} texts to classify")

    with console.status("[bold blue]Classifying texts...", spinner="dots"):
        records = classifier.classify_batch(texts)

    try:
        write_classifications(output_file, records)
    except TextClassifierError as e:
        _fail(str(e))
    console.print(f"Classification completed! Results saved to {escape(str(output_file))}")

    counts, mean_confidence = summarize_records(records)
    table = Table(title="Classification Summary")
    table.add_column("Category", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("Share", justify="right")
    for category, count in counts.items():
        table.add_row(escape(category), str(count), f"{count / len(records):.1%}")
    console.print(table)
    console.print(f"Average confidence: {mean_confidence:.3f}")


# ------------------------------------------------------------------
# Rich rendering helpers
# ------------------------------------------------------------------

def _render_features(classifier: NaiveBayesClassifier, top_n: int) -> None:
    """Render the most informative tokens of each category."""
    for category in classifier.categories:
        table = Table(title=f"Top tokens: {escape(category)}", show_lines=False)
        table.add_column("Token", style="cyan")
        table.add_column("Score", justify="right")
        for token, score in classifier.most_informative_tokens(category, top_n):
            table.add_row(escape(token), f"{score:.4f}")
        console.print(table)


if __name__ == "__main__":
    main()
