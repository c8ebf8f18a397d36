"""Interactive classification loop.

Reads one line of text at a time and prints the predicted category with
the probability of every category. ``quit``, ``exit`` or end of input
leaves the loop.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Optional, Union

from rich.console import Console
from rich.markup import escape

from .classifier import NaiveBayesClassifier
from .models import NaiveBayesModel, Prediction

EXIT_COMMANDS = frozenset({"quit", "exit"})
PROMPT = "> "


def render_prediction(prediction: Prediction, console: Console) -> None:
    """Print a prediction and its probability distribution."""
    if prediction.is_empty:
        console.print("[yellow]No prediction possible: the model has no training data.[/]")
        return

    console.print(f"Predicted category: [bold cyan]{escape(prediction.category)}[/]")
    console.print("Probabilities:")
    for category, probability in prediction.ranked():
        console.print(f"  {escape(category)}: {probability:.3f}")


def run_interactive(
    target: Union[NaiveBayesClassifier, NaiveBayesModel],
    console: Optional[Console] = None,
    input_func: Optional[Callable[[str], str]] = None,
) -> int:
    """Classify lines of user input until the user quits.

    Args:
        target: Classifier or model to predict with.
        console: Console to write to (defaults to a new one).
        input_func: Callable that shows a prompt and returns one line.
            Defaults to ``console.input``.

    Returns:
        Number of texts classified.
    """
    console = console or Console()
    classifier = target if isinstance(target, NaiveBayesClassifier) else NaiveBayesClassifier(target)
    read = input_func or console.input

    console.print("\n[bold]=== Interactive Classification Mode ===[/]")
    console.print("Enter text to classify (or 'quit' to exit):")

    classified = 0
    while True:
        try:
            line = read(PROMPT)
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        text = line.strip()
        if text.lower() in EXIT_COMMANDS:
            break
        if not text:
            continue

        render_prediction(classifier.predict(text), console)
        console.print()
        classified += 1

    return classified
