"""Text preprocessing for the Naive Bayes classifier.

Turns raw text into the token stream the model is trained and scored on:

1. Lowercase the input
2. Strip everything that is not an ASCII letter, digit, or whitespace
3. Split on whitespace
4. Drop words shorter than three characters
5. Drop English stop words
6. Append bigrams of adjacent surviving words (``word1_word2``)

Bigrams are built *after* stop-word removal, so ``"win the game"`` yields
the bigram ``win_game``. Changing that order changes the vocabulary and
therefore every trained model.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

BIGRAM_SEPARATOR = "_"

# Words of this length or longer survive the length filter
MIN_WORD_LENGTH = 3

# Only ASCII whitespace separates words; other spacing characters are stripped
_NON_ALNUM_RE = re.compile(r"[^a-z0-9 \t\n\f\r]")

# Standard English stop words
STOP_WORDS: frozenset[str] = frozenset(
    {
        "a", "about", "above", "after", "again", "against", "all", "am",
        "an", "and", "any", "are", "as", "at", "be", "because", "been",
        "before", "being", "below", "between", "both", "but", "by", "can",
        "did", "do", "does", "doing", "don", "down", "during", "each", "few",
        "for", "from", "further", "had", "has", "have", "having", "he", "her",
        "here", "hers", "herself", "him", "himself", "his", "how", "i", "if",
        "in", "into", "is", "it", "its", "itself", "just", "me", "more",
        "most", "my", "myself", "no", "nor", "not", "now", "of", "off", "on",
        "once", "only", "or", "other", "our", "ours", "ourselves", "out",
        "over", "own", "s", "same", "she", "should", "so", "some", "such",
        "t", "than", "that", "the", "their", "theirs", "them", "themselves",
        "then", "there", "these", "they", "this", "those", "through", "to",
        "too", "under", "until", "up", "very", "was", "we", "were", "what",
        "when", "where", "which", "while", "who", "whom", "why", "will",
        "with", "you", "your", "yours", "yourself", "yourselves",
    }
)


# ---------------------------------------------------------------------------
# Preprocessor
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TextPreprocessor:
    """Configurable tokenizer producing unigram and bigram features.

    The defaults are the configuration every trained model is built with;
    ``train`` and ``predict`` always use :data:`DEFAULT_PREPROCESSOR`, so a
    customised instance is only useful for inspecting text.

    Args:
        stop_words: Words removed before bigram generation.
        min_word_length: Shortest word (in characters) that is kept.
        use_bigrams: Whether to append bigrams after the unigrams.
        separator: String joining the two halves of a bigram.

    Example::

        >>> TextPreprocessor().tokenize("The Cat sat on THE mat.")
        ['cat', 'sat', 'mat', 'cat_sat', 'sat_mat']
    """

    stop_words: frozenset[str] = field(default=STOP_WORDS, repr=False)
    min_word_length: int = MIN_WORD_LENGTH
    use_bigrams: bool = True
    separator: str = BIGRAM_SEPARATOR

    def normalize(self, text: str) -> str:
        """Lowercase *text* and strip non-alphanumeric, non-space characters."""
        return _NON_ALNUM_RE.sub("", text.lower())

    def words(self, text: str) -> list[str]:
        """Return the filtered words of *text* in source order."""
        return [
            word
            for word in self.normalize(text).split()
            if len(word) >= self.min_word_length and word not in self.stop_words
        ]

    def bigrams(self, words: list[str]) -> list[str]:
        """Join each adjacent pair of *words* with the separator."""
        return [
            f"{words[i]}{self.separator}{words[i + 1]}"
            for i in range(len(words) - 1)
        ]

    def tokenize(self, text: str) -> list[str]:
        """Return unigrams followed by bigrams for *text*."""
        unigrams = self.words(text)
        if not self.use_bigrams:
            return unigrams
        return unigrams + self.bigrams(unigrams)


DEFAULT_PREPROCESSOR = TextPreprocessor()


def tokenize(text: str) -> list[str]:
    """Tokenize *text* with the default preprocessing pipeline."""
    return DEFAULT_PREPROCESSOR.tokenize(text)
