"""
Word corpus: the secret-word pool and the valid-guess set.
"""
import logging
import random
from typing import Iterable, Optional, Tuple

logger = logging.getLogger(__name__)

WORD_LENGTH = 5


class CorpusError(Exception):
    """Base class for word list failures."""


class LoadError(CorpusError):
    """A word list source was unavailable or could not be fetched."""


class EmptyPoolError(CorpusError):
    """The word lists loaded but no secret word qualified."""


def normalize(word: str) -> str:
    return word.strip().upper()


def parse_words(text: str, word_length: int = WORD_LENGTH) -> Iterable[str]:
    """Yield normalized words of exactly word_length characters, one per line."""
    for line in text.splitlines():
        word = normalize(line)
        if len(word) == word_length:
            yield word


class WordCorpus:
    """Immutable pair of word collections used by one game session."""

    def __init__(self, secret_pool: Iterable[str], valid_guesses: Iterable[str], word_length: int = WORD_LENGTH):
        self.word_length = word_length
        self.secret_pool: Tuple[str, ...] = tuple(secret_pool)
        self.valid_guesses = frozenset(valid_guesses)

    @classmethod
    def load(cls, secret_text: Optional[str], guess_text: Optional[str], word_length: int = WORD_LENGTH) -> "WordCorpus":
        """
        Build a corpus from two newline-delimited text blobs.

        Args:
            secret_text: Candidate answers, one per line
            guess_text: Words a player may submit, one per line
            word_length: Required word length; other entries are dropped

        Returns:
            WordCorpus

        Raises:
            LoadError: if either text is unavailable
        """
        if secret_text is None or guess_text is None:
            raise LoadError("Word lists are unavailable")

        corpus = cls(
            parse_words(secret_text, word_length),
            parse_words(guess_text, word_length),
            word_length=word_length,
        )
        logger.info(
            "Loaded %d secret words and %d valid guesses", len(corpus.secret_pool), len(corpus.valid_guesses)
        )
        return corpus

    @property
    def is_empty(self) -> bool:
        return not self.secret_pool or not self.valid_guesses

    def select_random_secret(self, rng: Optional[random.Random] = None) -> str:
        """Pick one secret uniformly at random. Raises EmptyPoolError on an empty pool."""
        if not self.secret_pool:
            raise EmptyPoolError("No secret words of length %d available" % self.word_length)
        rng = rng or random
        return self.secret_pool[rng.randrange(len(self.secret_pool))]

    # Check if a word is valid for Wordle gameplay.
    def is_valid_guess(self, word: str) -> bool:
        return normalize(word) in self.valid_guesses

    def __repr__(self):
        return f"<WordCorpus(secret_pool={len(self.secret_pool)}, valid_guesses={len(self.valid_guesses)})>"
