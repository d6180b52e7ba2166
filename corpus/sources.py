"""
Word list sources: local files or HTTP(S) URLs, fetched as whole text blobs.
"""
import logging
import os

import requests

from corpus.word_corpus import WORD_LENGTH, LoadError, WordCorpus

logger = logging.getLogger(__name__)

# Default word lists (relative to project root, stored in data folder)
DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "data")
SECRET_WORDS_LOCATION = os.getenv("WORDLE_SECRET_WORDS", os.path.join(DATA_DIR, "secret_words.txt"))
VALID_WORDS_LOCATION = os.getenv("WORDLE_VALID_WORDS", os.path.join(DATA_DIR, "valid_words.txt"))
FETCH_TIMEOUT = float(os.getenv("WORDLE_FETCH_TIMEOUT", "10"))


def is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def read_text(location: str, timeout: float = FETCH_TIMEOUT) -> str:
    """
    Read one word list as text.

    Args:
        location: Filesystem path or http(s) URL
        timeout: Request timeout in seconds (URLs only)

    Returns:
        The raw text blob

    Raises:
        LoadError: if the file or URL could not be read
    """
    if is_url(location):
        try:
            response = requests.get(location, timeout=timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.warning("Failed to fetch word list %s: %s", location, e)
            raise LoadError(f"Could not fetch word list from {location}") from e
        return response.text

    try:
        with open(location, "r", encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        logger.warning("Failed to read word list %s: %s", location, e)
        raise LoadError(f"Could not read word list at {location}") from e


def load_word_lists(
    secret_location: str = SECRET_WORDS_LOCATION,
    guess_location: str = VALID_WORDS_LOCATION,
    word_length: int = WORD_LENGTH,
    timeout: float = FETCH_TIMEOUT,
) -> WordCorpus:
    """Fetch both word lists and build a WordCorpus."""
    secret_text = read_text(secret_location, timeout=timeout)
    guess_text = read_text(guess_location, timeout=timeout)
    return WordCorpus.load(secret_text, guess_text, word_length=word_length)
