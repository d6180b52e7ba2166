"""
Load the configured word lists and report their sizes.
"""
import sys

from dotenv import load_dotenv

load_dotenv()

from corpus.sources import SECRET_WORDS_LOCATION, VALID_WORDS_LOCATION, load_word_lists  # noqa: E402
from corpus.word_corpus import LoadError  # noqa: E402


def main(secret_location=SECRET_WORDS_LOCATION, guess_location=VALID_WORDS_LOCATION):
    print("Loading word lists...")
    try:
        corpus = load_word_lists(secret_location, guess_location)
    except LoadError as e:
        print(f"Error: {e}")
        return 1

    print(f"Secret words: {len(corpus.secret_pool)} ({secret_location})")
    print(f"Valid guesses: {len(corpus.valid_guesses)} ({guess_location})")
    if not corpus.secret_pool:
        print("Warning: no secret words qualified, games cannot start")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
