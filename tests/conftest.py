import pytest

from app import create_app
from corpus.word_corpus import WordCorpus
from game_state import GameSession

SECRET_TEXT = "angle\n"
GUESS_TEXT = "\n".join([
    "angle", "angry", "agnel", "crane", "slate", "speed",
    "erase", "lemon", "house", "mouse",
]) + "\n"


@pytest.fixture
def corpus():
    return WordCorpus.load(SECRET_TEXT, GUESS_TEXT)


@pytest.fixture
def game(corpus):
    # Only one secret in the pool, so every game is "ANGLE"
    session = GameSession(lambda: corpus)
    session.start_new_game()
    return session


@pytest.fixture
def word_files(tmp_path):
    secret_path = tmp_path / "secret_words.txt"
    guess_path = tmp_path / "valid_words.txt"
    secret_path.write_text(SECRET_TEXT, encoding="utf-8")
    guess_path.write_text(GUESS_TEXT, encoding="utf-8")
    return str(secret_path), str(guess_path)


@pytest.fixture
def app(word_files):
    secret_path, guess_path = word_files
    return create_app({
        "TESTING": True,
        "SECRET_KEY": "test",
        "SESSION_TYPE": None,
        "REDIS_URL": None,
        "WORDLE_SECRET_WORDS": secret_path,
        "WORDLE_VALID_WORDS": guess_path,
    })


@pytest.fixture
def client(app):
    return app.test_client()
