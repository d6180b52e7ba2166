import os
import threading
from typing import Optional

import redis
from dotenv import load_dotenv
from flask import Blueprint, Flask, current_app, jsonify, request, session
from flask_session import Session
from flask_socketio import SocketIO, emit

load_dotenv()

from corpus.sources import DATA_DIR, load_word_lists  # noqa: E402
from corpus.word_corpus import WORD_LENGTH, WordCorpus  # noqa: E402
from game_state import MAX_GUESSES, GameSession, GameStatus, SubmitOutcome  # noqa: E402
from game_store import MemoryGameStore, RedisGameStore, new_game_id  # noqa: E402

socketio = SocketIO()
api = Blueprint("api", __name__)

ERROR_MESSAGES = {
    SubmitOutcome.GAME_NOT_ACTIVE: "No active game",
    SubmitOutcome.WRONG_LENGTH: "Guess must be {word_length} letters",
    SubmitOutcome.INVALID_WORD: "Not in word list",
}

STATUS_CODES = {
    SubmitOutcome.ACCEPTED: 200,
    SubmitOutcome.WRONG_LENGTH: 400,
    SubmitOutcome.INVALID_WORD: 400,
    SubmitOutcome.GAME_NOT_ACTIVE: 409,
}


class CorpusCache:
    """
    Loads the word lists on first use and keeps them for the life of the app.
    A failed or empty load is retried on the next call.
    """

    def __init__(self, secret_location: str, guess_location: str, word_length: int, timeout: float):
        self.secret_location = secret_location
        self.guess_location = guess_location
        self.word_length = word_length
        self.timeout = timeout
        self.corpus: Optional[WordCorpus] = None
        self._lock = threading.Lock()

    def __call__(self) -> WordCorpus:
        with self._lock:
            if self.corpus is None or self.corpus.is_empty:
                self.corpus = load_word_lists(
                    self.secret_location,
                    self.guess_location,
                    word_length=self.word_length,
                    timeout=self.timeout,
                )
            return self.corpus


# Flask app setup
def create_app(config=None):
    """Factory function to create and configure Flask app."""
    app = Flask(__name__)
    app.config["SECRET_KEY"] = os.environ.get("SECRET_KEY", "dev-secret-change-in-production")
    app.config["WORDLE_SECRET_WORDS"] = os.environ.get(
        "WORDLE_SECRET_WORDS", os.path.join(DATA_DIR, "secret_words.txt")
    )
    app.config["WORDLE_VALID_WORDS"] = os.environ.get(
        "WORDLE_VALID_WORDS", os.path.join(DATA_DIR, "valid_words.txt")
    )
    app.config["WORDLE_WORD_LENGTH"] = int(os.environ.get("WORDLE_WORD_LENGTH", WORD_LENGTH))
    app.config["WORDLE_MAX_GUESSES"] = int(os.environ.get("WORDLE_MAX_GUESSES", MAX_GUESSES))
    app.config["WORDLE_FETCH_TIMEOUT"] = float(os.environ.get("WORDLE_FETCH_TIMEOUT", 10))

    # Redis-backed server-side sessions when a Redis URL is configured
    redis_url = os.environ.get("REDIS_URL")
    app.config["REDIS_URL"] = redis_url
    app.config["SESSION_TYPE"] = os.environ.get("SESSION_TYPE", "redis" if redis_url else None)
    app.config["SESSION_PERMANENT"] = False
    app.config["SESSION_USE_SIGNER"] = True

    if config:
        app.config.update(config)

    if app.config["SESSION_TYPE"] == "redis" and "SESSION_REDIS" not in app.config:
        app.config["SESSION_REDIS"] = redis.from_url(app.config["REDIS_URL"] or "redis://localhost:6379/0")
    if app.config["SESSION_TYPE"]:
        Session(app)

    app.extensions["word_corpus"] = CorpusCache(
        app.config["WORDLE_SECRET_WORDS"],
        app.config["WORDLE_VALID_WORDS"],
        app.config["WORDLE_WORD_LENGTH"],
        app.config["WORDLE_FETCH_TIMEOUT"],
    )

    # Game snapshots live on the server; the session only holds a game id
    if "GAME_STORE" not in app.config:
        if app.config["REDIS_URL"]:
            app.config["GAME_STORE"] = RedisGameStore(
                redis.from_url(app.config["REDIS_URL"], decode_responses=True)
            )
        else:
            app.config["GAME_STORE"] = MemoryGameStore()

    app.register_blueprint(api)

    # SocketIO with Redis message queue for multi-process scaling
    socketio.init_app(app, cors_allowed_origins="*", message_queue=app.config["REDIS_URL"])
    return app


# --------------------
# Session helpers
# --------------------
def load_game() -> GameSession:
    """Restore the player's game from the store, or create one still LOADING."""
    loader = current_app.extensions["word_corpus"]
    game_id = session.get("game_id")
    data = current_app.config["GAME_STORE"].get(game_id) if game_id else None
    if data is None:
        return GameSession(
            loader,
            max_guesses=current_app.config["WORDLE_MAX_GUESSES"],
            word_length=current_app.config["WORDLE_WORD_LENGTH"],
        )
    return GameSession.from_dict(data, loader)


def save_game(game: GameSession):
    if "game_id" not in session:
        session["game_id"] = new_game_id()
    current_app.config["GAME_STORE"].set(session["game_id"], game.to_dict())


def guess_from(data) -> str:
    """Pull the guess text out of a request body; anything malformed becomes ""."""
    if not isinstance(data, dict):
        return ""
    guess = data.get("guess")
    return guess if isinstance(guess, str) else ""


def error_message(game: GameSession, outcome: SubmitOutcome) -> str:
    return ERROR_MESSAGES[outcome].format(word_length=game.word_length)


def guess_payload(game: GameSession, result) -> dict:
    payload = {
        "success": result.accepted,
        "outcome": result.outcome.value,
        "attempt": result.attempt.to_dict() if result.attempt else None,
        "state": game.public_state(),
    }
    if not result.accepted:
        payload["error"] = error_message(game, result.outcome)
    return payload


# --------------------
# Single-player game API
# --------------------
@api.route("/api/state")
def get_state():
    """Current game for this session. The first visit starts a game."""
    game = load_game()
    if game.status is GameStatus.LOADING:
        game.start_new_game()
        save_game(game)
    return jsonify(game.public_state())


@api.route("/api/new-game", methods=["POST"])
def new_game():
    """Start a new game, reloading the word lists if needed."""
    game = load_game()
    status = game.start_new_game()
    save_game(game)

    if status is GameStatus.LOAD_ERROR:
        current_app.logger.error("New game failed: %s", game.error)
        return jsonify({"success": False, "error": game.error, "state": game.public_state()}), 503

    return jsonify({
        "success": True,
        "message": "New game started",
        "state": game.public_state(),
    })


@api.route("/api/guess", methods=["POST"])
def make_guess():
    """Submit one guess for the current game."""
    guess = guess_from(request.get_json(silent=True))

    game = load_game()
    result = game.submit_guess(guess)
    save_game(game)

    if result.status in (GameStatus.WON, GameStatus.LOST) and result.accepted:
        current_app.logger.info("Game over (%s) after %d guesses", result.status.value, len(game.accepted_attempts))

    return jsonify(guess_payload(game, result)), STATUS_CODES[result.outcome]


# --------------------
# Socket events
# --------------------
@socketio.on("connect")
def on_connect(auth=None):
    """Send the current game state to a newly connected client."""
    emit("game_state", load_game().public_state())


@socketio.on("new_game")
def on_new_game():
    game = load_game()
    game.start_new_game()
    save_game(game)
    emit("game_state", game.public_state())


@socketio.on("submit_guess")
def on_submit_guess(data):
    """Process player's word guess."""
    guess = guess_from(data)

    game = load_game()
    result = game.submit_guess(guess)
    save_game(game)

    if not result.accepted:
        emit("guess_error", guess_payload(game, result))
        return

    attempt = result.attempt
    emit("guess_feedback", {
        "guess": attempt.guess,
        "feedback": attempt.feedback_code,
        "colors": attempt.labels,
        "solved": attempt.is_correct,
        "state": game.public_state(),
    })


@socketio.on("disconnect")
def on_disconnect(reason=None):
    current_app.logger.debug("Client %s disconnected", request.sid)


if __name__ == "__main__":
    app = create_app()
    port = int(os.environ.get("PORT", 5000))
    debug = os.environ.get("FLASK_DEBUG", "0") == "1"
    socketio.run(app, host="0.0.0.0", port=port, debug=debug, allow_unsafe_werkzeug=True)
