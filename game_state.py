"""
Game state machine for a single Wordle session.

A session moves LOADING -> IN_PROGRESS -> WON | LOST, or LOADING -> LOAD_ERROR
when the word lists cannot be loaded. Only submit_guess leaves IN_PROGRESS.
"""
import logging
import random
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Callable, List, Optional

from corpus.word_corpus import WORD_LENGTH, CorpusError, EmptyPoolError, WordCorpus, normalize
from game_logic import feedback_labels, is_winning_code, score

logger = logging.getLogger(__name__)

MAX_GUESSES = 6

WIN_MESSAGE = "Congratulations! You guessed the word!"
LOSS_MESSAGE = 'Game Over! The word was "{}".'


class GameStatus(str, Enum):
    LOADING = "loading"
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"
    LOAD_ERROR = "load_error"


class SubmitOutcome(str, Enum):
    ACCEPTED = "accepted"
    GAME_NOT_ACTIVE = "game_not_active"
    WRONG_LENGTH = "wrong_length"
    INVALID_WORD = "invalid_word"


FINISHED = (GameStatus.WON, GameStatus.LOST)
LOCKED = FINISHED + (GameStatus.LOAD_ERROR, GameStatus.LOADING)


@dataclass(frozen=True)
class Attempt:
    """One submitted guess. Invalid words are recorded with an empty feedback code."""
    guess: str
    feedback_code: str = ""
    is_correct: bool = False
    is_valid_guess: bool = False
    revealed_answer: Optional[str] = None

    @property
    def labels(self) -> List[str]:
        return feedback_labels(self.feedback_code)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["labels"] = self.labels
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Attempt":
        return cls(
            guess=data["guess"],
            feedback_code=data.get("feedback_code", ""),
            is_correct=data.get("is_correct", False),
            is_valid_guess=data.get("is_valid_guess", False),
            revealed_answer=data.get("revealed_answer"),
        )


@dataclass(frozen=True)
class SubmitResult:
    outcome: SubmitOutcome
    status: GameStatus
    attempt: Optional[Attempt] = None

    @property
    def accepted(self) -> bool:
        return self.outcome is SubmitOutcome.ACCEPTED


class GameSession:
    """
    Owns the secret word, the attempt history and the turn counter.

    The word lists come from load_corpus, a callable that returns a
    WordCorpus or raises a CorpusError. It is called again whenever a new
    game is requested without a usable corpus.
    """

    def __init__(
        self,
        load_corpus: Callable[[], WordCorpus],
        max_guesses: int = MAX_GUESSES,
        word_length: int = WORD_LENGTH,
        rng: Optional[random.Random] = None,
    ):
        self._load_corpus = load_corpus
        self.max_guesses = max_guesses
        self.word_length = word_length
        self.rng = rng
        self.corpus: Optional[WordCorpus] = None

        self.status = GameStatus.LOADING
        self.secret_word: Optional[str] = None
        self.attempt_history: List[Attempt] = []
        self.current_attempt_index = 0
        self.game_message = ""
        self.error: Optional[str] = None

    # --------------------
    # Commands
    # --------------------
    def load_word_lists(self) -> GameStatus:
        """Load the corpus and, if that succeeds, start a game."""
        self.status = GameStatus.LOADING
        try:
            self.corpus = self._load_corpus()
        except CorpusError as e:
            self._fail(e)
            return self.status
        return self._begin_game()

    def start_new_game(self) -> GameStatus:
        """Start a fresh game, reloading the word lists first if they are missing or empty."""
        if self.corpus is None or self.corpus.is_empty:
            return self.load_word_lists()
        return self._begin_game()

    def submit_guess(self, raw_guess: str) -> SubmitResult:
        """
        Validate and score one guess.

        Rejections for an inactive game or a wrong length change nothing.
        A word missing from the valid-guess set is recorded in the history
        but does not use up an attempt.
        """
        if self.status is not GameStatus.IN_PROGRESS:
            logger.debug("Rejected guess %r: game is %s", raw_guess, self.status.value)
            return SubmitResult(SubmitOutcome.GAME_NOT_ACTIVE, self.status)

        guess = normalize(raw_guess or "")
        if len(guess) != self.word_length:
            logger.debug("Rejected guess %r: expected %d letters", raw_guess, self.word_length)
            return SubmitResult(SubmitOutcome.WRONG_LENGTH, self.status)

        if not self.corpus.is_valid_guess(guess):
            attempt = Attempt(guess=guess)
            self.attempt_history.append(attempt)
            logger.debug("Rejected guess %s: not in word list", guess)
            return SubmitResult(SubmitOutcome.INVALID_WORD, self.status, attempt)

        code = score(guess, self.secret_word)
        is_correct = is_winning_code(code)
        is_last = self.current_attempt_index == self.max_guesses - 1
        attempt = Attempt(
            guess=guess,
            feedback_code=code,
            is_correct=is_correct,
            is_valid_guess=True,
            revealed_answer=self.secret_word if is_last and not is_correct else None,
        )
        self.attempt_history.append(attempt)

        if is_correct:
            self.status = GameStatus.WON
            self.game_message = WIN_MESSAGE
            logger.info("Game won on attempt %d", self.current_attempt_index + 1)
        elif is_last:
            self.status = GameStatus.LOST
            self.game_message = LOSS_MESSAGE.format(self.secret_word)
            logger.info("Game lost, the word was %s", self.secret_word)
        else:
            self.current_attempt_index += 1

        return SubmitResult(SubmitOutcome.ACCEPTED, self.status, attempt)

    # --------------------
    # Queries
    # --------------------
    def feedback_for(self, index: int) -> str:
        if 0 <= index < len(self.attempt_history):
            attempt = self.attempt_history[index]
            if attempt.is_valid_guess:
                return attempt.feedback_code
        return ""

    def is_row_locked(self, index: int) -> bool:
        return index < self.current_attempt_index or self.status in LOCKED

    @property
    def is_over(self) -> bool:
        return self.status in FINISHED

    @property
    def revealed_answer(self) -> Optional[str]:
        return self.secret_word if self.status is GameStatus.LOST else None

    @property
    def accepted_attempts(self) -> List[Attempt]:
        """Valid attempts in order; entry i belongs to row i."""
        return [a for a in self.attempt_history if a.is_valid_guess]

    def public_state(self) -> dict:
        """Everything a UI layer needs to render the board. The secret is only included once lost."""
        return {
            "status": self.status.value,
            "current_attempt_index": self.current_attempt_index,
            "max_guesses": self.max_guesses,
            "word_length": self.word_length,
            "attempts": [a.to_dict() for a in self.attempt_history],
            "locked_rows": [self.is_row_locked(i) for i in range(self.max_guesses)],
            "game_message": self.game_message,
            "revealed_answer": self.revealed_answer,
            "error": self.error,
        }

    # --------------------
    # Snapshots
    # --------------------
    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "secret_word": self.secret_word,
            "attempts": [asdict(a) for a in self.attempt_history],
            "current_attempt_index": self.current_attempt_index,
            "max_guesses": self.max_guesses,
            "word_length": self.word_length,
            "game_message": self.game_message,
            "error": self.error,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        load_corpus: Callable[[], WordCorpus],
        rng: Optional[random.Random] = None,
    ) -> "GameSession":
        """
        Rebuild a session from to_dict() output.

        A game still in progress needs its corpus back to validate guesses;
        if that load fails the session moves to LOAD_ERROR.
        """
        game = cls(
            load_corpus,
            max_guesses=data.get("max_guesses", MAX_GUESSES),
            word_length=data.get("word_length", WORD_LENGTH),
            rng=rng,
        )
        game.status = GameStatus(data["status"])
        game.secret_word = data.get("secret_word")
        game.attempt_history = [Attempt.from_dict(a) for a in data.get("attempts", [])]
        game.current_attempt_index = data.get("current_attempt_index", 0)
        game.game_message = data.get("game_message", "")
        game.error = data.get("error")

        if game.status is GameStatus.IN_PROGRESS:
            try:
                game.corpus = load_corpus()
            except CorpusError as e:
                game._fail(e)
        return game

    # --------------------
    # Internals
    # --------------------
    def _begin_game(self) -> GameStatus:
        try:
            secret = self.corpus.select_random_secret(self.rng)
        except EmptyPoolError as e:
            self._fail(e)
            return self.status

        self.secret_word = secret
        self.attempt_history = []
        self.current_attempt_index = 0
        self.game_message = ""
        self.error = None
        self.status = GameStatus.IN_PROGRESS
        logger.info("New game started with %d guesses", self.max_guesses)
        return self.status

    def _fail(self, error: CorpusError):
        logger.error("Word lists unusable: %s", error)
        self.status = GameStatus.LOAD_ERROR
        self.error = str(error)
        self.game_message = str(error)

    def __repr__(self):
        return (
            f"<GameSession(status={self.status.value}, attempt={self.current_attempt_index}, "
            f"history={len(self.attempt_history)})>"
        )
