"""
Guess scoring for the Wordle engine.

A feedback code is one character per letter:
  G = correct letter, correct position
  Y = correct letter, wrong position
  R = letter not in the word (or all of its copies already credited)
"""
from typing import List

CORRECT = "G"
PRESENT = "Y"
ABSENT = "R"

LABELS = {
    CORRECT: "correct",
    PRESENT: "present",
    ABSENT: "miss",
}


# Evaluate a guess against the secret word.
def score(guess: str, secret: str) -> str:
    """
    Score an uppercase guess against an uppercase secret of the same length.

    Exact matches are locked in before any wrong-position credit is given,
    and every secret letter can be credited at most once.

    Args:
        guess: Normalized guess text
        secret: Normalized secret word

    Returns:
        Feedback code string, e.g. "GYRRG"
    """
    if len(guess) != len(secret):
        raise ValueError("Guess and secret must be the same length.")

    result = [ABSENT] * len(secret)
    remaining: List = list(secret)

    # First pass: mark correct positions and consume those secret letters
    for i, (s, g) in enumerate(zip(secret, guess)):
        if g == s:
            result[i] = CORRECT
            remaining[i] = None

    # Second pass: credit the first unconsumed secret letter, left to right
    for i, g in enumerate(guess):
        if result[i] == CORRECT:
            continue
        if g in remaining:
            result[i] = PRESENT
            remaining[remaining.index(g)] = None

    return "".join(result)


def is_winning_code(code: str) -> bool:
    return bool(code) and all(c == CORRECT for c in code)


def feedback_labels(code: str) -> List[str]:
    """Map a feedback code to per-letter label names ("correct", "present", "miss")."""
    return [LABELS[c] for c in code]
