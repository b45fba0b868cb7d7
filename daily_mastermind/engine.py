"""
Pure game logic (no HTTP, no storage).
We compute two feedback numbers for each guess:
- exact_matches: right colour, right place ("black" peg)
- color_matches: right colour, wrong place, counted only among the slots
  left over after exact matches ("white" peg)

Exact matches are taken first. That order is what makes this Mastermind
scoring and not a plain colour-count intersection.
"""

from typing import NamedTuple

from . import config
from .types import Code


class Feedback(NamedTuple):
    exact_matches: int
    color_matches: int


def score_guess(guess: Code, secret: Code, code_length: int = config.CODE_LENGTH) -> Feedback:
    """
    Example:
      secret = [0, 0, 1, 1]   (Red, Red, Blue, Blue)
      guess  = [0, 1, 0, 1]   (Red, Blue, Red, Blue)
      exact_matches = 2  (positions 0 and 3)
      color_matches = 2  (the leftover Blue and Red pair up)
    """

    # 0. Validate lengths: a short guess is a caller bug, fail loudly
    if len(guess) != code_length or len(secret) != code_length:
        raise ValueError(f"Guess and secret must both have exactly {code_length} colours.")

    guess_used = [False] * code_length
    secret_used = [False] * code_length

    # 1. Exact pass
    exact_matches = 0
    for i in range(code_length):
        if guess[i] == secret[i]:
            exact_matches += 1
            guess_used[i] = True
            secret_used[i] = True

    # 2. Colour pass: pair each leftover guess slot with the first free secret slot
    color_matches = 0
    for i in range(code_length):
        if guess_used[i]:
            continue
        j = 0
        while j < code_length:
            if not secret_used[j] and secret[j] == guess[i]:
                secret_used[j] = True
                color_matches += 1
                break
            j += 1

    return Feedback(exact_matches, color_matches)


def is_win(feedback: Feedback, code_length: int = config.CODE_LENGTH) -> bool:
    return feedback.exact_matches == code_length


def format_elapsed(seconds: int) -> str:
    """125 -> '2:05'"""
    seconds = max(0, int(seconds))
    return f"{seconds // 60}:{seconds % 60:02d}"


def parse_elapsed(text: str) -> int:
    """'2:05' -> 125. Raises ValueError on anything else."""
    minutes, _, secs = text.partition(":")
    if not minutes.isdigit() or len(secs) != 2 or not secs.isdigit():
        raise ValueError(f"Not an elapsed time: {text!r}")
    return int(minutes) * 60 + int(secs)
