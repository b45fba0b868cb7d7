"""
One player's session for today's puzzle.

Commands come in from the host (select_color, delete_last, submit, reset)
and are looked up in TRANSITIONS by (status, command). Anything not in the
table, or rejected by the handler's guard, is a silent no-op: dispatch()
returns False and state is untouched.

    in_progress --submit(all exact)--> won
    in_progress --submit(8th miss)---> lost
    (stored result for today) -------> restored_completed

won / lost / restored_completed accept nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple

from . import config
from .engine import format_elapsed, is_win, parse_elapsed, score_guess
from .persistence import DailyResult, DailyResultStore, GuessRecord
from .puzzle import (
    day_index, day_key, formatted_date, generate_secret_code, time_until_next_puzzle, utc_date,
)
from .share import build_share_text
from .types import Code, ColorIndex, Command, SessionStatus

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CompletionEvent:
    """Sent to the host once per day when a live game ends."""
    completed: bool  # True only for a win
    elapsed_seconds: int
    guesses_used: int
    difficulty: str = config.DIFFICULTY


TERMINAL_STATUSES = ("won", "lost", "restored_completed")

TRANSITIONS: Dict[Tuple[SessionStatus, Command], str] = {
    ("in_progress", "select_color"): "_add_color",
    ("in_progress", "delete_last"): "_remove_last_color",
    ("in_progress", "submit"): "_submit_guess",
    ("in_progress", "reset"): "_reset_puzzle",
}


class Session:
    def __init__(
        self,
        results: DailyResultStore,
        clock: Clock = utc_now,
        on_complete: Optional[Callable[[CompletionEvent], None]] = None,
        launch_date: date = config.LAUNCH_DATE,
    ) -> None:
        self._results = results
        self._clock = clock
        self._on_complete = on_complete

        now = clock()
        self.puzzle_date: date = utc_date(now)
        self.day_index = day_index(now, launch_date)
        self.day_key = day_key(now)
        self.secret: Code = generate_secret_code(self.day_index)

        self.guesses: List[GuessRecord] = []
        self.current_guess: List[ColorIndex] = []
        self.won = False
        self.completion: Optional[CompletionEvent] = None
        self.started_at: Optional[datetime] = None
        self._frozen_time: Optional[str] = None

        stored = results.load(self.day_key)
        if stored is not None:
            # Already played today: show the result, allow nothing
            self.status: SessionStatus = "restored_completed"
            self.won = stored.won
            self.guesses = list(stored.guess_records)
            self._frozen_time = stored.time
            logger.info("Restored %s (won=%s)", self.day_key, stored.won)
        else:
            self.status = "in_progress"
            self.started_at = now
            logger.info("Started puzzle #%d", self.day_index)

    # --- Commands ---

    def dispatch(self, command: Command, *args) -> bool:
        handler = TRANSITIONS.get((self.status, command))
        if handler is None:
            logger.debug("Ignored %s while %s", command, self.status)
            return False
        applied = getattr(self, handler)(*args)
        if not applied:
            logger.debug("Ignored %s: guard failed", command)
        return applied

    def add_color(self, color: ColorIndex) -> bool:
        return self.dispatch("select_color", color)

    def remove_last_color(self) -> bool:
        return self.dispatch("delete_last")

    def submit_guess(self) -> bool:
        return self.dispatch("submit")

    def reset_puzzle(self) -> bool:
        return self.dispatch("reset")

    # --- Handlers (only reached from dispatch) ---

    def _add_color(self, color: ColorIndex) -> bool:
        if len(self.current_guess) >= config.CODE_LENGTH:
            return False
        if color < 0 or color >= config.PALETTE_SIZE:
            return False
        self.current_guess.append(color)
        return True

    def _remove_last_color(self) -> bool:
        if not self.current_guess:
            return False
        self.current_guess.pop()
        return True

    def _submit_guess(self) -> bool:
        if len(self.current_guess) != config.CODE_LENGTH:
            return False

        feedback = score_guess(self.current_guess, self.secret)
        self.guesses.append(GuessRecord(tuple(self.current_guess), feedback))
        self.current_guess = []

        if is_win(feedback):
            self._finish(won=True)
        elif len(self.guesses) >= config.MAX_GUESSES:
            self._finish(won=False)
        return True

    def _reset_puzzle(self) -> bool:
        # same day, same secret; only the attempt starts over
        self.guesses = []
        self.current_guess = []
        self.started_at = self._clock()
        return True

    def _finish(self, won: bool) -> None:
        now = self._clock()
        seconds = self._seconds_since_start(now)
        self._frozen_time = format_elapsed(seconds)
        self.won = won
        self.status = "won" if won else "lost"

        result = DailyResult(
            completed=True,
            won=won,
            time=self._frozen_time,
            guess_records=tuple(self.guesses),
            timestamp=now,
        )
        # Keyed on the wall-clock date of completion, not the puzzle's day
        self._results.save(day_key(now), result)

        self.completion = CompletionEvent(
            completed=won,
            elapsed_seconds=seconds,
            guesses_used=len(self.guesses),
        )
        logger.info("Puzzle #%d %s in %d guesses (%s)", self.day_index, self.status,
                    len(self.guesses), self._frozen_time)
        if self._on_complete is not None:
            self._on_complete(self.completion)

    # --- Read-outs ---

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def guesses_used(self) -> int:
        return len(self.guesses)

    @property
    def message(self) -> str:
        if self.status == "restored_completed":
            return "Already completed today!" if self.won else "Already attempted today!"
        if self.status == "won":
            return "Code cracked!"
        if self.status == "lost":
            return "Out of guesses!"
        return "Crack the code!"

    def _seconds_since_start(self, now: datetime) -> int:
        return max(0, int((now - self.started_at).total_seconds()))

    def elapsed_seconds(self) -> int:
        if self._frozen_time is not None:
            return parse_elapsed(self._frozen_time)
        return self._seconds_since_start(self._clock())

    def elapsed_display(self) -> str:
        if self._frozen_time is not None:
            return self._frozen_time
        return format_elapsed(self.elapsed_seconds())

    def next_puzzle_in(self) -> str:
        return time_until_next_puzzle(self._clock())

    def share_text(self) -> str:
        if not self.is_terminal:
            raise ValueError("Share text is only available once the game is over.")
        return build_share_text(
            formatted_date(self.puzzle_date),
            self.guesses,
            self.won,
            self.elapsed_display(),
        )
