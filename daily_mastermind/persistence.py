"""
Daily result persistence.

Public API:
- DailyResultStore(storage).save(day_key, result) -> bool
- DailyResultStore(storage).load(day_key) -> DailyResult | None

The storage is any string key-value mapping (see KeyValueStorage). Storage
trouble never reaches gameplay: a failed write is logged and dropped (no
retry), a failed read or a corrupt record loads as "nothing saved today".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Protocol, Tuple

from pydantic import ValidationError

from .engine import Feedback
from .schemas import StoredDailyResult, StoredFeedback, StoredGuess
from .types import ColorIndex

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...


@dataclass(frozen=True)
class GuessRecord:
    colors: Tuple[ColorIndex, ...]
    feedback: Feedback


@dataclass(frozen=True)
class DailyResult:
    completed: bool
    won: bool
    time: str  # "M:SS"
    guess_records: Tuple[GuessRecord, ...]
    timestamp: datetime

    @property
    def guess_count(self) -> int:
        return len(self.guess_records)


def encode_result(result: DailyResult) -> str:
    stored = StoredDailyResult(
        completed=result.completed,
        won=result.won,
        time=result.time,
        guessCount=result.guess_count,
        guesses=[
            StoredGuess(
                colors=list(r.colors),
                feedback=StoredFeedback(black=r.feedback.exact_matches, white=r.feedback.color_matches),
            )
            for r in result.guess_records
        ],
        timestamp=int(result.timestamp.timestamp() * 1000),
    )
    return stored.model_dump_json()


def decode_result(raw: str) -> DailyResult:
    """Raises pydantic.ValidationError (a ValueError) on malformed data."""
    stored = StoredDailyResult.model_validate_json(raw)
    return DailyResult(
        completed=stored.completed,
        won=stored.won,
        time=stored.time,
        guess_records=tuple(
            GuessRecord(tuple(g.colors), Feedback(g.feedback.black, g.feedback.white))
            for g in stored.guesses
        ),
        timestamp=datetime.fromtimestamp(stored.timestamp / 1000, tz=timezone.utc),
    )


class DailyResultStore:
    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def save(self, day_key: str, result: DailyResult) -> bool:
        try:
            self.storage.set_item(day_key, encode_result(result))
        except Exception:
            # quota, unavailable DB, ... -> keep playing in memory only
            logger.warning("Could not save daily result %s; continuing in memory", day_key, exc_info=True)
            return False
        logger.info("Saved daily result %s (won=%s, guesses=%d)", day_key, result.won, result.guess_count)
        return True

    def load(self, day_key: str) -> Optional[DailyResult]:
        try:
            raw = self.storage.get_item(day_key)
        except Exception:
            logger.warning("Could not read daily result %s; starting fresh", day_key, exc_info=True)
            return None
        if raw is None:
            return None

        try:
            result = decode_result(raw)
        except (ValidationError, ValueError, OverflowError, OSError):
            # bad JSON/shape, or a timestamp datetime cannot represent
            logger.warning("Ignoring corrupt daily result %s", day_key)
            return None

        if not result.completed:
            return None
        return result
