"""
In-memory store
- MemoryStorage: dict-backed key-value storage (tests, or running without a DB)
- SessionStore: holds each player's live Session for today in memory.
"""

import logging
from typing import Callable, Dict, Optional, Tuple
from threading import RLock

from . import config
from .persistence import DailyResultStore, KeyValueStorage
from .puzzle import day_index
from .session import Clock, CompletionEvent, Session, utc_now
from .types import Command

logger = logging.getLogger(__name__)


class MemoryStorage:
    def __init__(self) -> None:
        self._items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value


class SessionStore:
    """
    One live Session per player for the current UTC day.

    FastAPI runs sync routes in a thread pool. The registry lock only guards
    the dicts; commands run under the player's own lock, so a slow storage
    write for one player never stalls the others.
    When the UTC day rolls over every session is dropped: yesterday's games
    are over either way, and today's state is rebuilt from storage on demand.
    """

    def __init__(
        self,
        storage_for: Callable[[str], KeyValueStorage],
        clock: Clock = utc_now,
    ) -> None:
        self._storage_for = storage_for
        self._clock = clock
        self._lock = RLock()
        self._sessions: Dict[str, Session] = {}
        self._player_locks: Dict[str, RLock] = {}
        self._day: Optional[int] = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _roll_over(self, today: int) -> None:
        if self._day is not None and self._sessions:
            logger.info("Day rolled over; dropping %d session(s), starting puzzle #%d", len(self._sessions), today)
        self._sessions.clear()
        self._player_locks.clear()
        self._day = today

    def _entry(self, player_id: str) -> Tuple[Session, RLock]:
        with self._lock:
            today = day_index(self._clock(), config.LAUNCH_DATE)
            if today != self._day:
                self._roll_over(today)

            session = self._sessions.get(player_id)
            if session is None:
                session = Session(
                    DailyResultStore(self._storage_for(player_id)),
                    clock=self._clock,
                    on_complete=lambda event: self._log_completion(player_id, event),
                )
                self._sessions[player_id] = session
            return session, self._player_locks.setdefault(player_id, RLock())

    def get_or_start(self, player_id: str) -> Session:
        return self._entry(player_id)[0]

    def _log_completion(self, player_id: str, event: CompletionEvent) -> None:
        logger.info(
            "GAME_COMPLETE player=%s completed=%s time_seconds=%d guesses_used=%d difficulty=%s",
            player_id, event.completed, event.elapsed_seconds, event.guesses_used, event.difficulty,
        )

    def apply(self, player_id: str, command: Command, *args) -> Tuple[Session, bool, Optional[CompletionEvent]]:
        """
        Run one command against the player's session.
        Returns (session, applied, completion); completion is set only when
        this very command ended the game.
        """
        session, player_lock = self._entry(player_id)
        with player_lock:
            was_terminal = session.is_terminal
            applied = session.dispatch(command, *args)
            completion = session.completion if (not was_terminal and session.is_terminal) else None
            return session, applied, completion
