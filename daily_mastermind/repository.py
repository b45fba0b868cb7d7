"""
DB-backed key-value storage with the same API as store.MemoryStorage.

Public methods:
- get_item(key) -> str | None
- set_item(key, value) -> None

Why: lets DailyResultStore switch from memory to SQL without changing the
session code. Errors propagate; DailyResultStore decides they are non-fatal.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from .models import StoredItem


class SqlStorage:
    """KeyValueStorage scoped to one owner (player)."""

    def __init__(self, session_factory: sessionmaker, owner: str):
        self.session_factory = session_factory
        self.owner = owner

    def _find(self, db, key: str) -> Optional[StoredItem]:
        return db.execute(
            select(StoredItem).where(StoredItem.owner == self.owner, StoredItem.key == key)
        ).scalar_one_or_none()

    def get_item(self, key: str) -> Optional[str]:
        with self.session_factory() as db:
            item = self._find(db, key)
            return item.value if item else None

    def set_item(self, key: str, value: str) -> None:
        with self.session_factory() as db:
            try:
                item = self._find(db, key)
                if item is None:
                    db.add(StoredItem(owner=self.owner, key=key, value=value, updated_at=datetime.utcnow()))
                else:
                    item.value = value
                    item.updated_at = datetime.utcnow()
                db.commit()
            except Exception:
                db.rollback()
                raise
