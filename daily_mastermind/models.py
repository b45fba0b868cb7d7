"""
SQLAlchemy ORM models.

Tables:
- stored_items: a plain key-value table, one namespace per player
  (owner). Daily results live here as JSON text under keys like
  "mastermind-2026-10-19", exactly as a browser would keep them in local storage.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import String, Integer, DateTime, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from .db import Base

class StoredItem(Base):
    __tablename__ = "stored_items"
    __table_args__ = (UniqueConstraint("owner", "key", name="uq_stored_items_owner_key"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Namespace, i.e. the player id
    owner: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    key: Mapped[str] = mapped_column(String(64), nullable=False)

    # Encoded DailyResult (JSON)
    value: Mapped[str] = mapped_column(Text, nullable=False)

    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
