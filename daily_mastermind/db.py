"""
Single place to:
- Create a SQLAlchemy Engine from DATABASE_URL (SQLite by default, MySQL via PyMySQL)
- Create a Session factory (SessionLocal)
- Hand SessionLocal to the live-session registry (main.py)

Why a factory and not a per-request session: a player's live game outlives
the request, and its storage opens a short session per read/write.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from . import config

# 1) Create the SQLAlchemy Engine.
#    pool_pre_ping=True = auto-detect dead connections (helps with long-lived processes).
#    SQLite needs check_same_thread=False because routes run in a thread pool.
connect_args = {"check_same_thread": False} if config.DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(
    config.DATABASE_URL,
    pool_pre_ping=True,
    echo=False,
    connect_args=connect_args,
)

# 2) Session factory.
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

# 3) Base class for ORM models.
class Base(DeclarativeBase):
    pass
