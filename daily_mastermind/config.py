"""
Single place for settings.

- Environment driven values (read once at import, .env supported in dev)
- Fixed game constants. SEED_MULTIPLIER / SEED_OFFSET must never change:
  they decide every past and future daily code.
"""

import os
from datetime import date
from typing import NamedTuple, Tuple

from dotenv import load_dotenv

# dev convenience; in prod the platform injects env vars
load_dotenv()

APP_ENV = os.getenv("APP_ENV", "local")
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+pysqlite:///./mastermind.db")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LAUNCH_DATE = date.fromisoformat(os.getenv("MASTERMIND_LAUNCH_DATE", "2025-01-27"))


class Color(NamedTuple):
    name: str
    letter: str
    hex: str
    emoji: str


# Index order matters: a ColorIndex is a position in this tuple
PALETTE: Tuple[Color, ...] = (
    Color("Red", "R", "#ef4444", "🔴"),
    Color("Blue", "B", "#3b82f6", "🔵"),
    Color("Green", "G", "#22c55e", "🟢"),
    Color("Yellow", "Y", "#eab308", "🟡"),
    Color("Purple", "P", "#a855f7", "🟣"),
    Color("Orange", "O", "#f97316", "🟠"),
)
PALETTE_SIZE = len(PALETTE)

CODE_LENGTH = 4
MAX_GUESSES = 8

SEED_MULTIPLIER = 1000
SEED_OFFSET = 777

STORAGE_KEY_PREFIX = "mastermind"
DIFFICULTY = "Standard"
