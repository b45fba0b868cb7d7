"""
Explicit validation & Pydantic models
- Stored* models describe the persisted daily record (one JSON blob per day key)
  and reject corrupt data on load.
- The rest define the structure of API requests and responses.
"""

import re
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from . import config

_TIME_RE = re.compile(r"[0-9]+:[0-9]{2}")
# 9999-12-31T23:59:59.999Z, the last moment datetime can hold
MAX_TIMESTAMP_MS = 253402300799999


def _check_colors(colors: List[int]) -> List[int]:
    if len(colors) != config.CODE_LENGTH:
        raise ValueError(f"Exactly {config.CODE_LENGTH} colours required.")
    for colour in colors:
        if colour < 0 or colour >= config.PALETTE_SIZE:
            raise ValueError(f"Each colour must be between 0 and {config.PALETTE_SIZE - 1} inclusive.")
    return colors


# ---------------- Persisted record ----------------

class StoredFeedback(BaseModel):
    black: int = Field(..., ge=0, description="Exact matches")
    white: int = Field(..., ge=0, description="Colour-only matches")

    @model_validator(mode="after")
    def check_total(self):
        if self.black + self.white > config.CODE_LENGTH:
            raise ValueError("Feedback cannot exceed the code length.")
        return self


class StoredGuess(BaseModel):
    colors: List[int]
    feedback: StoredFeedback

    @field_validator("colors")
    @classmethod
    def validate_colors(cls, colors: List[int]) -> List[int]:
        return _check_colors(colors)


class StoredDailyResult(BaseModel):
    """Wire shape of a finished day; field names match existing saved data."""
    completed: bool
    won: bool
    time: str
    guessCount: int = Field(..., ge=0)
    guesses: List[StoredGuess] = Field(default_factory=list)
    timestamp: int = Field(..., ge=0, le=MAX_TIMESTAMP_MS, description="Epoch milliseconds when the day was finished")

    @field_validator("time")
    @classmethod
    def validate_time(cls, value: str) -> str:
        if not _TIME_RE.fullmatch(value):
            raise ValueError("time must look like M:SS")
        return value


# ---------------- API ----------------

# 1. Validates a colour selection
class ColorRequest(BaseModel):
    color: int = Field(..., description=f"Colour index, 0 to {config.PALETTE_SIZE - 1}")

    @field_validator("color")
    @classmethod
    def validate_color(cls, color: int) -> int:
        if color < 0 or color >= config.PALETTE_SIZE:
            raise ValueError(f"Colour must be between 0 and {config.PALETTE_SIZE - 1} inclusive.")
        return color

    model_config = {
        "json_schema_extra": {
            "examples": [{"color": 0}, {"color": 5}]
        }
    }


class ColorOut(BaseModel):
    index: int
    name: str
    letter: str
    hex: str


# 2. Today's puzzle (no secret)
class PuzzleOut(BaseModel):
    day_index: int = Field(..., description="Whole UTC days since launch")
    date: str = Field(..., description="Formatted UTC date, e.g. '19 Oct 2026'")
    code_length: int
    max_guesses: int
    palette: List[ColorOut]
    next_puzzle_in: str = Field(..., description="Countdown to next UTC midnight")


# 3. One scored guess
class GuessRecordOut(BaseModel):
    colors: List[int] = Field(..., description="The guessed colours")
    black: int = Field(..., description="Right colour, right place")
    white: int = Field(..., description="Right colour, wrong place")
    pegs: List[str] = Field(..., description="Feedback glyphs, exact first")


# 4. Session state
class SessionOut(BaseModel):
    player_id: str
    day_index: int
    date: str
    status: Literal["in_progress", "won", "lost", "restored_completed"]
    won: bool
    message: str
    guesses: List[GuessRecordOut]
    current_guess: List[int]
    guesses_used: int
    max_guesses: int
    elapsed: str = Field(..., description="M:SS, frozen once the game ends")
    secret: Optional[List[int]] = Field(None, description="Only revealed once the game is over")
    next_puzzle_in: Optional[str] = Field(None, description="Only while the game is over")


# 5. Host notification, mirrors CompletionEvent
class CompletionOut(BaseModel):
    completed: bool = Field(..., description="True when the code was cracked")
    elapsed_seconds: int
    guesses_used: int
    difficulty: str


# 6. Result of any command
class CommandOut(BaseModel):
    applied: bool = Field(..., description="False when the command was not valid in this state (no-op)")
    session: SessionOut
    completion: Optional[CompletionOut] = Field(None, description="Present only on the call that ended the game")


class ShareOut(BaseModel):
    text: str
