"""
Daily puzzle derivation (no HTTP, no storage).

Everything here takes the current moment as an argument so tests can pin
the clock. "Today" always means the UTC calendar date, never local time.
"""

from datetime import date, datetime, timedelta, timezone
from math import floor

from . import config
from .rng import mulberry32
from .types import Code

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sept", "Oct", "Nov", "Dec")


def utc_date(moment) -> date:
    """UTC calendar date of a moment; naive datetimes are read as UTC."""
    if not isinstance(moment, datetime):
        return moment  # already a calendar date
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone(timezone.utc).date()


def day_index(now: datetime, launch_date: date = config.LAUNCH_DATE) -> int:
    """
    Whole UTC days since launch (midnight to midnight, not elapsed seconds).
    Example: launch 2025-01-27, now 2026-10-19T23:59Z -> 630
    """
    return (utc_date(now) - launch_date).days


def seed_for_day(index: int) -> int:
    return index * config.SEED_MULTIPLIER + config.SEED_OFFSET


def generate_secret_code(
    index: int,
    code_length: int = config.CODE_LENGTH,
    palette_size: int = config.PALETTE_SIZE,
) -> Code:
    """
    Same day index -> same code on every client.
    Duplicate colours are allowed (no rejection sampling).
    """
    stream = mulberry32(seed_for_day(index))
    code = []
    for _ in range(code_length):
        code.append(floor(next(stream) * palette_size))
    return code


def day_key(now: datetime, prefix: str = config.STORAGE_KEY_PREFIX) -> str:
    # Month/day are not zero padded, e.g. "mastermind-2026-1-5"
    today = utc_date(now)
    return f"{prefix}-{today.year}-{today.month}-{today.day}"


def formatted_date(now) -> str:
    """e.g. '19 Oct 2026'"""
    today = utc_date(now)
    return f"{today.day} {_MONTHS[today.month - 1]} {today.year}"


def time_until_next_puzzle(now: datetime) -> str:
    """Countdown to the next UTC midnight as 'Hh Mm Ss'."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    today = utc_date(now)
    midnight = datetime(today.year, today.month, today.day, tzinfo=timezone.utc) + timedelta(days=1)
    remaining = int((midnight - now).total_seconds())
    hours, rest = divmod(remaining, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours}h {minutes}m {seconds}s"
