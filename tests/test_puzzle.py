"""
Testing daily puzzle derivation: day index, secret code, keys and dates.
"""

from datetime import date, datetime, timedelta, timezone

from daily_mastermind.puzzle import (
    day_index, day_key, formatted_date, generate_secret_code, seed_for_day, time_until_next_puzzle,
)

LAUNCH = date(2025, 1, 27)
UTC = timezone.utc

def test_known_daily_codes():
    # Already published daily codes; must never change
    assert generate_secret_code(0) == [4, 0, 1, 0]
    assert generate_secret_code(1) == [1, 1, 4, 1]
    assert generate_secret_code(2) == [4, 3, 4, 2]
    assert generate_secret_code(630) == [3, 5, 5, 4]
    assert generate_secret_code(-1) == [2, 3, 1, 0]

def test_seed_formula():
    assert seed_for_day(0) == 777
    assert seed_for_day(630) == 630777

def test_generation_is_deterministic_and_in_range():
    for index in range(-10, 200):
        code = generate_secret_code(index)
        assert code == generate_secret_code(index)
        assert len(code) == 4
        assert all(0 <= c < 6 for c in code)

def test_palette_size_is_a_parameter():
    code = generate_secret_code(630, code_length=6, palette_size=3)
    assert len(code) == 6
    assert all(0 <= c < 3 for c in code)

def test_consecutive_days_get_different_codes():
    for index in range(0, 730):
        assert generate_secret_code(index) != generate_secret_code(index + 1)

def test_day_index_switches_at_utc_midnight():
    assert day_index(datetime(2025, 1, 27, 0, 0, tzinfo=UTC), LAUNCH) == 0
    assert day_index(datetime(2026, 10, 19, 23, 59, 59, tzinfo=UTC), LAUNCH) == 630
    assert day_index(datetime(2026, 10, 20, 0, 0, 0, tzinfo=UTC), LAUNCH) == 631
    assert day_index(datetime(2025, 1, 26, 23, 0, tzinfo=UTC), LAUNCH) == -1

def test_day_index_ignores_local_time_zone():
    # 01:00 in UTC+5 is still the previous UTC day
    plus_five = timezone(timedelta(hours=5))
    assert day_index(datetime(2026, 10, 20, 1, 0, tzinfo=plus_five), LAUNCH) == 630
    # naive datetimes are read as UTC
    assert day_index(datetime(2026, 10, 19, 8, 0), LAUNCH) == 630

def test_day_key_uses_unpadded_utc_date():
    assert day_key(datetime(2026, 1, 5, 10, 0, tzinfo=UTC)) == "mastermind-2026-1-5"
    assert day_key(datetime(2026, 10, 19, 23, 59, tzinfo=UTC)) == "mastermind-2026-10-19"

def test_day_key_changes_across_midnight():
    before = datetime(2026, 10, 19, 23, 59, 59, tzinfo=UTC)
    after = before + timedelta(seconds=1)
    assert day_key(before) != day_key(after)

def test_formatted_date():
    assert formatted_date(datetime(2026, 10, 19, 12, 0, tzinfo=UTC)) == "19 Oct 2026"
    assert formatted_date(datetime(2026, 9, 5, 12, 0, tzinfo=UTC)) == "5 Sept 2026"
    assert formatted_date(date(2026, 1, 5)) == "5 Jan 2026"

def test_time_until_next_puzzle():
    assert time_until_next_puzzle(datetime(2026, 10, 19, 19, 56, 58, tzinfo=UTC)) == "4h 3m 2s"
    assert time_until_next_puzzle(datetime(2026, 10, 19, 0, 0, 0, tzinfo=UTC)) == "24h 0m 0s"
    assert time_until_next_puzzle(datetime(2026, 10, 19, 23, 59, 59, 500000, tzinfo=UTC)) == "0h 0m 0s"
