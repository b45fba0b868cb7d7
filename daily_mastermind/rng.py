"""
Deterministic RNG (mulberry32).

Every client must derive the same daily code, so the arithmetic here is
bit-exact 32-bit unsigned math: every intermediate is wrapped with MASK_32.
"""

from typing import Iterator, Tuple

MASK_32 = 0xFFFFFFFF
INCREMENT = 0x6D2B79F5
TWO_POW_32 = 4294967296.0


def _imul(a: int, b: int) -> int:
    # low 32 bits of the product, like a C uint32 multiply
    return (a * b) & MASK_32


def next_float(state: int) -> Tuple[float, int]:
    """
    Advance the generator one step.
    Returns (value in [0, 1), new_state). Pure: same state in, same pair out.
    """
    state = (state + INCREMENT) & MASK_32
    t = _imul(state ^ (state >> 15), state | 1)
    t ^= (t + _imul(t ^ (t >> 7), t | 61)) & MASK_32
    return ((t ^ (t >> 14)) & MASK_32) / TWO_POW_32, state


def mulberry32(seed: int) -> Iterator[float]:
    """Endless stream of floats for a seed (negative seeds wrap mod 2**32)."""
    state = seed & MASK_32
    while True:
        value, state = next_float(state)
        yield value
