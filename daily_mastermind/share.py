"""
Shareable result text.

Pure function of (date, guess records, won, time) so a restored result
renders exactly like the live one did.
"""

from typing import List, Sequence

from . import config
from .engine import Feedback

EXACT_PEG = "🟢"
PARTIAL_PEG = "🟡"
MISS_PEG = "🔴"


def feedback_pegs(feedback: Feedback, code_length: int = config.CODE_LENGTH) -> List[str]:
    """Fixed order: exact first, then colour-only, then misses."""
    misses = code_length - feedback.exact_matches - feedback.color_matches
    return (
        [EXACT_PEG] * feedback.exact_matches
        + [PARTIAL_PEG] * feedback.color_matches
        + [MISS_PEG] * misses
    )


def build_share_text(
    date_text: str,
    records: Sequence,
    won: bool,
    time_display: str,
    max_guesses: int = config.MAX_GUESSES,
) -> str:
    """
    records: GuessRecord-like objects with .colors and .feedback

    Example:
      🎯 Mastermind · 19 Oct 2026
      🔴🔵🟢🟡 🟢🟡🔴🔴
      ...

      ✅ Solved in 3/8! | ⏱️ 1:42
    """
    text = f"🎯 Mastermind · {date_text}\n"
    for record in records:
        colours = "".join(config.PALETTE[c].emoji for c in record.colors)
        pegs = "".join(feedback_pegs(record.feedback, len(record.colors)))
        text += f"{colours} {pegs}\n"

    text += f"\n✅ Solved in {len(records)}/{max_guesses}!" if won else "\n❌ Failed"
    text += f" | ⏱️ {time_display}"
    return text
