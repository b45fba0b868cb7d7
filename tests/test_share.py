"""
Testing the shareable result text.
"""

from daily_mastermind.engine import Feedback
from daily_mastermind.persistence import GuessRecord
from daily_mastermind.share import build_share_text, feedback_pegs

def test_feedback_pegs_fixed_order():
    assert feedback_pegs(Feedback(1, 2)) == ["🟢", "🟡", "🟡", "🔴"]
    assert feedback_pegs(Feedback(0, 0)) == ["🔴"] * 4
    assert feedback_pegs(Feedback(4, 0)) == ["🟢"] * 4

def test_share_text_for_a_win():
    records = [
        GuessRecord((0, 1, 2, 3), Feedback(0, 1)),
        GuessRecord((3, 5, 5, 4), Feedback(4, 0)),
    ]

    text = build_share_text("19 Oct 2026", records, True, "1:35")

    assert text == (
        "🎯 Mastermind · 19 Oct 2026\n"
        "🔴🔵🟢🟡 🟡🔴🔴🔴\n"
        "🟡🟠🟠🟣 🟢🟢🟢🟢\n"
        "\n✅ Solved in 2/8! | ⏱️ 1:35"
    )

def test_share_text_for_a_loss():
    records = [GuessRecord((0, 0, 0, 0), Feedback(0, 0))] * 8

    text = build_share_text("19 Oct 2026", records, False, "3:07")

    lines = text.split("\n")
    assert lines[0] == "🎯 Mastermind · 19 Oct 2026"
    assert lines[1:9] == ["🔴🔴🔴🔴 🔴🔴🔴🔴"] * 8
    assert lines[-1] == "❌ Failed | ⏱️ 3:07"
