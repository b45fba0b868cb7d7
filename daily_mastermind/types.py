"""
Labels for clarity.
"""

from typing import List, Literal

ColorIndex = int  # 0 -> PALETTE_SIZE - 1
Code = List[ColorIndex]  # 4 colour secret or guess
SessionStatus = Literal["in_progress", "won", "lost", "restored_completed"]
Command = Literal["select_color", "delete_last", "submit", "reset"]
