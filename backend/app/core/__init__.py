"""
Core utilities, enums and configuration.
"""

from .rounds import PlayoffRound, PLAYOFF_ROUNDS, completed_rounds_through

__all__ = [
    "PlayoffRound",
    "PLAYOFF_ROUNDS",
    "completed_rounds_through",
]
