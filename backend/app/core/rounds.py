"""
Playoff round enum and bracket ordering.
"""

from enum import Enum
from typing import List


class PlayoffRound(str, Enum):
    """NFL playoff rounds, in bracket order."""
    WILDCARD = "wildcard"
    DIVISIONAL = "divisional"
    CHAMPIONSHIP = "championship"
    SUPERBOWL = "superbowl"


PLAYOFF_ROUNDS: List[str] = [r.value for r in PlayoffRound]


def completed_rounds_through(last_completed: str) -> List[str]:
    """
    Get every round up to and including ``last_completed``.

    Args:
        last_completed: Name of the latest finished round

    Returns:
        Round names in bracket order

    Raises:
        ValueError: If the round name is unknown
    """
    current = PlayoffRound(last_completed.lower())
    return PLAYOFF_ROUNDS[:PLAYOFF_ROUNDS.index(current.value) + 1]
