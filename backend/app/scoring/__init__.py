"""
Fantasy scoring for NFL player stat lines.
"""

from .fantasy_points import ScoringRule, ScoredCategory, FantasyPoints, STANDARD_RULES, calculate_fantasy_points

__all__ = [
    "ScoringRule",
    "ScoredCategory",
    "FantasyPoints",
    "STANDARD_RULES",
    "calculate_fantasy_points",
]
