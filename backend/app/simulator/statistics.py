"""
Deterministic spread statistics for team projections.

A team's projected total is treated as the sum of independent per-slot
normals, so its variance is the sum of the slot variances. Completed rounds
contribute their actual points and no variance.
"""

import math
from typing import List, Sequence

from .models import TeamSnapshot, TeamSummary


# z-score of the 75th percentile of a standard normal
QUARTILE_Z = 0.674


def summarize_team(team: TeamSnapshot) -> TeamSummary:
    """
    Summarize one team's projected total.

    Args:
        team: Validated team snapshot

    Returns:
        TeamSummary with expected total, variance, standard deviation,
        coefficient of variation (percent) and the P25/P75 band
    """
    expected = team.expected_total
    variance = team.total_variance
    std_dev = math.sqrt(variance)
    cv = std_dev / expected * 100 if expected != 0 else None

    return TeamSummary(
        team_name=team.team_name,
        roster_size=team.roster_size,
        expected_total=round(expected, 1),
        total_variance=round(variance, 1),
        std_dev=round(std_dev, 2),
        coefficient_of_variation=round(cv, 1) if cv is not None else None,
        p25=round(expected - QUARTILE_Z * std_dev, 1),
        p75=round(expected + QUARTILE_Z * std_dev, 1)
    )


def summarize_pool(teams: Sequence[TeamSnapshot]) -> List[TeamSummary]:
    """Summaries for every team, validating each snapshot first, sorted by expected total."""
    for team in teams:
        team.validate()
    summaries = [summarize_team(team) for team in teams]
    return sorted(summaries, key=lambda s: s.expected_total, reverse=True)
