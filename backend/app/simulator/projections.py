"""
Expected points from raw projections and NFL team advancement odds.

A player only scores in a round if their NFL team is still playing, so the
expected points for a slot are its projected points weighted by the team's
probability of reaching that round.
"""

import logging
from typing import Dict, List, Mapping, Optional, Sequence

from .exceptions import InvalidSnapshotError


logger = logging.getLogger(__name__)


def calculate_expected_points(
    projected_points: Mapping[str, Sequence[Optional[float]]],
    nfl_teams: Sequence[str],
    team_probabilities: Mapping[str, Sequence[float]],
    rounds: Sequence[str],
    team_name: Optional[str] = None
) -> Dict[str, List[float]]:
    """
    Weight each slot's projection by its NFL team's chance of playing the round.

    Args:
        projected_points: Per-round projected points, one entry per roster slot
        nfl_teams: NFL team abbreviation for each roster slot
        team_probabilities: Per NFL team, the probability of playing each
            round, indexed in the same order as ``rounds``
        rounds: Round names in bracket order
        team_name: Fantasy team name, used in error messages

    Returns:
        Expected points per round, rounded to one decimal

    Raises:
        InvalidSnapshotError: If a round is missing, a slot count does not
            match the roster, or an NFL team has no probability for a round
    """
    expected = {}
    for round_idx, round_name in enumerate(rounds):
        projections = projected_points.get(round_name)
        if projections is None:
            raise InvalidSnapshotError("no projected points", team_name, round_name)
        if len(projections) != len(nfl_teams):
            raise InvalidSnapshotError(
                f"{len(projections)} projections for {len(nfl_teams)} roster slots",
                team_name, round_name
            )

        values = []
        for slot, (projection, nfl_team) in enumerate(zip(projections, nfl_teams)):
            probabilities = team_probabilities.get(nfl_team)
            if probabilities is None or round_idx >= len(probabilities):
                raise InvalidSnapshotError(
                    f"slot {slot}: no advancement probability for {nfl_team!r}",
                    team_name, round_name
                )
            values.append(round((projection or 0) * probabilities[round_idx], 1))
        expected[round_name] = values

    return expected


def apply_expected_points(
    team: dict,
    team_probabilities: Mapping[str, Sequence[float]],
    rounds: Sequence[str]
) -> dict:
    """
    Return a copy of a pool team record with ``expectedPoints`` filled in.

    The record needs a ``roster`` of players with an ``nflTeam`` and a
    ``projectedPoints`` section keyed by round.
    """
    team_name = team.get("teamName")
    nfl_teams = [player["nflTeam"] for player in team.get("roster", [])]

    expected = calculate_expected_points(
        team.get("projectedPoints") or {},
        nfl_teams,
        team_probabilities,
        rounds,
        team_name=team_name
    )
    logger.debug("Expected points for %s: %s", team_name, expected)

    updated = dict(team)
    updated["expectedPoints"] = expected
    return updated
