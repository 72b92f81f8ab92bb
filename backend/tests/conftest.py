"""
Shared fixtures for simulator and API tests.
"""

import pytest

from app.simulator import RoundData, TeamSnapshot


def completed(name, scores):
    return RoundData(name=name, actual_scores=list(scores))


def pending(name, expected, variance):
    return RoundData(name=name, expected_points=list(expected), variance=list(variance))


@pytest.fixture
def make_team():
    """Factory for a two-round team: one completed round, one pending round."""
    def _make(name, actual, expected, variance):
        return TeamSnapshot(
            team_name=name,
            rounds=[completed("wildcard", actual), pending("divisional", expected, variance)]
        )
    return _make


@pytest.fixture
def scenario_teams(make_team):
    """Team A banked 15 points, team B 12; both have [5, 5] left with no variance."""
    return [
        make_team("Team A", [10, 5], [5, 5], [0, 0]),
        make_team("Team B", [8, 4], [5, 5], [0, 0]),
    ]


@pytest.fixture
def full_bracket_team():
    """Factory for a four-round team with the wildcard round completed."""
    def _make(name, actual, expected, variance):
        return TeamSnapshot(
            team_name=name,
            rounds=[
                completed("wildcard", actual),
                pending("divisional", expected, variance),
                pending("championship", expected, variance),
                pending("superbowl", expected, variance),
            ]
        )
    return _make
