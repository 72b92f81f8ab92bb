"""
Data models for the win-probability engine.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Mapping, Optional, Sequence

from .exceptions import InvalidSnapshotError


@dataclass(frozen=True)
class RoundData:
    """
    One round of a team's roster data.

    A completed round carries ``actual_scores``; a pending round carries
    ``expected_points`` and ``variance``. Never both.
    """

    name: str
    actual_scores: Optional[List[Optional[float]]] = None
    expected_points: Optional[List[float]] = None
    variance: Optional[List[float]] = None

    @property
    def is_completed(self) -> bool:
        return self.actual_scores is not None

    @property
    def roster_size(self) -> int:
        if self.actual_scores is not None:
            return len(self.actual_scores)
        return len(self.expected_points or [])

    def actual_total(self) -> float:
        return sum(score or 0 for score in self.actual_scores or [])

    def expected_total(self) -> float:
        if self.is_completed:
            return self.actual_total()
        return sum(self.expected_points or [])

    def _check_slots(self, team_name: str, label: str, values: object, allow_null: bool = False) -> None:
        """Raise InvalidSnapshotError unless ``values`` is a list of finite numbers."""
        if not isinstance(values, (list, tuple)):
            raise InvalidSnapshotError(f"{label} must be a list, got {type(values).__name__}", team_name, self.name)

        for idx, value in enumerate(values):
            if value is None:
                if allow_null:
                    continue
                raise InvalidSnapshotError(f"slot {idx} has no {label}", team_name, self.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidSnapshotError(f"slot {idx} {label} is not a number: {value!r}", team_name, self.name)
            if not math.isfinite(value):
                raise InvalidSnapshotError(f"slot {idx} has a non-finite {label}", team_name, self.name)

    def validate(self, team_name: str) -> None:
        """Raise InvalidSnapshotError unless this round is fully completed or fully pending."""
        has_expected = self.expected_points is not None or self.variance is not None

        if self.actual_scores is not None:
            if has_expected:
                raise InvalidSnapshotError(
                    "round mixes actual scores with expected points/variance",
                    team_name, self.name
                )
            self._check_slots(team_name, "actual scores", self.actual_scores, allow_null=True)
            return

        if self.expected_points is None and self.variance is None:
            raise InvalidSnapshotError(
                "round has neither actual scores nor expected points/variance",
                team_name, self.name
            )
        if self.expected_points is None:
            raise InvalidSnapshotError("pending round is missing expected points", team_name, self.name)
        if self.variance is None:
            raise InvalidSnapshotError("pending round is missing variance", team_name, self.name)

        self._check_slots(team_name, "expected points", self.expected_points)
        self._check_slots(team_name, "variance", self.variance)

        if len(self.expected_points) != len(self.variance):
            raise InvalidSnapshotError(
                f"expected points ({len(self.expected_points)}) and variance "
                f"({len(self.variance)}) have different lengths",
                team_name, self.name
            )

        for idx, var in enumerate(self.variance):
            if var < 0:
                raise InvalidSnapshotError(f"slot {idx} has negative variance {var}", team_name, self.name)

    def to_dict(self) -> dict:
        if self.is_completed:
            return {"name": self.name, "actual_scores": list(self.actual_scores)}
        return {
            "name": self.name,
            "expected_points": list(self.expected_points or []),
            "variance": list(self.variance or [])
        }


@dataclass(frozen=True)
class TeamSnapshot:
    """A fantasy team's per-round roster data, in bracket order."""

    team_name: str
    rounds: List[RoundData] = field(default_factory=list)

    @property
    def round_names(self) -> List[str]:
        return [r.name for r in self.rounds]

    @property
    def roster_size(self) -> int:
        return self.rounds[0].roster_size if self.rounds else 0

    @property
    def expected_total(self) -> float:
        """Actual points for completed rounds plus expected points for pending rounds."""
        return sum(r.expected_total() for r in self.rounds)

    @property
    def total_variance(self) -> float:
        return sum(sum(r.variance or []) for r in self.rounds if not r.is_completed)

    def validate(self) -> None:
        """Check round completeness and that every round has the same roster size."""
        if not self.rounds:
            raise InvalidSnapshotError("snapshot has no rounds", self.team_name)

        seen = set()
        for round_data in self.rounds:
            if round_data.name in seen:
                raise InvalidSnapshotError("round appears more than once", self.team_name, round_data.name)
            seen.add(round_data.name)
            round_data.validate(self.team_name)

        size = self.roster_size
        if size == 0:
            raise InvalidSnapshotError("roster has zero slots", self.team_name)

        for round_data in self.rounds[1:]:
            if round_data.roster_size != size:
                raise InvalidSnapshotError(
                    f"roster size {round_data.roster_size} does not match {size}",
                    self.team_name, round_data.name
                )

    @classmethod
    def from_pool_team(cls, team: dict, rounds: Sequence[str], completed_rounds: Sequence[str]) -> 'TeamSnapshot':
        """
        Build a snapshot from a pool team record.

        Pool records keep per-round arrays under ``scores``, ``expectedPoints``
        and ``variance``. Rounds listed in ``completed_rounds`` are read from
        ``scores``; every other round from ``expectedPoints``/``variance``.

        Args:
            team: Pool team record with a ``teamName`` key
            rounds: Round names in bracket order
            completed_rounds: Rounds whose actual scores are final

        Returns:
            TeamSnapshot for the team

        Raises:
            InvalidSnapshotError: If a per-round section is not a mapping
        """
        team_name = team["teamName"]
        completed = set(completed_rounds)

        sections = {}
        for key in ("scores", "expectedPoints", "variance"):
            section = team.get(key) or {}
            if not isinstance(section, Mapping):
                raise InvalidSnapshotError(
                    f"'{key}' must map round names to per-player lists, got {type(section).__name__}",
                    team_name
                )
            sections[key] = section
        scores, expected, variance = sections["scores"], sections["expectedPoints"], sections["variance"]

        round_data = []
        for name in rounds:
            if name in completed:
                round_data.append(RoundData(name=name, actual_scores=scores.get(name)))
            else:
                round_data.append(RoundData(
                    name=name,
                    expected_points=expected.get(name),
                    variance=variance.get(name)
                ))

        return cls(team_name=team_name, rounds=round_data)

    def to_dict(self) -> dict:
        return {
            "team_name": self.team_name,
            "rounds": [r.to_dict() for r in self.rounds]
        }


class FinishTally:
    """
    Finish-position counts for one simulation run.

    ``counts[team][rank]`` is the number of trials that placed ``team`` at
    ``rank`` (0 = highest total). Tallies from separate shards of the same
    run are combined with ``merge``.
    """

    def __init__(self, n_teams: int):
        self.n_teams = n_teams
        self.trials = 0
        self.counts: List[List[int]] = [[0] * n_teams for _ in range(n_teams)]

    def record(self, ranking: Sequence[int]) -> None:
        """Record one trial. ``ranking`` lists team indexes from first to last."""
        for rank, team_idx in enumerate(ranking):
            self.counts[team_idx][rank] += 1
        self.trials += 1

    def merge(self, other: 'FinishTally') -> None:
        if other.n_teams != self.n_teams:
            raise ValueError(f"Cannot merge tally for {other.n_teams} teams into {self.n_teams}")
        for mine, theirs in zip(self.counts, other.counts):
            for rank, count in enumerate(theirs):
                mine[rank] += count
        self.trials += other.trials


@dataclass(frozen=True)
class TeamResult:
    """Finish-position probabilities for one team (percentages)."""

    team_name: str
    expected_total: float
    finish_counts: List[int]
    finish_probabilities: List[float]
    win_probability: float
    top3_probability: float
    last_place_probability: float

    def to_dict(self) -> dict:
        return {
            "team_name": self.team_name,
            "expected_total": self.expected_total,
            "finish_counts": list(self.finish_counts),
            "finish_probabilities": list(self.finish_probabilities),
            "win_probability": self.win_probability,
            "top3_probability": self.top3_probability,
            "last_place_probability": self.last_place_probability
        }


@dataclass(frozen=True)
class SimulationReport:
    """Sorted team results plus provenance for display."""

    teams: List[TeamResult]
    n_simulations: int
    generated_at: datetime

    def to_dict(self) -> dict:
        return {
            "generated_at": self.generated_at.isoformat(),
            "n_simulations": self.n_simulations,
            "teams": [t.to_dict() for t in self.teams]
        }


@dataclass(frozen=True)
class TeamSummary:
    """Deterministic spread statistics for one team's projected total."""

    team_name: str
    roster_size: int
    expected_total: float
    total_variance: float
    std_dev: float
    coefficient_of_variation: Optional[float]
    p25: float
    p75: float

    def to_dict(self) -> Dict[str, object]:
        return {
            "team_name": self.team_name,
            "roster_size": self.roster_size,
            "expected_total": self.expected_total,
            "total_variance": self.total_variance,
            "std_dev": self.std_dev,
            "coefficient_of_variation": self.coefficient_of_variation,
            "p25": self.p25,
            "p75": self.p75
        }
