"""
Pydantic schemas for API request/response validation.
"""

from datetime import datetime
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field

from ..core.config import MAX_SIMULATIONS
from ..simulator import RoundData, TeamSnapshot


# ============== Snapshot Schemas ==============

class RoundPayload(BaseModel):
    """One round of a team's roster data. Completed rounds send actual_scores, pending rounds send expected_points and variance."""
    name: str = Field(..., min_length=1, max_length=50)
    actual_scores: Optional[List[Optional[float]]] = None
    expected_points: Optional[List[float]] = None
    variance: Optional[List[float]] = None

    def to_round_data(self) -> RoundData:
        return RoundData(
            name=self.name,
            actual_scores=self.actual_scores,
            expected_points=self.expected_points,
            variance=self.variance
        )


class TeamSnapshotPayload(BaseModel):
    """A team's rounds in bracket order."""
    team_name: str = Field(..., min_length=1, max_length=100)
    rounds: List[RoundPayload]

    def to_snapshot(self) -> TeamSnapshot:
        return TeamSnapshot(
            team_name=self.team_name,
            rounds=[r.to_round_data() for r in self.rounds]
        )


# ============== Simulation Schemas ==============

class WinProbabilityRequest(BaseModel):
    """Run a simulation over explicit team snapshots."""
    teams: List[TeamSnapshotPayload]
    n_simulations: Optional[int] = Field(default=None, ge=1, le=MAX_SIMULATIONS)
    seed: Optional[int] = None  # Reproducible runs; system entropy when omitted


class PoolWinProbabilityRequest(BaseModel):
    """Run a simulation over pool team records (scores/expectedPoints/variance keyed by round)."""
    teams: List[Dict[str, Any]]
    last_completed_round: Optional[str] = Field(
        default="wildcard",
        pattern="^(wildcard|divisional|championship|superbowl)$"
    )
    n_simulations: Optional[int] = Field(default=None, ge=1, le=MAX_SIMULATIONS)
    seed: Optional[int] = None


class TeamResultResponse(BaseModel):
    """Finish-position probabilities for a single team."""
    team_name: str
    expected_total: float
    finish_counts: List[int]
    finish_probabilities: List[float]
    win_probability: float
    top3_probability: float
    last_place_probability: float


class WinProbabilityResponse(BaseModel):
    """Full simulation results response."""
    generated_at: datetime
    n_simulations: int
    teams: List[TeamResultResponse]


# ============== Summary Schemas ==============

class TeamSummariesRequest(BaseModel):
    """Summarize projected totals for explicit team snapshots."""
    teams: List[TeamSnapshotPayload] = Field(..., min_length=1)


class TeamSummaryResponse(BaseModel):
    """Spread statistics for one team's projected total."""
    team_name: str
    roster_size: int
    expected_total: float
    total_variance: float
    std_dev: float
    coefficient_of_variation: Optional[float]
    p25: float
    p75: float


# ============== Scoring Schemas ==============

class FantasyPointsRequest(BaseModel):
    """A player's stat line, keyed by provider field name."""
    stats: Dict[str, Optional[float]]


class ScoredCategoryResponse(BaseModel):
    stat: str
    calculation: str
    points: float


class FantasyPointsResponse(BaseModel):
    """Fantasy points with per-category breakdown."""
    points: float
    breakdown: Dict[str, ScoredCategoryResponse]


# ============== Error Schemas ==============

class ErrorResponse(BaseModel):
    """API error response."""
    detail: str
    code: Optional[str] = None
