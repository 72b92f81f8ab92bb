"""
Fantasy Football Playoff Pool Simulator

Monte Carlo simulation to calculate final-standings probabilities.
"""

from .models import RoundData, TeamSnapshot, FinishTally, TeamResult, SimulationReport, TeamSummary
from .exceptions import SimulationError, InvalidSnapshotError, SimulationIncompleteError
from .sampler import random_normal, sample_team_total
from .engine import DEFAULT_SIMULATIONS, calculate_win_probabilities, simulate_pool, validate_snapshots
from .statistics import summarize_team, summarize_pool
from .projections import calculate_expected_points, apply_expected_points

__all__ = [
    # Models
    "RoundData",
    "TeamSnapshot",
    "FinishTally",
    "TeamResult",
    "SimulationReport",
    "TeamSummary",
    # Exceptions
    "SimulationError",
    "InvalidSnapshotError",
    "SimulationIncompleteError",
    # Sampler
    "random_normal",
    "sample_team_total",
    # Engine
    "DEFAULT_SIMULATIONS",
    "calculate_win_probabilities",
    "simulate_pool",
    "validate_snapshots",
    # Statistics
    "summarize_team",
    "summarize_pool",
    # Projections
    "calculate_expected_points",
    "apply_expected_points",
]
