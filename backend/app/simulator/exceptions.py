"""
Exceptions raised by the win-probability engine.
"""

from typing import Optional


class SimulationError(Exception):
    """Base class for errors raised while running a simulation."""
    pass


class InvalidSnapshotError(SimulationError, ValueError):
    """Raised when team snapshots are malformed or degenerate."""

    def __init__(self, message: str, team_name: Optional[str] = None, round_name: Optional[str] = None):
        self.team_name = team_name
        self.round_name = round_name
        if team_name is not None and round_name is not None:
            message = f"Team '{team_name}', round '{round_name}': {message}"
        elif team_name is not None:
            message = f"Team '{team_name}': {message}"
        super().__init__(message)


class SimulationIncompleteError(SimulationError):
    """Raised when a simulation is cancelled or exceeds its deadline."""

    def __init__(self, message: str, completed: int = 0, requested: int = 0):
        self.completed = completed
        self.requested = requested
        super().__init__(f"{message} ({completed}/{requested} simulations completed)")
