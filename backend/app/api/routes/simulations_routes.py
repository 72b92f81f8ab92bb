"""
Win-probability simulation API routes.
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, status
from fastapi.concurrency import run_in_threadpool

from ..schemas import (
    ErrorResponse,
    PoolWinProbabilityRequest,
    WinProbabilityRequest,
    WinProbabilityResponse
)
from ...core.config import SIMULATION_COUNT, SIMULATION_TIMEOUT, SIMULATION_WORKERS
from ...core.rounds import PLAYOFF_ROUNDS, completed_rounds_through
from ...simulator import (
    InvalidSnapshotError,
    SimulationIncompleteError,
    TeamSnapshot,
    simulate_pool
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/win-probabilities", tags=["simulations"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


async def run_simulation(
    snapshots: List[TeamSnapshot],
    n_simulations: int | None,
    seed: int | None
) -> WinProbabilityResponse:
    """
    Run the engine off the event loop and translate its errors.

    Args:
        snapshots: Team snapshots to simulate
        n_simulations: Trial count (defaults to SIMULATION_COUNT)
        seed: Optional seed for a reproducible run

    Returns:
        WinProbabilityResponse with provenance fields
    """
    n_simulations = n_simulations or SIMULATION_COUNT

    try:
        report = await run_in_threadpool(
            simulate_pool,
            snapshots,
            n_simulations,
            seed=seed,
            n_workers=SIMULATION_WORKERS,
            timeout=SIMULATION_TIMEOUT
        )
    except InvalidSnapshotError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except SimulationIncompleteError as e:
        logger.warning("Simulation did not complete: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e)
        )

    return WinProbabilityResponse(**report.to_dict())


@router.post("", response_model=WinProbabilityResponse, responses=ERROR_RESPONSES)
async def calculate_win_probabilities(request: WinProbabilityRequest) -> WinProbabilityResponse:
    """
    Estimate every team's finish-position probabilities.

    Teams are returned sorted by win probability.
    """
    snapshots = [team.to_snapshot() for team in request.teams]
    return await run_simulation(snapshots, request.n_simulations, request.seed)


@router.post("/pool", response_model=WinProbabilityResponse, responses=ERROR_RESPONSES)
async def calculate_pool_win_probabilities(request: PoolWinProbabilityRequest) -> WinProbabilityResponse:
    """
    Estimate finish-position probabilities from pool team records.

    Rounds up to and including ``last_completed_round`` use actual scores;
    later rounds use expected points and variance.
    """
    completed = (
        completed_rounds_through(request.last_completed_round)
        if request.last_completed_round else []
    )

    snapshots = []
    for team in request.teams:
        if not team.get("teamName"):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Every pool team needs a teamName"
            )
        try:
            snapshots.append(TeamSnapshot.from_pool_team(team, PLAYOFF_ROUNDS, completed))
        except InvalidSnapshotError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e)
            )

    return await run_simulation(snapshots, request.n_simulations, request.seed)
