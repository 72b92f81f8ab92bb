"""
Fantasy scoring API routes.
"""

from fastapi import APIRouter

from ..schemas import FantasyPointsRequest, FantasyPointsResponse
from ...scoring import calculate_fantasy_points


router = APIRouter(prefix="/fantasy-points", tags=["scoring"])


@router.post("", response_model=FantasyPointsResponse)
async def score_stat_line(request: FantasyPointsRequest) -> FantasyPointsResponse:
    """Score one player's stat line with the pool's standard scoring."""
    result = calculate_fantasy_points(request.stats)
    return FantasyPointsResponse(**result.to_dict())
