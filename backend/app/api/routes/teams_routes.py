"""
Team projection summary API routes.
"""

from typing import List
from fastapi import APIRouter, HTTPException, status

from ..schemas import ErrorResponse, TeamSummariesRequest, TeamSummaryResponse
from ...simulator import InvalidSnapshotError, summarize_pool


router = APIRouter(prefix="/team-summaries", tags=["teams"])


@router.post("", response_model=List[TeamSummaryResponse], responses={400: {"model": ErrorResponse}})
async def summarize_teams(request: TeamSummariesRequest) -> List[TeamSummaryResponse]:
    """
    Summarize each team's projected total: expected value, standard
    deviation, coefficient of variation and interquartile band.
    """
    try:
        summaries = summarize_pool([team.to_snapshot() for team in request.teams])
    except InvalidSnapshotError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    return [TeamSummaryResponse(**summary.to_dict()) for summary in summaries]
