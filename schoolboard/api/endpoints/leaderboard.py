"""
Leaderboard endpoints
Serves the per-school leaderboard
"""

from fastapi import APIRouter, Depends

from schoolboard.api.deps import get_resolver
from schoolboard.schemas.leaderboard import ErrorResponse, LeaderboardResponse
from schoolboard.services.resolver import LeaderboardResolver

router = APIRouter()


@router.get(
    "",
    response_model=LeaderboardResponse,
    responses={500: {"model": ErrorResponse}},
)
async def get_leaderboard(resolver: LeaderboardResolver = Depends(get_resolver)):
    """Get the school leaderboard from mock data, the cache, or Moodle"""
    return await resolver.resolve()
