"""
Health check endpoints
"""

from fastapi import APIRouter, Depends, Request

from schoolboard.api.deps import get_resolver
from schoolboard.services.resolver import LEADERBOARD_CACHE_KEY, LeaderboardResolver

router = APIRouter()


@router.get("")
async def health_check(request: Request, resolver: LeaderboardResolver = Depends(get_resolver)):
    """Basic health check"""
    config = request.app.state.settings
    ttl = resolver.cache.get_ttl(LEADERBOARD_CACHE_KEY)
    age = resolver.cache.get_age(LEADERBOARD_CACHE_KEY)
    return {
        "status": "healthy",
        "service": config.APP_NAME,
        "version": config.APP_VERSION,
        "mode": "mock" if resolver.mock_mode else "live",
        "cache": {
            "ttl_seconds": resolver.cache.ttl_seconds,
            "leaderboard_cached": ttl is not None,
            "age": round(age, 1) if age is not None else None,
            "expires_in": round(ttl, 1) if ttl is not None else None,
        },
    }
