"""
API main router
Combines all endpoint routers
"""

from fastapi import APIRouter

from schoolboard.api.endpoints import health, leaderboard

api_router = APIRouter()

api_router.include_router(leaderboard.router, prefix="/leaderboard", tags=["Leaderboard"])
api_router.include_router(health.router, prefix="/health", tags=["Health"])
