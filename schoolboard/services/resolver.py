"""
Leaderboard resolver
Chooses between mock data, the cached leaderboard and a live aggregation
"""

import asyncio
import logging
from typing import List, Optional

from schoolboard.core.cache import TTLCache
from schoolboard.schemas.leaderboard import LeaderboardEntry, LeaderboardResponse
from schoolboard.services.leaderboard import LeaderboardAggregator, build_mock_leaderboard

logger = logging.getLogger(__name__)

LEADERBOARD_CACHE_KEY = "leaderboard"


class LeaderboardResolver:
    """
    Produces the leaderboard response envelope for each request

    The cache is owned by the caller and shared for the lifetime of the
    service process. Requests that miss the cache while an aggregation is
    already running join it and share its result or its error.
    """

    def __init__(self, aggregator: LeaderboardAggregator, cache: TTLCache, use_mock: bool = False):
        self.aggregator = aggregator
        self.cache = cache
        self.use_mock = use_mock
        self._inflight: Optional[asyncio.Task] = None

    @property
    def mock_mode(self) -> bool:
        return self.use_mock or not self.aggregator.client.is_configured

    async def resolve(self) -> LeaderboardResponse:
        if self.mock_mode:
            return LeaderboardResponse(source="mock", data=build_mock_leaderboard())

        cached = self.cache.get(LEADERBOARD_CACHE_KEY)
        if cached is not None:
            return LeaderboardResponse(source="cache", data=cached)

        if self._inflight is None:
            logger.info("Leaderboard cache miss, aggregating from Moodle")
            self._inflight = asyncio.ensure_future(self._refresh())
        else:
            logger.debug("Joining in-flight leaderboard aggregation")

        # A disconnecting caller must not cancel the run other requests await
        data = await asyncio.shield(self._inflight)
        return LeaderboardResponse(source="live", data=data)

    async def _refresh(self) -> List[LeaderboardEntry]:
        try:
            data = await self.aggregator.build()
            self.cache.set(LEADERBOARD_CACHE_KEY, data)
            return data
        finally:
            self._inflight = None
