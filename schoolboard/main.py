"""
School Leaderboard - FastAPI application
Ranks schools by quiz tasks completed in Moodle
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sentry_sdk.integrations.fastapi import FastApiIntegration

from schoolboard.api.api import api_router
from schoolboard.core.cache import TTLCache
from schoolboard.core.config import Settings, settings
from schoolboard.core.exceptions import register_exception_handlers
from schoolboard.core.logging import setup_logging
from schoolboard.middleware import LoggingMiddleware, RequestIDMiddleware
from schoolboard.services.leaderboard import LeaderboardAggregator, PassCounter
from schoolboard.services.moodle import MoodleClient
from schoolboard.services.resolver import LeaderboardResolver

setup_logging()
logger = logging.getLogger(__name__)

# Initialize Sentry if DSN is provided
if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        integrations=[FastApiIntegration(transaction_style="endpoint")],
        traces_sample_rate=1.0 if settings.DEBUG else 0.1,
        environment=settings.ENVIRONMENT,
    )
    logger.info("Sentry initialized")


def create_app(
    config: Optional[Settings] = None,
    client: Optional[MoodleClient] = None,
    cache: Optional[TTLCache] = None,
    pass_counter: Optional[PassCounter] = None,
) -> FastAPI:
    """
    Build the application and the objects it owns

    Args:
        config: Settings to use, defaults to the environment
        client: Moodle client, built from config when omitted
        cache: Leaderboard cache, built from config when omitted
        pass_counter: Pass-count strategy for the aggregator

    Returns:
        Configured FastAPI application
    """
    config = config or settings
    if client is None:
        if not config.moodle_configured():
            logger.warning("MOODLE_BASE_URL or MOODLE_TOKEN not set, leaderboard will use mock data")
        client = MoodleClient(config.MOODLE_BASE_URL, config.MOODLE_TOKEN)
    if cache is None:
        cache = TTLCache(ttl_seconds=config.CACHE_TTL_SECONDS)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        logger.info(f"Starting {config.APP_NAME} v{config.APP_VERSION}")
        if config.USE_MOCK:
            logger.warning("USE_MOCK is set, serving mock leaderboard data")

        yield

        logger.info("Shutting down application")
        await client.aclose()

    app = FastAPI(
        title=config.APP_NAME,
        description=config.APP_DESCRIPTION,
        version=config.APP_VERSION,
        lifespan=lifespan,
    )

    app.state.settings = config
    app.state.cache = cache
    app.state.resolver = LeaderboardResolver(
        aggregator=LeaderboardAggregator(client, pass_counter),
        cache=cache,
        use_mock=config.USE_MOCK,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.get_cors_origins(),
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "message": f"Welcome to {config.APP_NAME}",
            "version": config.APP_VERSION,
            "leaderboard": "/api/leaderboard",
            "health": "/api/health",
        }

    app.include_router(api_router, prefix="/api")

    logo_dir = Path(config.LOGO_FOLDER)
    if logo_dir.is_dir():
        app.mount("/logos", StaticFiles(directory=logo_dir), name="logos")
    else:
        logger.warning(f"Logo folder {logo_dir} not found, /logos will not be served")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "schoolboard.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
    )
