"""Shared test fixtures for the leaderboard service tests."""

import json
from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest

from schoolboard.core.cache import TTLCache
from schoolboard.core.config import Settings
from schoolboard.services.moodle import MoodleClient

BASE_URL = "https://moodle.test"
TOKEN = "test-token"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class MoodleStub:
    """Routes MockTransport requests by wsfunction and records every call.

    Each route value is a JSON-serialisable payload, an ``httpx.Response``
    returned verbatim, or a callable taking the request's query params and
    returning either of those.
    """

    def __init__(self, routes: dict[str, Any]) -> None:
        self.routes = routes
        self.calls: list[dict[str, str]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        params = dict(request.url.params)
        self.calls.append(params)
        route = self.routes[params["wsfunction"]]
        payload = route(params) if callable(route) else route
        if isinstance(payload, httpx.Response):
            return payload
        return httpx.Response(200, content=json.dumps(payload))

    def functions(self) -> list[str]:
        return [call["wsfunction"] for call in self.calls]


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(fake_clock: FakeClock) -> TTLCache:
    """Leaderboard cache with a 600s TTL driven by the fake clock."""
    return TTLCache(ttl_seconds=600, clock=fake_clock)


@pytest.fixture
def make_client() -> Callable[[MoodleStub], MoodleClient]:
    """Factory for a configured MoodleClient backed by a MoodleStub."""

    def factory(stub: MoodleStub, base_url: str = BASE_URL, token: str = TOKEN) -> MoodleClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(stub))
        return MoodleClient(base_url, token, http_client=http_client)

    return factory


@pytest.fixture
def live_settings(tmp_path) -> Settings:
    """Settings pointing at a configured Moodle with mock mode off."""
    return Settings(
        MOODLE_BASE_URL=BASE_URL,
        MOODLE_TOKEN=TOKEN,
        USE_MOCK=False,
        CACHE_TTL_SECONDS=600,
        LOGO_FOLDER=str(tmp_path / "logos"),
    )


@pytest.fixture
def mock_moodle_client() -> MagicMock:
    """Configured MoodleClient double with async fetch methods."""
    client = MagicMock(spec=MoodleClient)
    client.is_configured = True
    client.get_categories.return_value = []
    client.get_courses_by_category.return_value = []
    client.get_quizzes_by_course.return_value = []
    return client
