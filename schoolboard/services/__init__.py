"""Leaderboard services"""

from schoolboard.services.leaderboard import (
    LeaderboardAggregator,
    PassCounter,
    ZeroPassCounter,
    build_mock_leaderboard,
    slugify,
)
from schoolboard.services.moodle import MoodleClient
from schoolboard.services.resolver import LeaderboardResolver

__all__ = [
    "LeaderboardAggregator",
    "LeaderboardResolver",
    "MoodleClient",
    "PassCounter",
    "ZeroPassCounter",
    "build_mock_leaderboard",
    "slugify",
]
