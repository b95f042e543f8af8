"""
Leaderboard aggregation
Walks categories -> courses -> quizzes and totals passed attempts per school
"""

import logging
import re
from typing import List, Optional, Protocol, Set

from schoolboard.core.logging import log_execution_time
from schoolboard.schemas.leaderboard import Category, LeaderboardEntry
from schoolboard.services.moodle import MoodleClient

logger = logging.getLogger(__name__)

LOGO_URL_PREFIX = "/logos"

MOCK_SCORES = [245, 198, 176, 104, 99, 93, 88, 84, 79, 73, 68]


def slugify(value) -> str:
    """Create URL friendly string ("School #1!" -> "school-1")"""
    return re.sub(r"[^a-z0-9]+", "-", str(value or "").strip().lower()).strip("-")


def category_shortname(category: Category) -> str:
    fallback = f"category-{category.id}"
    key = category.idnumber or category.name or fallback
    return slugify(key) or fallback


def logo_path(shortname: str) -> str:
    return f"{LOGO_URL_PREFIX}/{shortname}.png"


def unique_shortname(shortname: str, category_id: int, taken: Set[str]) -> str:
    """
    Disambiguate a shortname already used by an earlier category

    The first holder keeps the plain slug; later ones get "-<id>" appended,
    then a counter if even that is taken.
    """
    candidate = shortname
    attempt = 0
    while candidate in taken:
        attempt += 1
        candidate = f"{shortname}-{category_id}" if attempt == 1 else f"{shortname}-{category_id}-{attempt}"
    return candidate


class PassCounter(Protocol):
    """Counts quiz attempts that meet or exceed the quiz's passing grade"""

    async def count_passed_attempts(self, quiz_id: int, passing_grade: float) -> int: ...


class ZeroPassCounter:
    """
    Placeholder pass counter that always reports zero

    Moodle has no web-service function listing every user's attempts on a
    quiz, so there is nothing to count yet. Swap in a report-based counter
    once one is available.
    """

    async def count_passed_attempts(self, quiz_id: int, passing_grade: float) -> int:
        return 0


def rank_entries(entries: List[LeaderboardEntry]) -> List[LeaderboardEntry]:
    """Order by tasks completed, highest first; ties keep their input order"""
    return sorted(entries, key=lambda entry: entry.tasks_completed, reverse=True)


def build_mock_leaderboard() -> List[LeaderboardEntry]:
    """Fixed sample data served in mock mode"""
    entries = []
    for number, score in enumerate(MOCK_SCORES, start=1):
        shortname = f"school-{number}"
        entries.append(
            LeaderboardEntry(
                name=f"School {number}",
                shortname=shortname,
                logo_path=logo_path(shortname),
                tasks_completed=score,
            )
        )
    return entries


class LeaderboardAggregator:
    """Computes the live leaderboard from Moodle"""

    def __init__(self, client: MoodleClient, pass_counter: Optional[PassCounter] = None):
        self.client = client
        self.pass_counter = pass_counter or ZeroPassCounter()

    async def count_category_tasks(self, category: Category) -> int:
        """Total passed attempts across every quiz of every course in a category"""
        total = 0
        courses = await self.client.get_courses_by_category(category.id)
        for course in courses:
            quizzes = await self.client.get_quizzes_by_course(course.id)
            for quiz in quizzes:
                passed = await self.pass_counter.count_passed_attempts(quiz.id, quiz.passing_grade)
                total += max(int(passed), 0)
        return total

    @log_execution_time(logger)
    async def build(self) -> List[LeaderboardEntry]:
        """
        Build the ranked leaderboard

        Any remote failure propagates and aborts the whole run; a partial
        leaderboard is never returned.
        """
        categories = await self.client.get_categories()
        entries = []
        taken: Set[str] = set()

        for category in categories:
            tasks_completed = await self.count_category_tasks(category)
            base = category_shortname(category)
            shortname = unique_shortname(base, category.id, taken)
            if shortname != base:
                logger.warning(f"Shortname {base} already used, category {category.id} gets {shortname}")
            taken.add(shortname)
            entries.append(
                LeaderboardEntry(
                    id=category.id,
                    name=category.name,
                    shortname=shortname,
                    logo_path=logo_path(shortname),
                    tasks_completed=tasks_completed,
                )
            )

        logger.info(f"Aggregated leaderboard for {len(entries)} categories")
        return rank_entries(entries)
