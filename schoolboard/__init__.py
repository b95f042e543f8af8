"""School Leaderboard - Moodle-backed leaderboard service"""

__version__ = "1.0.0"
