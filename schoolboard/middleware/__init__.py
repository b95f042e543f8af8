"""Middleware modules for the School Leaderboard service"""

from .logging_middleware import LoggingMiddleware
from .request_id import RequestIDMiddleware

__all__ = [
    "RequestIDMiddleware",
    "LoggingMiddleware",
]
