"""Request-scoped dependencies"""

from fastapi import Request

from schoolboard.services.resolver import LeaderboardResolver


def get_resolver(request: Request) -> LeaderboardResolver:
    """Resolver owned by the running application"""
    return request.app.state.resolver
