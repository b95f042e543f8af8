"""
Request ID middleware
Tags every request, its log records and its response with a correlation ID
"""

import logging
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from schoolboard.core.logging import request_id_ctx

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add unique request ID to each request

    The ID is taken from the caller's X-Request-ID header when present and is
    bound to ``request_id_ctx`` for the duration of the request, so every log
    line written while serving it (Moodle calls, aggregation timing, errors)
    carries the same ID.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        token = request_id_ctx.set(request_id)

        try:
            logger.debug(f"Processing {request.method} {request.url.path}")
            response = await call_next(request)
        finally:
            request_id_ctx.reset(token)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
