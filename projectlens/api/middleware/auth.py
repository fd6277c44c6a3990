"""Request identification and security header middleware."""

import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from projectlens.core.config import get_settings
from projectlens.core.logging import get_logger

logger = get_logger(__name__)


class AuthMiddleware(BaseHTTPMiddleware):
    """Middleware for handling authentication concerns."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Tag the request with an ID and harden the response."""
        settings = get_settings()

        # Skip for health check endpoints
        if request.url.path in [
            settings.health_check_path,
            settings.readiness_check_path,
        ]:
            return await call_next(request)

        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id

        if settings.debug:
            logger.debug(
                "OAuth headers in request",
                extra={
                    "request_id": request_id,
                    "path": request.url.path,
                    "oauth_headers": {
                        settings.oauth_header_user: request.headers.get(
                            settings.oauth_header_user
                        ),
                        settings.oauth_header_groups: request.headers.get(
                            settings.oauth_header_groups
                        ),
                    },
                },
            )

        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Request-ID"] = request_id

        return response
