"""Request audit logging.

Every request is logged with the caller identity taken from the OAuth proxy
headers, so discovery decisions can be traced back to who asked. The headers
are read as sent; authentication itself happens in the endpoint dependencies.
"""

import time
from typing import Any, Callable, Dict

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from projectlens.api.dependencies.auth import parse_groups
from projectlens.core.config import get_settings
from projectlens.core.logging import get_logger, log_event

logger = get_logger(__name__)


def describe_request(request: Request) -> Dict[str, Any]:
    """Fields shared by every audit event of a request."""
    settings = get_settings()
    headers = request.headers

    info: Dict[str, Any] = {
        "method": request.method,
        "path": request.url.path,
        "query_params": dict(request.query_params),
        "client_host": request.client.host if request.client else None,
        "user_id": headers.get(settings.oauth_header_user),
        "groups": parse_groups(headers.get(settings.oauth_header_groups)),
    }
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        info["request_id"] = request_id
    return info


class LoggingMiddleware(BaseHTTPMiddleware):
    """Emits request_started, request_completed and request_failed events."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.time()
        info = describe_request(request)
        log_event(logger, "info", "request_started", **info)

        try:
            response = await call_next(request)
        except Exception as e:
            log_event(
                logger,
                "error",
                "request_failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_seconds=time.time() - started,
                **info,
            )
            raise

        elapsed = time.time() - started
        log_event(
            logger,
            "info",
            "request_completed",
            status_code=response.status_code,
            duration_seconds=elapsed,
            **info,
        )
        response.headers["X-Process-Time"] = str(elapsed)
        return response
