"""Request logging middleware.

Every request produces a ``request_started`` and a ``request_completed``
event. Authorization failures show up as 401/403 completions at warning
level; the decision engine itself never logs.
"""

import time
from typing import Any

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint


logger = structlog.get_logger()

DEFAULT_EXCLUDED_PATHS = (
    "/health/live",
    "/health/ready",
    "/docs",
    "/redoc",
    "/openapi.json",
)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware that logs HTTP requests and their outcome.

    Probe and documentation paths are skipped by default.
    """

    def __init__(
        self,
        app: Any,
        exclude_paths: list[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.exclude_paths = tuple(exclude_paths or DEFAULT_EXCLUDED_PATHS)

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log the request, run it, and log the outcome."""
        path = request.url.path
        if path.startswith(self.exclude_paths):
            return await call_next(request)

        start_time = time.perf_counter()
        context: dict[str, Any] = {"method": request.method, "path": path}

        request_id = getattr(request.state, "request_id", None)
        if request_id:
            context["request_id"] = request_id

        logger.info(
            "request_started",
            client_ip=get_client_ip(request),
            query=str(request.url.query) or None,
            **context,
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception(
                "request_failed",
                duration_ms=_elapsed_ms(start_time),
                error=str(exc),
                **context,
            )
            raise

        user_id = getattr(request.state, "user_id", None)
        if user_id:
            context["user_id"] = str(user_id)

        if response.status_code >= 500:
            log = logger.error
        elif response.status_code >= 400:
            log = logger.warning
        else:
            log = logger.info

        log(
            "request_completed",
            status_code=response.status_code,
            duration_ms=_elapsed_ms(start_time),
            **context,
        )
        return response


def _elapsed_ms(start_time: float) -> float:
    return round((time.perf_counter() - start_time) * 1000, 2)


def get_client_ip(request: Request) -> str | None:
    """Extract the real client IP from a request.

    Honors X-Forwarded-For and X-Real-IP for proxied requests.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # The first address is the original client
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return request.client.host if request.client else None
