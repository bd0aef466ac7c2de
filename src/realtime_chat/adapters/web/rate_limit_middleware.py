"""Per-client rate limiting for the chat API, backed by throttled-py."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from throttled import RateLimiterType, Throttled, rate_limiter, store

from .client_info import get_client_info_from_scope
from .responses import error_response

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER_SECONDS = 60.0
RATE_LIMITED_MESSAGE = "Rate limit exceeded. Please try again later."


def extract_client_ip(request: Request) -> str:
    """Key requests by the originating client address.

    Uses the same resolution as socket logging: first ``X-Forwarded-For``
    hop, then the peer address, then ``"unknown"``.
    """
    ip = get_client_info_from_scope(request.scope).ip
    if ip == "unknown":
        logger.warning(f"Could not determine client IP for {request.url.path}, using 'unknown'")
    return ip


def retry_after_seconds(result: Any) -> float:
    """Read the suggested wait from a throttled-py result, whatever its shape."""
    state = getattr(result, "state", None)
    for source in (state, result):
        value = getattr(source, "retry_after", None)
        if isinstance(value, (int, float)) and value > 0:
            return float(value)
    return DEFAULT_RETRY_AFTER_SECONDS


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Token bucket per client IP on HTTP requests.

    WebSocket scopes bypass BaseHTTPMiddleware, so the realtime socket is
    never throttled here.
    """

    def __init__(
        self,
        app: Callable,
        requests_per_minute: int = 300,
        exempt_paths: Iterable[str] = ("/healthz",),
    ) -> None:
        """Initialize rate limiting middleware.

        Args:
            app: The ASGI application to wrap.
            requests_per_minute: Requests allowed per client IP per minute.
            exempt_paths: Paths never counted, such as health probes.
        """
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.exempt_paths = frozenset(exempt_paths)
        self.quota = rate_limiter.per_min(requests_per_minute, burst=requests_per_minute)
        self.bucket_store = store.MemoryStore()
        logger.info(
            f"API rate limit: {requests_per_minute} requests per minute per client IP"
            + (f" (exempt: {', '.join(sorted(self.exempt_paths))})" if self.exempt_paths else "")
        )

    def _is_limited(self, client_ip: str) -> tuple[bool, float]:
        throttle = Throttled(
            key=f"api:{client_ip}",
            using=RateLimiterType.TOKEN_BUCKET.value,
            quota=self.quota,
            store=self.bucket_store,
        )
        result = throttle.limit()
        if not result.limited:
            return False, 0.0
        return True, retry_after_seconds(result)

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Reject the request with 429 once the client's bucket is empty."""
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        client_ip = extract_client_ip(request)
        limited, retry_after = self._is_limited(client_ip)
        if limited:
            logger.warning(
                f"Rate limited {request.method} {request.url.path} from {client_ip}, "
                f"retry after {retry_after:.0f}s"
            )
            response = error_response(RATE_LIMITED_MESSAGE, 429)
            response.headers["Retry-After"] = str(max(1, int(retry_after)))
            return response

        return await call_next(request)
