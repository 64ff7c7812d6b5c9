"""
Rate limiting middleware.

Two limits are tracked per client IP:
- a token bucket for API routes (the root and /phrase routes), replenished
  in whole periods
- a fixed window across every route (hourly by default)
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
import asyncio
import math
import time
import logging
from typing import Callable, Dict, Optional
from dataclasses import dataclass

from app.config.settings import RateLimitSettings
from app.core.exceptions import ErrorCode

logger = logging.getLogger(__name__)

# Idle clients are dropped after this many requests have been seen
_PRUNE_EVERY = 1000


@dataclass
class ClientLimitState:
    """Rate limiting state for a single client."""
    tokens: float
    last_replenished: float
    window_start: float
    window_count: int
    last_request_time: float


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Per-client rate limiting with a token bucket for API routes
    and a fixed window for all routes.
    """

    def __init__(
        self,
        app,
        limits: Optional[RateLimitSettings] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        super().__init__(app)
        self.limits = limits or RateLimitSettings()
        self.clock = clock
        self.clients: Dict[str, ClientLimitState] = {}
        self.lock = asyncio.Lock()
        self._seen = 0

    @staticmethod
    def is_api_route(path: str) -> bool:
        return path == "/" or path == "/phrase" or path.startswith("/phrase/")

    def _get_client_id(self, request: Request) -> str:
        """Client identifier; forwarded headers are resolved by the server."""
        return request.client.host if request.client else 'unknown'

    def _state_for(self, client_id: str, now: float) -> ClientLimitState:
        state = self.clients.get(client_id)
        if state is None:
            state = ClientLimitState(
                tokens=float(self.limits.token_limit),
                last_replenished=now,
                window_start=now,
                window_count=0,
                last_request_time=now
            )
            self.clients[client_id] = state
        return state

    def _replenish(self, state: ClientLimitState, now: float) -> None:
        period = self.limits.replenishment_period_seconds
        periods = int((now - state.last_replenished) // period)
        if periods > 0:
            state.tokens = min(
                float(self.limits.token_limit),
                state.tokens + periods * self.limits.tokens_per_period
            )
            state.last_replenished += periods * period

    def _roll_window(self, state: ClientLimitState, now: float) -> None:
        if now - state.window_start >= self.limits.window_seconds:
            state.window_start = now
            state.window_count = 0

    def _prune(self, now: float) -> None:
        idle_after = max(self.limits.window_seconds, self.limits.replenishment_period_seconds)
        expired = [
            client_id for client_id, state in self.clients.items()
            if now - state.last_request_time > idle_after
        ]
        for client_id in expired:
            del self.clients[client_id]
        if expired:
            logger.debug(f"Cleaned up rate limit data for {len(expired)} expired clients")

    def _reject(self, client_id: str, reason: str, retry_after: float) -> JSONResponse:
        retry_after_seconds = max(1, math.ceil(retry_after))
        logger.warning(
            f"Rate limit exceeded for client {client_id}: {reason}",
            extra={'client_ip': client_id, 'limit': reason}
        )
        return JSONResponse(
            status_code=429,
            content={
                "error_code": ErrorCode.RATE_LIMIT_EXCEEDED.value,
                "message": self.limits.rejection_message,
                "retry_after_seconds": retry_after_seconds
            },
            headers={"Retry-After": str(retry_after_seconds)}
        )

    async def dispatch(self, request: Request, call_next):
        """
        Apply the window limit to every request and the token bucket to API routes.
        """
        if not self.limits.enabled:
            return await call_next(request)

        client_id = self._get_client_id(request)
        api_route = self.is_api_route(request.url.path)

        async with self.lock:
            now = self.clock()
            self._seen += 1
            if self._seen % _PRUNE_EVERY == 0:
                self._prune(now)

            state = self._state_for(client_id, now)
            state.last_request_time = now

            self._roll_window(state, now)
            if state.window_count >= self.limits.hourly_limit:
                return self._reject(
                    client_id,
                    "window",
                    state.window_start + self.limits.window_seconds - now
                )
            state.window_count += 1

            if api_route:
                self._replenish(state, now)
                if state.tokens < 1:
                    return self._reject(
                        client_id,
                        "token_bucket",
                        state.last_replenished + self.limits.replenishment_period_seconds - now
                    )
                state.tokens -= 1

            remaining = int(state.tokens)

        response = await call_next(request)

        if api_route:
            response.headers["X-RateLimit-Limit"] = str(self.limits.token_limit)
            response.headers["X-RateLimit-Remaining"] = str(remaining)

        return response
