from __future__ import annotations

import logging
from secrets import token_urlsafe
import time
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from theme_gallery.logging_context import set_request_id

REQUEST_ID_HEADER = "X-Request-ID"

logger = logging.getLogger(__name__)


def record_theme_counts(request: Request, counts: dict[str, int]) -> None:
    request.state.theme_counts = counts


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tags each request with an id and logs one completion event.

    Routes that render themes attach their per-category counts through
    ``record_theme_counts``; those land on the ``request.completed`` event.
    """

    def __init__(self, app, *, log_requests: bool = True) -> None:
        super().__init__(app)
        self._log_requests = log_requests

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or token_urlsafe(12)
        set_request_id(request_id)
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request.failed",
                extra=self._request_fields(request, "request.failed", start),
            )
            raise
        else:
            response.headers[REQUEST_ID_HEADER] = request_id
            if self._log_requests:
                fields = self._request_fields(request, "request.completed", start)
                fields["status_code"] = response.status_code
                fields.update(getattr(request.state, "theme_counts", {}))
                logger.info("request.completed", extra=fields)
            return response
        finally:
            set_request_id(None)

    @staticmethod
    def _request_fields(request: Request, event: str, start: float) -> dict[str, Any]:
        return {
            "event": event,
            "method": request.method,
            "path": request.url.path,
            "duration_ms": int((time.perf_counter() - start) * 1000),
        }
