from __future__ import annotations

import json
import logging
import sys
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware


_EXTRA_KEYS = (
    "request_id",
    "user_id",
    "role",
    "path",
    "method",
    "status_code",
    "latency_ms",
    "invoice_id",
    "case_id",
    "status",
    "fields",
    "total",
    "error_type",
)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in _EXTRA_KEYS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def configure_logging(level: str = "INFO") -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(
        level=level,
        handlers=[handler],
        force=True,
    )


def _caller(request: Request) -> tuple[Optional[int], Optional[str]]:
    # Set by get_current_identity once the bearer token has been verified.
    identity = getattr(request.state, "identity", None)
    if identity is None:
        return None, None
    return identity.id, identity.role.value


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One access-log line per request, tagged with an ``X-Request-Id``.

    Denied access is logged by the error handler in ``lexdesk.main``.
    """

    def __init__(self, app, logger_name: str = "request") -> None:
        super().__init__(app)
        self.logger = logging.getLogger(logger_name)

    def _context(self, request: Request, start: float) -> dict[str, Any]:
        user_id, role = _caller(request)
        return {
            "request_id": request.state.request_id,
            "path": request.url.path,
            "method": request.method,
            "latency_ms": round((time.perf_counter() - start) * 1000, 2),
            "user_id": user_id,
            "role": role,
        }

    async def dispatch(self, request: Request, call_next) -> Response:
        request.state.request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self.logger.exception("unhandled_exception", extra=self._context(request, start))
            raise

        self.logger.info("request", extra={**self._context(request, start), "status_code": response.status_code})
        response.headers["X-Request-Id"] = request.state.request_id
        return response
