"""Structured Logging — JSON log lines and per-request access logging.

Invariants:
    - Every line carries timestamp, level, logger and message
    - Known context fields (course/comment/user ids, error code, request data)
      are copied from `extra` when present; anything else is dropped
    - setup_logging owns exactly one root handler; calling it again swaps it
    - log_requests logs one line per request, including requests that raise
"""

import json
import logging
import time
from datetime import datetime, timezone

from fastapi import Request

CONTEXT_FIELDS = (
    "course_id", "comment_id", "parent_id", "user_id", "backend",
    "error_code", "method", "path", "status", "duration_ms",
)

_handler: logging.Handler | None = None

access_logger = logging.getLogger("classroom.access")


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (name, record.__dict__[name])
            for name in CONTEXT_FIELDS
            if record.__dict__.get(name) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the root handler: JSON for production, plain text for a terminal."""
    global _handler
    if fmt == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s")
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    _handler = handler


async def log_requests(request: Request, call_next):
    """HTTP middleware: method, path, status and latency of every request."""
    start = time.perf_counter()
    extra = {"method": request.method, "path": request.url.path}
    try:
        response = await call_next(request)
    except Exception:
        extra["duration_ms"] = int((time.perf_counter() - start) * 1000)
        access_logger.exception(
            "%s %s raised", request.method, request.url.path, extra=extra,
        )
        raise
    extra.update(
        status=response.status_code,
        duration_ms=int((time.perf_counter() - start) * 1000),
    )
    access_logger.info(
        "%s %s -> %s (%dms)",
        request.method, request.url.path, response.status_code, extra["duration_ms"],
        extra=extra,
    )
    return response
