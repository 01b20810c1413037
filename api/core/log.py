"""
Logging setup and the per-request access log.
"""

from __future__ import annotations

import logging
import time
from typing import Awaitable, Callable

from fastapi import Request, Response

from . import config

access_logger = logging.getLogger("api.access")


def configure_logging(level: str | None = None) -> None:
    """Attach a single stream handler to the root logger (idempotent)."""
    root = logging.getLogger()
    root.setLevel(level or config.log_level())
    if root.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)


async def log_requests(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    started = time.perf_counter()
    # Unhandled errors propagate from call_next and end up as a 500.
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000
        access_logger.info(
            "%s %s %s %.3f ms",
            request.method,
            request.url.path,
            status_code,
            elapsed_ms,
        )
