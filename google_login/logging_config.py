"""
Logging setup: one stdout handler with a single-line format, plus an access-log
middleware that writes `METHOD path status duration` for every request.
"""
import logging
import sys
import time

from starlette.requests import Request

ACCESS_LOGGER = "google_login.access"

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s  %(message)s"


def configure_logging(level: str = "info") -> None:
    """Install the stdout handler on the root logger. Safe to call more than once."""
    root = logging.getLogger()
    root.setLevel(level.upper())
    for handler in root.handlers:
        if getattr(handler, "_google_login", False):
            return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler._google_login = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    # uvicorn's own access log would duplicate ours
    logging.getLogger("uvicorn.access").propagate = False


async def log_requests(request: Request, call_next):
    """HTTP middleware; never logs query strings since the callback carries the auth code."""
    start = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        # Unhandled errors still get a line; the error boundary answers them with 500
        duration_ms = (time.perf_counter() - start) * 1000
        logging.getLogger(ACCESS_LOGGER).info(
            "%s %s %d %.3f ms", request.method, request.url.path, status_code, duration_ms
        )
