from __future__ import annotations

import logging
import sys
import time
from typing import Callable, Iterable

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
REDACTED = "***"

request_logger = logging.getLogger("jira_proxy.request")


class CredentialRedactor(logging.Filter):
    """Masks the Jira API token and the encoded Basic credential in rendered log lines."""

    def __init__(self, secrets: Iterable[str] = ()):
        super().__init__()
        self.secrets = tuple(s for s in secrets if s)

    def filter(self, record: logging.LogRecord) -> bool:
        if not self.secrets:
            return True
        message = record.getMessage()
        redacted = message
        for secret in self.secrets:
            redacted = redacted.replace(secret, REDACTED)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def configure_logging(level: str = "INFO", secrets: Iterable[str] = ()) -> None:
    """
    Send logs to stdout and keep the given credential strings out of every handler's output.

    Safe to call more than once; the redactor on each root handler is replaced, not stacked.
    """
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(handler)
    redactor = CredentialRedactor(secrets)
    for handler in root.handlers:
        for old in [f for f in handler.filters if isinstance(f, CredentialRedactor)]:
            handler.removeFilter(old)
        handler.addFilter(redactor)
    root.setLevel(level.upper())


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One line per proxied call: method, path, status, latency and the calling origin."""

    async def dispatch(self, request: Request, call_next: Callable):
        start = time.perf_counter()
        response = None
        try:
            response = await call_next(request)
            return response
        finally:
            request_logger.info(
                "%s %s -> %s (%.2f ms) origin=%s",
                request.method,
                request.url.path,
                getattr(response, "status_code", "n/a"),
                (time.perf_counter() - start) * 1000.0,
                request.headers.get("origin", "-"),
            )


def install_request_logging(app: FastAPI) -> None:
    app.add_middleware(RequestLoggingMiddleware)
