from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..models.common import ConfigErrorResponse, ProxyFailureResponse, UpstreamErrorResponse

logger = logging.getLogger(__name__)


class JiraProxyError(Exception):
    """Base class for failures that are reported to the caller as JSON."""

    status_code: int = 500

    def body(self) -> Dict[str, Any]:
        raise NotImplementedError


class CredentialsNotConfiguredError(JiraProxyError):
    """JIRA_EMAIL or JIRA_API_TOKEN is not set; no upstream call was made."""

    def __init__(self, message: str = "Missing JIRA_EMAIL or JIRA_API_TOKEN environment variables"):
        super().__init__(message)
        self.message = message

    def body(self) -> Dict[str, Any]:
        return ConfigErrorResponse(message=self.message).model_dump()


class UpstreamRejectedError(JiraProxyError):
    """Jira answered with a non-2xx status; status and body text are relayed as-is."""

    def __init__(self, status_code: int, status_text: str, details: str):
        super().__init__(f"Jira API error: {status_code} {status_text}")
        self.status_code = status_code
        self.status_text = status_text
        self.details = details

    def body(self) -> Dict[str, Any]:
        return UpstreamErrorResponse(
            status=self.status_code, statusText=self.status_text, details=self.details
        ).model_dump()


class ProxyRequestError(JiraProxyError):
    """Transport failure or unreadable upstream payload."""

    def __init__(self, details: str):
        super().__init__(details)
        self.details = details

    def body(self) -> Dict[str, Any]:
        return ProxyFailureResponse(details=self.details).model_dump()


def install_exception_handlers(app: FastAPI) -> None:
    """Register the handlers that turn proxy failures into HTTP responses."""

    @app.exception_handler(JiraProxyError)
    async def jira_proxy_error_handler(_: Request, exc: JiraProxyError):
        return JSONResponse(status_code=exc.status_code, content=exc.body())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(_: Request, exc: Exception):
        logger.exception("Proxy error: %s", exc)
        return JSONResponse(status_code=500, content=ProxyFailureResponse(details=str(exc)).model_dump())
