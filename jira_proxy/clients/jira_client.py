from __future__ import annotations

import base64
import logging
from typing import Any, Dict, Optional

import httpx

from ..core.config import Settings
from ..core.errors import (
    CredentialsNotConfiguredError,
    JiraProxyError,
    ProxyRequestError,
    UpstreamRejectedError,
)
from ..models.jira import IssueLookupRequest, SearchRequest, UpstreamPayload

logger = logging.getLogger(__name__)


class JiraClient:
    """
    Forwards read-only queries to the Jira REST API using basic auth (email + API token).

    The Authorization header is computed once here and reused for every call. A single
    httpx.AsyncClient is shared by all requests between open() and close().
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.api_root = settings.jira_api_root
        self.timeout = httpx.Timeout(settings.REQUEST_TIMEOUT_SECONDS)
        self._auth_header: Optional[str] = None
        if settings.has_credentials:
            self._auth_header = self._basic_auth_header(settings.JIRA_EMAIL, settings.JIRA_API_TOKEN)
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def configured(self) -> bool:
        return self._auth_header is not None

    @property
    def secrets(self) -> tuple:
        """Credential strings that must never reach the logs."""
        if not self.configured:
            return ()
        return (self.settings.JIRA_API_TOKEN, self._auth_header.split(" ", 1)[1])

    async def open(self) -> None:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    @staticmethod
    def _basic_auth_header(username: str, token: str) -> str:
        raw = f"{username}:{token}".encode("utf-8")
        return "Basic " + base64.b64encode(raw).decode("ascii")

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": self._auth_header or "",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            await self.open()
        assert self._client is not None
        return self._client

    def _require_credentials(self) -> None:
        if not self.configured:
            logger.error("Jira credentials not configured; refusing to call upstream")
            raise CredentialsNotConfiguredError()

    async def _get(self, path: str, params: Dict[str, Any]) -> UpstreamPayload:
        try:
            client = await self._ensure_client()
            url = httpx.URL(f"{self.api_root}{path}", params=params or None)
            logger.info("Making request to: %s", url)
            resp = await client.get(url, headers=self._headers())
            if not resp.is_success:
                details = resp.text
                logger.error("Jira API error: %s %s", resp.status_code, resp.reason_phrase)
                logger.error("Error details: %s", details)
                raise UpstreamRejectedError(resp.status_code, resp.reason_phrase, details)
            return UpstreamPayload(content=resp.content, data=resp.json())
        except JiraProxyError:
            raise
        except Exception as exc:
            logger.error("Proxy error: %r", exc)
            raise ProxyRequestError(str(exc) or exc.__class__.__name__) from exc

    async def search(self, request: SearchRequest) -> UpstreamPayload:
        """Run a JQL search; the upstream body is returned untouched."""
        logger.info("Proxying Jira search request: jql=%s fields=%s limit=%s", request.jql, request.fields, request.limit)
        self._require_credentials()
        payload = await self._get("/search", request.upstream_params())
        issues = payload.data.get("issues") if isinstance(payload.data, dict) else None
        logger.info("Successfully retrieved %d issues from Jira", len(issues) if isinstance(issues, list) else 0)
        return payload

    async def get_issue(self, request: IssueLookupRequest) -> UpstreamPayload:
        """Fetch a single issue by key."""
        logger.info("Proxying single issue request: %s", request.issue_key)
        self._require_credentials()
        payload = await self._get(f"/issue/{request.issue_key}", request.upstream_params())
        logger.info("Successfully retrieved issue %s from Jira", request.issue_key)
        return payload
