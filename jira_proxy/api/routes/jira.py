from __future__ import annotations

from typing import Any, Optional, Union

from fastapi import APIRouter, Body, Depends, Path, Query
from fastapi.responses import Response

from ...clients.jira_client import JiraClient
from ...models.common import ConfigErrorResponse, ProxyFailureResponse, UpstreamErrorResponse
from ...models.jira import IssueLookupRequest, SearchRequest, UpstreamPayload
from ..dependencies import get_jira_client

router = APIRouter(prefix="/jira", tags=["JIRA"])

ERROR_RESPONSES = {
    500: {"model": Union[ConfigErrorResponse, ProxyFailureResponse], "description": "Credentials missing or proxy failure"},
    "default": {"model": UpstreamErrorResponse, "description": "Upstream Jira status and error text, relayed as-is"},
}


def _relay(payload: UpstreamPayload) -> Response:
    return Response(content=payload.content, status_code=200, media_type="application/json")


@router.post(
    "/search",
    summary="Search Issues",
    responses=ERROR_RESPONSES,
)
async def search_issues(
    body: Any = Body(default=None, description="{jql, fields, limit, expand}; passed through unvalidated"),
    jira: JiraClient = Depends(get_jira_client),
):
    """Search JIRA issues with JQL; the upstream search payload is returned verbatim."""
    payload = await jira.search(SearchRequest.from_body(body))
    return _relay(payload)


@router.get(
    "/issue/{issue_key}",
    summary="Get Issue",
    responses=ERROR_RESPONSES,
)
async def get_issue(
    issue_key: str = Path(..., description="JIRA issue key"),
    fields: Optional[str] = Query(default=None, description="Comma-separated fields to return"),
    expand: Optional[str] = Query(default=None, description="Comma-separated expand directives"),
    jira: JiraClient = Depends(get_jira_client),
):
    """Retrieve a JIRA issue by key; the upstream issue payload is returned verbatim."""
    payload = await jira.get_issue(IssueLookupRequest(issue_key=issue_key, fields=fields, expand=expand))
    return _relay(payload)
