from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

DEFAULT_SEARCH_FIELDS = (
    "key,summary,description,status,created,updated,assignee,reporter,labels,customfield_10016"
)
DEFAULT_SEARCH_LIMIT = 50


def to_param(value: Any) -> str:
    """Render a JSON value the way it appears in a Jira query string (lists comma-joined)."""
    if isinstance(value, (list, tuple)):
        return ",".join(to_param(v) for v in value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


class SearchRequest(BaseModel):
    """
    JSON body of POST /jira/search.

    Every field accepts any JSON value: nothing is validated here, values are only
    rendered into query parameters and Jira judges them.
    """
    jql: Any = Field(default=None, description="JQL string for JIRA search")
    fields: Any = Field(default=None, description="Fields to return, comma-separated string or list")
    limit: Any = Field(default=DEFAULT_SEARCH_LIMIT, description="Forwarded as maxResults")
    expand: Any = Field(default="", description="Expand directives, comma-separated string or list")

    @classmethod
    def from_body(cls, body: Any) -> "SearchRequest":
        """Build from a decoded JSON body; anything but an object counts as empty."""
        if not isinstance(body, dict):
            return cls()
        known = {k: v for k, v in body.items() if k in cls.model_fields}
        return cls(**known)

    def upstream_params(self) -> dict[str, str]:
        params: dict[str, str] = {"jql": to_param(self.jql)} if self.jql is not None else {}
        limit = DEFAULT_SEARCH_LIMIT if self.limit is None else self.limit
        params["maxResults"] = to_param(limit)
        params["fields"] = to_param(self.fields) or DEFAULT_SEARCH_FIELDS
        params["expand"] = to_param(self.expand)
        return params


class IssueLookupRequest(BaseModel):
    """Path key and query-string options of GET /jira/issue/{issue_key}."""
    issue_key: str = Field(..., description="JIRA issue key, e.g. ABC-1")
    fields: Optional[str] = Field(default=None, description="Comma-separated fields to return")
    expand: Optional[str] = Field(default=None, description="Comma-separated expand directives")

    def upstream_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if self.fields:
            params["fields"] = self.fields
        if self.expand:
            params["expand"] = self.expand
        return params


class UpstreamPayload(BaseModel):
    """Successful upstream answer: the raw bytes to relay plus the decoded JSON."""
    content: bytes
    data: Any = None
