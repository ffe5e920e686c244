from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness plus a view of the upstream configuration."""
    status: str = Field(default="healthy", description="Service status")
    jiraBaseUrl: str = Field(..., description="Jira instance requests are proxied to")
    hasCredentials: bool = Field(..., description="Whether JIRA_EMAIL and JIRA_API_TOKEN are both set")


class ConfigErrorResponse(BaseModel):
    """Returned when the proxy has no Jira credentials."""
    error: str = Field(default="Jira credentials not configured", description="Short error type")
    message: str = Field(..., description="Human readable error message")


class UpstreamErrorResponse(BaseModel):
    """Returned when Jira answers with a non-2xx status."""
    error: str = Field(default="Jira API request failed", description="Short error type")
    status: int = Field(..., description="Upstream HTTP status code")
    statusText: str = Field(..., description="Upstream HTTP reason phrase")
    details: str = Field(..., description="Upstream error body text")


class ProxyFailureResponse(BaseModel):
    """Returned when the upstream call could not be completed."""
    error: str = Field(default="Proxy request failed", description="Short error type")
    details: str = Field(..., description="Exception message")
