from __future__ import annotations

from fastapi import Request

from ..clients.jira_client import JiraClient
from ..core.config import Settings


# PUBLIC_INTERFACE
def get_app_settings(request: Request) -> Settings:
    """Settings the running app was built with."""
    return request.app.state.settings


# PUBLIC_INTERFACE
def get_jira_client(request: Request) -> JiraClient:
    """The process-wide JiraClient created by build_app()."""
    return request.app.state.jira_client
