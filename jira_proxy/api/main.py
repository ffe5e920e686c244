from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..clients.jira_client import JiraClient
from ..core.config import Settings, get_settings
from ..core.errors import install_exception_handlers
from ..core.logging import configure_logging, install_request_logging
from ..models.common import HealthResponse
from .dependencies import get_app_settings
from .routes.jira import router as jira_router

logger = logging.getLogger(__name__)


def warn_missing_credentials() -> None:
    logger.warning("Missing Jira credentials. Please set JIRA_EMAIL and JIRA_API_TOKEN environment variables.")
    logger.warning(
        "To get an API token: create one at https://id.atlassian.com/manage-profile/security/api-tokens, "
        "then set JIRA_EMAIL=your-email@example.com and JIRA_API_TOKEN=your-token-here"
    )


# PUBLIC_INTERFACE
def build_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create the proxy application around one immutable Settings instance."""
    settings = settings or get_settings()
    jira_client = JiraClient(settings)
    configure_logging(settings.LOG_LEVEL, secrets=jira_client.secrets)

    if not settings.has_credentials:
        warn_missing_credentials()

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        await jira_client.open()
        try:
            yield
        finally:
            await jira_client.close()

    app = FastAPI(
        title="Jira Proxy",
        description="Forwards read-only Jira queries with server-side credentials",
        version="1.0.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "JIRA", "description": "Endpoints proxied to JIRA"},
            {"name": "Health", "description": "Health and diagnostics"},
        ],
    )
    app.state.settings = settings
    app.state.jira_client = jira_client

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOW_ORIGINS or ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    install_request_logging(app)
    install_exception_handlers(app)

    @app.get("/health", tags=["Health"], summary="Health Check", response_model=HealthResponse)
    def health_check(current: Settings = Depends(get_app_settings)):
        """Report the upstream base URL and whether credentials are configured. Never calls Jira."""
        return HealthResponse(jiraBaseUrl=current.jira_base_url, hasCredentials=current.has_credentials)

    app.include_router(jira_router)
    return app


app = build_app()
