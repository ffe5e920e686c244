from __future__ import annotations

import logging

import uvicorn

from ..core.config import get_settings
from .main import app

logger = logging.getLogger(__name__)


def main() -> None:
    """Run the proxy with uvicorn on $PORT."""
    settings = get_settings()
    logger.info("Jira proxy server running on port %s", settings.PORT)
    logger.info("Proxying requests to: %s", settings.jira_base_url)
    logger.info("Authentication configured: %s", settings.has_credentials)
    if not settings.has_credentials:
        logger.warning("Jira credentials not configured! Set JIRA_EMAIL and JIRA_API_TOKEN environment variables")
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT, log_config=None)


if __name__ == "__main__":
    main()
