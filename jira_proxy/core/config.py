from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

JIRA_BASE_URL = "https://cvs-hcd.atlassian.net"
JIRA_API_VERSION = "3"


class Settings(BaseSettings):
    """
    Proxy settings loaded from environment variables (and an optional .env file).

    Missing Jira credentials are not a validation error: the proxy starts anyway
    and reports the problem on every data-serving request.
    """

    # Server
    PORT: int = Field(default=8080, description="Port the proxy listens on")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    ALLOW_ORIGINS: List[str] = Field(default=["*"], description="CORS allowed origins list")

    # JIRA
    JIRA_EMAIL: Optional[str] = Field(default=None, description="JIRA account email for API auth")
    JIRA_API_TOKEN: Optional[str] = Field(default=None, description="JIRA API token for API auth")

    # HTTP
    REQUEST_TIMEOUT_SECONDS: Optional[float] = Field(
        default=30.0, description="Timeout for upstream calls in seconds; None disables it"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_parse_none_str="none",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @property
    def jira_base_url(self) -> str:
        return JIRA_BASE_URL

    @property
    def jira_api_root(self) -> str:
        """Root of the versioned REST API, e.g. https://host/rest/api/3."""
        return f"{JIRA_BASE_URL}/rest/api/{JIRA_API_VERSION}"

    @property
    def has_credentials(self) -> bool:
        return bool(self.JIRA_EMAIL and self.JIRA_API_TOKEN)


# PUBLIC_INTERFACE
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings instance."""
    return Settings()
