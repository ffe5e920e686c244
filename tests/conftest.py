import pytest
from fastapi.testclient import TestClient

from jira_proxy.api.main import build_app
from jira_proxy.core.config import Settings

API_ROOT = "https://cvs-hcd.atlassian.net/rest/api/3"


def make_settings(**overrides) -> Settings:
    values = {"JIRA_EMAIL": "user@example.com", "JIRA_API_TOKEN": "token", "_env_file": None}
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def client():
    with TestClient(build_app(make_settings())) as c:
        yield c


@pytest.fixture
def unconfigured_client():
    with TestClient(build_app(make_settings(JIRA_EMAIL=None, JIRA_API_TOKEN=None))) as c:
        yield c
