import base64

import httpx
import respx
from httpx import Response

from conftest import API_ROOT
from jira_proxy.models.jira import DEFAULT_SEARCH_FIELDS

CREDENTIALS_ERROR = {
    "error": "Jira credentials not configured",
    "message": "Missing JIRA_EMAIL or JIRA_API_TOKEN environment variables",
}


@respx.mock
def test_search(client):
    body = b'{"issues":[{"key":"ABC-1"}]}'
    route = respx.get(f"{API_ROOT}/search").mock(
        return_value=Response(200, content=body, headers={"Content-Type": "application/json"})
    )

    r = client.post("/jira/search", json={"jql": "project=ABC", "limit": 10})

    assert r.status_code == 200
    assert r.content == body
    assert r.headers["content-type"].startswith("application/json")
    sent = route.calls.last.request
    assert sent.url.params["jql"] == "project=ABC"
    assert sent.url.params["maxResults"] == "10"
    assert sent.url.params["fields"] == DEFAULT_SEARCH_FIELDS
    assert sent.url.params["expand"] == ""


@respx.mock
def test_search_sends_basic_auth(client):
    route = respx.get(f"{API_ROOT}/search").mock(return_value=Response(200, json={"issues": []}))

    client.post("/jira/search", json={"jql": "project=ABC"})

    sent = route.calls.last.request
    expected = "Basic " + base64.b64encode(b"user@example.com:token").decode("ascii")
    assert sent.headers["Authorization"] == expected
    assert sent.headers["Accept"] == "application/json"
    assert sent.headers["Content-Type"] == "application/json"


@respx.mock
def test_search_defaults_and_overrides(client):
    route = respx.get(f"{API_ROOT}/search").mock(return_value=Response(200, json={"issues": []}))

    client.post("/jira/search", json={"jql": "assignee = currentUser()"})
    params = route.calls.last.request.url.params
    assert params["maxResults"] == "50"
    assert params["fields"] == DEFAULT_SEARCH_FIELDS

    client.post("/jira/search", json={"jql": "project=ABC", "fields": "key,summary", "expand": "changelog"})
    params = route.calls.last.request.url.params
    assert params["fields"] == "key,summary"
    assert params["expand"] == "changelog"


@respx.mock
def test_search_upstream_error_is_relayed(client):
    respx.get(f"{API_ROOT}/search").mock(return_value=Response(400, text="Error in the JQL Query"))

    r = client.post("/jira/search", json={"jql": "project ="})

    assert r.status_code == 400
    assert r.json() == {
        "error": "Jira API request failed",
        "status": 400,
        "statusText": "Bad Request",
        "details": "Error in the JQL Query",
    }


@respx.mock
def test_search_transport_error(client):
    respx.get(f"{API_ROOT}/search").mock(side_effect=httpx.ConnectError("connection refused"))

    r = client.post("/jira/search", json={"jql": "project=ABC"})

    assert r.status_code == 500
    assert r.json() == {"error": "Proxy request failed", "details": "connection refused"}


@respx.mock
def test_search_unreadable_upstream_body(client):
    respx.get(f"{API_ROOT}/search").mock(return_value=Response(200, text="<html>maintenance</html>"))

    r = client.post("/jira/search", json={"jql": "project=ABC"})

    assert r.status_code == 500
    assert r.json()["error"] == "Proxy request failed"


def test_search_without_credentials(unconfigured_client):
    with respx.mock(assert_all_called=False) as jira:
        route = jira.get(f"{API_ROOT}/search").mock(return_value=Response(200, json={"issues": []}))
        r = unconfigured_client.post("/jira/search", json={"jql": "project=ABC"})
        empty = unconfigured_client.post("/jira/search")

    assert r.status_code == 500
    assert r.json() == CREDENTIALS_ERROR
    assert empty.status_code == 500
    assert empty.json() == CREDENTIALS_ERROR
    assert not route.called


@respx.mock
def test_get_issue(client):
    body = b'{"id":"10001","key":"ABC-1","fields":{"summary":"Test"}}'
    route = respx.get(f"{API_ROOT}/issue/ABC-1").mock(return_value=Response(200, content=body))

    r = client.get("/jira/issue/ABC-1")

    assert r.status_code == 200
    assert r.content == body
    assert route.calls.last.request.url.query == b""


@respx.mock
def test_get_issue_forwards_fields_and_expand(client):
    route = respx.get(f"{API_ROOT}/issue/ABC-2").mock(return_value=Response(200, json={"key": "ABC-2"}))

    r = client.get("/jira/issue/ABC-2", params={"fields": "summary,status", "expand": "renderedFields"})

    assert r.status_code == 200
    params = route.calls.last.request.url.params
    assert params["fields"] == "summary,status"
    assert params["expand"] == "renderedFields"


@respx.mock
def test_get_issue_not_found(client):
    respx.get(f"{API_ROOT}/issue/ABC-1").mock(return_value=Response(404, text="Issue not found"))

    r = client.get("/jira/issue/ABC-1")

    assert r.status_code == 404
    assert r.json() == {
        "error": "Jira API request failed",
        "status": 404,
        "statusText": "Not Found",
        "details": "Issue not found",
    }


@respx.mock
def test_get_issue_timeout(client):
    respx.get(f"{API_ROOT}/issue/ABC-1").mock(side_effect=httpx.ReadTimeout("timed out"))

    r = client.get("/jira/issue/ABC-1")

    assert r.status_code == 500
    assert r.json() == {"error": "Proxy request failed", "details": "timed out"}


def test_get_issue_without_credentials(unconfigured_client):
    with respx.mock(assert_all_called=False) as jira:
        route = jira.get(f"{API_ROOT}/issue/ABC-1").mock(return_value=Response(200, json={"key": "ABC-1"}))
        r = unconfigured_client.get("/jira/issue/ABC-1", headers={"Origin": "http://localhost:3000"})

    assert r.status_code == 500
    assert r.json() == CREDENTIALS_ERROR
    assert r.headers["access-control-allow-origin"] == "*"
    assert not route.called


@respx.mock
def test_search_passes_loose_values_through(client):
    route = respx.get(f"{API_ROOT}/search").mock(return_value=Response(200, json={"issues": []}))

    r = client.post("/jira/search", json={"jql": "project=ABC", "limit": "all", "fields": ["key", "summary"]})

    assert r.status_code == 200
    params = route.calls.last.request.url.params
    assert params["maxResults"] == "all"
    assert params["fields"] == "key,summary"


def test_search_loose_values_without_credentials(unconfigured_client):
    with respx.mock(assert_all_called=False) as jira:
        route = jira.get(f"{API_ROOT}/search").mock(return_value=Response(200, json={"issues": []}))
        r = unconfigured_client.post(
            "/jira/search", json={"jql": "project=ABC", "limit": "all", "fields": ["key", "summary"]}
        )

    assert r.status_code == 500
    assert r.json() == CREDENTIALS_ERROR
    assert not route.called


@respx.mock
def test_search_without_jql_omits_it_upstream(client):
    route = respx.get(f"{API_ROOT}/search").mock(return_value=Response(200, json={"issues": []}))

    r = client.post("/jira/search", json={"limit": 5})

    assert r.status_code == 200
    params = route.calls.last.request.url.params
    assert "jql" not in params
    assert params["maxResults"] == "5"


@respx.mock
def test_search_relays_unusual_issues_value(client):
    body = b'{"issues":5}'
    respx.get(f"{API_ROOT}/search").mock(return_value=Response(200, content=body))

    r = client.post("/jira/search", json={"jql": "project=ABC"}, headers={"Origin": "http://localhost:3000"})

    assert r.status_code == 200
    assert r.content == body
    assert r.headers["access-control-allow-origin"] == "*"
