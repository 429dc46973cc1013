"""
Test Suite: FastAPI Search Contract

Validates the public HTTP surface of the search service without calling the real
OpenAI API. A SearchOrchestrator backed by a scripted fake chat client is injected
through FastAPI dependency overrides, and retry waits are recorded instead of slept.

Covers:
- Health and tool discovery endpoints
- Tool calls rendering text content for both success and failure
- Structured search responses and their cost block
- Mapping of classified errors to HTTP status codes (including Retry-After)
"""

import pytest
from fastapi.testclient import TestClient

from models.errors import SearchValidationError
from orchestrator.retry_executor import RetryExecutor, RetryPolicy
from orchestrator.search_orchestrator import SearchOrchestrator
from server import dependencies as deps
from server.app import create_app
from server.utils import ERROR_STATUS_CODES, status_code_for

pytestmark = pytest.mark.integration


@pytest.fixture()
def fake_client(fake_client_factory):
    return fake_client_factory()


@pytest.fixture()
def script(fake_client):
    """Completions (or exceptions) the fake upstream returns, in order."""
    return fake_client.script


@pytest.fixture()
def app(fake_client, recorded_sleeps):
    app = create_app()
    orchestrator = SearchOrchestrator(
        fake_client,
        RetryExecutor(RetryPolicy(max_attempts=3), timeout_ms=fake_client.timeout_ms, sleep=recorded_sleeps),
    )
    app.dependency_overrides[deps.get_orchestrator] = lambda: orchestrator
    yield app
    app.dependency_overrides.clear()


@pytest.fixture()
def client(app):
    return TestClient(app)


def test_health(client):
    r = client.get("/health")

    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "healthy"
    assert body["timestamp"].endswith("Z")
    assert body["model"]


def test_list_tools(client):
    r = client.get("/v1/tools")

    assert r.status_code == 200
    tools = r.json()["tools"]
    assert [t["name"] for t in tools] == ["o3_search"]
    assert tools[0]["inputSchema"]["required"] == ["query"]


class TestToolCall:
    def test_success(self, client, script, search_completion):
        script.append(search_completion())

        r = client.post("/v1/tools/call", json={"name": "o3_search", "arguments": {"query": "test query"}})

        assert r.status_code == 200
        body = r.json()
        assert body["is_error"] is False
        assert body["content"][0]["type"] == "text"
        assert body["content"][0]["text"].startswith("Search results: 3")

    def test_invalid_arguments_render_as_error_content(self, client, script, search_completion, fake_client):
        script.append(search_completion())

        r = client.post("/v1/tools/call", json={"name": "o3_search", "arguments": {"query": "q", "limit": 100}})

        assert r.status_code == 200
        assert r.json()["is_error"] is True
        assert r.json()["content"][0]["text"].startswith("Search error:")
        assert fake_client.calls == []

    def test_unknown_tool(self, client):
        r = client.post("/v1/tools/call", json={"name": "unknown_tool", "arguments": {}})

        assert r.status_code == 404
        assert "Unknown tool" in r.json()["detail"]


class TestSearchEndpoint:
    def test_success(self, client, script, search_completion, make_results):
        script.append(search_completion(make_results(10)))

        r = client.post("/v1/search", json={"query": "python", "limit": 5, "language": "en"})

        assert r.status_code == 200
        body = r.json()
        assert body["result_count"] == 5
        assert body["results"][0] == {
            "title": "Test Result 1",
            "url": "https://example.com/result1",
            "snippet": "This is test result 1",
            "published_date": "2024-01-01",
            "relevance_score": 0.9,
        }
        assert body["cost_info"]["model"] == "gpt-4-o3"
        assert body["cost_info"]["usage"]["total_tokens"] == 300
        assert body["cost_info"]["currency"] == "USD"

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"query": ""},
            {"query": "q", "limit": 0},
            {"query": "q", "language": "xx"},
            {"query": "q", "extra": True},
        ],
    )
    def test_invalid_body_is_422(self, client, fake_client, payload):
        r = client.post("/v1/search", json=payload)

        assert r.status_code == 422
        assert fake_client.calls == []

    def test_auth_error(self, client, script, api_error):
        script.append(api_error("Invalid API key", 401))

        r = client.post("/v1/search", json={"query": "q"})

        assert r.status_code == 401
        body = r.json()
        assert body["code"] == "auth"
        assert body["retryable"] is False

    def test_rate_limit_sets_retry_after(self, client, script, api_error):
        script.append(api_error("Too many", 429, {"retry-after": "30"}))

        r = client.post("/v1/search?retry=false", json={"query": "q"})

        assert r.status_code == 429
        assert r.headers["retry-after"] == "30"
        assert r.json()["details"]["retry_after"] == 30

    def test_timeout_is_504(self, client, script):
        script.append(TimeoutError("timed out"))

        r = client.post("/v1/search?retry=false", json={"query": "q"})

        assert r.status_code == 504
        assert r.json()["code"] == "timeout"

    def test_parse_error_is_502(self, client, script, make_completion):
        script.append(make_completion("I can't search the web."))

        r = client.post("/v1/search", json={"query": "q"})

        assert r.status_code == 502
        assert r.json()["code"] == "parse"

    def test_retry_recovers(self, client, script, fake_client, api_error, search_completion, recorded_sleeps):
        script.extend([api_error("Server error", 503), search_completion()])

        r = client.post("/v1/search", json={"query": "q"})

        assert r.status_code == 200
        assert len(fake_client.calls) == 2
        assert recorded_sleeps.delays == [1.0]


def test_every_error_code_has_a_status():
    assert set(ERROR_STATUS_CODES) == {
        "validation",
        "auth",
        "rate_limit",
        "timeout",
        "network",
        "parse",
        "unknown",
    }


def test_numeric_result_fields_are_returned_as_text(client, script, make_completion):
    script.append(make_completion('{"results":[{"title":123,"url":"u","date":20240101,"score":"0.5"}]}'))

    r = client.post("/v1/search?retry=false", json={"query": "q"})

    assert r.status_code == 200
    result = r.json()["results"][0]
    assert result["title"] == "123"
    assert result["published_date"] == "20240101"
    assert result["relevance_score"] == 0.5


def test_validation_maps_to_422():
    assert status_code_for(SearchValidationError("bad input")) == 422
