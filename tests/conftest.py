import json
import os
from types import SimpleNamespace

import pytest

# Must be set before utils.logger / config are imported by the test modules.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("OPENAI_API_KEY", "test_api_key")

from api.base_client import BaseChatClient  # noqa: E402


def build_completion(content, *, model="gpt-4-o3", usage=(100, 200, 300)):
    """Build an object shaped like openai's ChatCompletion."""
    return SimpleNamespace(
        id="test-completion-id",
        object="chat.completion",
        model=model,
        choices=[
            SimpleNamespace(
                index=0,
                message=SimpleNamespace(role="assistant", content=content),
                finish_reason="stop",
            )
        ],
        usage=(
            SimpleNamespace(
                prompt_tokens=usage[0], completion_tokens=usage[1], total_tokens=usage[2]
            )
            if usage
            else None
        ),
    )


def build_results(count=3):
    return [
        {
            "title": f"Test Result {i + 1}",
            "url": f"https://example.com/result{i + 1}",
            "description": f"This is test result {i + 1}",
            "date": "2024-01-01",
            "score": round(0.9 - i * 0.05, 2),
        }
        for i in range(count)
    ]


class FakeChatClient(BaseChatClient):
    """
    Fake chat backend. Each call consumes the next scripted item: exceptions are
    raised, anything else is returned as the completion.
    """

    provider_name = "fake"

    def __init__(self, script=None, model_name="gpt-4-o3", timeout_ms=5000):
        super().__init__("test_api_key", model_name, timeout_ms)
        self.script = list(script or [])
        self.calls = []

    async def send(self, model, messages, temperature, max_tokens):
        self.calls.append(
            {
                "model": model,
                "messages": messages,
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
        )
        item = self.script.pop(0) if len(self.script) > 1 else self.script[0]
        if isinstance(item, BaseException):
            raise item
        return item


class MockAPIError(Exception):
    """Shaped like an SDK API error without being one."""

    def __init__(self, message, status, headers=None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.headers = headers or {}


@pytest.fixture
def make_completion():
    return build_completion


@pytest.fixture
def make_results():
    return build_results


@pytest.fixture
def search_completion():
    """Factory: completion whose content is a JSON search payload."""

    def _factory(results=None, total_count=None, **kwargs):
        results = build_results() if results is None else results
        payload = {"results": results}
        if total_count is not None:
            payload["totalCount"] = total_count
        return build_completion(json.dumps(payload), **kwargs)

    return _factory


@pytest.fixture
def fake_client_factory():
    return FakeChatClient


@pytest.fixture
def api_error():
    return MockAPIError


@pytest.fixture
def recorded_sleeps():
    """A sleep replacement that records requested delays (seconds) without waiting."""
    delays = []

    async def _sleep(seconds):
        delays.append(seconds)

    _sleep.delays = delays
    return _sleep


@pytest.fixture
def mock_env(monkeypatch):
    """Fixture to mock environment variables for configuration tests."""
    env_vars = {
        "APP_ENV": "test",
        "OPENAI_API_KEY": "test_api_key",
        "OPENAI_MODEL": "gpt-4-o3",
        "SERVER_TIMEOUT": "5000",
        "SERVER_MAX_RETRIES": "1",
        "LOG_LEVEL": "error",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars
