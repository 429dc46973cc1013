import httpx
import openai
import pytest

from models.errors import (
    AuthError,
    NetworkError,
    RateLimitError,
    RequestTimeoutError,
    ResponseParseError,
    SearchValidationError,
    UnknownUpstreamError,
)
from orchestrator.error_classifier import classify_error, describe_error

TIMEOUT_MS = 30000


def _openai_status_error(status_code, headers=None):
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    response = httpx.Response(status_code, headers=headers or {}, request=request)
    return openai.APIStatusError(f"Error code: {status_code}", response=response, body=None)


class TestStatusErrors:
    def test_401_is_auth(self, api_error):
        error = classify_error(api_error("Invalid API key", 401), TIMEOUT_MS)

        assert isinstance(error, AuthError)
        assert error.retryable is False
        assert "OPENAI_API_KEY" in error.message

    def test_429_uses_retry_after_header(self, api_error):
        error = classify_error(api_error("Too many", 429, {"retry-after": "30"}), TIMEOUT_MS)

        assert isinstance(error, RateLimitError)
        assert error.retry_after == 30

    @pytest.mark.parametrize("headers", [{}, {"retry-after": "soon"}])
    def test_429_defaults_to_60_seconds(self, api_error, headers):
        error = classify_error(api_error("Too many", 429, headers), TIMEOUT_MS)

        assert isinstance(error, RateLimitError)
        assert error.retry_after == 60

    @pytest.mark.parametrize("status", [500, 502, 503])
    def test_server_errors_are_network(self, api_error, status):
        error = classify_error(api_error("Upstream down", status), TIMEOUT_MS)

        assert type(error) is NetworkError
        assert error.retryable is True
        assert error.details["status"] == status

    def test_other_status_includes_upstream_text(self, api_error):
        error = classify_error(api_error("Unsupported parameter: foo", 400), TIMEOUT_MS)

        assert type(error) is NetworkError
        assert "Unsupported parameter: foo" in error.message

    def test_cause_is_preserved(self, api_error):
        original = api_error("Upstream down", 503)
        assert classify_error(original, TIMEOUT_MS).cause is original


class TestRealSdkErrorsClassifyLikeDoubles:
    def test_sdk_auth_error(self, api_error):
        sdk_error = classify_error(_openai_status_error(401), TIMEOUT_MS)
        double_error = classify_error(api_error("Invalid API key", 401), TIMEOUT_MS)

        assert type(sdk_error) is type(double_error) is AuthError

    def test_sdk_rate_limit_reads_response_headers(self):
        error = classify_error(_openai_status_error(429, {"retry-after": "12"}), TIMEOUT_MS)

        assert isinstance(error, RateLimitError)
        assert error.retry_after == 12

    def test_sdk_timeout(self):
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        error = classify_error(openai.APITimeoutError(request=request), TIMEOUT_MS)

        assert isinstance(error, RequestTimeoutError)
        assert error.timeout_ms == TIMEOUT_MS

    def test_sdk_connection_error(self):
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        error = classify_error(openai.APIConnectionError(request=request), TIMEOUT_MS)

        assert type(error) is NetworkError


class TestNonStatusErrors:
    def test_abort_error_is_timeout(self):
        abort = Exception("The operation was aborted")
        abort.name = "AbortError"

        error = classify_error(abort, 5000)

        assert isinstance(error, RequestTimeoutError)
        assert error.timeout_ms == 5000
        assert "5000ms" in error.message

    def test_timeout_in_message(self):
        assert isinstance(classify_error(Exception("Request timeout"), TIMEOUT_MS), RequestTimeoutError)

    def test_builtin_timeout_error(self):
        assert isinstance(classify_error(TimeoutError("timed out"), TIMEOUT_MS), RequestTimeoutError)

    @pytest.mark.parametrize(
        "message", ["network unreachable", "connect ECONNREFUSED 127.0.0.1:443", "Connection refused"]
    )
    def test_connectivity_errors(self, message):
        error = classify_error(Exception(message), TIMEOUT_MS)
        assert type(error) is NetworkError

    def test_unexpected_error(self):
        original = ValueError("something odd")

        error = classify_error(original, TIMEOUT_MS)

        assert isinstance(error, UnknownUpstreamError)
        assert isinstance(error, NetworkError)
        assert error.code == "unknown"
        assert error.cause is original
        assert error.details["error_type"] == "ValueError"


class TestPassThrough:
    @pytest.mark.parametrize(
        "error",
        [
            ResponseParseError("bad payload"),
            SearchValidationError("bad input"),
            RateLimitError("slow down", retry_after=5),
        ],
    )
    def test_classified_errors_are_returned_unchanged(self, error):
        assert classify_error(error, TIMEOUT_MS) is error


def test_describe_error_ignores_non_numeric_status():
    error = Exception("odd")
    error.status = "teapot"

    assert describe_error(error).status is None
