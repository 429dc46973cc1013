import openai

from utils.logger import get_logger

from .base_client import BaseChatClient

logger = get_logger(__name__)


class OpenAIChatClient(BaseChatClient):
    """
    Async client for the OpenAI chat completions API.

    One instance is shared across concurrent searches. The SDK's own retries are
    disabled; retry policy belongs to RetryExecutor.
    """

    provider_name = "openai"

    def __init__(self, api_key: str, model_name: str = "gpt-4-o3", timeout_ms: int = 30000, **kwargs):
        """
        Initialize the OpenAI client.

        Args:
            api_key: The OpenAI API key
            model_name: The name of the model to use (default: gpt-4-o3)
            timeout_ms: Request timeout in milliseconds
            **kwargs: Passed through to openai.AsyncOpenAI (e.g. base_url)
        """
        super().__init__(api_key, model_name, timeout_ms)
        self.client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_ms / 1000,
            max_retries=0,
            **kwargs,
        )
        logger.debug(
            "Created OpenAI client",
            extra={"extra_fields": {"model": model_name, "timeout_ms": timeout_ms}},
        )

    async def send(
        self,
        model: str,
        messages: list[dict[str, str]],
        temperature: float,
        max_tokens: int,
    ):
        response = await self.client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )

        usage = getattr(response, "usage", None)
        logger.debug(
            "Received OpenAI response",
            extra={
                "extra_fields": {
                    "model": getattr(response, "model", None),
                    "total_tokens": getattr(usage, "total_tokens", None),
                }
            },
        )
        return response
