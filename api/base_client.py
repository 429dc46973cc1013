from abc import ABC, abstractmethod
from typing import Any


class BaseChatClient(ABC):
    """
    Abstract base class for chat completion backends.
    The search core only needs to send a prompt and receive the raw completion.
    """

    provider_name = "unknown"

    def __init__(self, api_key: str, model_name: str, timeout_ms: int = 30000):
        """
        Initialize the chat client.

        Args:
            api_key: API key for the chat service
            model_name: Model used for every request
            timeout_ms: Per-request timeout in milliseconds
        """
        self.api_key = api_key
        self.model_name = model_name
        self.timeout_ms = timeout_ms

    @abstractmethod
    async def send(
        self,
        model: str,
        messages: list[dict[str, str]],
        temperature: float,
        max_tokens: int,
    ) -> Any:
        """
        Send a chat prompt and return the raw completion.

        The completion must expose ``choices[0].message.content`` and may expose
        ``usage`` and ``model``. Transport failures are raised unclassified.
        """
