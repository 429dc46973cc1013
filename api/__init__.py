"""Chat completion backends used by the search core."""

from .base_client import BaseChatClient
from .openai_client import OpenAIChatClient

__all__ = ["BaseChatClient", "OpenAIChatClient"]
