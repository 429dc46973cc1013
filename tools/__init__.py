"""Agent tool definitions."""

from .search_tool import handle_search_call, search_tool

__all__ = ["handle_search_call", "search_tool"]
