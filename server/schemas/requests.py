"""Pydantic request models for FastAPI endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class ToolCallRequest(BaseModel):
    name: str = Field(..., min_length=1)
    arguments: dict[str, Any] = Field(default_factory=dict)
    retry: bool = True
