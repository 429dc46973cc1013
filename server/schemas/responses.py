"""Pydantic response models (DTOs) for FastAPI endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class UsageDTO(BaseModel):
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


class CostDTO(BaseModel):
    input_cost: float
    output_cost: float
    total_cost: float


class CostInfoDTO(BaseModel):
    model: str
    usage: UsageDTO
    cost: CostDTO
    currency: str = "USD"

    @classmethod
    def from_cost_info(cls, cost_info):
        if cost_info is None:
            return None
        return cls(**cost_info.to_dict())


class SearchResultDTO(BaseModel):
    title: str
    url: str | None = None
    snippet: str = ""
    published_date: str | None = None
    relevance_score: float | None = None


class SearchResponseDTO(BaseModel):
    results: list[SearchResultDTO]
    result_count: int
    cost_info: CostInfoDTO | None = None

    @classmethod
    def from_outcome(cls, outcome):
        """Convert a SearchOutcome to DTO."""
        return cls(
            results=[SearchResultDTO(**r.to_dict()) for r in outcome.results],
            result_count=len(outcome.results),
            cost_info=CostInfoDTO.from_cost_info(outcome.cost_info),
        )


class ErrorDTO(BaseModel):
    code: str
    message: str
    retryable: bool
    details: dict[str, Any] = Field(default_factory=dict)


class TextContentDTO(BaseModel):
    type: str = "text"
    text: str


class ToolCallResponseDTO(BaseModel):
    content: list[TextContentDTO]
    is_error: bool = False


class ToolDefinitionDTO(BaseModel):
    name: str
    description: str
    inputSchema: dict[str, Any]


class ToolListResponseDTO(BaseModel):
    tools: list[ToolDefinitionDTO]


class HealthResponseDTO(BaseModel):
    status: str
    timestamp: str
    model: str
    version: str = "1.0.0"
