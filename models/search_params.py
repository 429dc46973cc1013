"""Validated search parameters and the upstream query derived from them."""

from dataclasses import dataclass, field
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator

SUPPORTED_LANGUAGES = ("auto", "ja", "en", "zh", "ko", "fr", "de", "es", "it", "pt", "ru")
SUPPORTED_TIMEFRAMES = ("recent", "past_week", "past_month", "past_year")

MAX_QUERY_LENGTH = 500
MIN_LIMIT = 1
MAX_LIMIT = 50
DEFAULT_LIMIT = 10

Language = Literal["auto", "ja", "en", "zh", "ko", "fr", "de", "es", "it", "pt", "ru"]
Timeframe = Literal["recent", "past_week", "past_month", "past_year"]


class SearchParams(BaseModel):
    """Search request after validation. Immutable once constructed."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    query: StrictStr = Field(..., max_length=MAX_QUERY_LENGTH)
    limit: StrictInt = Field(DEFAULT_LIMIT, ge=MIN_LIMIT, le=MAX_LIMIT)
    language: Language = "auto"
    timeframe: Optional[Timeframe] = None

    @field_validator("query")
    @classmethod
    def strip_query(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("query must not be empty")
        return stripped

    @field_validator("limit", mode="before")
    @classmethod
    def floor_limit(cls, value: Any) -> Any:
        # Whole-number floats are accepted and floored; bools are not numbers here.
        if isinstance(value, bool):
            raise ValueError("limit must be a number")
        if isinstance(value, float) and MIN_LIMIT <= value <= MAX_LIMIT:
            return int(value)
        return value


@dataclass(frozen=True)
class UpstreamQuery:
    query: str
    max_results: int
    filters: dict[str, Optional[str]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "action": "web_search",
            "query": self.query,
            "max_results": self.max_results,
            "filters": {k: v for k, v in self.filters.items() if v is not None},
        }
