import math
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class UsageInfo:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def __post_init__(self):
        if self.total_tokens == 0 and (self.prompt_tokens > 0 or self.completion_tokens > 0):
            object.__setattr__(self, "total_tokens", self.prompt_tokens + self.completion_tokens)

    def to_dict(self) -> dict[str, int]:
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
        }


@dataclass(frozen=True)
class CostBreakdown:
    input_cost: float = 0.0
    output_cost: float = 0.0
    total_cost: float = 0.0


@dataclass(frozen=True)
class CostInfo:
    model: str
    usage: UsageInfo
    cost: CostBreakdown
    currency: str = "USD"

    def to_dict(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "usage": self.usage.to_dict(),
            "cost": {
                "input_cost": self.cost.input_cost,
                "output_cost": self.cost.output_cost,
                "total_cost": self.cost.total_cost,
            },
            "currency": self.currency,
        }


@dataclass(frozen=True)
class NormalizedResult:
    """One entry as the upstream reported it. Missing fields stay None."""

    title: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    date: Optional[str] = None
    score: Optional[float] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NormalizedResult":
        return cls(
            title=data.get("title"),
            url=data.get("url"),
            description=data.get("description"),
            date=data.get("date"),
            score=_as_score(data.get("score")),
        )


def _as_score(value: Any) -> Optional[float]:
    """Models sometimes quote the score ("0.95"); anything non-numeric becomes None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        score = float(value)
    except (TypeError, ValueError):
        return None
    return score if math.isfinite(score) else None


@dataclass(frozen=True)
class SearchResponse:
    results: list[NormalizedResult] = field(default_factory=list)
    total_count: int = 0
    cost: Optional[CostInfo] = None


@dataclass(frozen=True)
class SearchResult:
    """Caller-facing search hit."""

    title: str
    url: Optional[str]
    snippet: str = ""
    published_date: Optional[str] = None
    relevance_score: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "snippet": self.snippet,
            "published_date": self.published_date,
            "relevance_score": self.relevance_score,
        }


@dataclass(frozen=True)
class SearchOutcome:
    results: list[SearchResult]
    cost_info: Optional[CostInfo] = None


@dataclass(frozen=True)
class BatchOutcome:
    """Per-query outcomes of a batch search, in request order.

    Each slot holds either a SearchOutcome or the exception that query raised.
    """

    outcomes: list[Any]
    cost_info: Optional[CostInfo] = None

    @property
    def success_count(self) -> int:
        return sum(1 for o in self.outcomes if isinstance(o, SearchOutcome))

    @property
    def error_count(self) -> int:
        return len(self.outcomes) - self.success_count
