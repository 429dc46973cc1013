"""
SearchOrchestrator - public entry point of the search core.

Builds the search prompt from validated parameters, calls the chat backend (optionally
through RetryExecutor), normalizes the answer and enforces the requested result limit.
"""

import asyncio
import json
from collections.abc import Sequence

from api.base_client import BaseChatClient
from models.errors import ResponseParseError
from models.search_params import SearchParams, UpstreamQuery
from models.search_response import BatchOutcome, SearchOutcome, SearchResponse, SearchResult
from orchestrator.error_classifier import classify_error
from orchestrator.retry_executor import RetryExecutor, RetryPolicy
from utils.cost_calculator import aggregate_costs
from utils.logger import get_logger
from utils.response_parser import parse_search_response

logger = get_logger(__name__)

NO_TITLE = "No title"

SYSTEM_PROMPT = (
    "You are a high-precision web search assistant. Search for the most recent and "
    "relevant information for the user's query and return the results as structured JSON."
)

RESPONSE_FORMAT_EXAMPLE = {
    "results": [
        {
            "title": "Article title",
            "url": "https://example.com/article",
            "description": "Summary of the article",
            "date": "2024-01-01",
            "score": 0.95,
        }
    ],
    "totalCount": 10,
}

SEARCH_TEMPERATURE = 0.1
SEARCH_MAX_TOKENS = 4000


def build_upstream_query(params: SearchParams) -> UpstreamQuery:
    return UpstreamQuery(
        query=params.query,
        max_results=params.limit,
        filters={
            "language": params.language or "auto",
            "timeframe": params.timeframe,
        },
    )


def build_search_prompt(query: UpstreamQuery) -> str:
    return (
        "Execute the following search request and return the results in structured JSON:\n\n"
        f"{json.dumps(query.to_dict(), indent=2, ensure_ascii=False)}\n\n"
        "Expected response format:\n"
        f"{json.dumps(RESPONSE_FORMAT_EXAMPLE, indent=2)}"
    )


def _as_text(value):
    # Upstream JSON may carry numbers where strings are expected, e.g. "title": 123
    if value is None or isinstance(value, str):
        return value
    return str(value)


def transform_results(response: SearchResponse, limit: int | None = None) -> list[SearchResult]:
    """
    Project normalized entries into the caller-facing shape and apply the limit.

    Entries with an empty url are kept; filtering is the caller's concern.
    """
    results = [
        SearchResult(
            title=_as_text(item.title) or NO_TITLE,
            url=_as_text(item.url),
            snippet=_as_text(item.description) or "",
            published_date=_as_text(item.date) or None,
            relevance_score=item.score,
        )
        for item in response.results
    ]
    # The model may ignore max_results; the limit is enforced here.
    return results[:limit] if limit else results


class SearchOrchestrator:
    """
    Stateless across calls: each search builds its own query and retry loop, so one
    instance can serve concurrent searches.

    Example usage:
        orchestrator = SearchOrchestrator(OpenAIChatClient(api_key, "gpt-4o"))
        outcome = await orchestrator.search_with_retry(SearchParams(query="python 3.13"))
        for result in outcome.results:
            print(result.title, result.url)
    """

    def __init__(
        self,
        client: BaseChatClient,
        retry_executor: RetryExecutor | None = None,
        *,
        max_attempts: int = 3,
    ):
        """
        Args:
            client: Chat backend used for every search
            retry_executor: Retry policy for search_with_retry
            max_attempts: Default attempt count for search_with_retry
        """
        self.client = client
        self.retry_executor = retry_executor or RetryExecutor(
            RetryPolicy(max_attempts=max_attempts), timeout_ms=client.timeout_ms
        )
        self.max_attempts = max_attempts

    async def _call_upstream(self, query: UpstreamQuery) -> SearchResponse:
        prompt = build_search_prompt(query)
        logger.debug("Generated search prompt", extra={"extra_fields": {"prompt_length": len(prompt)}})

        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]
        try:
            completion = await self.client.send(
                model=self.client.model_name,
                messages=messages,
                temperature=SEARCH_TEMPERATURE,
                max_tokens=SEARCH_MAX_TOKENS,
            )
        except Exception as e:
            raise classify_error(e, self.client.timeout_ms) from e

        try:
            return parse_search_response(completion)
        except ResponseParseError as e:
            logger.error(
                "Failed to parse search response",
                extra={"extra_fields": {"error_message": e.message}},
            )
            raise

    def _finish(self, params: SearchParams, response: SearchResponse) -> SearchOutcome:
        results = transform_results(response, params.limit)
        logger.info(
            "Search completed successfully",
            extra={
                "extra_fields": {
                    "query": params.query,
                    "result_count": len(results),
                    "total_count": response.total_count,
                    "total_cost": response.cost.cost.total_cost if response.cost else None,
                }
            },
        )
        return SearchOutcome(results=results, cost_info=response.cost)

    def _log_start(self, params: SearchParams, query: UpstreamQuery) -> None:
        logger.info(
            "Executing search",
            extra={
                "extra_fields": {
                    "query": params.query,
                    "limit": params.limit,
                    "language": params.language,
                    "timeframe": params.timeframe,
                    "upstream_query": query.to_dict(),
                }
            },
        )

    async def execute_search(self, params: SearchParams) -> SearchOutcome:
        """Run one search with a single upstream call and no retries."""
        query = build_upstream_query(params)
        self._log_start(params, query)
        try:
            response = await self._call_upstream(query)
        except Exception as e:
            logger.error(
                "Search execution failed",
                extra={"extra_fields": {"query": params.query, "error": str(e)}},
            )
            raise
        return self._finish(params, response)

    async def search_with_retry(
        self, params: SearchParams, max_attempts: int | None = None
    ) -> SearchOutcome:
        """Run one search, retrying transient upstream failures."""
        query = build_upstream_query(params)
        self._log_start(params, query)
        attempts = max_attempts if max_attempts is not None else self.max_attempts
        try:
            response = await self.retry_executor.execute_with_retry(
                lambda: self._call_upstream(query), attempts
            )
        except Exception as e:
            logger.error(
                "Search execution failed",
                extra={
                    "extra_fields": {
                        "query": params.query,
                        "max_attempts": attempts,
                        "error": str(e),
                    }
                },
            )
            raise
        return self._finish(params, response)

    async def search_batch(
        self, params_list: Sequence[SearchParams], *, retry: bool = True
    ) -> BatchOutcome:
        """
        Run several searches concurrently.

        A failing query does not cancel the others; its slot holds the raised error.
        """
        search = self.search_with_retry if retry else self.execute_search
        outcomes = await asyncio.gather(
            *(search(params) for params in params_list), return_exceptions=True
        )
        costs = [o.cost_info for o in outcomes if isinstance(o, SearchOutcome) and o.cost_info]

        batch = BatchOutcome(outcomes=list(outcomes), cost_info=aggregate_costs(costs))
        logger.info(
            "Batch search completed",
            extra={
                "extra_fields": {
                    "query_count": len(params_list),
                    "success_count": batch.success_count,
                    "error_count": batch.error_count,
                }
            },
        )
        return batch
