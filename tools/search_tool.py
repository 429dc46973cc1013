"""Search tool definition, argument validation and text rendering."""

from typing import Any

from pydantic import ValidationError

from models.errors import SearchServiceError, SearchValidationError
from models.search_params import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    MAX_QUERY_LENGTH,
    MIN_LIMIT,
    SUPPORTED_LANGUAGES,
    SUPPORTED_TIMEFRAMES,
    SearchParams,
)
from models.search_response import CostInfo, SearchOutcome, SearchResult
from orchestrator.search_orchestrator import SearchOrchestrator
from utils.cost_calculator import format_cost_info
from utils.logger import get_logger

logger = get_logger(__name__)

SEARCH_TOOL_NAME = "o3_search"
NO_RESULTS_MESSAGE = "No search results found."
ERROR_LABEL = "Search error"

search_tool = {
    "name": SEARCH_TOOL_NAME,
    "description": "Run a web search through the configured chat model and return structured results.",
    "inputSchema": {
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": "Search query string",
                "minLength": 1,
                "maxLength": MAX_QUERY_LENGTH,
            },
            "limit": {
                "type": "integer",
                "description": f"Maximum number of results ({MIN_LIMIT}-{MAX_LIMIT})",
                "default": DEFAULT_LIMIT,
                "minimum": MIN_LIMIT,
                "maximum": MAX_LIMIT,
            },
            "language": {
                "type": "string",
                "description": "Result language code (ja, en, auto, ...)",
                "default": "auto",
                "enum": list(SUPPORTED_LANGUAGES),
            },
            "timeframe": {
                "type": "string",
                "description": "Time range filter for results",
                "enum": list(SUPPORTED_TIMEFRAMES),
            },
        },
        "required": ["query"],
        "additionalProperties": False,
    },
}


def _describe_validation_error(error: ValidationError) -> str:
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "arguments"
        messages.append(f"{location}: {item.get('msg', 'invalid value')}")
    return "; ".join(messages)


def validate_search_params(args: Any) -> SearchParams:
    """
    Validate untrusted tool arguments.

    Raises:
        SearchValidationError: With a readable description of every invalid field
    """
    if not isinstance(args, dict) or not args:
        raise SearchValidationError("Search parameters are required")

    # Explicit nulls mean "use the default".
    cleaned = {key: value for key, value in args.items() if value is not None}
    try:
        return SearchParams(**cleaned)
    except ValidationError as e:
        raise SearchValidationError(f"Invalid search parameters: {_describe_validation_error(e)}") from e


def _format_result(index: int, result: SearchResult) -> str:
    parts = [
        f"{index}. **{result.title}**",
        f"   URL: {result.url or ''}",
        f"   Summary: {result.snippet}",
    ]
    if result.published_date:
        parts.append(f"   Published: {result.published_date}")
    if result.relevance_score is not None:
        parts.append(f"   Relevance: {result.relevance_score * 100:.1f}%")
    return "\n".join(parts)


def format_search_results(results: list[SearchResult], cost_info: CostInfo | None = None) -> str:
    if not results:
        return NO_RESULTS_MESSAGE

    body = "\n\n".join(_format_result(i, r) for i, r in enumerate(results, start=1))
    text = f"Search results: {len(results)}\n\n{body}"
    if cost_info is not None:
        text += f"\n\n{format_cost_info(cost_info)}"
    return text


def format_error_message(error: BaseException) -> str:
    message = error.message if isinstance(error, SearchServiceError) else str(error)
    return f"{ERROR_LABEL}: {message}"


def text_content(text: str, *, is_error: bool = False) -> dict[str, Any]:
    return {"content": [{"type": "text", "text": text}], "is_error": is_error}


async def handle_search_call(
    args: Any, orchestrator: SearchOrchestrator, *, retry: bool = True
) -> dict[str, Any]:
    """
    Run the search tool and render the outcome as text content.

    Failures are rendered, not raised, so the tool caller always receives a message.
    """
    try:
        params = validate_search_params(args)
        if retry:
            outcome: SearchOutcome = await orchestrator.search_with_retry(params)
        else:
            outcome = await orchestrator.execute_search(params)
        text = format_search_results(outcome.results, outcome.cost_info)
    except Exception as e:
        logger.error(
            "Search tool call failed",
            extra={
                "extra_fields": {
                    "error_code": getattr(e, "code", "unknown"),
                    "error": str(e),
                }
            },
        )
        return text_content(format_error_message(e), is_error=True)

    return text_content(text)
