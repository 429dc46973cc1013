"""Parsing of free-form chat completions into structured search responses.

Models asked for JSON often wrap it in prose or a fenced code block, so the first
balanced ``{...}`` span is located and parsed rather than the whole text.
"""

import json
from collections.abc import Mapping
from typing import Any, Optional

from models.errors import ResponseParseError
from models.search_response import NormalizedResult, SearchResponse, UsageInfo
from utils.cost_calculator import calculate_cost
from utils.logger import get_logger

logger = get_logger(__name__)


def _get(obj: Any, name: str, default: Any = None) -> Any:
    """Read a field from an SDK object or from a plain mapping of the same shape."""
    if obj is None:
        return default
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def extract_content(completion: Any) -> str:
    """
    Return the text of the first choice of a chat completion.

    Raises:
        ResponseParseError: If there is no choice or the content is empty
    """
    choices = _get(completion, "choices") or []
    if not choices:
        raise ResponseParseError("Search response is empty")

    message = _get(choices[0], "message")
    content = _get(message, "content")
    if not content:
        raise ResponseParseError("Search response is empty")
    return content


def find_json_object(text: str) -> Optional[str]:
    """
    Return the first balanced ``{...}`` span in text, or None.

    Braces inside JSON string literals are ignored, so values such as
    ``"title": "a } b"`` do not end the span early.
    """
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for index in range(start, len(text)):
            char = text[index]
            if in_string:
                if escaped:
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == '"':
                    in_string = False
                continue

            if char == '"':
                in_string = True
            elif char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return text[start : index + 1]

        # Unbalanced from this brace; try the next one.
        start = text.find("{", start + 1)
    return None


def extract_usage(completion: Any) -> Optional[UsageInfo]:
    usage = _get(completion, "usage")
    if usage is None:
        return None
    return UsageInfo(
        prompt_tokens=_token_count(_get(usage, "prompt_tokens")),
        completion_tokens=_token_count(_get(usage, "completion_tokens")),
        total_tokens=_token_count(_get(usage, "total_tokens")),
    )


def _token_count(value: Any) -> int:
    """Usage counters that are missing or not numbers count as 0."""
    try:
        return int(value or 0)
    except (TypeError, ValueError, OverflowError):
        return 0


def parse_search_response(completion: Any) -> SearchResponse:
    """
    Convert a raw chat completion into a SearchResponse.

    Entries missing a title or url are kept (a warning is logged); filtering them is
    left to the caller. Cost is attached only when the completion reports usage.

    Raises:
        ResponseParseError: If no valid result payload can be extracted
    """
    content = extract_content(completion)

    json_text = find_json_object(content)
    if json_text is None:
        raise ResponseParseError("No JSON object found in search response")

    try:
        payload = json.loads(json_text)
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Invalid JSON in search response: {e.msg}", cause=e) from e

    raw_results = payload.get("results") if isinstance(payload, dict) else None
    if not isinstance(raw_results, list):
        raise ResponseParseError("Invalid search result format: 'results' must be a list")

    results: list[NormalizedResult] = []
    for index, entry in enumerate(raw_results):
        if not isinstance(entry, dict):
            entry = {}
        if not entry.get("title") or not entry.get("url"):
            logger.warning(
                f"Search result {index} is missing required fields",
                extra={"extra_fields": {"index": index, "result": entry}},
            )
        results.append(NormalizedResult.from_dict(entry))

    total_count = payload.get("totalCount") or len(results)

    cost = None
    usage = extract_usage(completion)
    if usage is not None:
        model = _get(completion, "model") or ""
        cost = calculate_cost(model, usage)
        logger.debug(
            "Calculated search cost",
            extra={
                "extra_fields": {
                    "model": model,
                    "priced_as": cost.model,
                    "total_tokens": usage.total_tokens,
                    "total_cost": cost.cost.total_cost,
                }
            },
        )

    return SearchResponse(results=results, total_count=total_count, cost=cost)
