#!/usr/bin/env python3
"""Command line entry point: run one search and print the rendered results."""

import argparse
import asyncio
import sys

from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from config.config import get_config
from models.search_params import SUPPORTED_LANGUAGES, SUPPORTED_TIMEFRAMES
from orchestrator.search_orchestrator import SearchOrchestrator
from server.dependencies import build_orchestrator
from tools.search_tool import handle_search_call
from utils.logger import get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Web search through a chat model")
    parser.add_argument("query", help="Search query")
    parser.add_argument("--limit", type=int, default=None, help="Maximum number of results (1-50)")
    parser.add_argument("--language", choices=SUPPORTED_LANGUAGES, default=None)
    parser.add_argument("--timeframe", choices=SUPPORTED_TIMEFRAMES, default=None)
    parser.add_argument("--no-retry", action="store_true", help="Make a single upstream call")
    return parser


async def run(args: argparse.Namespace, orchestrator: SearchOrchestrator) -> int:
    """
    Run the search tool once and print its text output.

    Returns:
        Process exit code (1 when the search failed)
    """
    tool_args = {
        "query": args.query,
        "limit": args.limit,
        "language": args.language,
        "timeframe": args.timeframe,
    }
    result = await handle_search_call(tool_args, orchestrator, retry=not args.no_retry)
    for item in result["content"]:
        print(item["text"])
    return 1 if result["is_error"] else 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    config = get_config()
    if not config.validate():
        print("Error: OPENAI_API_KEY is not set. Please set it in the .env file.", file=sys.stderr)
        return 2

    logger.info("Starting search CLI", extra={"extra_fields": {"model_info": config.get_model_info()}})
    return asyncio.run(run(args, build_orchestrator(config)))


if __name__ == "__main__":
    sys.exit(main())
