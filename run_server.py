#!/usr/bin/env python3
"""Serve the search tool over HTTP with uvicorn."""

import argparse
import sys

import uvicorn
from dotenv import load_dotenv

load_dotenv()

from config.config import get_config
from utils.logger import get_logger

logger = get_logger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="O3 Search HTTP server")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    args = parser.parse_args(argv)

    config = get_config()
    if not config.validate():
        print("Error: OPENAI_API_KEY is not set. Please set it in the .env file.", file=sys.stderr)
        return 2

    logger.info(
        "Starting search server",
        extra={"extra_fields": {"host": args.host, "port": args.port, "model_info": config.get_model_info()}},
    )
    uvicorn.run(
        "server.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=config.LOG_LEVEL.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
