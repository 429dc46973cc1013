"""FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from config.config import get_config
from models.errors import SearchServiceError
from server.routes import health, search, tools
from server.utils import search_error_handler
from utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup/shutdown logic."""
    config = get_config()
    logger.info(
        "Search server starting up",
        extra={"extra_fields": {"model_info": config.get_model_info()}},
    )
    if not config.validate():
        logger.warning("Configuration is incomplete; check OPENAI_API_KEY and SERVER_* settings")

    yield

    logger.info("Search server shutting down")


def create_app() -> FastAPI:
    """Factory function to create FastAPI application."""
    app = FastAPI(
        title="O3 Search API",
        description="Web search backed by a chat model, exposed as an agent tool",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_exception_handler(SearchServiceError, search_error_handler)

    app.include_router(health.router)
    app.include_router(tools.router)
    app.include_router(search.router)

    return app
