"""FastAPI dependencies for configuration and orchestrator access."""

from api.openai_client import OpenAIChatClient
from config.config import Config, get_config
from orchestrator.search_orchestrator import SearchOrchestrator
from utils.logger import get_logger

logger = get_logger(__name__)


def build_orchestrator(config: Config) -> SearchOrchestrator:
    client = OpenAIChatClient(
        api_key=config.OPENAI_API_KEY,
        model_name=config.OPENAI_MODEL,
        timeout_ms=config.SERVER_TIMEOUT_MS,
    )
    logger.info(
        "Creating search orchestrator",
        extra={
            "extra_fields": {
                "model": config.OPENAI_MODEL,
                "timeout_ms": config.SERVER_TIMEOUT_MS,
                "max_retries": config.SERVER_MAX_RETRIES,
            }
        },
    )
    return SearchOrchestrator(client, max_attempts=config.SERVER_MAX_RETRIES)


def get_orchestrator() -> SearchOrchestrator:
    """Dependency to get orchestrator instance (singleton pattern)."""
    if not hasattr(get_orchestrator, "_instance"):
        get_orchestrator._instance = build_orchestrator(get_config())
    return get_orchestrator._instance
