import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent


def _get_env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be a number") from None


class Config:
    """Configuration management for the application.

    Values are read once from the environment. The search core only reads them.
    """

    def __init__(self):
        """Initialize configuration with environment variables."""
        # .env.test takes precedence in test runs; plain .env fills the gaps.
        self.APP_ENV = os.getenv("APP_ENV", "development")
        env_file = ".env.test" if self.APP_ENV == "test" else ".env"
        env_path = PROJECT_ROOT / env_file
        if env_path.exists():
            load_dotenv(dotenv_path=env_path)
        load_dotenv()

        self.TEST_MODE = os.getenv("TEST_MODE", "false").lower() == "true"

        # API Configuration
        self.OPENAI_API_KEY = os.getenv("OPENAI_API_KEY") or (
            "test_api_key" if self.APP_ENV == "test" else ""
        )
        self.OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4-o3")

        # Request handling
        self.SERVER_TIMEOUT_MS = _get_env_int("SERVER_TIMEOUT", 30000)
        self.SERVER_MAX_RETRIES = _get_env_int("SERVER_MAX_RETRIES", 3)

        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    def validate(self) -> bool:
        """
        Validate that all required configuration is present.

        Returns:
            bool: True if configuration is valid, False otherwise
        """
        if not self.OPENAI_API_KEY:
            return False
        if self.SERVER_TIMEOUT_MS <= 0 or self.SERVER_MAX_RETRIES < 1:
            return False
        return True

    def get_model_info(self) -> str:
        return f"OpenAI ({self.OPENAI_MODEL}, timeout={self.SERVER_TIMEOUT_MS}ms, retries={self.SERVER_MAX_RETRIES})"


def get_config() -> Config:
    """Process-wide configuration (singleton pattern)."""
    if not hasattr(get_config, "_instance"):
        get_config._instance = Config()
    return get_config._instance
