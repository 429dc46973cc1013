"""Application configuration and model pricing."""

from .config import Config, get_config
from .pricing import ModelPricing

__all__ = ["Config", "ModelPricing", "get_config"]
