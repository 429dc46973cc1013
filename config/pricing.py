"""
Model pricing configuration.
All prices are in USD per million tokens.
Prices are as of December 2024; gpt-4-o3 and gpt-5 are estimates.
"""


class ModelPricing:
    """Pricing information for the chat models used as a search backend."""

    # OpenAI Models Pricing (per million tokens)
    OPENAI_PRICING = {
        "gpt-4o": {"input": 2.50, "output": 10.00},
        "gpt-4o-mini": {"input": 0.15, "output": 0.60},
        "gpt-4-turbo": {"input": 10.00, "output": 30.00},
        "gpt-4": {"input": 30.00, "output": 60.00},
        "gpt-3.5-turbo": {"input": 0.50, "output": 1.50},
        # Newer models (estimated)
        "gpt-4-o3": {"input": 3.00, "output": 12.00},
        "gpt-5": {"input": 5.00, "output": 15.00},
    }

    DEFAULT_MODEL = "gpt-4o"

    # Substring rules, most specific first. A mini variant must be checked before its
    # base model, and o3-style names before the legacy "gpt-4" catch-all.
    MODEL_NAME_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
        (("gpt-4o-mini",), "gpt-4o-mini"),
        (("gpt-4o",), "gpt-4o"),
        (("gpt-4-turbo",), "gpt-4-turbo"),
        (("gpt-4-o3", "o3"), "gpt-4-o3"),
        (("gpt-5",), "gpt-5"),
        (("gpt-4",), "gpt-4"),
        (("gpt-3.5", "turbo"), "gpt-3.5-turbo"),
    )

    @classmethod
    def is_supported_model(cls, model_name: str) -> bool:
        """Return True if the name is an exact key of the pricing table."""
        return model_name in cls.OPENAI_PRICING

    @classmethod
    def guess_model(cls, model_name: str) -> str:
        """
        Map an arbitrary model name onto a canonical pricing key.

        Args:
            model_name: Model identifier as reported by the API (may be dated or aliased)

        Returns:
            The first canonical model whose marker appears in the name,
            or DEFAULT_MODEL when nothing matches
        """
        lowered = (model_name or "").lower()
        for markers, canonical in cls.MODEL_NAME_RULES:
            if any(marker in lowered for marker in markers):
                return canonical
        return cls.DEFAULT_MODEL

    @classmethod
    def resolve_model(cls, model_name: str) -> str:
        if cls.is_supported_model(model_name):
            return model_name
        return cls.guess_model(model_name)

    @classmethod
    def get_model_pricing(cls, model_name: str) -> dict[str, float] | None:
        """
        Get pricing information for a specific model.

        Args:
            model_name: The specific model name

        Returns:
            Dictionary with 'input' and 'output' pricing per million tokens,
            or None if pricing not found
        """
        return cls.OPENAI_PRICING.get(model_name)
