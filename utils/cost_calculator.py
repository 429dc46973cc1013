"""
Cost calculation module for search requests.
Estimates the USD cost of a completion from its token usage and the model's pricing.
"""

from collections.abc import Sequence

from config.pricing import ModelPricing
from models.search_response import CostBreakdown, CostInfo, UsageInfo

COST_PRECISION = 6


class CostCalculator:
    """
    Calculate costs for one model.

    Unknown model names never fail: they are resolved to the closest canonical model
    (see ModelPricing.guess_model), falling back to the default model.
    """

    def __init__(self, model_name: str):
        """
        Args:
            model_name: Model identifier as reported by the API
        """
        self.requested_model = model_name
        self.model_name = ModelPricing.resolve_model(model_name or "")
        self.pricing = ModelPricing.get_model_pricing(self.model_name)

    def calculate_cost(self, usage: UsageInfo) -> CostInfo:
        """
        Calculate cost for a single API call.

        Args:
            usage: Token usage reported by the API

        Returns:
            CostInfo with every monetary figure rounded to 6 decimal places
        """
        prompt_tokens = max(usage.prompt_tokens, 0)
        completion_tokens = max(usage.completion_tokens, 0)

        # Pricing is per million tokens
        input_cost = (prompt_tokens / 1_000_000) * self.pricing["input"]
        output_cost = (completion_tokens / 1_000_000) * self.pricing["output"]
        total_cost = input_cost + output_cost

        return CostInfo(
            model=self.model_name,
            usage=usage,
            cost=CostBreakdown(
                input_cost=round(input_cost, COST_PRECISION),
                output_cost=round(output_cost, COST_PRECISION),
                total_cost=round(total_cost, COST_PRECISION),
            ),
            currency="USD",
        )


def calculate_cost(model_name: str, usage: UsageInfo) -> CostInfo:
    return CostCalculator(model_name).calculate_cost(usage)


def format_cost(cost: float, currency: str = "USD") -> str:
    if currency == "USD":
        return f"${cost:.6f}"
    return f"{cost:.6f} {currency}"


def format_cost_info(cost_info: CostInfo) -> str:
    """
    Format cost info as a one-line human-readable summary (display only).

    Example:
        Model: gpt-4o | Tokens: 100 input + 200 output = 300 total |
        Cost: $0.000250 (input) + $0.002000 (output) = $0.002250 total
    """
    usage = cost_info.usage
    cost = cost_info.cost
    currency = cost_info.currency
    return " | ".join(
        [
            f"Model: {cost_info.model}",
            f"Tokens: {usage.prompt_tokens} input + {usage.completion_tokens} output"
            f" = {usage.total_tokens} total",
            f"Cost: {format_cost(cost.input_cost, currency)} (input)"
            f" + {format_cost(cost.output_cost, currency)} (output)"
            f" = {format_cost(cost.total_cost, currency)} total",
        ]
    )


def aggregate_costs(costs: Sequence[CostInfo]) -> CostInfo | None:
    """
    Combine the cost of several calls.

    Costs are only summed when every entry was priced with the same model; with mixed
    models the most recent entry is returned unchanged.
    """
    if not costs:
        return None

    first = costs[0]
    if len(costs) == 1:
        return first

    if any(c.model != first.model for c in costs):
        return costs[-1]

    usage = UsageInfo(
        prompt_tokens=sum(c.usage.prompt_tokens for c in costs),
        completion_tokens=sum(c.usage.completion_tokens for c in costs),
        total_tokens=sum(c.usage.total_tokens for c in costs),
    )

    return CostInfo(
        model=first.model,
        usage=usage,
        cost=CostBreakdown(
            input_cost=round(sum(c.cost.input_cost for c in costs), COST_PRECISION),
            output_cost=round(sum(c.cost.output_cost for c in costs), COST_PRECISION),
            total_cost=round(sum(c.cost.total_cost for c in costs), COST_PRECISION),
        ),
        currency=first.currency,
    )
