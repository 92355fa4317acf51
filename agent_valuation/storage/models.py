"""
Data models for storage layer.

Defines ledger entries and summaries.
"""

from dataclasses import dataclass, field
from datetime import datetime

from agent_valuation.core.pricing import ModelPricing, calculate_cost
from agent_valuation.core.token_counter import TokenUsage


@dataclass(frozen=True)
class UsageRecord:
    """Immutable record of token usage handed to a ledger.

    Prices are captured at the time of use so that later price table
    changes never alter recorded costs.
    """
    model: str  # "provider/model"
    input_tokens: int
    output_tokens: int
    input_price_per_million: float
    output_price_per_million: float
    timestamp: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_usage(cls, model: str, usage: TokenUsage, pricing: ModelPricing) -> "UsageRecord":
        return cls(
            model=model,
            input_tokens=usage.input_tokens,
            output_tokens=usage.output_tokens,
            input_price_per_million=pricing.input_price_per_million,
            output_price_per_million=pricing.output_price_per_million,
        )

    @property
    def usage(self) -> TokenUsage:
        return TokenUsage(input_tokens=self.input_tokens, output_tokens=self.output_tokens)

    @property
    def pricing(self) -> ModelPricing:
        return ModelPricing(
            input_price_per_million=self.input_price_per_million,
            output_price_per_million=self.output_price_per_million,
        )

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    @property
    def input_cost(self) -> float:
        return calculate_cost(TokenUsage(self.input_tokens, 0), self.pricing)

    @property
    def output_cost(self) -> float:
        return calculate_cost(TokenUsage(0, self.output_tokens), self.pricing)

    @property
    def total_cost(self) -> float:
        """Total cost in USD."""
        return calculate_cost(self.usage, self.pricing)


@dataclass(frozen=True)
class UsageSummary:
    """Aggregate totals across recorded usage."""
    request_count: int
    total_tokens: int
    total_cost_usd: float

    @classmethod
    def empty(cls) -> "UsageSummary":
        return cls(request_count=0, total_tokens=0, total_cost_usd=0.0)
