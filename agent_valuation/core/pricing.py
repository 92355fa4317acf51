"""
Pricing resolution and cost calculations.

Resolves per-million-token prices for a (provider, model) pair from a
configured price table, falling back to default rates.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from .token_counter import TokenUsage

logger = logging.getLogger(__name__)

# Conservative defaults for unknown models (USD per 1M tokens)
DEFAULT_INPUT_PRICE_PER_MILLION = 3.0
DEFAULT_OUTPUT_PRICE_PER_MILLION = 15.0

_ONE_MILLION = Decimal("1000000")


@dataclass(frozen=True)
class ModelPricing:
    """Per-token pricing for a specific model."""
    input_price_per_million: float  # USD per 1M input tokens
    output_price_per_million: float  # USD per 1M output tokens

    def __post_init__(self):
        """Validate prices are non-negative."""
        if self.input_price_per_million < 0:
            raise ValueError("input_price_per_million cannot be negative")
        if self.output_price_per_million < 0:
            raise ValueError("output_price_per_million cannot be negative")

    def as_tuple(self) -> Tuple[float, float]:
        return (self.input_price_per_million, self.output_price_per_million)


def _key_model(key: str) -> str:
    """Model part of a pricing key, stripping any provider prefix."""
    return key.rsplit("/", 1)[-1]


class PricingResolver:
    """Tiered lookup of model pricing.

    Resolution order:
    1. Exact "{provider}/{model}" key
    2. Exact "{model}" key
    3. Model family match, e.g. "gpt-4o-2024-05-13" against "openai/gpt-4o"
    4. Configured defaults

    The table is copied on construction and never modified, so a resolver
    can be shared across threads.
    """

    def __init__(
        self,
        prices: Optional[Mapping[str, ModelPricing]] = None,
        default_input_price: float = DEFAULT_INPUT_PRICE_PER_MILLION,
        default_output_price: float = DEFAULT_OUTPUT_PRICE_PER_MILLION,
    ):
        """Initialize the resolver.

        Args:
            prices: Mapping of pricing key ("provider/model" or "model") to pricing
            default_input_price: Input price for unmatched models
            default_output_price: Output price for unmatched models
        """
        self._prices: Mapping[str, ModelPricing] = MappingProxyType(dict(prices or {}))
        self._defaults = ModelPricing(
            input_price_per_million=float(default_input_price),
            output_price_per_million=float(default_output_price),
        )
        # Longest family name first, then key, so overlapping families resolve
        # the same way on every run.
        self._family_candidates: Tuple[Tuple[str, str, ModelPricing], ...] = tuple(
            sorted(
                ((_key_model(key), key, pricing) for key, pricing in self._prices.items()),
                key=lambda entry: (-len(entry[0]), entry[1]),
            )
        )

    @property
    def prices(self) -> Mapping[str, ModelPricing]:
        return self._prices

    @property
    def defaults(self) -> ModelPricing:
        return self._defaults

    def resolve(self, provider: str, model: str) -> ModelPricing:
        """Look up pricing for a model, trying various name formats.

        Never raises; unmatched models get the default pricing.
        """
        full_name = f"{provider}/{model}"
        if full_name in self._prices:
            return self._prices[full_name]

        if model in self._prices:
            return self._prices[model]

        family = self._match_family(model)
        if family is not None:
            return family

        logger.debug(
            "No pricing found for %s/%s, using defaults ($%s/$%s per 1M tokens)",
            provider,
            model,
            self._defaults.input_price_per_million,
            self._defaults.output_price_per_million,
        )
        return self._defaults

    def get_pricing(self, provider: str, model: str) -> Tuple[float, float]:
        """Get (input_price, output_price) per million tokens for a model."""
        return self.resolve(provider, model).as_tuple()

    def _match_family(self, model: str) -> Optional[ModelPricing]:
        for key_model, _key, pricing in self._family_candidates:
            if _is_family_match(model, key_model):
                return pricing
        return None

    def family_matches(self, model: str) -> List[str]:
        """Keys that would family-match a model, in resolution order."""
        return [
            key for key_model, key, _pricing in self._family_candidates
            if _is_family_match(model, key_model)
        ]


def _is_family_match(model: str, key_model: str) -> bool:
    if model.startswith(key_model) or key_model.startswith(model):
        return True

    # e.g. "claude-3-5-sonnet-20241022" against "claude-3.5-sonnet"
    normalized_model = model.replace("-", ".")
    normalized_key = key_model.replace("-", ".")
    return normalized_key in normalized_model or normalized_model in normalized_key


def calculate_cost(usage: TokenUsage, pricing: ModelPricing) -> float:
    """Calculate exact USD cost of token usage.

    Args:
        usage: Token usage data
        pricing: Per-million-token pricing

    Returns:
        Total cost in USD, unrounded
    """
    input_cost = _token_cost(usage.input_tokens, pricing.input_price_per_million)
    output_cost = _token_cost(usage.output_tokens, pricing.output_price_per_million)
    return float(input_cost + output_cost)


def _token_cost(tokens: int, price_per_million: float) -> Decimal:
    # (tokens / 1M) * price, via str() so float prices stay exact
    return (Decimal(tokens) / _ONE_MILLION) * Decimal(str(price_per_million))
