"""
Unit tests for pricing resolution and cost calculations.

Tests tier order, family matching, defaults and cost accuracy.
"""

import pytest

from agent_valuation.core.pricing import (
    DEFAULT_INPUT_PRICE_PER_MILLION,
    DEFAULT_OUTPUT_PRICE_PER_MILLION,
    ModelPricing,
    PricingResolver,
    calculate_cost,
)
from agent_valuation.core.token_counter import TokenUsage


class TestTokenUsage:
    """Test TokenUsage dataclass."""

    def test_total_tokens_calculation(self):
        """Verify total_tokens is computed correctly."""
        usage = TokenUsage(input_tokens=100, output_tokens=50)
        assert usage.total_tokens == 150
        assert not usage.is_empty

    def test_zero_tokens(self):
        """Verify zero token handling."""
        usage = TokenUsage(input_tokens=0, output_tokens=0)
        assert usage.total_tokens == 0
        assert usage.is_empty


class TestModelPricing:
    """Test ModelPricing validation."""

    def test_negative_input_price_rejected(self):
        """Verify negative prices are rejected."""
        with pytest.raises(ValueError, match="input_price_per_million cannot be negative"):
            ModelPricing(input_price_per_million=-1.0, output_price_per_million=1.0)

    def test_negative_output_price_rejected(self):
        """Verify negative prices are rejected."""
        with pytest.raises(ValueError, match="output_price_per_million cannot be negative"):
            ModelPricing(input_price_per_million=1.0, output_price_per_million=-1.0)

    def test_free_model_allowed(self):
        """Verify zero prices are valid."""
        assert ModelPricing(0.0, 0.0).as_tuple() == (0.0, 0.0)


class TestPricingResolver:
    """Test tiered pricing lookup."""

    def test_exact_provider_model_key(self):
        """Verify "provider/model" wins even when a family entry also matches."""
        resolver = PricingResolver({
            "openai/gpt-4o": ModelPricing(5.0, 15.0),
            "openai/gpt-4o-mini": ModelPricing(0.15, 0.6),
        })

        assert resolver.get_pricing("openai", "gpt-4o-mini") == (0.15, 0.6)
        assert resolver.get_pricing("openai", "gpt-4o") == (5.0, 15.0)

    def test_exact_provider_key_beats_model_key(self):
        """Verify tier 1 is tried before tier 2."""
        resolver = PricingResolver({
            "gpt-4": ModelPricing(30.0, 60.0),
            "azure/gpt-4": ModelPricing(33.0, 66.0),
        })

        assert resolver.get_pricing("azure", "gpt-4") == (33.0, 66.0)
        assert resolver.get_pricing("openai", "gpt-4") == (30.0, 60.0)

    def test_model_only_key(self):
        """Verify bare model keys match any provider."""
        resolver = PricingResolver({"gpt-4": ModelPricing(30.0, 60.0)})
        assert resolver.get_pricing("openrouter", "gpt-4") == (30.0, 60.0)

    def test_family_match_with_version_suffix(self):
        """Verify a dated model matches its family entry."""
        resolver = PricingResolver({"openai/gpt-4o": ModelPricing(5.0, 15.0)})
        assert resolver.get_pricing("openai", "gpt-4o-2024-05-13") == (5.0, 15.0)

    def test_family_match_key_longer_than_model(self):
        """Verify a short model name matches a dated key."""
        resolver = PricingResolver({"openai/gpt-4o-2024-08-06": ModelPricing(2.5, 10.0)})
        assert resolver.get_pricing("openai", "gpt-4o") == (2.5, 10.0)

    def test_family_match_normalizes_hyphens(self):
        """Verify hyphen and dot version separators are equivalent."""
        resolver = PricingResolver({"anthropic/claude-3.5-sonnet": ModelPricing(3.5, 16.0)})
        assert resolver.get_pricing("anthropic", "claude-3-5-sonnet-20241022") == (3.5, 16.0)

    @pytest.mark.parametrize("order", [
        ("openai/gpt-4", "openai/gpt-4o"),
        ("openai/gpt-4o", "openai/gpt-4"),
    ])
    def test_longest_family_wins(self, order):
        """Verify the most specific family is chosen regardless of table order."""
        table = {
            "openai/gpt-4": ModelPricing(30.0, 60.0),
            "openai/gpt-4o": ModelPricing(5.0, 15.0),
        }
        resolver = PricingResolver({key: table[key] for key in order})

        assert resolver.get_pricing("openai", "gpt-4o-2024-05-13") == (5.0, 15.0)
        assert resolver.family_matches("gpt-4o-2024-05-13") == ["openai/gpt-4o", "openai/gpt-4"]

    def test_equal_family_length_uses_key_order(self):
        """Verify equally specific families resolve by key."""
        resolver = PricingResolver({
            "vendor-b/gpt-x": ModelPricing(2.0, 2.0),
            "vendor-a/gpt-x": ModelPricing(1.0, 1.0),
        })
        assert resolver.get_pricing("vendor-c", "gpt-x-1") == (1.0, 1.0)

    def test_defaults_for_unknown_model(self):
        """Verify unmatched models get the reference defaults."""
        resolver = PricingResolver({"openai/gpt-4o": ModelPricing(5.0, 15.0)})

        assert resolver.get_pricing("unknown", "mystery-model") == (3.0, 15.0)
        assert resolver.get_pricing("unknown", "mystery-model") == (
            DEFAULT_INPUT_PRICE_PER_MILLION,
            DEFAULT_OUTPUT_PRICE_PER_MILLION,
        )

    def test_empty_table_uses_defaults(self):
        """Verify a resolver without prices never fails."""
        resolver = PricingResolver()
        assert resolver.get_pricing("anthropic", "claude-sonnet-4") == (3.0, 15.0)
        assert resolver.family_matches("claude-sonnet-4") == []

    def test_custom_defaults(self):
        """Verify configured defaults are used."""
        resolver = PricingResolver({}, default_input_price=1.0, default_output_price=2.0)
        assert resolver.get_pricing("x", "y") == (1.0, 2.0)
        assert resolver.defaults == ModelPricing(1.0, 2.0)

    def test_resolve_returns_model_pricing(self):
        """Verify resolve gives the same data as a value object."""
        pricing = ModelPricing(5.0, 15.0)
        resolver = PricingResolver({"openai/gpt-4o": pricing})
        assert resolver.resolve("openai", "gpt-4o") is pricing

    def test_table_is_copied(self):
        """Verify later changes to the source mapping are not seen."""
        prices = {"openai/gpt-4o": ModelPricing(5.0, 15.0)}
        resolver = PricingResolver(prices)
        prices["openai/gpt-4o"] = ModelPricing(50.0, 150.0)

        assert resolver.get_pricing("openai", "gpt-4o") == (5.0, 15.0)
        with pytest.raises(TypeError):
            resolver.prices["openai/o1"] = ModelPricing(15.0, 60.0)


class TestCostCalculation:
    """Test cost calculation accuracy."""

    def test_exact_cost(self):
        """Verify cost for a typical response."""
        usage = TokenUsage(input_tokens=1000, output_tokens=500)
        cost = calculate_cost(usage, ModelPricing(3.0, 15.0))
        # Input: 1000/1M * $3.00 = $0.003
        # Output: 500/1M * $15.00 = $0.0075
        assert cost == pytest.approx(0.0105)

    def test_one_million_each_at_defaults(self):
        """Verify 1M input and output tokens at default prices cost $18."""
        usage = TokenUsage(input_tokens=1_000_000, output_tokens=1_000_000)
        assert calculate_cost(usage, ModelPricing(3.0, 15.0)) == 18.0

    def test_no_rounding(self):
        """Verify tiny costs are not rounded away."""
        usage = TokenUsage(input_tokens=1, output_tokens=0)
        assert calculate_cost(usage, ModelPricing(3.0, 15.0)) == pytest.approx(0.000003)

    def test_zero_tokens_cost(self):
        """Verify zero tokens cost nothing."""
        assert calculate_cost(TokenUsage(0, 0), ModelPricing(5.0, 15.0)) == 0.0
