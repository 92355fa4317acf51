"""
Unit tests for configuration loading and validation.

Tests strict validation and error handling for valuation configs.
"""

import os
import tempfile

import pytest
import yaml

from agent_valuation.config.loader import (
    ClassifierConfig,
    EconomicConfig,
    PricingConfig,
    ValuationConfig,
    load_valuation_config,
)
from agent_valuation.core.pricing import ModelPricing


class TestConfigLoading:
    """Test configuration loading and validation."""

    def setup_method(self):
        """Set up test environment."""
        self.temp_dir = tempfile.mkdtemp()

    def teardown_method(self):
        """Clean up test environment."""
        import shutil
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _write_config(self, config_data: dict, filename: str = "config.yaml") -> str:
        """Write configuration data to temporary file."""
        config_path = os.path.join(self.temp_dir, filename)
        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(config_data, f)
        return config_path

    def test_valid_config_loads_correctly(self):
        """Test that a valid configuration loads correctly."""
        config_data = {
            "pricing": {
                "defaults": {
                    "input_price_per_million": 2.0,
                    "output_price_per_million": 8.0
                },
                "models": {
                    "openai/gpt-4o": {
                        "input_price_per_million": 5.0,
                        "output_price_per_million": 15.0
                    }
                }
            },
            "classifier": {
                "fallback_occupation": "Generalist",
                "fallback_wage": 50
            },
            "economic": {
                "initial_balance": 1000
            }
        }

        config = load_valuation_config(self._write_config(config_data))

        assert config.pricing.defaults == ModelPricing(2.0, 8.0)
        assert config.pricing.models == {"openai/gpt-4o": ModelPricing(5.0, 15.0)}
        assert config.classifier.fallback_occupation == "Generalist"
        assert config.classifier.fallback_wage == 50.0
        assert config.economic.initial_balance == 1000.0

    def test_missing_sections_use_defaults(self):
        """Test that omitted sections fall back to built-in values."""
        config = load_valuation_config(self._write_config({"economic": {"initial_balance": 500}}))

        assert config.pricing == PricingConfig()
        assert config.pricing.defaults == ModelPricing(3.0, 15.0)
        assert config.classifier == ClassifierConfig()
        assert config.classifier.fallback_occupation == "General and Operations Managers"
        assert config.economic.initial_balance == 500.0

    def test_pricing_without_defaults(self):
        """Test that a models-only pricing section keeps default prices."""
        config_data = {
            "pricing": {
                "models": {
                    "gpt-4": {"input_price_per_million": 30, "output_price_per_million": 60}
                }
            }
        }
        config = load_valuation_config(self._write_config(config_data))

        assert config.pricing.defaults == ModelPricing(3.0, 15.0)
        assert config.pricing.models["gpt-4"] == ModelPricing(30.0, 60.0)

    def test_build_resolver(self):
        """Test that pricing config builds a working resolver."""
        config_data = {
            "pricing": {
                "models": {
                    "openai/gpt-4o": {"input_price_per_million": 5.0, "output_price_per_million": 15.0}
                }
            }
        }
        resolver = load_valuation_config(self._write_config(config_data)).pricing.build_resolver()

        assert resolver.get_pricing("openai", "gpt-4o-2024-05-13") == (5.0, 15.0)
        assert resolver.get_pricing("unknown", "mystery-model") == (3.0, 15.0)

    def test_build_classifier(self):
        """Test that classifier config builds a classifier with its fallback."""
        config_data = {"classifier": {"fallback_occupation": "Generalist", "fallback_wage": 40.0}}
        classifier = load_valuation_config(self._write_config(config_data)).classifier.build_classifier()

        result = classifier.classify("xyzzy foobar baz")
        assert result.occupation == "Generalist"
        assert result.hourly_wage == 40.0

    def test_missing_file_raises_error(self):
        """Test that missing config file raises error."""
        with pytest.raises(FileNotFoundError, match="Valuation config file not found"):
            load_valuation_config("nonexistent.yaml")

    def test_empty_config_raises_error(self):
        """Test that empty config file raises error."""
        config_path = self._write_config({})

        with pytest.raises(ValueError, match="Configuration file is empty"):
            load_valuation_config(config_path)

    def test_invalid_yaml_raises_error(self):
        """Test that invalid YAML raises error."""
        config_path = os.path.join(self.temp_dir, "invalid.yaml")
        with open(config_path, 'w') as f:
            f.write("invalid: yaml: content: [")

        with pytest.raises(yaml.YAMLError):
            load_valuation_config(config_path)

    def test_non_mapping_config_raises_error(self):
        """Test that a top-level list is rejected."""
        config_path = os.path.join(self.temp_dir, "list.yaml")
        with open(config_path, 'w') as f:
            f.write("- pricing\n")

        with pytest.raises(ValueError, match="Configuration must be a dictionary"):
            load_valuation_config(config_path)

    def test_unknown_top_level_keys_raise_error(self):
        """Test that unknown top-level keys raise error."""
        config_path = self._write_config({"pricing": {}, "budget": {"daily": 1}})

        with pytest.raises(ValueError, match="Unknown configuration keys"):
            load_valuation_config(config_path)

    def test_unknown_pricing_keys_raise_error(self):
        """Test that unknown pricing keys raise error."""
        config_path = self._write_config({"pricing": {"model": {}}})

        with pytest.raises(ValueError, match="Unknown pricing keys"):
            load_valuation_config(config_path)

    def test_unknown_model_pricing_keys_raise_error(self):
        """Test that misspelled price fields raise error."""
        config_data = {
            "pricing": {
                "models": {
                    "openai/gpt-4o": {
                        "input_price_per_million": 5.0,
                        "output_price_per_million": 15.0,
                        "cached_price_per_million": 2.5
                    }
                }
            }
        }

        with pytest.raises(ValueError, match="Unknown keys in pricing.models.openai/gpt-4o"):
            load_valuation_config(self._write_config(config_data))

    def test_missing_output_price_raises_error(self):
        """Test that partial price entries raise error."""
        config_data = {"pricing": {"models": {"gpt-4": {"input_price_per_million": 30}}}}

        with pytest.raises(ValueError, match="Missing required 'output_price_per_million'"):
            load_valuation_config(self._write_config(config_data))

    def test_negative_price_raises_error(self):
        """Test that negative prices raise error."""
        config_data = {
            "pricing": {
                "defaults": {"input_price_per_million": -1, "output_price_per_million": 15}
            }
        }

        with pytest.raises(ValueError, match="must be a number >= 0"):
            load_valuation_config(self._write_config(config_data))

    def test_non_numeric_price_raises_error(self):
        """Test that string and boolean prices raise error."""
        for bad_value in ("cheap", True):
            config_data = {
                "pricing": {
                    "models": {
                        "gpt-4": {"input_price_per_million": bad_value, "output_price_per_million": 60}
                    }
                }
            }
            with pytest.raises(ValueError, match="must be a number >= 0"):
                load_valuation_config(self._write_config(config_data))

    def test_invalid_models_type_raises_error(self):
        """Test that a non-dictionary models section raises error."""
        config_path = self._write_config({"pricing": {"models": ["gpt-4"]}})

        with pytest.raises(ValueError, match="'pricing.models' must be a dictionary"):
            load_valuation_config(config_path)

    def test_invalid_section_type_raises_error(self):
        """Test that a non-dictionary section raises error."""
        config_path = self._write_config({"classifier": "fallback"})

        with pytest.raises(ValueError, match="'classifier' must be a dictionary"):
            load_valuation_config(config_path)

    def test_zero_fallback_wage_raises_error(self):
        """Test that a non-positive fallback wage raises error."""
        config_path = self._write_config({"classifier": {"fallback_wage": 0}})

        with pytest.raises(ValueError, match="fallback_wage must be > 0"):
            load_valuation_config(config_path)

    def test_unknown_classifier_keys_raise_error(self):
        """Test that unknown classifier keys raise error."""
        config_path = self._write_config({"classifier": {"fallback_confidence": 0.5}})

        with pytest.raises(ValueError, match="Unknown classifier keys"):
            load_valuation_config(config_path)

    def test_negative_initial_balance_raises_error(self):
        """Test that a non-positive initial balance raises error."""
        config_path = self._write_config({"economic": {"initial_balance": -10}})

        with pytest.raises(ValueError, match="initial_balance must be > 0"):
            load_valuation_config(config_path)


class TestConfigDefaults:
    """Test configuration dataclass defaults."""

    def test_default_config(self):
        """Verify built-in defaults."""
        config = ValuationConfig()

        assert config.pricing.models == {}
        assert config.classifier.fallback_wage == 64.0
        assert config.economic == EconomicConfig()
        assert config.economic.initial_balance is None

    def test_empty_fallback_occupation_rejected(self):
        """Verify the fallback occupation needs a name."""
        with pytest.raises(ValueError, match="fallback_occupation cannot be empty"):
            ClassifierConfig(fallback_occupation="  ")
