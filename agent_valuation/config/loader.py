"""
Configuration management and loading.

Handles pricing tables, classifier fallback and economic settings.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import yaml

from agent_valuation.core.classifier import (
    DEFAULT_FALLBACK_OCCUPATION,
    DEFAULT_FALLBACK_WAGE,
    TaskClassifier,
)
from agent_valuation.core.pricing import (
    DEFAULT_INPUT_PRICE_PER_MILLION,
    DEFAULT_OUTPUT_PRICE_PER_MILLION,
    ModelPricing,
    PricingResolver,
)


@dataclass(frozen=True)
class PricingConfig:
    """Price table and default prices for unmatched models."""
    models: Dict[str, ModelPricing] = field(default_factory=dict)
    defaults: ModelPricing = field(default_factory=lambda: ModelPricing(
        input_price_per_million=DEFAULT_INPUT_PRICE_PER_MILLION,
        output_price_per_million=DEFAULT_OUTPUT_PRICE_PER_MILLION
    ))

    def build_resolver(self) -> PricingResolver:
        return PricingResolver(
            prices=self.models,
            default_input_price=self.defaults.input_price_per_million,
            default_output_price=self.defaults.output_price_per_million
        )


@dataclass(frozen=True)
class ClassifierConfig:
    """Fallback used when an instruction matches no keyword."""
    fallback_occupation: str = DEFAULT_FALLBACK_OCCUPATION
    fallback_wage: float = DEFAULT_FALLBACK_WAGE

    def __post_init__(self):
        """Validate fallback values."""
        if not self.fallback_occupation or not self.fallback_occupation.strip():
            raise ValueError("fallback_occupation cannot be empty")
        if self.fallback_wage <= 0:
            raise ValueError("fallback_wage must be > 0")

    def build_classifier(self) -> TaskClassifier:
        return TaskClassifier(
            fallback_occupation=self.fallback_occupation,
            fallback_wage=self.fallback_wage
        )


@dataclass(frozen=True)
class EconomicConfig:
    """Starting capital used for survival status."""
    initial_balance: Optional[float] = None

    def __post_init__(self):
        """Validate initial balance is positive when given."""
        if self.initial_balance is not None and self.initial_balance <= 0:
            raise ValueError("initial_balance must be > 0")


@dataclass(frozen=True)
class ValuationConfig:
    """Complete valuation configuration."""
    pricing: PricingConfig = field(default_factory=PricingConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    economic: EconomicConfig = field(default_factory=EconomicConfig)


def load_valuation_config(path: str) -> ValuationConfig:
    """Load and validate valuation configuration from YAML file.

    Strict validation ensures no silent misconfigurations, such as a typo
    in a price key quietly falling back to default prices.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated ValuationConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If configuration is invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Valuation config file not found: {path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in config file {path}: {e}")

    if not raw_config:
        raise ValueError("Configuration file is empty")
    if not isinstance(raw_config, dict):
        raise ValueError("Configuration must be a dictionary")

    allowed_top_keys = {'pricing', 'classifier', 'economic'}
    unknown_keys = set(raw_config.keys()) - allowed_top_keys
    if unknown_keys:
        raise ValueError(f"Unknown configuration keys: {unknown_keys}")

    return ValuationConfig(
        pricing=_parse_pricing(_section(raw_config, 'pricing')),
        classifier=_parse_classifier(_section(raw_config, 'classifier')),
        economic=_parse_economic(_section(raw_config, 'economic'))
    )


def _section(raw_config: Dict, name: str) -> Dict:
    data = raw_config.get(name) or {}
    if not isinstance(data, dict):
        raise ValueError(f"'{name}' must be a dictionary")
    return data


def _parse_pricing(data: Dict) -> PricingConfig:
    """Parse and validate the pricing section.

    Args:
        data: Pricing section data

    Returns:
        Validated PricingConfig

    Raises:
        ValueError: If the section is invalid
    """
    allowed_keys = {'defaults', 'models'}
    unknown_keys = set(data.keys()) - allowed_keys
    if unknown_keys:
        raise ValueError(f"Unknown pricing keys: {unknown_keys}")

    defaults = PricingConfig().defaults
    if 'defaults' in data:
        defaults_data = data['defaults']
        if not isinstance(defaults_data, dict):
            raise ValueError("'pricing.defaults' must be a dictionary")
        defaults = _parse_model_pricing(defaults_data, "pricing.defaults")

    models_data = data.get('models') or {}
    if not isinstance(models_data, dict):
        raise ValueError("'pricing.models' must be a dictionary")

    models = {}
    for key, model_data in models_data.items():
        if not isinstance(key, str) or not key.strip():
            raise ValueError("Pricing keys must be non-empty strings")
        if not isinstance(model_data, dict):
            raise ValueError(f"Pricing for '{key}' must be a dictionary")
        models[key] = _parse_model_pricing(model_data, f"pricing.models.{key}")

    return PricingConfig(models=models, defaults=defaults)


def _parse_model_pricing(data: Dict, path: str) -> ModelPricing:
    """Parse and validate a single price entry.

    Args:
        data: Price entry data
        path: Path for error messages

    Returns:
        Validated ModelPricing

    Raises:
        ValueError: If the entry is invalid
    """
    allowed_keys = {'input_price_per_million', 'output_price_per_million'}
    unknown_keys = set(data.keys()) - allowed_keys
    if unknown_keys:
        raise ValueError(f"Unknown keys in {path}: {unknown_keys}")

    prices = {}
    for key in sorted(allowed_keys):
        if key not in data:
            raise ValueError(f"Missing required '{key}' in {path}")
        value = data[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
            raise ValueError(f"'{key}' in {path} must be a number >= 0")
        prices[key] = float(value)

    return ModelPricing(**prices)


def _parse_classifier(data: Dict) -> ClassifierConfig:
    allowed_keys = {'fallback_occupation', 'fallback_wage'}
    unknown_keys = set(data.keys()) - allowed_keys
    if unknown_keys:
        raise ValueError(f"Unknown classifier keys: {unknown_keys}")

    occupation = data.get('fallback_occupation', DEFAULT_FALLBACK_OCCUPATION)
    if not isinstance(occupation, str):
        raise ValueError("'classifier.fallback_occupation' must be a string")

    wage = data.get('fallback_wage', DEFAULT_FALLBACK_WAGE)
    if isinstance(wage, bool) or not isinstance(wage, (int, float)):
        raise ValueError("'classifier.fallback_wage' must be a number")

    return ClassifierConfig(fallback_occupation=occupation, fallback_wage=float(wage))


def _parse_economic(data: Dict) -> EconomicConfig:
    allowed_keys = {'initial_balance'}
    unknown_keys = set(data.keys()) - allowed_keys
    if unknown_keys:
        raise ValueError(f"Unknown economic keys: {unknown_keys}")

    balance = data.get('initial_balance')
    if balance is None:
        return EconomicConfig()
    if isinstance(balance, bool) or not isinstance(balance, (int, float)):
        raise ValueError("'economic.initial_balance' must be a number")

    return EconomicConfig(initial_balance=float(balance))
