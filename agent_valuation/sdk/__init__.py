"""
SDK for Agent Valuation.

Provides provider clients that emit usage events and the observers that
price them.
"""

from .cost_observer import CostObserver
from .events import LLMRequestEvent, LLMResponseEvent
from .openai_client import ObservedOpenAI

__all__ = ["CostObserver", "LLMRequestEvent", "LLMResponseEvent", "ObservedOpenAI"]
