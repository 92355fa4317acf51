"""
Cost-tracking observer.

Turns provider response events into priced usage records for a ledger.
"""

import logging

from ..core.pricing import PricingResolver
from ..core.token_counter import TokenUsage
from ..storage.models import UsageRecord
from ..storage.repository import Ledger
from .events import LLMResponseEvent, ObserverMetric

logger = logging.getLogger(__name__)


class CostObserver:
    """Observer that records token usage of successful responses to a ledger.

    Never raises from record_event: ledger failures are logged and dropped
    so cost tracking cannot break the request path.
    """

    def __init__(self, ledger: Ledger, resolver: PricingResolver):
        """Create a cost observer.

        Args:
            ledger: Shared ledger handle that receives usage records
            resolver: Pricing resolver for (provider, model) pairs
        """
        self.ledger = ledger
        self.resolver = resolver

    @property
    def name(self) -> str:
        return "cost"

    def record_event(self, event: object) -> None:
        """Record usage for a successful response with token counts."""
        if not isinstance(event, LLMResponseEvent) or not event.success:
            return

        usage = TokenUsage(
            input_tokens=event.input_tokens or 0,
            output_tokens=event.output_tokens or 0,
        )
        if usage.is_empty:
            return

        pricing = self.resolver.resolve(event.provider, event.model)
        record = UsageRecord.from_usage(f"{event.provider}/{event.model}", usage, pricing)

        try:
            self.ledger.record_usage(record)
        except Exception as e:
            logger.warning("Failed to record cost usage: %s", e)

    def record_metric(self, metric: ObserverMetric) -> None:
        # Cost observer doesn't handle metrics
        pass
