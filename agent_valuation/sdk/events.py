"""
Observer events and the observer interface.

Events are emitted by provider clients and delivered to observers such as
the cost observer.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Protocol


@dataclass(frozen=True)
class LLMRequestEvent:
    """A request is about to be sent to a provider."""
    provider: str
    model: str
    messages_count: int


@dataclass(frozen=True)
class LLMResponseEvent:
    """A provider responded, successfully or not.

    Token counts are None when the provider did not report them.
    """
    provider: str
    model: str
    duration: timedelta
    success: bool
    error_message: Optional[str] = None
    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None


@dataclass(frozen=True)
class ObserverMetric:
    """A named numeric measurement."""
    name: str
    value: float


class Observer(Protocol):
    """Receives events from provider clients."""

    @property
    def name(self) -> str:
        ...

    def record_event(self, event: object) -> None:
        ...

    def record_metric(self, metric: ObserverMetric) -> None:
        ...
