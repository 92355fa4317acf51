"""
Observed OpenAI client wrapper.

Emits request and response events to observers without modifying behavior.
"""

import logging
import time
from datetime import timedelta
from typing import Any, Dict, List, Optional, Sequence

from openai import OpenAI

from .events import LLMRequestEvent, LLMResponseEvent, Observer

logger = logging.getLogger(__name__)


class ObservedOpenAI:
    """OpenAI client wrapper that reports every call to observers.

    Provider errors are reported as failed responses and then re-raised
    unchanged. Exceptions raised by observers are logged and discarded.
    """

    def __init__(
        self,
        model: str,
        observers: Sequence[Observer] = (),
        provider: str = "openai",
        client: Optional[OpenAI] = None,
    ):
        """Initialize observed OpenAI client.

        Args:
            model: OpenAI model name (required)
            observers: Observers notified of each request and response
            provider: Provider name reported in events
            client: Preconfigured OpenAI client (defaults to OpenAI())

        Raises:
            ValueError: If model or provider is missing/empty
        """
        if not model or not model.strip():
            raise ValueError("model is required and cannot be empty")
        if not provider or not provider.strip():
            raise ValueError("provider is required and cannot be empty")

        self.model = model
        self.provider = provider
        self.observers = list(observers)
        self.client = client if client is not None else OpenAI()

    def chat(
        self,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        **kwargs: Any
    ) -> Any:
        """Create chat completion and notify observers.

        Args:
            messages: List of message dictionaries (required)
            temperature: Sampling temperature (optional)
            max_tokens: Maximum tokens to generate (optional)
            **kwargs: Additional OpenAI parameters

        Returns:
            OpenAI chat completion response, unchanged

        Raises:
            ValueError: If messages is empty
            OpenAI API errors: Propagated after observers are notified
        """
        if not messages:
            raise ValueError("messages is required and cannot be empty")

        self._dispatch(LLMRequestEvent(
            provider=self.provider,
            model=self.model,
            messages_count=len(messages)
        ))

        started = time.monotonic()
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
                **kwargs
            )
        except Exception as e:
            self._dispatch(LLMResponseEvent(
                provider=self.provider,
                model=self.model,
                duration=self._elapsed(started),
                success=False,
                error_message=str(e)
            ))
            raise

        usage = getattr(response, "usage", None)
        self._dispatch(LLMResponseEvent(
            provider=self.provider,
            model=self.model,
            duration=self._elapsed(started),
            success=True,
            input_tokens=usage.prompt_tokens if usage else None,
            output_tokens=usage.completion_tokens if usage else None
        ))

        return response

    def _dispatch(self, event: object) -> None:
        # Observer failures never replace the provider's result or error
        for observer in self.observers:
            try:
                observer.record_event(event)
            except Exception as e:
                logger.warning("Observer %s failed to record event: %s",
                               getattr(observer, "name", type(observer).__name__), e)

    @staticmethod
    def _elapsed(started: float) -> timedelta:
        return timedelta(seconds=time.monotonic() - started)
