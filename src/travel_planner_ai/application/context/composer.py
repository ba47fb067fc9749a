"""Deterministic prompt composition from registered context providers."""

import itertools
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any

from travel_planner_ai.domain.exceptions import ConfigurationError, ContextProviderError, TravelPlannerError
from travel_planner_ai.domain.interfaces import IContextProvider
from travel_planner_ai.domain.models import Message, MessageRole, MetadataEntry

logger = logging.getLogger(__name__)


@dataclass(order=True, frozen=True)
class _Registration:
    priority: int
    sequence: int
    provider: IContextProvider = field(compare=False)


class ContextComposer:
    """Collects prompt fragments from providers bound to payload types.

    Providers are ordered by ascending priority; equal priorities keep
    registration order. The order is fixed at registration time and does not
    depend on how providers were discovered.
    """

    def __init__(self, providers: list[IContextProvider] | None = None):
        self._registrations: dict[type, list[_Registration]] = defaultdict(list)
        self._sequence = itertools.count()
        for provider in providers or []:
            self.register(provider)

    def register(self, provider: IContextProvider, priority: int | None = None) -> None:
        """
        Bind a provider to its payload type.

        Args:
            provider: Provider to register
            priority: Overrides the provider's ``default_priority``
        """
        payload_type = getattr(provider, "payload_type", None)
        if payload_type is None or not provider.supports(payload_type):
            raise ConfigurationError(f"Context provider '{provider.name}' is not bound to a payload type")

        registration = _Registration(
            priority=provider.default_priority if priority is None else priority,
            sequence=next(self._sequence),
            provider=provider,
        )
        self._registrations[payload_type].append(registration)
        self._registrations[payload_type].sort()
        logger.debug(
            f"Registered context provider {provider.name} for {payload_type.__name__} "
            f"with priority {registration.priority}"
        )

    def providers_for(self, payload_type: type) -> list[IContextProvider]:
        """Get the providers bound to a payload type, in composition order."""
        return [registration.provider for registration in self._registrations.get(payload_type, [])]

    async def compose(self, *payloads: Any) -> list[MetadataEntry]:
        """
        Produce the fragments for every payload.

        Payloads are processed in argument order and ``None`` payloads are
        skipped. A payload with no bound provider contributes nothing.

        Raises:
            ContextProviderError: If a provider fails unexpectedly
            TravelPlannerError: Errors raised by providers themselves, such as a missing template
        """
        entries: list[MetadataEntry] = []
        for payload in payloads:
            if payload is None:
                continue
            for provider in self.providers_for(type(payload)):
                try:
                    entries.extend(await provider.produce(payload))
                except TravelPlannerError:
                    raise
                except Exception as e:
                    logger.error(f"Context provider {provider.name} failed: {e}")
                    raise ContextProviderError(
                        f"Context provider '{provider.name}' failed: {e}", provider_name=provider.name
                    ) from e
        return entries

    @staticmethod
    def inject(messages: list[Message], entries: list[MetadataEntry]) -> list[Message]:
        """
        Insert fragments into a prompt, before the last user message.

        Returns a new list; when there is no user message the fragments are appended.
        """
        result = list(messages)
        if not entries:
            return result

        fragments = [entry.to_message() for entry in entries]
        for index in range(len(result) - 1, -1, -1):
            if result[index].role == MessageRole.USER:
                return result[:index] + fragments + result[index:]
        return result + fragments
