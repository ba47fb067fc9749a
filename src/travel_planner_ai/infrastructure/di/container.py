"""Dependency injection container wiring the generation pipeline."""

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

from travel_planner_ai.application.agents.chat_agent import ChatAgent, default_chat_config
from travel_planner_ai.application.agents.itinerary_agent import ItineraryAgent, default_itinerary_config
from travel_planner_ai.application.agents.place_summary_agent import PlaceSummaryAgent, default_place_summary_config
from travel_planner_ai.application.context import ContextComposer
from travel_planner_ai.application.context.providers import (
    ItineraryCommandProvider,
    ItineraryQueryProvider,
    OutputFormatProvider,
    PlaceQueryProvider,
    PlaceSearchProvider,
    SessionContextProvider,
    SystemTemplateProvider,
    UserTemplateProvider,
)
from travel_planner_ai.application.events import EventRouter, LiveDeliveryHandler, PersistenceHandler
from travel_planner_ai.application.services import AgentRegistry, GenerationService, PromptTemplateService
from travel_planner_ai.config import settings
from travel_planner_ai.domain.exceptions import ConfigurationError
from travel_planner_ai.domain.interfaces import (
    IChatMemory,
    IEventPublisher,
    IGenerationSink,
    ILiveConnectionHub,
    IModelClient,
    IPlaceSearch,
    IPromptTemplateRepository,
    ITripPlanReader,
)
from travel_planner_ai.infrastructure.model.azure_chat_client import AzureChatModelClient
from travel_planner_ai.infrastructure.repositories.file_prompt_template_repository import (
    FilePromptTemplateRepository,
)
from travel_planner_ai.infrastructure.repositories.in_memory_chat_memory import InMemoryChatMemory
from travel_planner_ai.infrastructure.repositories.in_memory_place_search import InMemoryPlaceSearch
from travel_planner_ai.infrastructure.repositories.in_memory_trip_plan_reader import InMemoryTripPlanReader

T = TypeVar("T")


class DIContainer:
    """Simple dependency injection container."""

    def __init__(self):
        self._singletons: dict[type, Any] = {}
        self._lazy_singletons: dict[type, Callable[[], Any]] = {}
        self._factories: dict[type, Callable[[], Any]] = {}

    def register_singleton(self, service_type: type[T], instance: T) -> None:
        """Register a singleton instance."""
        self._singletons[service_type] = instance

    def register_lazy_singleton(self, service_type: type[T], factory: Callable[[], T]) -> None:
        """Register a singleton built by ``factory`` on first use."""
        self._lazy_singletons[service_type] = factory

    def register_transient(self, service_type: type[T], factory: Callable[[], T]) -> None:
        """Register a transient service factory."""
        self._factories[service_type] = factory

    def is_registered(self, service_type: type) -> bool:
        registries = (self._singletons, self._lazy_singletons, self._factories)
        return any(service_type in registry for registry in registries)

    def get(self, service_type: type[T]) -> T:
        """Get a service instance."""
        if service_type in self._singletons:
            return self._singletons[service_type]

        if service_type in self._lazy_singletons:
            instance = self._lazy_singletons.pop(service_type)()
            self._singletons[service_type] = instance
            return instance

        if service_type in self._factories:
            return self._factories[service_type]()

        raise ConfigurationError(f"Service {service_type.__name__} is not registered")


def build_container(
    model_client: IModelClient | None = None,
    template_repository: IPromptTemplateRepository | None = None,
    trip_plan_reader: ITripPlanReader | None = None,
    place_search: IPlaceSearch | None = None,
    memory: IChatMemory | None = None,
    live_hub: ILiveConnectionHub | None = None,
    sink: IGenerationSink | None = None,
    template_store_path: Path | None = None,
) -> DIContainer:
    """
    Wire the generation pipeline.

    Collaborators that are not passed in get their default implementation:
    the Azure OpenAI model client, the JSON file template store, in-memory
    conversation memory, and an empty in-memory trip plan reader and place
    search. Live delivery and persistence handlers are subscribed only when a
    hub or sink is given.
    Everything is built lazily on first ``get``.
    """
    container = DIContainer()

    def lazy(service_type: type, factory: Callable[[], Any], instance: Any = None) -> None:
        if instance is not None:
            container.register_singleton(service_type, instance)
        else:
            container.register_lazy_singleton(service_type, factory)

    lazy(IModelClient, AzureChatModelClient, model_client)
    lazy(
        IPromptTemplateRepository,
        lambda: FilePromptTemplateRepository(template_store_path or settings.app.template_store_path),
        template_repository,
    )
    lazy(ITripPlanReader, InMemoryTripPlanReader, trip_plan_reader)
    lazy(IPlaceSearch, InMemoryPlaceSearch, place_search)
    lazy(IChatMemory, lambda: InMemoryChatMemory(window=max(1, settings.generation.memory_window)), memory)

    container.register_lazy_singleton(
        PromptTemplateService, lambda: PromptTemplateService(container.get(IPromptTemplateRepository))
    )

    def create_router() -> EventRouter:
        router = EventRouter()
        if live_hub is not None:
            LiveDeliveryHandler(live_hub).register(router)
        if sink is not None:
            PersistenceHandler(sink).register(router)
        return router

    container.register_lazy_singleton(EventRouter, create_router)
    container.register_transient(IEventPublisher, lambda: container.get(EventRouter))

    def create_composer() -> ContextComposer:
        template_service = container.get(PromptTemplateService)
        return ContextComposer(
            [
                SystemTemplateProvider(template_service),
                UserTemplateProvider(template_service),
                OutputFormatProvider(),
                SessionContextProvider(),
                ItineraryQueryProvider(container.get(ITripPlanReader)),
                ItineraryCommandProvider(),
                PlaceSearchProvider(container.get(IPlaceSearch)),
                PlaceQueryProvider(),
            ]
        )

    container.register_lazy_singleton(ContextComposer, create_composer)

    def create_registry() -> AgentRegistry:
        dependencies = {
            "model_client": container.get(IModelClient),
            "composer": container.get(ContextComposer),
            "memory": container.get(IChatMemory),
            "publisher": container.get(IEventPublisher),
        }
        return AgentRegistry(
            [
                ChatAgent(default_chat_config(), **dependencies),
                ItineraryAgent(default_itinerary_config(), **dependencies),
                PlaceSummaryAgent(default_place_summary_config(), **dependencies),
            ]
        )

    container.register_lazy_singleton(AgentRegistry, create_registry)
    container.register_lazy_singleton(GenerationService, lambda: GenerationService(container.get(AgentRegistry)))
    return container
