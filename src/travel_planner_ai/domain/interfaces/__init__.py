"""Domain interfaces and abstract base classes."""

from .agent_interface import IAgent
from .context_provider_interface import IContextProvider
from .delivery_interface import IEventPublisher, IGenerationSink, ILiveConnectionHub
from .memory_interface import IChatMemory
from .model_client_interface import IModelClient
from .repository_interface import IPlaceSearch, IPromptTemplateRepository, ITripPlanReader
from .service_interface import IService

__all__ = [
    "IAgent",
    "IContextProvider",
    "IEventPublisher",
    "IGenerationSink",
    "ILiveConnectionHub",
    "IChatMemory",
    "IModelClient",
    "IPlaceSearch",
    "IPromptTemplateRepository",
    "ITripPlanReader",
    "IService",
]
