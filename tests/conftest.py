"""Pytest configuration and fixtures for the travel planner AI tests."""

import datetime

import pytest
from helpers import RecordingPublisher

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
from travel_planner_ai.application.services import PromptTemplateService
from travel_planner_ai.config import DecodeErrorPolicy, GenerationConfig
from travel_planner_ai.domain.models import (
    DailyPlanSnapshot,
    PlaceCandidate,
    PromptTemplate,
    TripPlanSnapshot,
)
from travel_planner_ai.domain.prompts.default_templates import DEFAULT_TEMPLATES
from travel_planner_ai.domain.retry import RetryPolicy
from travel_planner_ai.infrastructure.repositories.in_memory_chat_memory import InMemoryChatMemory
from travel_planner_ai.infrastructure.repositories.in_memory_place_search import InMemoryPlaceSearch
from travel_planner_ai.infrastructure.repositories.in_memory_prompt_template_repository import (
    InMemoryPromptTemplateRepository,
)
from travel_planner_ai.infrastructure.repositories.in_memory_trip_plan_reader import InMemoryTripPlanReader


@pytest.fixture
def template_repository():
    """Repository holding the built-in templates, all active."""
    return InMemoryPromptTemplateRepository(
        [
            PromptTemplate(role=role, agent_type=agent_type, body=body.strip(), active=True)
            for (role, agent_type), body in DEFAULT_TEMPLATES.items()
        ]
    )


@pytest.fixture
def template_service(template_repository):
    return PromptTemplateService(template_repository)


@pytest.fixture
def sample_trip_plan():
    return TripPlanSnapshot(
        trip_id=7,
        title="Jeju spring trip",
        start_date=datetime.date(2025, 4, 1),
        end_date=datetime.date(2025, 4, 3),
        daily_plans=[
            DailyPlanSnapshot(
                day_number=1,
                date=datetime.date(2025, 4, 1),
                title="East coast",
                place_names=["Seongsan Ilchulbong", "Udo Island"],
            )
        ],
    )


@pytest.fixture
def trip_plan_reader(sample_trip_plan):
    return InMemoryTripPlanReader([sample_trip_plan])


@pytest.fixture
def place_search():
    """Small Jeju catalogue with two sights and one restaurant."""
    return InMemoryPlaceSearch(
        places=[
            PlaceCandidate(
                place_id=101,
                name="Seongsan Ilchulbong",
                address="Seongsan-eup, Seogwipo, Jeju",
                themes=["nature"],
                description="Tuff cone with a sunrise view over the sea.",
            ),
            PlaceCandidate(
                place_id=102,
                name="Jeju Folk Village",
                address="Pyoseon-myeon, Seogwipo, Jeju",
                themes=["culture"],
            ),
        ],
        restaurants=[
            PlaceCandidate(place_id=201, name="Dombedon", address="Ildo-2-dong, Jeju City", themes=["food"]),
        ],
    )


@pytest.fixture
def composer(template_service, trip_plan_reader, place_search):
    """Composer with every provider registered."""
    return ContextComposer(
        [
            SystemTemplateProvider(template_service),
            UserTemplateProvider(template_service),
            OutputFormatProvider(),
            SessionContextProvider(),
            ItineraryQueryProvider(trip_plan_reader),
            ItineraryCommandProvider(),
            PlaceSearchProvider(place_search),
            PlaceQueryProvider(),
        ]
    )


@pytest.fixture
def memory():
    return InMemoryChatMemory(window=10)


@pytest.fixture
def publisher():
    return RecordingPublisher()


@pytest.fixture
def generation_config():
    return GenerationConfig(
        stall_timeout=0.5,
        decode_error_policy=DecodeErrorPolicy.SKIP,
        memory_window=10,
        max_itinerary_days=14,
    )


@pytest.fixture
def fast_retry_policy():
    return RetryPolicy(max_attempts=3, base_delay=0.0, max_delay=0.0, jitter=False)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test names."""
    for item in items:
        if "integration" in item.name.lower() or "TestIntegration" in str(item.cls):
            item.add_marker(pytest.mark.integration)
        if any(keyword in item.name.lower() for keyword in ["stall", "timeout", "slow"]):
            item.add_marker(pytest.mark.slow)
