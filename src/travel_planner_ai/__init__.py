"""Travel planner AI - agent dispatch, prompt context composition and streamed itinerary generation."""

from travel_planner_ai.observability import setup_logging, setup_observability

from .config import settings

# Initialize observability/tracing for all agents
# Configuration is loaded from environment variables via settings
if settings.observability.enable_otel:
    setup_observability(
        enable_sensitive_data=settings.observability.enable_sensitive_data,
        otlp_endpoint=settings.observability.otlp_endpoint,
    )

__all__ = ["setup_logging", "setup_observability", "settings"]
