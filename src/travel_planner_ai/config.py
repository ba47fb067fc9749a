"""Configuration management with proper validation and environment handling."""

from enum import Enum
from pathlib import Path
from typing import TypeVar

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SectionT = TypeVar("SectionT", bound=BaseSettings)


class Environment(str, Enum):
    """Application environments."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class DecodeErrorPolicy(str, Enum):
    """What the itinerary stream does with a malformed record."""

    SKIP = "skip"
    ABORT = "abort"


class ModelConfig(BaseSettings):
    """Azure OpenAI chat model configuration."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    api_key: str | None = Field(default=None, alias="AZURE_OPENAI_API_KEY", description="Azure OpenAI API key")
    endpoint: str | None = Field(
        default=None,
        alias="AZURE_OPENAI_ENDPOINT",
        description="Azure OpenAI endpoint URL",
    )
    api_version: str = Field(
        default="2024-10-21",
        alias="AZURE_OPENAI_API_VERSION",
        description="Azure OpenAI API version",
    )
    chat_deployment_name: str | None = Field(
        default=None,
        alias="AZURE_OPENAI_CHAT_DEPLOYMENT_NAME",
        description="Deployment name of the chat completion model",
    )
    temperature: float = Field(default=0.7, alias="AZURE_OPENAI_TEMPERATURE", description="Sampling temperature")

    @property
    def is_configured(self) -> bool:
        """Check if Azure OpenAI is properly configured."""
        return all([self.endpoint, self.chat_deployment_name])

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str | None) -> str | None:
        """Ensure endpoint ends with /."""
        if v and not v.endswith("/"):
            return v + "/"
        return v


class GenerationConfig(BaseSettings):
    """Generation pipeline configuration."""

    model_config = SettingsConfigDict(env_prefix="GENERATION_", env_file=".env", extra="ignore")

    stall_timeout: float = Field(default=30.0, gt=0, description="Seconds without a streamed chunk before a stall")
    request_timeout: float = Field(default=120.0, gt=0, description="Seconds allowed per blocking model call attempt")
    decode_error_policy: DecodeErrorPolicy = Field(
        default=DecodeErrorPolicy.SKIP,
        description="Skip malformed itinerary records or abort the whole generation",
    )
    memory_window: int = Field(default=10, ge=0, description="Conversation turns replayed into each prompt")
    max_itinerary_days: int = Field(default=14, ge=1, description="Upper bound on requested itinerary length")
    max_line_length: int = Field(default=65536, ge=1, description="Longest streamed record accepted, in characters")
    place_search_top_k: int = Field(default=10, ge=1, description="Candidate places fetched per search")
    place_similarity_threshold: float = Field(
        default=0.4, ge=0.0, le=1.0, description="Minimum similarity of a candidate place"
    )


class ObservabilityConfig(BaseSettings):
    """Observability and tracing configuration."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    enable_otel: bool = Field(default=False, alias="ENABLE_OTEL", description="Enable OpenTelemetry tracing")
    enable_sensitive_data: bool = Field(
        default=False,
        alias="ENABLE_SENSITIVE_DATA",
        description="Include prompt and completion text in traces",
    )
    otlp_endpoint: str | None = Field(default=None, alias="OTLP_ENDPOINT", description="OTLP endpoint for traces")


class ResilienceConfig(BaseSettings):
    """Resilience and retry configuration for model calls."""

    model_config = SettingsConfigDict(
        env_prefix="RESILIENCE_", env_file=".env", extra="ignore", protected_namespaces=()
    )

    enable_retries: bool = Field(default=True, description="Retry blocking model calls on transport errors")
    model_max_attempts: int = Field(default=3, ge=1, description="Maximum attempts for a blocking model call")
    model_base_delay: float = Field(default=1.0, description="Base delay between model retries")
    model_max_delay: float = Field(default=30.0, description="Maximum delay between model retries")
    model_backoff_multiplier: float = Field(default=2.0, description="Exponential backoff multiplier")


class ApplicationConfig(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    environment: Environment = Field(default=Environment.DEVELOPMENT, description="Application environment")
    debug: bool = Field(default=False, description="Enable debug mode")

    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Path | None = Field(default=None, description="Log file path")

    template_store_path: Path = Field(
        default=Path("prompt_templates.json"),
        description="JSON file backing the prompt template store",
    )

    @field_validator("environment", mode="before")
    @classmethod
    def parse_environment(cls, v: str) -> Environment:
        """Parse environment from string."""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Upper-case the level name so logging accepts it."""
        return v.upper()


class Settings:
    """Configuration sections, each loaded from the environment on first access."""

    def __init__(self):
        self._sections: dict[type[BaseSettings], BaseSettings] = {}

    def _section(self, section_type: type[SectionT]) -> SectionT:
        if section_type not in self._sections:
            self._sections[section_type] = section_type()
        return self._sections[section_type]

    @property
    def app(self) -> ApplicationConfig:
        return self._section(ApplicationConfig)

    @property
    def model(self) -> ModelConfig:
        return self._section(ModelConfig)

    @property
    def generation(self) -> GenerationConfig:
        return self._section(GenerationConfig)

    @property
    def observability(self) -> ObservabilityConfig:
        return self._section(ObservabilityConfig)

    @property
    def resilience(self) -> ResilienceConfig:
        return self._section(ResilienceConfig)

    def reload(self) -> None:
        """Drop every loaded section so the next access reads the environment again."""
        self._sections.clear()


# Global settings instance
settings = Settings()
