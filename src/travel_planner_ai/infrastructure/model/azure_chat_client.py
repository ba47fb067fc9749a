"""Azure OpenAI implementation of the model client port."""

import logging
from collections.abc import AsyncIterator
from typing import Any

from agent_framework import ChatMessage, Role
from agent_framework.azure import AzureOpenAIChatClient
from azure.identity import DefaultAzureCredential

from travel_planner_ai.config import ModelConfig, settings
from travel_planner_ai.domain.exceptions import ConfigurationError, ModelConnectionError, TravelPlannerError
from travel_planner_ai.domain.interfaces import IModelClient
from travel_planner_ai.domain.models import Message, MessageRole

logger = logging.getLogger(__name__)

_ROLES = {
    MessageRole.SYSTEM: Role.SYSTEM,
    MessageRole.USER: Role.USER,
    MessageRole.ASSISTANT: Role.ASSISTANT,
}


class AzureChatModelClient(IModelClient):
    """Chat completions through ``AzureOpenAIChatClient``.

    Authenticates with the configured API key, or with ``DefaultAzureCredential``
    when no key is set. Transport failures surface as ``ModelConnectionError``.
    """

    def __init__(self, config: ModelConfig | None = None, client: Any | None = None):
        self._config = config or settings.model
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            if not self._config.is_configured:
                raise ConfigurationError(
                    "Azure OpenAI is not configured. Set AZURE_OPENAI_ENDPOINT and "
                    "AZURE_OPENAI_CHAT_DEPLOYMENT_NAME in your .env file."
                )

            kwargs: dict[str, Any] = {
                "endpoint": self._config.endpoint,
                "deployment_name": self._config.chat_deployment_name,
                "api_version": self._config.api_version,
            }
            if self._config.api_key:
                kwargs["api_key"] = self._config.api_key
            else:
                kwargs["credential"] = DefaultAzureCredential()

            self._client = AzureOpenAIChatClient(**kwargs)
            logger.info(f"Created Azure OpenAI chat client for deployment '{self._config.chat_deployment_name}'")
        return self._client

    @staticmethod
    def to_chat_messages(messages: list[Message]) -> list[ChatMessage]:
        return [ChatMessage(role=_ROLES[message.role], text=message.content) for message in messages]

    def _temperature(self, temperature: float | None) -> float:
        return self._config.temperature if temperature is None else temperature

    async def complete(self, messages: list[Message], temperature: float | None = None) -> str:
        client = self._get_client()
        try:
            response = await client.get_response(
                self.to_chat_messages(messages), temperature=self._temperature(temperature)
            )
        except TravelPlannerError:
            raise
        except Exception as e:
            logger.error(f"Model call failed: {e}")
            raise ModelConnectionError(f"Model call failed: {e}") from e
        return response.text or ""

    async def stream(self, messages: list[Message], temperature: float | None = None) -> AsyncIterator[str]:
        client = self._get_client()
        try:
            async for update in client.get_streaming_response(
                self.to_chat_messages(messages), temperature=self._temperature(temperature)
            ):
                if update.text:
                    yield update.text
        except TravelPlannerError:
            raise
        except Exception as e:
            logger.error(f"Streaming model call failed: {e}")
            raise ModelConnectionError(f"Streaming model call failed: {e}") from e
