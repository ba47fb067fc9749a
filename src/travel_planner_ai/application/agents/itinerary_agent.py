"""Agent that streams a day-by-day itinerary as newline-delimited JSON."""

import asyncio
import json
import logging
from collections.abc import AsyncIterator

from travel_planner_ai.application.agents.base_agent import BaseGenerationAgent
from travel_planner_ai.application.decoding.stream_decoder import DecodedItem, NdjsonStreamDecoder
from travel_planner_ai.domain.exceptions import AgentExecutionError, ModelStallError, ValidationError
from travel_planner_ai.domain.models import (
    AgentConfig,
    AgentType,
    DailyPlan,
    DailyPlanGenerated,
    DecodeFailure,
    ItineraryCommandContext,
    ItineraryQueryContext,
    ItineraryRequested,
    OutputSchemaContext,
    PlaceVectorQueryContext,
    SessionContext,
    StreamUnit,
    StreamUnitRejected,
)
from travel_planner_ai.domain.prompts.itinerary_prompt import DAY_RANGE_INSTRUCTION, ITINERARY_PROMPT

logger = logging.getLogger(__name__)

DAILY_PLAN_SCHEMA = json.dumps(DailyPlan.model_json_schema(by_alias=True), indent=2, ensure_ascii=False)


class ItineraryAgent(BaseGenerationAgent):
    """Generates an itinerary with one streaming model call.

    Each decoded line becomes a ``DailyPlanGenerated`` event as soon as it is
    complete. Malformed lines become ``StreamUnitRejected`` events under the
    skip policy, or fail the generation under the abort policy. A stream that
    stays silent longer than ``stall_timeout`` fails with ``ModelStallError``.
    """

    request_type = ItineraryRequested

    async def _generate(self, request: ItineraryRequested) -> int:
        max_days = self._generation_config.max_itinerary_days
        if request.duration_days > max_days:
            raise ValidationError(
                f"Itinerary of {request.duration_days} days exceeds the limit of {max_days} days",
                details={"duration_days": request.duration_days, "max_itinerary_days": max_days},
            )

        command = ItineraryCommandContext(
            region=request.region,
            start_date=request.start_date,
            duration_days=request.duration_days,
            themes=request.themes,
            party_size=request.party_size,
            transport_mode=request.transport_mode,
        )
        logger.info(
            f"Generating itinerary - region: {request.region}, days: {request.duration_days}, trip: {request.trip_id}"
        )

        messages = await self.build_prompt(
            request.conversation_id,
            self._user_turn(request, command),
            AgentType.ITINERARY,
            OutputSchemaContext(json_schema=DAILY_PLAN_SCHEMA),
            SessionContext(
                conversation_id=request.conversation_id,
                trip_id=request.trip_id,
                user_id=request.user_id,
            ),
            ItineraryQueryContext(trip_id=request.trip_id, user_id=request.user_id),
            command,
            PlaceVectorQueryContext(
                region=request.region,
                themes=request.themes,
                top_k=self._generation_config.place_search_top_k,
                similarity_threshold=self._generation_config.place_similarity_threshold,
            ),
        )

        decoder = NdjsonStreamDecoder(
            DailyPlan,
            self._generation_config.decode_error_policy,
            max_line_length=self._generation_config.max_line_length,
        )
        stream = self._model_client.stream(messages, self._config.temperature)
        try:
            async for chunk in self._with_stall_timeout(stream):
                for item in decoder.feed(chunk):
                    self._handle(request, item)
            for item in decoder.close():
                self._handle(request, item)
        finally:
            await stream.aclose()

        if decoder.unit_count == 0:
            raise AgentExecutionError("Model stream contained no daily plan", agent_name=self.name)
        return decoder.unit_count

    @staticmethod
    def _user_turn(request: ItineraryRequested, command: ItineraryCommandContext) -> str:
        instruction = DAY_RANGE_INSTRUCTION.format(
            duration_days=command.duration_days,
            start_date=command.start_date,
            end_date=command.end_date,
        )
        if request.message and request.message.strip():
            return f"{instruction}\n\n{request.message.strip()}"
        return instruction

    async def _with_stall_timeout(self, stream: AsyncIterator[str]) -> AsyncIterator[str]:
        timeout = self._generation_config.stall_timeout
        while True:
            try:
                chunk = await asyncio.wait_for(anext(stream), timeout=timeout)
            except StopAsyncIteration:
                return
            except TimeoutError as e:
                raise ModelStallError(
                    f"No output from the model for {timeout} seconds", timeout_duration=timeout
                ) from e
            yield chunk

    def _handle(self, request: ItineraryRequested, item: DecodedItem) -> None:
        if isinstance(item, StreamUnit):
            plan: DailyPlan = item.value
            self._publish(
                DailyPlanGenerated(
                    conversation_id=request.conversation_id,
                    trip_id=request.trip_id,
                    user_id=request.user_id,
                    sequence=item.sequence,
                    day_number=plan.day_number,
                    unit=plan,
                )
            )
            logger.info(f"Day {plan.day_number} generated for conversation {request.conversation_id}")
        elif isinstance(item, DecodeFailure):
            self._publish(
                StreamUnitRejected(
                    conversation_id=request.conversation_id,
                    trip_id=request.trip_id,
                    line_number=item.line_number,
                    line=item.line,
                    reason=item.reason,
                )
            )
        else:
            logger.debug(
                f"Itinerary stream ended: {item.unit_count} unit(s), {item.failure_count} rejected line(s)"
            )


def default_itinerary_config() -> AgentConfig:
    return AgentConfig(
        name="Itinerary Agent",
        agent_type=AgentType.ITINERARY,
        instructions=ITINERARY_PROMPT.strip(),
    )
