"""Provider of the line-delimited JSON output contract."""

from travel_planner_ai.application.context.base_provider import BaseContextProvider
from travel_planner_ai.domain.models import MetadataEntry, OutputSchemaContext, system_entries
from travel_planner_ai.domain.prompts.output_format import NDJSON_OUTPUT_FORMAT


class OutputFormatProvider(BaseContextProvider[OutputSchemaContext]):
    """Tells the model to answer with one schema-conformant JSON object per line.

    Every streamed prompt must carry this fragment; the stream decoder relies on it.
    """

    payload_type = OutputSchemaContext
    default_priority = 1

    async def build(self, payload: OutputSchemaContext) -> list[MetadataEntry]:
        return system_entries(
            "## Output Context\n\n"
            "The format your answer must follow. Always respond in this format.\n"
            + NDJSON_OUTPUT_FORMAT.format(schema=payload.json_schema)
        )
