"""Dictionary-backed trip plan reader."""

from travel_planner_ai.domain.interfaces import ITripPlanReader
from travel_planner_ai.domain.models import TripPlanSnapshot


class InMemoryTripPlanReader(ITripPlanReader):
    def __init__(self, plans: list[TripPlanSnapshot] | None = None):
        self._plans: dict[int, TripPlanSnapshot] = {plan.trip_id: plan for plan in plans or []}

    def put(self, plan: TripPlanSnapshot) -> None:
        self._plans[plan.trip_id] = plan

    async def find_plan(self, trip_id: int, user_id: str | None = None) -> TripPlanSnapshot | None:
        return self._plans.get(trip_id)
