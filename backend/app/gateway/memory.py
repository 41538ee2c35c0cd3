"""In-process gateway for offline development and tests."""

import asyncio
from collections.abc import Sequence

from backend.app.models.itinerary import Trip

from .exceptions import GatewayError


class InMemoryTripGateway:
    """Keeps the last saved collection in memory.

    ``fail_loads``/``fail_saves`` make the next calls raise, and ``delay``
    simulates network latency so overlapping saves can be exercised.
    """

    def __init__(self, trips: Sequence[Trip] = (), delay: float = 0.0) -> None:
        self.trips: list[Trip] = list(trips)
        self.delay = delay
        self.saved_payloads: list[list[Trip]] = []
        self.load_calls = 0
        self.in_flight = 0
        self.max_in_flight = 0
        self.fail_loads = False
        self.fail_saves = False

    async def load(self) -> list[Trip]:
        self.load_calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_loads:
            raise GatewayError("load failed")
        return list(self.trips)

    async def save(self, trips: Sequence[Trip]) -> None:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if self.fail_saves:
                raise GatewayError("save failed")
            self.trips = list(trips)
            self.saved_payloads.append(list(trips))
        finally:
            self.in_flight -= 1
