"""Persistence gateway contract."""

from collections.abc import Sequence
from typing import Protocol

from backend.app.models.itinerary import Trip


class TripGateway(Protocol):
    """Remote store for a user's full trip collection.

    Both calls move the whole collection; there is no partial success.
    Either may raise ``GatewayError``.
    """

    async def load(self) -> list[Trip]:
        """Fetch the saved collection; empty on first run."""
        ...

    async def save(self, trips: Sequence[Trip]) -> None:
        """Replace the saved collection with ``trips``."""
        ...
