"""End-to-end sync: store -> controller -> HTTP gateway -> trips API -> database."""

import asyncio

import httpx
import pytest

from backend.app.db.session import get_session
from backend.app.gateway import HttpTripGateway
from backend.app.main import app
from backend.app.models import SyncStatus
from backend.app.store import ItineraryStore
from backend.app.sync import SyncController


@pytest.fixture
def asgi_gateway(test_session_factory):
    """HTTP gateway talking to the app in-process."""

    def override_get_session():
        session = test_session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_session] = override_get_session

    def make(profile_id: str) -> HttpTripGateway:
        return HttpTripGateway(
            base_url="http://testserver",
            profile_id=profile_id,
            transport=httpx.ASGITransport(app=app),
        )

    yield make

    app.dependency_overrides.clear()


@pytest.mark.integration
def test_edits_reach_a_second_device(asgi_gateway, store: ItineraryStore, id_generator) -> None:
    """Trips saved from one store are loaded into a fresh one."""

    async def scenario() -> tuple[SyncStatus, ItineraryStore]:
        async with asgi_gateway("u1") as gateway:
            controller = SyncController(store, gateway, debounce_s=0.05, status_timeout_s=1)
            controller.start()
            store.update_trip_info({"name": "北海道"})
            store.add_empty_spot()
            await asyncio.sleep(0.2)
            await controller.flush()
            await controller.aclose()
            status = controller.sync_state.status

        other = ItineraryStore(id_generator=id_generator)
        async with asgi_gateway("u1") as gateway:
            assert await SyncController(other, gateway).load_remote()
        return status, other

    status, other = asyncio.run(scenario())

    assert status == SyncStatus.saved
    assert other.export_data() == store.export_data()
    assert other.active_trip.name == "北海道"


@pytest.mark.integration
def test_first_run_keeps_local_default(asgi_gateway, store: ItineraryStore) -> None:
    async def scenario() -> bool:
        async with asgi_gateway("fresh") as gateway:
            return await SyncController(store, gateway).load_remote()

    assert asyncio.run(scenario()) is False
    assert store.active_trip.name == "我的東京冒險"
