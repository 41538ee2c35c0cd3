"""Integration tests for the /api/trips endpoint."""

import pytest
from fastapi.testclient import TestClient

from backend.app.db.models import UserTrips
from backend.app.db.session import get_session
from backend.app.main import app
from tests.unit.store_test_helpers import make_trip


@pytest.fixture
def test_client(test_session_factory):
    """Create test client with the database dependency overridden."""

    def override_get_session():
        session = test_session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_session] = override_get_session

    client = TestClient(app)
    yield client

    app.dependency_overrides.clear()


@pytest.mark.integration
class TestTripsApi:
    def test_unknown_profile_returns_empty_list(self, test_client: TestClient) -> None:
        response = test_client.get("/api/trips", params={"profileId": "nobody"})

        assert response.status_code == 200
        assert response.json() == []

    def test_save_then_load_round_trip(self, test_client: TestClient) -> None:
        data = [make_trip("t1").to_wire(), make_trip("t2").to_wire()]

        response = test_client.post("/api/trips", params={"profileId": "u1"}, json={"data": data})

        assert response.status_code == 200
        assert response.json() == {"success": True}
        loaded = test_client.get("/api/trips", params={"profileId": "u1"}).json()
        assert loaded == data

    def test_save_replaces_previous_collection(self, test_client: TestClient, test_session_factory) -> None:
        test_client.post("/api/trips", params={"profileId": "u1"}, json={"data": [make_trip("old").to_wire()]})
        test_client.post("/api/trips", params={"profileId": "u1"}, json={"data": [make_trip("new").to_wire()]})

        loaded = test_client.get("/api/trips", params={"profileId": "u1"}).json()
        assert [t["id"] for t in loaded] == ["new"]
        with test_session_factory() as session:
            assert session.query(UserTrips).count() == 1

    def test_profiles_are_isolated(self, test_client: TestClient) -> None:
        test_client.post("/api/trips", params={"profileId": "a"}, json={"data": [make_trip("ta").to_wire()]})

        assert test_client.get("/api/trips", params={"profileId": "b"}).json() == []

    def test_non_list_document_reads_as_empty(self, test_client: TestClient, test_session_factory) -> None:
        with test_session_factory() as session:
            session.add(UserTrips(profile_id="legacy", data={"trips": "oops"}))
            session.commit()

        assert test_client.get("/api/trips", params={"profileId": "legacy"}).json() == []

    def test_missing_profile_id_is_rejected(self, test_client: TestClient) -> None:
        assert test_client.get("/api/trips").status_code == 422
        assert test_client.post("/api/trips", json={"data": []}).status_code == 422

    def test_blank_profile_id_is_rejected(self, test_client: TestClient) -> None:
        response = test_client.get("/api/trips", params={"profileId": "  "})
        assert response.status_code == 400

    @pytest.mark.parametrize("body", [{}, {"data": "nope"}, {"data": [1, 2]}])
    def test_invalid_body_is_rejected(self, test_client: TestClient, body: dict) -> None:
        response = test_client.post("/api/trips", params={"profileId": "u1"}, json=body)
        assert response.status_code == 422
