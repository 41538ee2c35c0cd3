"""Integration tests for /healthz endpoint."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from backend.app.main import app


@pytest.mark.integration
def test_healthz_reports_db_ok(test_db_engine) -> None:
    factory = sessionmaker(bind=test_db_engine)

    with patch("backend.app.api.health.get_session_factory", return_value=factory):
        response = TestClient(app).get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "checks": {"db": "ok"}}
