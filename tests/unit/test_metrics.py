"""Unit tests for MetricsClient and the sync metrics façade."""

import logging

import pytest

from backend.app.metrics import MetricsClient, record_sync_call


@pytest.fixture
def metrics() -> MetricsClient:
    """Create a fresh metrics client."""
    return MetricsClient()


def test_observe_sync_latency_records_data(metrics: MetricsClient) -> None:
    metrics.observe_sync_latency("save", "ok", 100)
    metrics.observe_sync_latency("save", "error", 150)

    assert metrics.sync_latencies["save"] == [("ok", 100), ("error", 150)]


def test_get_sync_latency_stats_calculates_correctly(metrics: MetricsClient) -> None:
    for latency in (100, 200, 300):
        metrics.observe_sync_latency("load", "ok", latency)

    stats = metrics.get_sync_latency_stats("load")
    assert stats["count"] == 3
    assert stats["min"] == 100
    assert stats["max"] == 300
    assert stats["avg"] == 200


def test_get_sync_latency_stats_empty(metrics: MetricsClient) -> None:
    assert metrics.get_sync_latency_stats("save") == {"count": 0, "min": 0, "max": 0, "avg": 0}


def test_errors_tracked_by_reason(metrics: MetricsClient) -> None:
    metrics.inc_sync_errors("save", "GatewayTimeoutError")
    metrics.inc_sync_errors("save", "GatewayTimeoutError")
    metrics.inc_sync_errors("save", "GatewayConnectionError")

    assert metrics.get_sync_error_count("save", "GatewayTimeoutError") == 2
    assert metrics.get_sync_error_count("save") == 3
    assert metrics.get_sync_error_count("load") == 0


def test_reset_clears_everything(metrics: MetricsClient) -> None:
    metrics.observe_sync_latency("save", "ok", 1)
    metrics.inc_sync_errors("save", "x")
    metrics.inc_coalesced_save()
    metrics.inc_status("saved")

    metrics.reset()

    assert metrics.get_sync_latency_stats("save")["count"] == 0
    assert metrics.get_sync_error_count("save") == 0
    assert metrics.coalesced_saves == 0
    assert metrics.status_transitions == {}


def test_record_sync_call_logs_structured_fields(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="backend.app.metrics.core"):
        record_sync_call("save", 12, False, 3, 7, "GatewayError")

    record = caplog.records[-1]
    assert record.getMessage() == "sync_call_metric"
    assert record.operation == "save"
    assert record.ok is False
    assert record.seq == 7
    assert record.error_kind == "GatewayError"
