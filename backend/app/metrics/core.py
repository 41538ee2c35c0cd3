"""Metrics façade for sync call tracking."""

import logging

logger = logging.getLogger(__name__)


def record_sync_call(
    operation: str,
    latency_ms: int,
    ok: bool,
    trip_count: int,
    seq: int,
    error_kind: str | None = None,
) -> None:
    """Record metrics for a gateway load or save.

    Emits a structured log line; the in-process ``MetricsClient`` keeps the
    counters used by tests and the health of the sync loop.

    Args:
        operation: "load" or "save".
        latency_ms: Latency in milliseconds.
        ok: Whether the call succeeded.
        trip_count: Number of trips sent or received.
        seq: Sequence number of the sync call.
        error_kind: Exception class name if the call failed, None if succeeded.
    """
    logger.info(
        "sync_call_metric",
        extra={
            "operation": operation,
            "latency_ms": latency_ms,
            "ok": ok,
            "trip_count": trip_count,
            "seq": seq,
            "error_kind": error_kind,
        },
    )
