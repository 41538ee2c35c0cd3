"""In-process metrics registry for the sync controller."""

from collections import defaultdict


class MetricsClient:
    """
    Simple in-process metrics client for tracking remote sync.

    Stores metrics in memory for testing and internal monitoring.
    """

    def __init__(self) -> None:
        # Sync latency observations: operation -> list of (status, latency_ms)
        self.sync_latencies: dict[str, list[tuple[str, int]]] = defaultdict(list)

        # Error counts: operation -> reason -> count
        self.sync_errors: dict[str, dict[str, int]] = defaultdict(
            lambda: defaultdict(int)
        )

        # Saves folded into a follow-up save while one was in flight
        self.coalesced_saves: int = 0

        # Status transitions: status -> count
        self.status_transitions: dict[str, int] = defaultdict(int)

    def observe_sync_latency(self, operation: str, status: str, latency_ms: int) -> None:
        """Record a sync latency observation."""
        self.sync_latencies[operation].append((status, latency_ms))

    def inc_sync_errors(self, operation: str, reason: str) -> None:
        """Increment error counter for an operation and reason."""
        self.sync_errors[operation][reason] += 1

    def inc_coalesced_save(self) -> None:
        self.coalesced_saves += 1

    def inc_status(self, status: str) -> None:
        self.status_transitions[status] += 1

    def get_sync_latency_stats(self, operation: str) -> dict[str, float]:
        """Get latency statistics for an operation."""
        latencies = [lat for _, lat in self.sync_latencies.get(operation, [])]
        if not latencies:
            return {"count": 0, "min": 0, "max": 0, "avg": 0}

        return {
            "count": len(latencies),
            "min": min(latencies),
            "max": max(latencies),
            "avg": sum(latencies) / len(latencies),
        }

    def get_sync_error_count(self, operation: str, reason: str | None = None) -> int:
        """Get error count for an operation, optionally filtered by reason."""
        if reason:
            return self.sync_errors.get(operation, {}).get(reason, 0)
        return sum(self.sync_errors.get(operation, {}).values())

    def reset(self) -> None:
        """Reset all metrics (useful for testing)."""
        self.sync_latencies.clear()
        self.sync_errors.clear()
        self.coalesced_saves = 0
        self.status_transitions.clear()
