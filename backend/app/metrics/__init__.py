"""Sync metrics."""

from .core import record_sync_call
from .registry import MetricsClient

__all__ = ["MetricsClient", "record_sync_call"]
