"""Remote synchronization."""

from .controller import StatusListener, SyncController

__all__ = ["SyncController", "StatusListener"]
