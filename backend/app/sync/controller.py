"""Debounced remote synchronization of the trip collection.

The controller watches an ``ItineraryStore`` and, once edits settle for
``debounce_s`` seconds, saves the whole collection through a ``TripGateway``.
Saves never overlap: a change arriving while a save is in flight is folded
into a single follow-up save of the freshest snapshot.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from datetime import datetime, timezone

from backend.app.config import Settings
from backend.app.gateway.base import TripGateway
from backend.app.metrics.core import record_sync_call
from backend.app.metrics.registry import MetricsClient
from backend.app.models.common import SyncState, SyncStatus
from backend.app.models.defaults import SYNC_STATUS_TIMEOUT_S
from backend.app.models.itinerary import ItineraryState, Trip
from backend.app.store.store import ItineraryStore

logger = logging.getLogger(__name__)

StatusListener = Callable[[SyncState], None]


class SyncController:
    """Keeps the remote copy of a store's trips up to date."""

    def __init__(
        self,
        store: ItineraryStore,
        gateway: TripGateway,
        *,
        debounce_s: float = 1.5,
        status_timeout_s: float = SYNC_STATUS_TIMEOUT_S,
        metrics: MetricsClient | None = None,
    ):
        """Initialize the controller.

        Args:
            store: Store whose trip collection is synchronized
            gateway: Remote persistence gateway
            debounce_s: Quiet period after the last change before saving
            status_timeout_s: How long ``saved`` is shown before ``idle``
            metrics: Optional metrics registry
        """
        self._store = store
        self._gateway = gateway
        self.debounce_s = debounce_s
        self.status_timeout_s = status_timeout_s
        self._metrics = metrics

        self._loop: asyncio.AbstractEventLoop | None = None
        self._unsubscribe: Callable[[], None] | None = None
        self._state = SyncState()
        self._status_listeners: list[StatusListener] = []

        self._debounce_handle: asyncio.TimerHandle | None = None
        self._idle_handle: asyncio.TimerHandle | None = None
        self._save_task: asyncio.Task[None] | None = None
        self._dirty = False
        self._seq = 0
        # Collection known to match the remote copy
        self._synced_trips: tuple[Trip, ...] | None = None
        self._closed = False

    @classmethod
    def from_settings(
        cls,
        store: ItineraryStore,
        gateway: TripGateway,
        settings: Settings,
        metrics: MetricsClient | None = None,
    ) -> SyncController:
        return cls(
            store,
            gateway,
            debounce_s=settings.sync_debounce_s,
            status_timeout_s=settings.sync_status_timeout_s,
            metrics=metrics,
        )

    # === Status ===

    @property
    def sync_state(self) -> SyncState:
        return self._state

    @property
    def save_pending(self) -> bool:
        """True while a debounced save is waiting to fire."""
        return self._debounce_handle is not None

    def add_status_listener(self, listener: StatusListener) -> Callable[[], None]:
        """Register a callback for status changes; returns an unsubscribe callable."""
        self._status_listeners.append(listener)

        def remove() -> None:
            if listener in self._status_listeners:
                self._status_listeners.remove(listener)

        return remove

    def _set_state(self, status: SyncStatus, last_saved: datetime | None = None) -> None:
        state = SyncState(
            status=status,
            last_saved=last_saved if last_saved is not None else self._state.last_saved,
        )
        if state == self._state:
            return
        self._state = state
        if self._metrics:
            self._metrics.inc_status(status.value)
        for listener in list(self._status_listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Sync status listener failed")

    # === Lifecycle ===

    def start(self) -> None:
        """Subscribe to the store. Must be called from the running event loop."""
        if self._unsubscribe is not None:
            return
        self._loop = asyncio.get_running_loop()
        self._closed = False
        self._unsubscribe = self._store.subscribe(self._on_store_change)
        logger.info(f"Sync controller started (debounce={self.debounce_s}s)")

    async def aclose(self) -> None:
        """Stop watching the store, cancel timers and wait for an in-flight save."""
        self._closed = True
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._cancel_debounce()
        if self._idle_handle is not None:
            self._idle_handle.cancel()
            self._idle_handle = None
        if self._save_task is not None and not self._save_task.done():
            await self._save_task
        logger.info("Sync controller stopped")

    # === Store changes ===

    def _on_store_change(self, new: ItineraryState, previous: ItineraryState) -> None:
        # May run on any thread; hop onto the loop before touching timers.
        if new.trips is previous.trips or self._closed or self._loop is None:
            return
        try:
            self._loop.call_soon_threadsafe(self._schedule_save)
        except RuntimeError:
            logger.warning("Event loop closed, dropping store change")

    def _schedule_save(self) -> None:
        if self._closed or self._loop is None:
            return
        if self._store.trips is self._synced_trips:
            return
        self._cancel_debounce()
        self._debounce_handle = self._loop.call_later(self.debounce_s, self._fire_debounce)

    def _fire_debounce(self) -> None:
        self._debounce_handle = None
        self._request_save()

    def _cancel_debounce(self) -> None:
        if self._debounce_handle is not None:
            self._debounce_handle.cancel()
            self._debounce_handle = None

    # === Saving ===

    def _request_save(self) -> asyncio.Task[None]:
        if self._save_task is not None and not self._save_task.done():
            if not self._dirty and self._metrics:
                self._metrics.inc_coalesced_save()
            self._dirty = True
            return self._save_task
        self._save_task = asyncio.get_running_loop().create_task(self._run_saves())
        return self._save_task

    async def _run_saves(self) -> None:
        while True:
            self._dirty = False
            await self._save_once()
            if not self._dirty:
                return

    async def _save_once(self) -> None:
        self._seq += 1
        seq = self._seq
        trips = self._store.trips
        if self._idle_handle is not None:
            self._idle_handle.cancel()
            self._idle_handle = None
        self._set_state(SyncStatus.saving)

        start = time.perf_counter()
        try:
            await self._gateway.save(trips)
        except Exception as e:
            latency_ms = int((time.perf_counter() - start) * 1000)
            self._record("save", latency_ms, False, len(trips), seq, type(e).__name__)
            logger.error(f"Failed to save trips (seq={seq}): {e}")
            if seq == self._seq:
                self._set_state(SyncStatus.error)
            return

        latency_ms = int((time.perf_counter() - start) * 1000)
        self._record("save", latency_ms, True, len(trips), seq, None)
        self._synced_trips = trips
        if self._store.trips is not trips and not self._dirty and self._debounce_handle is None:
            # The store moved on (e.g. a remote load) with no save queued for it
            self._schedule_save()
        if seq != self._seq:
            logger.debug(f"Ignoring status of stale save (seq={seq}, latest={self._seq})")
            return
        self._mark_saved(seq, datetime.now(timezone.utc))

    def _mark_saved(self, seq: int, last_saved: datetime | None = None) -> None:
        self._set_state(SyncStatus.saved, last_saved=last_saved)
        if self._idle_handle is not None:
            self._idle_handle.cancel()
        self._idle_handle = asyncio.get_running_loop().call_later(
            self.status_timeout_s, self._reset_to_idle, seq
        )

    def _reset_to_idle(self, seq: int) -> None:
        self._idle_handle = None
        if seq == self._seq and self._state.status == SyncStatus.saved:
            self._set_state(SyncStatus.idle)

    async def save_now(self) -> None:
        """Save the current collection immediately, bypassing the debounce.

        If a save is already in flight, waits for it and for the single
        follow-up save carrying the current snapshot.
        """
        self._cancel_debounce()
        await self._request_save()

    async def flush(self) -> None:
        """Run a pending debounced save now and wait for saves to settle."""
        if self._debounce_handle is not None:
            await self.save_now()
        elif self._save_task is not None and not self._save_task.done():
            await self._save_task

    # === Loading ===

    async def load_remote(self) -> bool:
        """One-shot startup load from the gateway.

        Returns:
            True if remote trips were imported into the store
        """
        self._seq += 1
        seq = self._seq
        start = time.perf_counter()
        try:
            trips = await self._gateway.load()
        except Exception as e:
            latency_ms = int((time.perf_counter() - start) * 1000)
            self._record("load", latency_ms, False, 0, seq, type(e).__name__)
            logger.error(f"Failed to load trips, keeping local state: {e}")
            if seq == self._seq:
                self._set_state(SyncStatus.idle)
            return False

        latency_ms = int((time.perf_counter() - start) * 1000)
        self._record("load", latency_ms, True, len(trips), seq, None)
        if not trips:
            logger.info("No remote trips, keeping local state")
            if seq == self._seq:
                self._set_state(SyncStatus.idle)
            return False

        self._store.import_data(trips)
        self._synced_trips = self._store.trips
        if seq == self._seq:
            self._mark_saved(seq)
        return True

    def _record(
        self,
        operation: str,
        latency_ms: int,
        ok: bool,
        trip_count: int,
        seq: int,
        error_kind: str | None,
    ) -> None:
        record_sync_call(operation, latency_ms, ok, trip_count, seq, error_kind)
        if self._metrics:
            self._metrics.observe_sync_latency(operation, "ok" if ok else "error", latency_ms)
            if error_kind:
                self._metrics.inc_sync_errors(operation, error_kind)
