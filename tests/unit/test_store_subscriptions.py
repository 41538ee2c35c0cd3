"""Tests for store snapshots, subscriptions and thread safety."""

import threading

from backend.app.models import ItineraryState
from backend.app.store import ItineraryStore


def test_listener_receives_new_and_previous(two_trip_store: ItineraryStore) -> None:
    calls: list[tuple[ItineraryState, ItineraryState]] = []
    two_trip_store.subscribe(lambda new, previous: calls.append((new, previous)))
    before = two_trip_store.state

    two_trip_store.add_day()

    assert len(calls) == 1
    new, previous = calls[0]
    assert previous is before
    assert new is two_trip_store.state


def test_noop_does_not_notify(two_trip_store: ItineraryStore) -> None:
    calls = []
    two_trip_store.subscribe(lambda new, previous: calls.append(new))

    two_trip_store.remove_spot("missing")
    two_trip_store.delete_day(99)

    assert calls == []


def test_unsubscribe(two_trip_store: ItineraryStore) -> None:
    calls = []
    unsubscribe = two_trip_store.subscribe(lambda new, previous: calls.append(new))

    unsubscribe()
    unsubscribe()
    two_trip_store.add_day()

    assert calls == []


def test_failing_listener_does_not_block_others(two_trip_store: ItineraryStore) -> None:
    calls = []

    def broken(new, previous):
        raise RuntimeError("listener bug")

    two_trip_store.subscribe(broken)
    two_trip_store.subscribe(lambda new, previous: calls.append(new))

    two_trip_store.add_day()

    assert len(calls) == 1
    assert len(two_trip_store.active_trip.days) == 3


def test_old_snapshot_is_never_mutated(two_trip_store: ItineraryStore) -> None:
    snapshot = two_trip_store.state
    dumped = snapshot.model_dump()

    two_trip_store.add_spot({"name": "n", "location": {"lat": 1, "lng": 1}})
    two_trip_store.update_trip_info({"name": "renamed"})
    two_trip_store.delete_trip("t2")

    assert snapshot.model_dump() == dumped


def test_concurrent_mutations_do_not_lose_updates(two_trip_store: ItineraryStore) -> None:
    """Mutations from several threads are applied one at a time."""

    def worker() -> None:
        for _ in range(50):
            two_trip_store.add_empty_spot()

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(two_trip_store.current_spots) == 3 + 200
    assert len({s.id for s in two_trip_store.current_spots}) == 203
