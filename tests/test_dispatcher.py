"""Tests for :class:`booking_checker.orchestrator.BoundedDispatcher`."""
from __future__ import annotations

import random
import threading
import time
from typing import List, Optional

import pytest

from booking_checker.models import (
    BookingLookupRequest,
    Carrier,
    CarrierCredential,
    LookupStatus,
    ProviderOutcome,
)
from booking_checker.orchestrator import BoundedDispatcher
from booking_checker.progress import ProgressTracker
from booking_checker.providers import ProviderError, ProviderRegistry


class TrackingProvider:
    """Fake provider that records how many checks run at the same time."""

    name = "tracking"
    requires_credential = False

    def __init__(self, *, fail_locators: frozenset = frozenset(), altered_locators: frozenset = frozenset()) -> None:
        self._lock = threading.Lock()
        self.in_flight = 0
        self.max_in_flight = 0
        self.calls = 0
        self._fail_locators = fail_locators
        self._altered_locators = altered_locators

    def check(self, request: BookingLookupRequest, credential: Optional[CarrierCredential]) -> ProviderOutcome:
        with self._lock:
            self.in_flight += 1
            self.calls += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            time.sleep(random.uniform(0.005, 0.03))
            if request.locator in self._fail_locators:
                raise ProviderError(f"lookup failed for {request.locator}")
            if request.locator == "BOOM":
                raise KeyError("unexpected")
            return ProviderOutcome(altered=request.locator in self._altered_locators, flight_date="2025-05-20")
        finally:
            with self._lock:
                self.in_flight -= 1


def _requests(count: int, carrier: Carrier = Carrier.GOL) -> List[BookingLookupRequest]:
    return [
        BookingLookupRequest(carrier=carrier, locator=f"LOC{index:02d}", scheduled_date="01/01/2025")
        for index in range(count)
    ]


def test_at_most_five_lookups_run_concurrently() -> None:
    provider = TrackingProvider()
    registry = ProviderRegistry({Carrier.GOL: provider})
    dispatcher = BoundedDispatcher(ProgressTracker(), max_workers=5)

    results = dispatcher.dispatch(_requests(20), registry)

    assert len(results) == 20
    assert provider.calls == 20
    assert 1 <= provider.max_in_flight <= 5


def test_results_follow_input_order_not_completion_order() -> None:
    registry = ProviderRegistry({Carrier.GOL: TrackingProvider()})
    requests = _requests(15)

    results = BoundedDispatcher(ProgressTracker(), max_workers=5).dispatch(requests, registry)

    assert [result.locator for result in results] == [request.locator for request in requests]
    assert all(result.status is LookupStatus.OK for result in results)
    assert all(result.flight_date == "2025-05-20" for result in results)


def test_failures_are_isolated_to_their_own_record() -> None:
    provider = TrackingProvider(fail_locators=frozenset({"LOC01"}), altered_locators=frozenset({"LOC02"}))
    registry = ProviderRegistry({Carrier.GOL: provider})
    requests = _requests(3) + [BookingLookupRequest(carrier=Carrier.GOL, locator="BOOM", scheduled_date="02/02/2025")]
    tracker = ProgressTracker()
    tracker.reset(len(requests))

    results = BoundedDispatcher(tracker, max_workers=2).dispatch(requests, registry)

    assert [result.status for result in results] == [
        LookupStatus.OK,
        LookupStatus.ERROR,
        LookupStatus.ALTERED,
        LookupStatus.ERROR,
    ]
    assert results[1].flight_date == "01/01/2025"
    assert "LOC01" in results[1].details
    assert results[3].flight_date == "02/02/2025"
    assert tracker.snapshot().as_dict() == {"current": 4, "total": 4, "percentage": 100}


def test_unsupported_carrier_yields_unsupported_status() -> None:
    registry = ProviderRegistry({Carrier.GOL: TrackingProvider()})
    request = BookingLookupRequest(carrier=Carrier.UNSUPPORTED, raw_carrier_label="TAP", locator="TP1")

    (result,) = BoundedDispatcher(ProgressTracker()).dispatch([request], registry)

    assert result.status is LookupStatus.UNSUPPORTED
    assert result.carrier == "TAP"


def test_progress_is_monotonic_and_complete() -> None:
    registry = ProviderRegistry({Carrier.GOL: TrackingProvider()})
    tracker = ProgressTracker()
    requests = _requests(20)
    tracker.reset(len(requests))
    observations = []
    done = threading.Event()

    def poll() -> None:
        while not done.is_set():
            observations.append(tracker.snapshot())
            time.sleep(0.001)

    poller = threading.Thread(target=poll)
    poller.start()
    try:
        BoundedDispatcher(tracker, max_workers=5).dispatch(requests, registry)
    finally:
        done.set()
        poller.join()

    currents = [snapshot.current for snapshot in observations]
    assert all(0 <= snapshot.current <= snapshot.total == 20 for snapshot in observations)
    assert currents == sorted(currents)
    assert tracker.snapshot().current == 20


def test_empty_batch_returns_empty_list() -> None:
    assert BoundedDispatcher(ProgressTracker()).dispatch([], ProviderRegistry({})) == []


def test_invalid_worker_count_is_rejected() -> None:
    with pytest.raises(ValueError):
        BoundedDispatcher(ProgressTracker(), max_workers=0)
