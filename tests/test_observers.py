"""Tests for observers."""

import json

import pytest

from cloudops import (
    BaseObserver,
    BatchExecutor,
    FetchError,
    MetricsObserver,
    PagedFetcher,
    ProcessingEvent,
)
from cloudops.testing import FakeClock, FakePagedSource, MockAction


class RecordingObserver(BaseObserver):
    def __init__(self):
        self.events = []

    def on_event(self, event, data):
        self.events.append((event, data))


def test_fetch_events_in_order():
    """Fetch events follow the request and cooldown sequence."""
    observer = RecordingObserver()
    clock = FakeClock()
    source = FakePagedSource(range(300))

    PagedFetcher(source, sleep=clock.sleep, observers=[observer]).fetch_all(limit=300)

    events = [event for event, _ in observer.events]
    assert events == (
        [ProcessingEvent.FETCH_STARTED]
        + [ProcessingEvent.PAGE_FETCHED] * 5
        + [ProcessingEvent.COOLDOWN_STARTED, ProcessingEvent.COOLDOWN_ENDED]
        + [ProcessingEvent.PAGE_FETCHED]
        + [ProcessingEvent.FETCH_COMPLETED]
    )
    assert observer.events[-1][1] == {"requests": 6, "produced": 300}


def test_batch_events():
    observer = RecordingObserver()

    BatchExecutor(MockAction(fail_for=["b"]), observers=[observer]).run(["a", "b"])

    events = [event for event, _ in observer.events]
    assert events == [
        ProcessingEvent.BATCH_STARTED,
        ProcessingEvent.ITEM_STARTED,
        ProcessingEvent.ITEM_COMPLETED,
        ProcessingEvent.ITEM_STARTED,
        ProcessingEvent.ITEM_FAILED,
        ProcessingEvent.BATCH_COMPLETED,
    ]
    failed_data = observer.events[4][1]
    assert failed_data["item"] == "b"
    assert failed_data["error_category"] == "unknown"


def test_broken_observer_is_ignored():
    """An observer raising does not affect the batch."""

    class BrokenObserver(BaseObserver):
        def on_event(self, event, data):
            raise RuntimeError("observer broke")

    action = MockAction()
    outcome = BatchExecutor(action, observers=[BrokenObserver()]).run(["a", "b"])

    assert action.calls == ["a", "b"]
    assert outcome.had_failures is False


def test_metrics_observer():
    metrics = MetricsObserver()
    clock = FakeClock()

    PagedFetcher(FakePagedSource(range(120)), sleep=clock.sleep, observers=[metrics]).fetch_all(
        limit=120
    )
    BatchExecutor(MockAction(fail_for=["i-2"]), observers=[metrics]).run(["i-1", "i-2", "i-3"])

    collected = metrics.get_metrics()
    assert collected["pages_fetched"] == 3
    assert collected["items_fetched"] == 120
    assert collected["cooldowns"] == 0
    assert collected["items_processed"] == 3
    assert collected["items_succeeded"] == 2
    assert collected["items_failed"] == 1
    assert collected["error_counts"] == {"unknown": 1}
    assert collected["success_rate"] == 2 / 3


def test_metrics_count_cooldowns_and_fetch_failures():
    metrics = MetricsObserver()
    clock = FakeClock()
    source = FakePagedSource(range(600), fail_on_call=7)

    with pytest.raises(FetchError):
        PagedFetcher(source, sleep=clock.sleep, observers=[metrics]).fetch_all(limit=600)

    collected = metrics.get_metrics()
    assert collected["cooldowns"] == 1
    assert collected["total_cooldown_time"] == 1.0
    assert collected["fetch_failures"] == 1
    assert collected["error_counts"] == {"connection_error": 1}


def test_metrics_exports():
    metrics = MetricsObserver()
    BatchExecutor(MockAction(fail_for=["x"]), observers=[metrics]).run(["x"])

    data = json.loads(metrics.export_json())
    assert data["items_failed"] == 1

    prom = metrics.export_prometheus()
    assert "# TYPE cloudops_items_failed counter" in prom
    assert "cloudops_items_failed 1" in prom
    assert 'cloudops_errors_total{error_category="unknown"} 1' in prom

    metrics.reset()
    assert metrics.get_metrics()["items_failed"] == 0
