"""Tests for the sequential batch executor."""

import logging

import pytest

from cloudops import (
    ActionError,
    AggregateBatchFailure,
    BatchExecutor,
    BatchOutcome,
    run_batch,
)
from cloudops.testing import MockAction


def test_middle_failure_does_not_stop_batch(caplog):
    """A, B, C with B failing: all three run in order, one error for B."""
    action = MockAction(fail_for=["B"])
    executor = BatchExecutor(action)

    with caplog.at_level(logging.ERROR, logger="cloudops.executor"):
        outcome = executor.run(["A", "B", "C"])

    assert action.calls == ["A", "B", "C"]
    assert outcome.had_failures is True
    assert outcome.attempted == 3
    assert outcome.succeeded == 2
    assert outcome.failed_inputs == ["B"]

    failure = outcome.failures[0]
    assert isinstance(failure.error, ActionError)
    assert failure.error.item == "B"
    assert isinstance(failure.cause, RuntimeError)

    error_records = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(error_records) == 1
    assert "B" in error_records[0].getMessage()


def test_all_succeed():
    """No failure means no surfaced errors and a clean aggregate."""
    surfaced = []
    action = MockAction()
    executor = BatchExecutor(action, on_failure=surfaced.append)

    outcome = executor.run(["i-1", "i-2", "i-3"])

    assert outcome.had_failures is False
    assert outcome.failures == []
    assert surfaced == []
    assert action.calls == ["i-1", "i-2", "i-3"]


def test_empty_batch():
    """An empty batch invokes nothing and reports no failure."""
    action = MockAction()

    had_failures = BatchExecutor(action).run_batch([])

    assert had_failures is False
    assert action.calls == []


def test_all_fail():
    """Every input is still attempted when every input fails."""
    action = MockAction(fail_for=["i-1", "i-2", "i-3"])

    outcome = BatchExecutor(action).run(["i-1", "i-2", "i-3"])

    assert action.calls == ["i-1", "i-2", "i-3"]
    assert outcome.failed_inputs == ["i-1", "i-2", "i-3"]
    assert outcome.succeeded == 0


def test_failures_surface_as_they_happen():
    """The failure callback runs before the next input is attempted."""
    timeline = []

    def action(item):
        timeline.append(("call", item))
        if item in ("i-1", "i-3"):
            raise ValueError(f"bad {item}")

    def on_failure(failure):
        timeline.append(("failed", failure.input))

    BatchExecutor(action, on_failure=on_failure).run(["i-1", "i-2", "i-3"])

    assert timeline == [
        ("call", "i-1"),
        ("failed", "i-1"),
        ("call", "i-2"),
        ("call", "i-3"),
        ("failed", "i-3"),
    ]


def test_failing_callback_does_not_stop_batch():
    """An exception in the failure callback is logged and ignored."""
    action = MockAction(fail_for=["i-1"])

    def broken_callback(failure):
        raise RuntimeError("callback broke")

    outcome = BatchExecutor(action, on_failure=broken_callback).run(["i-1", "i-2"])

    assert action.calls == ["i-1", "i-2"]
    assert outcome.failed_inputs == ["i-1"]


def test_each_input_attempted_once():
    """Duplicate inputs are each applied once per occurrence; nothing is retried."""
    action = MockAction(fail_for=["i-1"])

    BatchExecutor(action).run(["i-1", "i-2", "i-1"])

    assert action.calls == ["i-1", "i-2", "i-1"]


def test_keyboard_interrupt_propagates():
    """Only Exception subclasses are recorded; interrupts abort the batch."""
    calls = []

    def action(item):
        calls.append(item)
        if item == "i-2":
            raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        BatchExecutor(action).run(["i-1", "i-2", "i-3"])

    assert calls == ["i-1", "i-2"]


def test_raise_for_failures():
    """The aggregate failure is synthesised only when something failed."""
    ok = BatchExecutor(MockAction()).run(["i-1"])
    ok.raise_for_failures()

    bad = BatchExecutor(MockAction(fail_for=["i-2"])).run(["i-1", "i-2"])
    with pytest.raises(AggregateBatchFailure) as exc_info:
        bad.raise_for_failures()

    assert exc_info.value.attempted == 2
    assert [f.input for f in exc_info.value.failures] == ["i-2"]
    assert "1 of 2 items failed: i-2" in str(exc_info.value)


def test_run_batch_function():
    """The module-level helper returns the aggregate flag."""
    assert run_batch(["a", "b"], MockAction()) is False
    assert run_batch(["a", "b"], MockAction(fail_for=["a"])) is True


def test_inputs_from_generator():
    """Any iterable of inputs is accepted and consumed in order."""
    action = MockAction()

    BatchExecutor(action).run(f"i-{n}" for n in range(3))

    assert action.calls == ["i-0", "i-1", "i-2"]


def test_failure_category_from_classifier():
    """Recorded failures carry the classifier's category."""

    def action(item):
        raise TimeoutError("request timed out")

    outcome = BatchExecutor(action).run(["i-1"])

    assert outcome.failures[0].category == "timeout"


def test_fresh_outcome_per_run():
    """Outcomes are not shared between runs."""
    executor = BatchExecutor(MockAction(fail_for=["i-1"]))

    first = executor.run(["i-1"])
    second = executor.run(["i-2"])

    assert first.had_failures is True
    assert second.had_failures is False
    assert isinstance(second, BatchOutcome)


def test_outcome_flag_follows_failures():
    """had_failures is derived from the failures, never passed in."""
    failure = BatchExecutor(MockAction(fail_for=["i-1"])).run(["i-1"]).failures[0]

    assert BatchOutcome(failures=[failure], attempted=1).had_failures is True
    assert BatchOutcome().had_failures is False
    with pytest.raises(TypeError):
        BatchOutcome(had_failures=True)
