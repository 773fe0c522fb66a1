"""Sequential batch executor"""

import logging
import time
from collections.abc import Iterable
from typing import Any, Generic

from .base import ActionFunc, BatchOutcome, FailureCallbackFunc, ItemFailure, TInput
from .observers import ProcessingEvent, ProcessorObserver, emit_event
from .strategies import ActionError, DefaultErrorClassifier, ErrorClassifier

logger = logging.getLogger(__name__)


class BatchExecutor(Generic[TInput]):
    """
    Applies one action to each input of a batch, one at a time, in order.

    A failing input never stops the batch: the error is recorded, surfaced
    immediately (ERROR log record and the optional ``on_failure`` callback),
    and the executor moves on to the next input. Once every input has been
    attempted, the outcome reports whether any of them failed.
    """

    def __init__(
        self,
        action: ActionFunc[TInput],
        action_name: str | None = None,
        on_failure: FailureCallbackFunc | None = None,
        error_classifier: ErrorClassifier | None = None,
        observers: list[ProcessorObserver] | None = None,
    ):
        """
        Initialize the batch executor.

        Args:
            action: Single-input action; raising an exception means the input failed
            action_name: Name used in log lines (default: the action's __name__)
            on_failure: Optional callback invoked with each ItemFailure as it happens
            error_classifier: Strategy for classifying errors (default: DefaultErrorClassifier)
            observers: List of observers for events
        """
        self.action = action
        self.action_name = action_name or getattr(action, "__name__", "action")
        self.on_failure = on_failure
        self.error_classifier = error_classifier or DefaultErrorClassifier()
        self.observers = observers or []

    def run(self, inputs: Iterable[TInput]) -> BatchOutcome[TInput]:
        """
        Apply the action to every input.

        Args:
            inputs: Ordered collection of independent inputs

        Returns:
            BatchOutcome with the failures in input order and the aggregate flag
        """
        items = list(inputs)
        outcome: BatchOutcome[TInput] = BatchOutcome()
        started_at = time.time()

        emit_event(
            self.observers,
            ProcessingEvent.BATCH_STARTED,
            {"action": self.action_name, "total": len(items)},
        )

        for item in items:
            outcome.attempted += 1
            failure = self._apply(item)
            if failure is not None:
                outcome.record(failure)
                self._surface(failure)

        duration = time.time() - started_at
        emit_event(
            self.observers,
            ProcessingEvent.BATCH_COMPLETED,
            {
                "action": self.action_name,
                "total": outcome.attempted,
                "failed": len(outcome.failures),
                "duration": duration,
            },
        )

        if outcome.had_failures:
            logger.warning(
                f"✗ {self.action_name}: {len(outcome.failures)} of {outcome.attempted} "
                f"items failed"
            )
        else:
            logger.info(f"✓ {self.action_name}: all {outcome.attempted} items succeeded")
        return outcome

    def run_batch(self, inputs: Iterable[TInput]) -> bool:
        """Apply the action to every input and return True if any input failed."""
        return self.run(inputs).had_failures

    def _apply(self, item: TInput) -> ItemFailure[TInput] | None:
        """Apply the action to one input, turning an exception into an ItemFailure."""
        emit_event(
            self.observers,
            ProcessingEvent.ITEM_STARTED,
            {"action": self.action_name, "item": item},
        )
        started_at = time.time()
        try:
            self.action(item)
        except Exception as e:
            error_info = self.error_classifier.classify(e)
            emit_event(
                self.observers,
                ProcessingEvent.ITEM_FAILED,
                {
                    "action": self.action_name,
                    "item": item,
                    "error": str(e)[:200],
                    "error_category": error_info.error_category,
                    "error_code": error_info.error_code,
                },
            )
            return ItemFailure(
                input=item,
                error=ActionError(item, e),
                category=error_info.error_category,
            )

        emit_event(
            self.observers,
            ProcessingEvent.ITEM_COMPLETED,
            {"action": self.action_name, "item": item, "duration": time.time() - started_at},
        )
        logger.info(f"✓ {self.action_name} {item}")
        return None

    def _surface(self, failure: ItemFailure[TInput]) -> None:
        """Report one failure as soon as it happens."""
        logger.error(f"✗ {self.action_name} failed for {failure.describe()} [{failure.category}]")
        if self.on_failure is None:
            return
        try:
            self.on_failure(failure)
        except Exception as e:
            logger.warning(f"⚠️  Failure callback error for {failure.input}: {e}")


def run_batch(
    inputs: Iterable[TInput],
    action: ActionFunc[TInput],
    **kwargs: Any,
) -> bool:
    """
    Apply ``action`` to each input in order; return True if any input failed.

    Keyword arguments are passed to BatchExecutor.
    """
    return BatchExecutor(action, **kwargs).run_batch(inputs)
