"""Base data types shared by the paged fetcher and the batch executor."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from .strategies.errors import ActionError, AggregateBatchFailure

# Type variables for generic typing
TItem = TypeVar("TItem")  # Item type produced by a paged source
TInput = TypeVar("TInput")  # Identifier type handed to a batch action


@dataclass(frozen=True)
class Page(Generic[TItem]):
    """
    One page returned by a paged-list operation.

    Attributes:
        items: Items in source order, never more than the requested maximum
        next_cursor: Opaque continuation token; None means the source is exhausted
    """

    items: Sequence[TItem]
    next_cursor: str | None = None

    @property
    def is_last(self) -> bool:
        """True when the source reported no continuation cursor."""
        return self.next_cursor is None


@dataclass
class FetchSession:
    """
    Transient state of a single fetch.

    Attributes:
        cursor: Cursor for the next page request (None before the first request)
        remaining: Items still allowed before the limit is reached
        window_requests: Requests issued since the last cooldown
        requests: Total page requests issued by this fetch
        produced: Items yielded so far
    """

    cursor: str | None
    remaining: int
    window_requests: int = 0
    requests: int = 0
    produced: int = 0


@dataclass(frozen=True)
class ItemFailure(Generic[TInput]):
    """A failed batch input together with the error it raised."""

    input: TInput
    error: ActionError
    category: str = "unknown"

    @property
    def cause(self) -> BaseException:
        """The exception raised by the action."""
        return self.error.cause

    def describe(self) -> str:
        """Return a one-line description suitable for operators."""
        return str(self.error)


@dataclass
class BatchOutcome(Generic[TInput]):
    """
    Result of running one action across a batch of inputs.

    Attributes:
        failures: Failed inputs in the order they were attempted
        attempted: Number of inputs the action was applied to
        had_failures: True if and only if at least one input failed
    """

    failures: list[ItemFailure[TInput]] = field(default_factory=list)
    attempted: int = 0
    had_failures: bool = field(default=False, init=False)

    def __post_init__(self):
        """Derive the aggregate flag from the recorded failures."""
        self.had_failures = bool(self.failures)

    def record(self, failure: ItemFailure[TInput]) -> None:
        """Append a failure and update the aggregate flag."""
        self.failures.append(failure)
        self.had_failures = True

    @property
    def succeeded(self) -> int:
        """Number of inputs whose action completed without error."""
        return self.attempted - len(self.failures)

    @property
    def failed_inputs(self) -> list[TInput]:
        """Inputs that failed, in attempt order."""
        return [failure.input for failure in self.failures]

    def raise_for_failures(self) -> None:
        """Raise AggregateBatchFailure if any input failed."""
        if self.had_failures:
            raise AggregateBatchFailure(self.failures, attempted=self.attempted)


# Type alias for a single-item action; raising means the item failed
ActionFunc = Callable[[TInput], Any]

# Type alias for the immediate failure channel
FailureCallbackFunc = Callable[[ItemFailure[Any]], None]
