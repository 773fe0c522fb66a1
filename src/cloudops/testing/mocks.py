"""Fake collaborators for testing."""

from collections.abc import Callable, Sequence
from typing import Any

from ..base import Page


class FakeClock:
    """Simulated clock whose sleep advances time instead of blocking."""

    def __init__(self, start: float = 0.0):
        """Initialize fake clock at ``start`` seconds."""
        self.now = start
        self.sleeps: list[float] = []

    def sleep(self, seconds: float) -> None:
        """Record the sleep and advance simulated time."""
        self.sleeps.append(seconds)
        self.now += seconds

    def time(self) -> float:
        """Current simulated time."""
        return self.now


class FakePagedSource:
    """In-memory cursor-paginated source."""

    def __init__(
        self,
        items: Sequence[Any],
        max_page_size: int = 50,
        fail_on_call: int | None = None,
        error: Exception | None = None,
        clock: FakeClock | None = None,
        cursor_after_last_full_page: bool = False,
    ):
        """
        Initialize fake paged source.

        Args:
            items: Every item the source holds, in order
            max_page_size: Largest page the source accepts; larger requests raise ValueError
            fail_on_call: Call number that raises ``error`` (1-indexed)
            error: Exception raised on ``fail_on_call`` (default: ConnectionError)
            clock: Clock used to timestamp requests
            cursor_after_last_full_page: Return a cursor with a final page that
                ends exactly at the last item, as some APIs do
        """
        self.items = list(items)
        self.max_page_size = max_page_size
        self.fail_on_call = fail_on_call
        self.error = error or ConnectionError("simulated transport failure")
        self.clock = clock
        self.cursor_after_last_full_page = cursor_after_last_full_page
        self.requests: list[tuple[str | None, int]] = []
        self.request_times: list[float] = []

    @property
    def call_count(self) -> int:
        """Number of page requests received."""
        return len(self.requests)

    def __call__(self, cursor: str | None, max_items: int) -> Page[Any]:
        """Return the page starting at ``cursor``."""
        self.requests.append((cursor, max_items))
        if self.clock is not None:
            self.request_times.append(self.clock.time())

        if self.fail_on_call is not None and self.call_count == self.fail_on_call:
            raise self.error
        if max_items < 1 or max_items > self.max_page_size:
            raise ValueError(f"max_items must be between 1 and {self.max_page_size}")

        start = int(cursor) if cursor is not None else 0
        end = start + max_items
        page_items = self.items[start:end]

        if end < len(self.items):
            next_cursor: str | None = str(end)
        elif end == len(self.items) and self.cursor_after_last_full_page:
            next_cursor = str(end)
        else:
            next_cursor = None
        return Page(items=page_items, next_cursor=next_cursor)


class MockAction:
    """Records every call and fails for chosen inputs."""

    def __init__(
        self,
        fail_for: Sequence[Any] = (),
        error_factory: Callable[[Any], Exception] | None = None,
    ):
        """
        Initialize mock action.

        Args:
            fail_for: Inputs for which the action raises
            error_factory: Builds the exception for a failing input
        """
        self.fail_for = set(fail_for)
        self.error_factory = error_factory or (lambda item: RuntimeError(f"cannot act on {item}"))
        self.calls: list[Any] = []
        self.__name__ = "mock_action"

    def __call__(self, item: Any) -> None:
        """Record the call and raise if ``item`` should fail."""
        self.calls.append(item)
        if item in self.fail_for:
            raise self.error_factory(item)
