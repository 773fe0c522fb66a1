"""Rate-bounded cursor pagination"""

import logging
import time
from collections.abc import Iterator
from typing import Generic

from .base import FetchSession, Page, TItem
from .core import PagedSource, PaginationConfig, RateLimitConfig, SleepFunc
from .observers import ProcessingEvent, ProcessorObserver, emit_event
from .strategies import (
    DefaultErrorClassifier,
    ErrorClassifier,
    FetchError,
    FixedWindowStrategy,
    RateLimitStrategy,
)

logger = logging.getLogger(__name__)


class PagedFetcher(Generic[TItem]):
    """
    Drains a cursor-paginated source under a request-rate ceiling.

    Each fetch is a lazy, finite, non-restartable iterator. It stops as soon as
    the source reports no continuation cursor or the requested number of items
    has been produced, whichever comes first. Page requests never ask for more
    than ``max_page_size`` items, and after every ``requests_per_window``
    requests the fetcher sleeps ``window_seconds`` before the next one.
    """

    def __init__(
        self,
        fetch_page: PagedSource[TItem],
        config: PaginationConfig | None = None,
        rate_limit: RateLimitConfig | None = None,
        rate_limit_strategy: RateLimitStrategy | None = None,
        sleep: SleepFunc | None = None,
        error_classifier: ErrorClassifier | None = None,
        observers: list[ProcessorObserver] | None = None,
    ):
        """
        Initialize the paged fetcher.

        Args:
            fetch_page: Paged-list operation, called as fetch_page(cursor, max_items)
            config: Pagination configuration (page size cap, default limit)
            rate_limit: Request ceiling used to build the default strategy
            rate_limit_strategy: Strategy deciding when to pause (overrides rate_limit)
            sleep: Blocking sleep used for cooldowns (default: time.sleep)
            error_classifier: Strategy for classifying errors (default: DefaultErrorClassifier)
            observers: List of observers for events
        """
        self.config = config or PaginationConfig()
        self.config.validate()

        if rate_limit_strategy is None:
            rate_limit = rate_limit or RateLimitConfig()
            rate_limit.validate()
            rate_limit_strategy = FixedWindowStrategy(
                requests_per_window=rate_limit.requests_per_window,
                window_seconds=rate_limit.window_seconds,
            )

        self.fetch_page = fetch_page
        self.rate_limit_strategy = rate_limit_strategy
        self.sleep = sleep or time.sleep
        self.error_classifier = error_classifier or DefaultErrorClassifier()
        self.observers = observers or []

    def fetch(self, limit: int | None = None) -> Iterator[TItem]:
        """
        Lazily fetch up to ``limit`` items.

        The limit is checked here rather than on first iteration, so a bad
        limit fails at the call site.

        Args:
            limit: Maximum number of items to produce (default: config.default_limit)

        Returns:
            Iterator over the retrieved items, in source order

        Raises:
            ValueError: If limit is negative
            FetchError: While iterating, if a page request fails
        """
        if limit is None:
            limit = self.config.default_limit
        if limit < 0:
            raise ValueError(
                f"limit must be >= 0 (got {limit}). "
                f"Pass 0 to fetch nothing or a positive number of items."
            )
        return self._iterate(FetchSession(cursor=None, remaining=limit))

    def fetch_all(self, limit: int | None = None) -> list[TItem]:
        """Fetch eagerly. Any page failure fails the whole call."""
        return list(self.fetch(limit))

    def _iterate(self, session: FetchSession) -> Iterator[TItem]:
        limit = session.remaining
        emit_event(self.observers, ProcessingEvent.FETCH_STARTED, {"limit": limit})

        if session.remaining == 0:
            self._finish(session)
            return

        self.rate_limit_strategy.reset()

        while True:
            if session.requests > 0:
                self._wait_for_window(session)

            page = self._request_page(session)

            # A misbehaving source may return more than requested
            items = list(page.items)[: session.remaining]
            for item in items:
                session.produced += 1
                session.remaining -= 1
                yield item

            if page.next_cursor is None:
                logger.debug(f"Source exhausted after {session.requests} requests")
                break
            if session.remaining == 0:
                logger.debug(f"Limit of {limit} items reached, more pages available")
                break
            session.cursor = page.next_cursor

        self._finish(session)

    def _wait_for_window(self, session: FetchSession) -> None:
        """Pause if the current rate window is used up."""
        delay = self.rate_limit_strategy.before_request(session.window_requests)
        if delay <= 0:
            return

        emit_event(
            self.observers,
            ProcessingEvent.COOLDOWN_STARTED,
            {"duration": delay, "requests": session.requests},
        )
        logger.info(
            f"ℹ️  Issued {session.window_requests} requests in this window, "
            f"pausing for {delay:.1f}s"
        )
        self.sleep(delay)
        session.window_requests = 0
        emit_event(self.observers, ProcessingEvent.COOLDOWN_ENDED, {"duration": delay})

    def _request_page(self, session: FetchSession) -> Page[TItem]:
        """Issue one page request and account for it in the session."""
        max_items = min(session.remaining, self.config.max_page_size)
        request_number = session.requests + 1
        try:
            page = self.fetch_page(session.cursor, max_items)
        except FetchError as e:
            self._fail(session, e)
            raise
        except Exception as e:
            error = FetchError(f"page request {request_number} failed: {e}", cause=e)
            self._fail(session, error)
            raise error from e

        session.requests += 1
        session.window_requests += 1

        emit_event(
            self.observers,
            ProcessingEvent.PAGE_FETCHED,
            {
                "request": session.requests,
                "max_items": max_items,
                "item_count": len(page.items),
                "has_more": page.next_cursor is not None,
            },
        )
        logger.debug(
            f"Page {session.requests}: {len(page.items)} items "
            f"(asked for {max_items}, more={page.next_cursor is not None})"
        )
        return page

    def _fail(self, session: FetchSession, error: FetchError) -> None:
        logger.error(
            f"✗ Fetch aborted after {session.requests} requests and "
            f"{session.produced} items: {error}"
        )
        emit_event(
            self.observers,
            ProcessingEvent.FETCH_FAILED,
            {
                "requests": session.requests,
                "produced": session.produced,
                "error": str(error)[:200],
                "error_category": self.error_classifier.classify(error).error_category,
            },
        )

    def _finish(self, session: FetchSession) -> None:
        logger.info(f"✓ Fetched {session.produced} items in {session.requests} requests")
        emit_event(
            self.observers,
            ProcessingEvent.FETCH_COMPLETED,
            {"requests": session.requests, "produced": session.produced},
        )


def paged_fetch(
    fetch_page: PagedSource[TItem],
    limit: int,
    **kwargs,
) -> Iterator[TItem]:
    """
    Lazily drain ``fetch_page`` up to ``limit`` items.

    Keyword arguments are passed to PagedFetcher.
    """
    return PagedFetcher(fetch_page, **kwargs).fetch(limit)
