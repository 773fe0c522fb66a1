"""Operator tooling for listing and manipulating AWS resources.

This package provides the two pieces of the CLI with real state to track:

- PagedFetcher: drains a cursor-paginated API under a fixed request-rate
  ceiling and a caller-supplied item limit, as a lazy iterator
- BatchExecutor: applies one single-target action to many targets in order,
  reporting each failure as it happens and a single aggregate verdict

Example:
    >>> from cloudops import BatchExecutor, PagedFetcher
    >>> from cloudops.testing import FakeClock, FakePagedSource, MockAction
    >>>
    >>> clock = FakeClock()
    >>> fetcher = PagedFetcher(FakePagedSource(range(120)), sleep=clock.sleep)
    >>> len(fetcher.fetch_all(limit=100))
    100
    >>>
    >>> executor = BatchExecutor(MockAction(fail_for=["i-2"]))
    >>> executor.run_batch(["i-1", "i-2", "i-3"])
    True
"""

# Core classes
from .base import (
    ActionFunc,
    BatchOutcome,
    FailureCallbackFunc,
    FetchSession,
    ItemFailure,
    Page,
)

# Configuration
from .core import (
    MAX_PAGE_SIZE,
    CliConfig,
    PagedSource,
    PaginationConfig,
    RateLimitConfig,
    SleepFunc,
)

# Batch execution
from .executor import BatchExecutor, run_batch

# Observers
from .observers import BaseObserver, MetricsObserver, ProcessingEvent, ProcessorObserver

# Paged retrieval
from .paging import PagedFetcher, paged_fetch

# Errors and rate limit strategies
from .strategies import (
    ActionError,
    AggregateBatchFailure,
    CloudOpsError,
    DefaultErrorClassifier,
    ErrorClassifier,
    ErrorInfo,
    FetchError,
    FixedWindowStrategy,
    MissingFieldError,
    RateLimitStrategy,
    UnthrottledStrategy,
)

__all__ = [
    # Core
    "ActionFunc",
    "BatchOutcome",
    "FailureCallbackFunc",
    "FetchSession",
    "ItemFailure",
    "Page",
    # Configuration
    "MAX_PAGE_SIZE",
    "CliConfig",
    "PaginationConfig",
    "RateLimitConfig",
    "PagedSource",
    "SleepFunc",
    # Components
    "BatchExecutor",
    "PagedFetcher",
    "paged_fetch",
    "run_batch",
    # Errors
    "CloudOpsError",
    "FetchError",
    "MissingFieldError",
    "ActionError",
    "AggregateBatchFailure",
    "ErrorClassifier",
    "ErrorInfo",
    "DefaultErrorClassifier",
    # Rate limit strategies
    "RateLimitStrategy",
    "FixedWindowStrategy",
    "UnthrottledStrategy",
    # Observers
    "ProcessorObserver",
    "BaseObserver",
    "MetricsObserver",
    "ProcessingEvent",
]

__version__ = "0.1.0"
