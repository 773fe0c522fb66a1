"""Core components for paged retrieval and batch execution."""

from .config import MAX_PAGE_SIZE, CliConfig, PaginationConfig, RateLimitConfig
from .protocols import PagedSource, SleepFunc

__all__ = [
    "MAX_PAGE_SIZE",
    "CliConfig",
    "PaginationConfig",
    "RateLimitConfig",
    "PagedSource",
    "SleepFunc",
]
