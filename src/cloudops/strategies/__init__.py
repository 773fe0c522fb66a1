"""Processing strategies."""

from .errors import (
    ActionError,
    AggregateBatchFailure,
    CloudOpsError,
    DefaultErrorClassifier,
    ErrorClassifier,
    ErrorInfo,
    FetchError,
    MissingFieldError,
)
from .rate_limit import FixedWindowStrategy, RateLimitStrategy, UnthrottledStrategy

__all__ = [
    "CloudOpsError",
    "FetchError",
    "MissingFieldError",
    "ActionError",
    "AggregateBatchFailure",
    "ErrorClassifier",
    "ErrorInfo",
    "DefaultErrorClassifier",
    "RateLimitStrategy",
    "FixedWindowStrategy",
    "UnthrottledStrategy",
]
