"""Request-rate strategies for throttled sources."""

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class RateLimitStrategy(ABC):
    """Strategy deciding when a paged fetch must pause before its next request."""

    @abstractmethod
    def before_request(self, window_requests: int) -> float:
        """
        Called before every page request except the first.

        Args:
            window_requests: Requests issued since the last pause

        Returns:
            Seconds to sleep before issuing the request (0.0 for no pause)
        """
        ...

    def reset(self) -> None:
        """Forget any per-fetch state. Called when a fetch starts."""
        return None


class FixedWindowStrategy(RateLimitStrategy):
    """
    Fixed request quota per window, followed by an unconditional cooldown.

    Up to ``requests_per_window`` requests may be issued; the next one waits
    ``window_seconds`` first. The caller zeroes its window counter after each
    pause, not after each request.
    """

    def __init__(self, requests_per_window: int = 5, window_seconds: float = 1.0):
        """
        Initialize fixed window strategy.

        Args:
            requests_per_window: Requests allowed before a pause is required
            window_seconds: Duration of the pause in seconds
        """
        if requests_per_window < 1:
            raise ValueError(
                f"requests_per_window must be >= 1 (got {requests_per_window}). "
                f"Set requests_per_window to the source's per-window request ceiling."
            )
        if window_seconds < 0:
            raise ValueError(
                f"window_seconds must be >= 0 (got {window_seconds}). "
                f"Set window_seconds to a non-negative number of seconds."
            )
        self.requests_per_window = requests_per_window
        self.window_seconds = window_seconds

    def before_request(self, window_requests: int) -> float:
        """Pause once the window quota has been used up."""
        if window_requests >= self.requests_per_window:
            logger.debug(
                f"Request quota of {self.requests_per_window} used, "
                f"pausing for {self.window_seconds:.1f}s"
            )
            return self.window_seconds
        return 0.0


class UnthrottledStrategy(RateLimitStrategy):
    """Never pauses. For sources without a request ceiling."""

    def before_request(self, window_requests: int) -> float:
        """Always allow the request immediately."""
        return 0.0
