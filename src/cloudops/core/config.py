"""Configuration management for cloudops."""

import os
from dataclasses import dataclass, field

# Hard per-call maximum of the paged sources we talk to
MAX_PAGE_SIZE = 50


@dataclass
class RateLimitConfig:
    """Configuration for the external request-rate ceiling."""

    requests_per_window: int = 5
    window_seconds: float = 1.0

    def validate(self) -> None:
        """Validate rate limit configuration."""
        if self.requests_per_window < 1:
            raise ValueError(
                f"requests_per_window must be >= 1 (got {self.requests_per_window}). "
                f"Set rate_limit.requests_per_window to a positive integer."
            )
        if self.window_seconds < 0:
            raise ValueError(
                f"window_seconds must be >= 0 (got {self.window_seconds}). "
                f"Set rate_limit.window_seconds to a non-negative number in seconds."
            )


@dataclass
class PaginationConfig:
    """Configuration for paged retrieval."""

    max_page_size: int = MAX_PAGE_SIZE
    default_limit: int = 50

    def validate(self) -> None:
        """Validate pagination configuration."""
        if not 1 <= self.max_page_size <= MAX_PAGE_SIZE:
            raise ValueError(
                f"max_page_size must be between 1 and {MAX_PAGE_SIZE} (got {self.max_page_size}). "
                f"The source rejects requests for more than {MAX_PAGE_SIZE} items."
            )
        if self.default_limit < 0:
            raise ValueError(
                f"default_limit must be >= 0 (got {self.default_limit}). "
                f"Set pagination.default_limit to 0 or a positive integer."
            )


@dataclass
class CliConfig:
    """Complete configuration for one cloudops invocation."""

    profile: str | None = None
    region: str | None = None

    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    pagination: PaginationConfig = field(default_factory=PaginationConfig)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "CliConfig":
        """Build a config from the standard AWS environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            profile=env.get("AWS_PROFILE") or None,
            region=env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION") or None,
        )

    def validate(self) -> None:
        """Validate complete configuration."""
        if self.region is not None and not self.region.strip():
            raise ValueError(
                "region cannot be whitespace only. "
                "Pass --region with a region name such as us-east-1, or omit it."
            )
        self.rate_limit.validate()
        self.pagination.validate()
