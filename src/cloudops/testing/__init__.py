"""Testing utilities for cloudops."""

from .mocks import FakeClock, FakePagedSource, MockAction

__all__ = ["FakeClock", "FakePagedSource", "MockAction"]
