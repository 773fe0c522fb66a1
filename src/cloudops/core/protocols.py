"""Type protocols for the collaborators the core consumes."""

from typing import Protocol, TypeVar

from ..base import Page

TItem_co = TypeVar("TItem_co", covariant=True)


class PagedSource(Protocol[TItem_co]):
    """Protocol that any paged-list operation must satisfy."""

    def __call__(self, cursor: str | None, max_items: int) -> Page[TItem_co]:
        """Fetch at most ``max_items`` items starting at ``cursor``."""
        ...


class SleepFunc(Protocol):
    """Protocol for the blocking pause used between rate windows."""

    def __call__(self, seconds: float) -> None:
        """Block for ``seconds``."""
        ...
