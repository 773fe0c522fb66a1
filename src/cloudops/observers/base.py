"""Observer system for fetch and batch events."""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class ProcessingEvent(Enum):
    """Events that can be observed during fetching and batch execution."""

    FETCH_STARTED = "fetch_started"
    PAGE_FETCHED = "page_fetched"
    COOLDOWN_STARTED = "cooldown_started"
    COOLDOWN_ENDED = "cooldown_ended"
    FETCH_COMPLETED = "fetch_completed"
    FETCH_FAILED = "fetch_failed"
    BATCH_STARTED = "batch_started"
    ITEM_STARTED = "item_started"
    ITEM_COMPLETED = "item_completed"
    ITEM_FAILED = "item_failed"
    BATCH_COMPLETED = "batch_completed"


class ProcessorObserver(ABC):
    """Abstract base class for event observers."""

    @abstractmethod
    def on_event(
        self,
        event: ProcessingEvent,
        data: dict[str, Any],
    ) -> None:
        """
        Handle an event.

        Args:
            event: The event type
            data: Event-specific data
        """
        pass


class BaseObserver(ProcessorObserver):
    """Base observer with no-op implementation."""

    def on_event(
        self,
        event: ProcessingEvent,
        data: dict[str, Any],
    ) -> None:
        """Default: do nothing."""
        pass


def emit_event(
    observers: list[ProcessorObserver],
    event: ProcessingEvent,
    data: dict[str, Any] | None = None,
) -> None:
    """Emit event to all observers. A failing observer never stops the caller."""
    if not observers:
        return

    event_data = data or {}
    for observer in observers:
        try:
            observer.on_event(event, event_data)
        except Exception as e:
            logger.warning(f"⚠️  Observer error for event {event.name}: {e}")
