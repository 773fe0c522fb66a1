"""Observers for fetch and batch events."""

from .base import BaseObserver, ProcessingEvent, ProcessorObserver, emit_event
from .metrics import MetricsObserver

__all__ = [
    "ProcessorObserver",
    "BaseObserver",
    "ProcessingEvent",
    "MetricsObserver",
    "emit_event",
]
