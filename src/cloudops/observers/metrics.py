"""Metrics collection observer."""

import json
from typing import Any

from .base import BaseObserver, ProcessingEvent


class MetricsObserver(BaseObserver):
    """Collect counters for fetches and batches."""

    def __init__(self):
        """Initialize metrics collector."""
        self.metrics = {
            "pages_fetched": 0,
            "items_fetched": 0,
            "fetch_failures": 0,
            "cooldowns": 0,
            "total_cooldown_time": 0.0,
            "items_processed": 0,
            "items_succeeded": 0,
            "items_failed": 0,
            "error_counts": {},
        }

    def on_event(
        self,
        event: ProcessingEvent,
        data: dict[str, Any],
    ) -> None:
        """Collect metrics from events."""
        if event == ProcessingEvent.PAGE_FETCHED:
            self.metrics["pages_fetched"] += 1
            self.metrics["items_fetched"] += data.get("item_count", 0)

        elif event == ProcessingEvent.FETCH_FAILED:
            self.metrics["fetch_failures"] += 1
            self._count_error(data)

        elif event == ProcessingEvent.COOLDOWN_ENDED:
            self.metrics["cooldowns"] += 1
            if "duration" in data:
                self.metrics["total_cooldown_time"] += data["duration"]

        elif event == ProcessingEvent.ITEM_COMPLETED:
            self.metrics["items_processed"] += 1
            self.metrics["items_succeeded"] += 1

        elif event == ProcessingEvent.ITEM_FAILED:
            self.metrics["items_processed"] += 1
            self.metrics["items_failed"] += 1
            self._count_error(data)

    def _count_error(self, data: dict[str, Any]) -> None:
        if "error_category" in data:
            category = data["error_category"]
            self.metrics["error_counts"][category] = (
                self.metrics["error_counts"].get(category, 0) + 1
            )

    def get_metrics(self) -> dict[str, Any]:
        """Get collected metrics with computed statistics."""
        return {
            **self.metrics,
            "error_counts": dict(self.metrics["error_counts"]),
            "success_rate": (
                self.metrics["items_succeeded"] / self.metrics["items_processed"]
                if self.metrics["items_processed"] > 0
                else 0
            ),
        }

    def reset(self) -> None:
        """Reset all metrics."""
        self.__init__()

    def export_json(self) -> str:
        """Export metrics as JSON string."""
        return json.dumps(self.get_metrics(), indent=2)

    def export_prometheus(self) -> str:
        """Export metrics in Prometheus text format.

        Returns:
            Prometheus-formatted metrics string

        Example:
            >>> observer = MetricsObserver()
            >>> # ... fetch and run batches ...
            >>> print(observer.export_prometheus())
            # HELP cloudops_pages_fetched Total pages fetched
            # TYPE cloudops_pages_fetched counter
            cloudops_pages_fetched 3
            ...
        """
        metrics = self.get_metrics()

        lines = []

        counters = [
            ("pages_fetched", "Total pages fetched"),
            ("items_fetched", "Total items received from paged sources"),
            ("fetch_failures", "Total failed fetches"),
            ("cooldowns", "Total rate window cooldowns"),
            ("items_processed", "Total batch items processed"),
            ("items_succeeded", "Total batch items succeeded"),
            ("items_failed", "Total batch items failed"),
        ]

        for metric_name, help_text in counters:
            lines.append(f"# HELP cloudops_{metric_name} {help_text}")
            lines.append(f"# TYPE cloudops_{metric_name} counter")
            lines.append(f"cloudops_{metric_name} {metrics.get(metric_name, 0)}")
            lines.append("")

        gauges = [
            ("success_rate", "Batch success rate (0.0 to 1.0)"),
            ("total_cooldown_time", "Total time spent in rate window cooldown (seconds)"),
        ]

        for metric_name, help_text in gauges:
            lines.append(f"# HELP cloudops_{metric_name} {help_text}")
            lines.append(f"# TYPE cloudops_{metric_name} gauge")
            lines.append(f"cloudops_{metric_name} {metrics.get(metric_name, 0)}")
            lines.append("")

        error_counts = metrics.get("error_counts", {})
        if error_counts:
            lines.append("# HELP cloudops_errors_total Total errors by category")
            lines.append("# TYPE cloudops_errors_total counter")
            for category, count in error_counts.items():
                safe_category = category.replace('"', '\\"')
                lines.append(f'cloudops_errors_total{{error_category="{safe_category}"}} {count}')
            lines.append("")

        return "\n".join(lines)
