"""Example usage of the cloudops core.

This drives the paged fetcher and the batch executor against in-memory fakes,
so it runs without AWS credentials. Swap the fakes for
``LogService(client).log_stream_page(...)`` and ``InstanceService(client).stop_instance``
to talk to a real account.
"""

import logging

from cloudops import BatchExecutor, MetricsObserver, PagedFetcher, RateLimitConfig
from cloudops.testing import FakeClock, FakePagedSource, MockAction

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)


def example_paged_fetch():
    """Fetch 320 items from a 1000-item source under the default rate ceiling."""
    print("\n=== Paged fetch ===")

    clock = FakeClock()
    source = FakePagedSource([f"stream-{i:04d}" for i in range(1000)], clock=clock)
    metrics = MetricsObserver()

    fetcher = PagedFetcher(source, sleep=clock.sleep, observers=[metrics])
    items = fetcher.fetch_all(limit=320)

    print(f"Fetched {len(items)} items in {source.call_count} requests")
    print(f"Paused {len(clock.sleeps)} times, {clock.now:.1f}s of (fake) time")
    print(f"First: {items[0]}, last: {items[-1]}")
    print(metrics.export_json())


def example_custom_rate_limit():
    """Stream lazily under a tighter ceiling of two requests every half second."""
    print("\n=== Custom rate limit, streaming ===")

    clock = FakeClock()
    source = FakePagedSource(range(200), clock=clock)
    fetcher = PagedFetcher(
        source,
        rate_limit=RateLimitConfig(requests_per_window=2, window_seconds=0.5),
        sleep=clock.sleep,
    )

    for item in fetcher.fetch(limit=160):
        if item % 50 == 0:
            print(f"  item {item} at t={clock.now:.1f}s")

    print(f"Request times: {source.request_times}")


def example_batch():
    """Stop four instances where one of them refuses."""
    print("\n=== Batch action ===")

    action = MockAction(fail_for=["i-0b"])
    executor = BatchExecutor(
        action,
        action_name="stop instance",
        on_failure=lambda failure: print(f"  callback: {failure.describe()}"),
    )
    outcome = executor.run(["i-0a", "i-0b", "i-0c", "i-0d"])

    print(f"Attempted {outcome.attempted}, succeeded {outcome.succeeded}")
    print(f"Had failures: {outcome.had_failures}, failed: {outcome.failed_inputs}")


def main():
    example_paged_fetch()
    example_custom_rate_limit()
    example_batch()


if __name__ == "__main__":
    main()
