"""Plain-text rendering of listings."""

from collections.abc import Iterable, Iterator

from .aws.models import Bucket, InstanceAddresses, InstanceSummary, LogGroup, LogStream

INSTANCE_ID_WIDTH = 19


def format_instances(rows: list[InstanceSummary]) -> list[str]:
    """Render instances as ``id state name`` with the state column padded."""
    state_width = max((len(row.state) for row in rows), default=0)
    return [
        f"{row.id.ljust(INSTANCE_ID_WIDTH)} {row.state.ljust(state_width)} {row.name}"
        for row in rows
    ]


def format_addresses(addresses: InstanceAddresses) -> list[str]:
    return [
        f"private IP: {addresses.private_ip}",
        f"public IP: {addresses.public_ip}",
    ]


def format_bucket(bucket: Bucket) -> str:
    return bucket.name


def format_log_group(group: LogGroup) -> str:
    return group.name


def format_log_streams(streams: Iterable[LogStream]) -> Iterator[str]:
    """Render log streams lazily, one line per stream as it arrives."""
    for stream in streams:
        last_event = stream.last_event_time
        last_event_str = last_event.isoformat(timespec="seconds") if last_event else "-"
        stored = "-" if stream.stored_bytes is None else str(stream.stored_bytes)
        yield f"{stream.name}  {last_event_str}  {stored}"
