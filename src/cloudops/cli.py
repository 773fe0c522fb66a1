"""Command-line interface for cloudops.

Usage:
    cloudops ec2 instances
    cloudops ec2 addr INSTANCE_ID
    cloudops ec2 stop INSTANCE_ID [INSTANCE_ID ...]
    cloudops s3 buckets
    cloudops logs groups [--prefix P] [--limit N]
    cloudops logs streams GROUP [--prefix P] [--limit N]
"""

import argparse
import logging
import sys
from collections.abc import Callable, Iterable
from functools import cached_property
from typing import Any

from botocore.exceptions import BotoCoreError

from .aws import BucketService, InstanceService, LogService, make_session
from .core import CliConfig
from .executor import BatchExecutor
from .formatting import (
    format_addresses,
    format_bucket,
    format_instances,
    format_log_group,
    format_log_streams,
)
from .paging import PagedFetcher
from .strategies import FetchError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1

INSTANCE_ACTIONS = {
    "start": ("start_instance", "Start instances."),
    "stop": ("stop_instance", "Stop instances."),
    "terminate": ("terminate_instance", "Terminate instances."),
    "reboot": ("reboot_instance", "Reboot instances."),
}

SessionFactory = Callable[[CliConfig], Any]


class Services:
    """
    AWS services bound to one session.

    Each client is created on first use, so a command only needs the
    configuration (region, endpoints) of the service it talks to.
    """

    def __init__(self, session: Any):
        self.session = session

    @cached_property
    def instances(self) -> InstanceService:
        return InstanceService(self.session.client("ec2"))

    @cached_property
    def buckets(self) -> BucketService:
        return BucketService(self.session.client("s3"))

    @cached_property
    def logs(self) -> LogService:
        return LogService(self.session.client("logs"))


def non_negative_int(value: str) -> int:
    """argparse type for counts that may be zero but not negative."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0 (got {number})")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(prog="cloudops", description="AWS command-line tool")
    parser.add_argument("--profile", help="AWS profile name (default: $AWS_PROFILE)")
    parser.add_argument("--region", help="AWS region (default: $AWS_REGION)")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress (-v) or debug details (-vv)",
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")

    services = parser.add_subparsers(dest="service", required=True)

    ec2 = services.add_parser("ec2", help="EC2 instances").add_subparsers(
        dest="command", required=True
    )
    ec2.add_parser("instances", help="List instances.")
    addr = ec2.add_parser("addr", help="Show an instance's IP address(es).")
    addr.add_argument("instance_id")
    for command, (_, help_text) in INSTANCE_ACTIONS.items():
        action = ec2.add_parser(command, help=help_text)
        action.add_argument("instance_ids", nargs="+", metavar="INSTANCE_ID")

    s3 = services.add_parser("s3", help="S3 buckets").add_subparsers(
        dest="command", required=True
    )
    s3.add_parser("buckets", help="List buckets.")

    logs = services.add_parser("logs", help="CloudWatch Logs").add_subparsers(
        dest="command", required=True
    )
    groups = logs.add_parser("groups", help="List log groups.")
    groups.add_argument("--prefix", help="Only groups whose name starts with this")
    groups.add_argument(
        "--limit", type=non_negative_int, default=None, help="Maximum groups to list"
    )
    streams = logs.add_parser(
        "streams",
        help="List log streams of a group, newest first (alphabetically with --prefix).",
    )
    streams.add_argument("group")
    streams.add_argument("--prefix", help="Only streams whose name starts with this")
    streams.add_argument(
        "--limit", type=non_negative_int, default=None, help="Maximum streams to list"
    )

    return parser


def configure_logging(verbose: int = 0, quiet: bool = False) -> None:
    """Configure root logging for a CLI run."""
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", force=True)
    # botocore is chatty at DEBUG
    logging.getLogger("botocore").setLevel(max(level, logging.INFO))


def _print_lines(lines: Iterable[str]) -> None:
    for line in lines:
        print(line)


def _run_fetch(config: CliConfig, fetch_page: Any, limit: int | None) -> Iterable[Any]:
    fetcher = PagedFetcher(fetch_page, config=config.pagination, rate_limit=config.rate_limit)
    return fetcher.fetch(limit)


def _run_batch(services: Services, command: str, instance_ids: list[str]) -> int:
    method_name, _ = INSTANCE_ACTIONS[command]
    executor = BatchExecutor(
        getattr(services.instances, method_name), action_name=f"{command} instance"
    )
    outcome = executor.run(instance_ids)
    if outcome.had_failures:
        print(
            f"error: {len(outcome.failures)} of {outcome.attempted} instances failed to "
            f"{command}: {', '.join(outcome.failed_inputs)}",
            file=sys.stderr,
        )
        return EXIT_FAILURE
    return EXIT_OK


def dispatch(args: argparse.Namespace, config: CliConfig, services: Services) -> int:
    """Run the parsed command and return the exit status."""
    logger.debug(f"Dispatching {args.service} {args.command}")
    if args.service == "ec2":
        if args.command == "instances":
            _print_lines(format_instances(services.instances.list_instances()))
        elif args.command == "addr":
            for addresses in services.instances.describe_addresses(args.instance_id):
                _print_lines(format_addresses(addresses))
        else:
            return _run_batch(services, args.command, args.instance_ids)

    elif args.service == "s3":
        _print_lines(format_bucket(bucket) for bucket in services.buckets.list_buckets())

    elif args.service == "logs":
        if args.command == "groups":
            groups = _run_fetch(config, services.logs.log_group_page(args.prefix), args.limit)
            _print_lines(format_log_group(group) for group in groups)
        else:
            streams = _run_fetch(
                config, services.logs.log_stream_page(args.group, args.prefix), args.limit
            )
            _print_lines(format_log_streams(streams))

    return EXIT_OK


def main(
    args: list[str] | None = None,
    session_factory: SessionFactory = make_session,
) -> int:
    """
    Main entry point.

    Args:
        args: Command line arguments. If None, uses sys.argv.
        session_factory: Builds the boto3 session from the config

    Returns:
        Exit code (0 for success, 1 if any fetch or batch item failed).
    """
    parsed = build_parser().parse_args(args)
    configure_logging(parsed.verbose, parsed.quiet)

    config = CliConfig.from_env()
    if parsed.profile:
        config.profile = parsed.profile
    if parsed.region:
        config.region = parsed.region

    try:
        config.validate()
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    try:
        services = Services(session_factory(config))
        return dispatch(parsed, config, services)
    except (FetchError, BotoCoreError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
