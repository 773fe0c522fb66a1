"""CloudWatch Logs paged sources."""

import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from ..base import Page
from ..core import MAX_PAGE_SIZE, PagedSource
from ..strategies import FetchError
from .models import LogGroup, LogStream, parse_record, require_field

logger = logging.getLogger(__name__)


class LogService:
    """
    Paged access to log groups and log streams through a boto3 logs client.

    The methods here return page-fetch callables for PagedFetcher; they do no
    throttling of their own. DescribeLogStreams is limited to 5 requests per
    second per account and region.
    """

    def __init__(self, client: Any):
        """
        Initialize log service.

        Args:
            client: boto3 CloudWatch Logs client
        """
        self.client = client

    def _call(self, operation: str, context: str, **kwargs: Any) -> dict[str, Any]:
        try:
            return getattr(self.client, operation)(**kwargs)
        except (ClientError, BotoCoreError) as e:
            raise FetchError(f"failed to {context}: {e}", cause=e) from e

    def log_group_page(self, prefix: str | None = None) -> PagedSource[LogGroup]:
        """Return a page-fetch callable over DescribeLogGroups."""

        def fetch_page(cursor: str | None, max_items: int) -> Page[LogGroup]:
            kwargs: dict[str, Any] = {"limit": min(max_items, MAX_PAGE_SIZE)}
            if prefix:
                kwargs["logGroupNamePrefix"] = prefix
            if cursor is not None:
                kwargs["nextToken"] = cursor
            response = self._call("describe_log_groups", "list log groups", **kwargs)
            groups = require_field(response, "logGroups", "DescribeLogGroups response")
            return Page(
                items=[parse_record(LogGroup, group, "log group entry") for group in groups],
                next_cursor=_next_cursor(response, cursor),
            )

        return fetch_page

    def log_stream_page(
        self,
        group: str,
        prefix: str | None = None,
        newest_first: bool = True,
    ) -> PagedSource[LogStream]:
        """
        Return a page-fetch callable over DescribeLogStreams for one group.

        Streams are ordered by last event time (newest first unless
        ``newest_first`` is False). With a name prefix they are listed
        alphabetically instead, since the API only accepts a prefix when
        ordering by stream name.
        """

        def fetch_page(cursor: str | None, max_items: int) -> Page[LogStream]:
            kwargs: dict[str, Any] = {
                "logGroupName": group,
                "limit": min(max_items, MAX_PAGE_SIZE),
            }
            if prefix:
                kwargs["logStreamNamePrefix"] = prefix
                kwargs["orderBy"] = "LogStreamName"
                kwargs["descending"] = False
            else:
                kwargs["orderBy"] = "LastEventTime"
                kwargs["descending"] = newest_first
            if cursor is not None:
                kwargs["nextToken"] = cursor
            response = self._call(
                "describe_log_streams", f"list log streams of {group}", **kwargs
            )
            streams = require_field(response, "logStreams", "DescribeLogStreams response")
            return Page(
                items=[parse_record(LogStream, stream, "log stream entry") for stream in streams],
                next_cursor=_next_cursor(response, cursor),
            )

        return fetch_page


def _next_cursor(response: dict[str, Any], cursor: str | None) -> str | None:
    """Return the continuation token, treating a repeated token as the end."""
    next_token = response.get("nextToken")
    if next_token is not None and next_token == cursor:
        logger.debug("Source repeated its continuation token, treating as exhausted")
        return None
    return next_token
