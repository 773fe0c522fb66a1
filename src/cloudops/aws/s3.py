"""S3 bucket operations."""

from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from ..strategies import FetchError
from .models import Bucket, parse_record, require_field


class BucketService:
    """Lists S3 buckets through a boto3 S3 client."""

    def __init__(self, client: Any):
        self.client = client

    def list_buckets(self) -> list[Bucket]:
        """Return every bucket owned by the caller."""
        try:
            response = self.client.list_buckets()
        except (ClientError, BotoCoreError) as e:
            raise FetchError(f"failed to list buckets: {e}", cause=e) from e
        buckets = require_field(response, "Buckets", "ListBuckets response")
        return [parse_record(Bucket, bucket, "bucket entry") for bucket in buckets]
