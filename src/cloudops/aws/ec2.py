"""EC2 instance operations."""

import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from ..strategies import FetchError
from .models import InstanceAddresses, InstanceSummary, require_field

logger = logging.getLogger(__name__)


class InstanceService:
    """
    Lists and controls EC2 instances through a boto3 EC2 client.

    The start/stop/terminate/reboot methods take a single instance ID and
    raise on failure, so they can be handed to BatchExecutor directly.
    """

    def __init__(self, client: Any):
        """
        Initialize instance service.

        Args:
            client: boto3 EC2 client
        """
        self.client = client

    def _describe(self, context: str, **kwargs: Any) -> list[dict[str, Any]]:
        try:
            response = self.client.describe_instances(**kwargs)
        except (ClientError, BotoCoreError) as e:
            raise FetchError(f"failed to {context}: {e}", cause=e) from e
        reservations = require_field(response, "Reservations", "DescribeInstances response")
        return [
            instance
            for reservation in reservations
            for instance in reservation.get("Instances") or []
        ]

    def list_instances(self) -> list[InstanceSummary]:
        """Return every instance in the region, sorted by name."""
        rows = [
            InstanceSummary.from_instance(instance)
            for instance in self._describe("list instances")
        ]
        rows.sort(key=lambda row: row.name)
        logger.debug(f"Listed {len(rows)} instances")
        return rows

    def describe_addresses(self, instance_id: str) -> list[InstanceAddresses]:
        """Return the private and public IP addresses of one instance."""
        instances = self._describe("get instance details", InstanceIds=[instance_id])
        return [InstanceAddresses.model_validate(instance) for instance in instances]

    def start_instance(self, instance_id: str) -> None:
        """Start one instance."""
        self.client.start_instances(InstanceIds=[instance_id])

    def stop_instance(self, instance_id: str) -> None:
        """Stop one instance."""
        self.client.stop_instances(InstanceIds=[instance_id])

    def terminate_instance(self, instance_id: str) -> None:
        """Terminate one instance."""
        self.client.terminate_instances(InstanceIds=[instance_id])

    def reboot_instance(self, instance_id: str) -> None:
        """Reboot one instance."""
        self.client.reboot_instances(InstanceIds=[instance_id])
