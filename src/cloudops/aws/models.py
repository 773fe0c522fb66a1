"""Pydantic models for the AWS responses cloudops reads."""

from datetime import datetime, timezone
from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..strategies import FetchError, MissingFieldError

UNKNOWN_INSTANCE_ID = "i-?????????????????"
NO_NAME = "<no-name>"
UNKNOWN_STATE = "unknown"

TModel = TypeVar("TModel", bound=BaseModel)


class AwsRecord(BaseModel):
    """Base for records parsed from boto3 response dicts."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class InstanceSummary(AwsRecord):
    """One row of the instance listing."""

    id: Annotated[str, Field(description="Instance ID")]
    name: Annotated[str, Field(description="Value of the Name tag")]
    state: Annotated[str, Field(description="Instance state name")]

    @classmethod
    def from_instance(cls, instance: dict[str, Any]) -> "InstanceSummary":
        """Build a row from an EC2 Instance dict, filling in placeholders."""
        name = next(
            (
                tag["Value"]
                for tag in instance.get("Tags") or []
                if tag.get("Key") == "Name" and tag.get("Value") is not None
            ),
            NO_NAME,
        )
        return cls(
            id=instance.get("InstanceId") or UNKNOWN_INSTANCE_ID,
            name=name,
            state=(instance.get("State") or {}).get("Name") or UNKNOWN_STATE,
        )


class InstanceAddresses(AwsRecord):
    """IP addresses of one instance."""

    instance_id: str = Field(default=UNKNOWN_INSTANCE_ID, alias="InstanceId")
    private_ip: str = Field(default="", alias="PrivateIpAddress")
    public_ip: str = Field(default="", alias="PublicIpAddress")


class Bucket(AwsRecord):
    """An S3 bucket."""

    name: str = Field(alias="Name")
    created: datetime | None = Field(default=None, alias="CreationDate")


class LogGroup(AwsRecord):
    """A CloudWatch Logs log group."""

    name: str = Field(alias="logGroupName")
    stored_bytes: int | None = Field(default=None, alias="storedBytes")


class LogStream(AwsRecord):
    """A CloudWatch Logs log stream."""

    name: str = Field(alias="logStreamName")
    last_event_timestamp: int | None = Field(default=None, alias="lastEventTimestamp")
    stored_bytes: int | None = Field(default=None, alias="storedBytes")

    @property
    def last_event_time(self) -> datetime | None:
        """Time of the last ingested event (UTC), if the stream has any."""
        if self.last_event_timestamp is None:
            return None
        return datetime.fromtimestamp(self.last_event_timestamp / 1000, tz=timezone.utc)


def parse_record(model: type[TModel], raw: dict[str, Any], context: str) -> TModel:
    """
    Validate one response entry.

    Raises:
        MissingFieldError: If a required field is absent
        FetchError: If the entry is otherwise malformed
    """
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        for error in e.errors():
            if error["type"] == "missing":
                raise MissingFieldError(str(error["loc"][-1]), context) from e
        raise FetchError(f"malformed {context}: {e}", cause=e) from e


def require_field(response: dict[str, Any], field_name: str, context: str) -> Any:
    """Return ``response[field_name]`` or raise MissingFieldError."""
    value = response.get(field_name)
    if value is None:
        raise MissingFieldError(field_name, context)
    return value
