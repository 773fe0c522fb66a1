"""AWS collaborators: thin boto3 wrappers with validated responses."""

from .ec2 import InstanceService
from .logs import LogService
from .models import Bucket, InstanceAddresses, InstanceSummary, LogGroup, LogStream
from .s3 import BucketService
from .session import make_session

__all__ = [
    "InstanceService",
    "BucketService",
    "LogService",
    "InstanceSummary",
    "InstanceAddresses",
    "Bucket",
    "LogGroup",
    "LogStream",
    "make_session",
]
