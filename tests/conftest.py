"""Shared fixtures: boto3 clients wired to botocore Stubbers (no network)."""

import boto3
import pytest
from botocore.stub import Stubber


def make_client(service: str):
    return boto3.client(
        service,
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def ec2_stub():
    client = make_client("ec2")
    with Stubber(client) as stubber:
        yield client, stubber
        stubber.assert_no_pending_responses()


@pytest.fixture
def s3_stub():
    client = make_client("s3")
    with Stubber(client) as stubber:
        yield client, stubber
        stubber.assert_no_pending_responses()


@pytest.fixture
def logs_stub():
    client = make_client("logs")
    with Stubber(client) as stubber:
        yield client, stubber
        stubber.assert_no_pending_responses()


class StubSession:
    """Session stand-in handing out pre-stubbed clients."""

    def __init__(self, clients):
        self.clients = clients

    def client(self, service):
        return self.clients[service]


@pytest.fixture
def stub_session(ec2_stub, s3_stub, logs_stub):
    session = StubSession({"ec2": ec2_stub[0], "s3": s3_stub[0], "logs": logs_stub[0]})
    return session, {"ec2": ec2_stub[1], "s3": s3_stub[1], "logs": logs_stub[1]}
