"""boto3 session construction."""

import logging

import boto3

from ..core import CliConfig

logger = logging.getLogger(__name__)


def make_session(config: CliConfig) -> boto3.session.Session:
    """Create a boto3 session for the configured profile and region."""
    logger.debug(f"Creating session (profile={config.profile}, region={config.region})")
    return boto3.session.Session(profile_name=config.profile, region_name=config.region)
