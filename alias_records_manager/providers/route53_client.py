"""
Route53 client construction.

Region, credentials, HTTP options and an optional named profile are passed in
explicitly through Route53ClientConfig instead of being read from a shared
host object.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Optional

import boto3
from botocore.config import Config

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"

CREDENTIAL_KEYS = ("aws_access_key_id", "aws_secret_access_key", "aws_session_token")
HTTP_OPTION_KEYS = ("connect_timeout", "read_timeout", "proxies", "max_pool_connections")


@dataclass
class Route53ClientConfig:
    """Settings used to build a Route53 client."""

    region: str = DEFAULT_REGION
    credentials: Dict[str, str] = field(default_factory=dict)
    http_options: Dict = field(default_factory=dict)
    profile: Optional[str] = None

    @classmethod
    def from_dict(cls, config: Optional[Dict]) -> "Route53ClientConfig":
        config = config or {}
        credentials = {
            key: value
            for key, value in (config.get("credentials") or {}).items()
            if key in CREDENTIAL_KEYS and value
        }
        http_options = {
            key: value
            for key, value in (config.get("http_options") or {}).items()
            if key in HTTP_OPTION_KEYS
        }
        return cls(
            region=config.get("region") or DEFAULT_REGION,
            credentials=credentials,
            http_options=http_options,
            profile=config.get("profile"),
        )

    def with_overrides(
        self, profile: Optional[str] = None, region: Optional[str] = None
    ) -> "Route53ClientConfig":
        """
        Apply a per-domain profile. The region override only takes effect
        together with a profile; explicit keys are dropped in favour of the
        profile's credentials.
        """
        if not profile:
            return self
        return replace(self, profile=profile, region=region or self.region, credentials={})


def create_route53_client(config: Route53ClientConfig):
    """Create a boto3 Route53 client for the given configuration."""
    if config.profile:
        logger.info(f"Using AWS profile '{config.profile}' for Route53")
        session = boto3.Session(profile_name=config.profile, region_name=config.region)
    else:
        session = boto3.Session(region_name=config.region, **config.credentials)

    return session.client("route53", config=Config(**config.http_options))
