"""
DNS Client - Unified access to Route53 clients

This module picks the configured provider (real Route53 or the in-memory
mock) and hands out one Route53Wrapper per AWS profile/region combination.
"""

import logging
from typing import Dict, Optional, Tuple

from botocore.exceptions import BotoCoreError

from ..core.record_reconciler import DEFAULT_COMMENT_TAG
from ..core.route53_wrapper import Route53Wrapper
from ..exceptions import DomainConfigError
from ..models.domain_config import DomainConfig
from .aws_helpers import RetryPolicy
from .mock_provider import MockRoute53Client
from .route53_client import Route53ClientConfig, create_route53_client

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("route53", "mock")


class DNSClient:
    """Unified DNS client that supports the Route53 and mock providers."""

    def __init__(self, config: Dict):
        """Initialize DNS client with configuration."""
        self.config = config
        self.provider_name = self._get_provider_name()
        self.provider_config = config.get("dns_providers", {}).get(self.provider_name) or {}
        self.client_config = Route53ClientConfig.from_dict(self.provider_config)
        self.retry_policy = RetryPolicy.from_dict(config.get("retry"))
        self.comment_tag = config.get("record_comment_tag", DEFAULT_COMMENT_TAG)
        self._wrappers: Dict[Tuple[Optional[str], Optional[str]], Route53Wrapper] = {}

    def _get_provider_name(self) -> str:
        """Get DNS provider name based on configuration."""
        provider_name = self.config.get("default_provider", "route53")
        if provider_name not in SUPPORTED_PROVIDERS:
            logger.warning(f"Unknown provider '{provider_name}', using mock provider")
            return "mock"
        return provider_name

    def _create_client(self, client_config: Route53ClientConfig):
        if self.provider_name == "mock":
            return MockRoute53Client(self.provider_config, region=client_config.region)
        return create_route53_client(client_config)

    def for_domain(self, domain: DomainConfig) -> Route53Wrapper:
        """Get the wrapper for a domain, honouring its route53Profile/route53Region."""
        return self._get_wrapper(domain.route53_profile, domain.route53_region)

    @property
    def default_wrapper(self) -> Route53Wrapper:
        """Wrapper for domains without a profile override."""
        return self._get_wrapper()

    def _get_wrapper(self, profile: Optional[str] = None, region: Optional[str] = None) -> Route53Wrapper:
        if self.provider_name == "mock":
            # One shared in-memory account
            client_config = self.client_config
            key = (None, None)
        else:
            client_config = self.client_config.with_overrides(profile, region)
            key = (client_config.profile, client_config.region)

        if key not in self._wrappers:
            try:
                route53 = self._create_client(client_config)
            except BotoCoreError as e:
                raise DomainConfigError(
                    f"Cannot create Route53 client for profile '{client_config.profile}': {e}"
                ) from e
            self._wrappers[key] = Route53Wrapper(route53, self.retry_policy, self.comment_tag)
        return self._wrappers[key]
