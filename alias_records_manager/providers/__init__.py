"""
Route53 provider implementations.

This package contains the boto3 client factory, the throttling and paging
helpers, and an in-memory mock client.
"""

from .aws_helpers import RetryPolicy, get_aws_paged_results, throttled_call
from .dns_client import DNSClient
from .mock_provider import MockRoute53Client
from .route53_client import Route53ClientConfig, create_route53_client

__all__ = [
    "DNSClient",
    "MockRoute53Client",
    "RetryPolicy",
    "Route53ClientConfig",
    "create_route53_client",
    "get_aws_paged_results",
    "throttled_call",
]
