"""
Alias Records Manager - Route53 alias records for custom domains

Finds the most specific hosted zone for a custom domain and creates, updates
or deletes the alias record pointing it at its endpoint, with simple, latency
and weighted routing and split-horizon (public plus private zone) support.
"""

__version__ = "1.0.0"
__author__ = "Alias Records Manager Team"
__description__ = "Route53 alias record management for custom domains"

from .core.dns_manager import DNSManager
from .core.route53_wrapper import Route53Wrapper
from .models.domain_config import ChangeAction, DomainConfig
from .providers.dns_client import DNSClient

__all__ = [
    "ChangeAction",
    "DNSClient",
    "DNSManager",
    "DomainConfig",
    "Route53Wrapper",
]
