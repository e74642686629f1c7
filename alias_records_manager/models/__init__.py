"""
Data models for domain configuration and Route53 objects.
"""

from .domain_config import (
    AliasTarget,
    ChangeAction,
    DomainConfig,
    HostedZone,
    Route53Params,
    RoutingPolicy,
    ZoneVisibility,
)

__all__ = [
    "AliasTarget",
    "ChangeAction",
    "DomainConfig",
    "HostedZone",
    "Route53Params",
    "RoutingPolicy",
    "ZoneVisibility",
]
