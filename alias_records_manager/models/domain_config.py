"""
Domain configuration models.

These dataclasses describe a single custom domain entry and the Route53
objects the resolver and reconciler work with. Domain entries are built from
serverless-style mappings (camelCase keys) via DomainConfig.from_dict.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from ..exceptions import DomainConfigError
from ..utils.validators import (
    strip_hosted_zone_prefix,
    validate_choice,
    validate_fqdn,
    validate_hosted_zone_id,
    validate_weight,
)

logger = logging.getLogger(__name__)

DEFAULT_WEIGHT = 200


class ChangeAction(str, Enum):
    """Route53 change actions supported for alias records"""

    UPSERT = "UPSERT"
    DELETE = "DELETE"


class RoutingPolicy(str, Enum):
    """Route53 routing policies"""

    SIMPLE = "simple"
    LATENCY = "latency"
    WEIGHTED = "weighted"


class ZoneVisibility(str, Enum):
    """Hosted zone privacy filter"""

    PUBLIC = "public"
    PRIVATE = "private"

    @classmethod
    def from_flag(cls, is_private: Optional[bool]) -> Optional["ZoneVisibility"]:
        if is_private is None:
            return None
        return cls.PRIVATE if is_private else cls.PUBLIC

    @property
    def is_private(self) -> bool:
        return self is ZoneVisibility.PRIVATE


@dataclass
class AliasTarget:
    """Endpoint the alias record points at"""

    dns_name: str
    # None means "the zone resolved for the domain itself"
    hosted_zone_id: Optional[str] = None


@dataclass
class Route53Params:
    """Routing policy parameters for the alias record"""

    routing_policy: RoutingPolicy = RoutingPolicy.SIMPLE
    set_identifier: Optional[str] = None
    weight: int = DEFAULT_WEIGHT
    health_check_id: Optional[str] = None


@dataclass
class DomainConfig:
    """A single custom domain entry"""

    given_domain_name: str
    alias_target: AliasTarget
    hosted_zone_id: Optional[str] = None
    hosted_zone_private: Optional[bool] = None
    split_horizon_dns: bool = False
    create_route53_record: bool = True
    route53_params: Route53Params = field(default_factory=Route53Params)
    route53_profile: Optional[str] = None
    route53_region: Optional[str] = None

    @property
    def zone_visibility(self) -> Optional[ZoneVisibility]:
        return ZoneVisibility.from_flag(self.hosted_zone_private)

    @classmethod
    def from_dict(cls, data: Dict) -> "DomainConfig":
        """
        Build a DomainConfig from a serverless-style mapping.

        Args:
            data: Mapping with keys such as domainName, hostedZoneId,
                aliasTarget and route53Params

        Returns:
            The validated DomainConfig

        Raises:
            DomainConfigError: If a required key is missing or a value is invalid
        """
        if not isinstance(data, dict):
            raise DomainConfigError(f"Domain entry must be a mapping, got {type(data).__name__}")

        domain_name = data.get("domainName")
        if not validate_fqdn(domain_name):
            raise DomainConfigError(f"Invalid or missing domainName: {domain_name!r}")

        hosted_zone_id = data.get("hostedZoneId")
        if hosted_zone_id is not None:
            if not validate_hosted_zone_id(hosted_zone_id):
                raise DomainConfigError(f"Invalid hostedZoneId for '{domain_name}': {hosted_zone_id!r}")
            hosted_zone_id = strip_hosted_zone_prefix(hosted_zone_id)

        hosted_zone_private = _optional_bool(data, "hostedZonePrivate", domain_name)

        return cls(
            given_domain_name=domain_name,
            alias_target=_parse_alias_target(data.get("aliasTarget"), domain_name),
            hosted_zone_id=hosted_zone_id,
            hosted_zone_private=hosted_zone_private,
            split_horizon_dns=bool(_optional_bool(data, "splitHorizonDns", domain_name)),
            create_route53_record=_optional_bool(data, "createRoute53Record", domain_name) is not False,
            route53_params=_parse_route53_params(data.get("route53Params") or {}, domain_name),
            route53_profile=data.get("route53Profile"),
            route53_region=data.get("route53Region"),
        )


@dataclass
class HostedZone:
    """A hosted zone as returned by list_hosted_zones"""

    id: str
    name: str
    private: bool = False

    @classmethod
    def from_api(cls, zone: Dict) -> "HostedZone":
        return cls(
            id=zone["Id"],
            name=zone["Name"],
            private=bool(zone.get("Config", {}).get("PrivateZone", False)),
        )

    @property
    def bare_name(self) -> str:
        """Zone name without its trailing dot"""
        return self.name[:-1] if self.name.endswith(".") else self.name

    @property
    def bare_id(self) -> str:
        return strip_hosted_zone_prefix(self.id)

    def matches(self, domain_name: str) -> bool:
        return domain_name.endswith(self.bare_name)


def _optional_bool(data: Dict, key: str, domain_name: str) -> Optional[bool]:
    value = data.get(key)
    if value is None or isinstance(value, bool):
        return value
    raise DomainConfigError(f"{key} for '{domain_name}' must be true or false, got {value!r}")


def _parse_alias_target(data, domain_name: str) -> AliasTarget:
    if not isinstance(data, dict):
        raise DomainConfigError(f"aliasTarget with a dnsName is required for '{domain_name}'")

    dns_name = data.get("dnsName")
    if not validate_fqdn(dns_name):
        raise DomainConfigError(f"Invalid aliasTarget.dnsName for '{domain_name}': {dns_name!r}")

    hosted_zone_id = data.get("hostedZoneId")
    if hosted_zone_id is not None:
        if not validate_hosted_zone_id(hosted_zone_id):
            raise DomainConfigError(
                f"Invalid aliasTarget.hostedZoneId for '{domain_name}': {hosted_zone_id!r}"
            )
        hosted_zone_id = strip_hosted_zone_prefix(hosted_zone_id)

    return AliasTarget(dns_name=dns_name, hosted_zone_id=hosted_zone_id)


def _parse_route53_params(data: Dict, domain_name: str) -> Route53Params:
    policies = [policy.value for policy in RoutingPolicy]
    routing_policy = data.get("routingPolicy", RoutingPolicy.SIMPLE.value)
    if not validate_choice(routing_policy, policies):
        raise DomainConfigError(
            f"{routing_policy!r} is not a supported routing policy for '{domain_name}', "
            f"use one of: {', '.join(policies)}"
        )

    weight = data.get("weight", DEFAULT_WEIGHT)
    if not validate_weight(weight):
        raise DomainConfigError(f"weight for '{domain_name}' must be an integer 0-255, got {weight!r}")

    return Route53Params(
        routing_policy=RoutingPolicy(routing_policy),
        set_identifier=data.get("setIdentifier"),
        weight=weight,
        health_check_id=data.get("healthCheckId"),
    )
