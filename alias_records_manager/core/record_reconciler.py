"""
Record Reconciler - alias record change batches

This module builds the Route53 change batches for a domain's alias record and
submits them, one per target hosted zone. With split-horizon DNS the record is
written to both the public and the private zone.
"""

import asyncio
import logging
from typing import Dict, List, Optional, Union

from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import RecordChangeError
from ..models.domain_config import ChangeAction, DomainConfig, RoutingPolicy, ZoneVisibility
from ..providers.aws_helpers import RetryPolicy, throttled_call
from .zone_resolver import ZoneResolver

logger = logging.getLogger(__name__)

DEFAULT_COMMENT_TAG = "alias-records-manager"
RECORD_TYPES = ["CNAME"]


def build_routing_options(domain: DomainConfig, region: str) -> Dict:
    """
    Record set fields for the domain's routing policy.

    Simple routing adds nothing. Latency and weighted routing add the region or
    weight, a set identifier (defaulting to the alias target name) and the
    health check when one is configured.
    """
    params = domain.route53_params
    if params.routing_policy is RoutingPolicy.SIMPLE:
        return {}

    health_check = {"HealthCheckId": params.health_check_id} if params.health_check_id else {}
    set_identifier = params.set_identifier or domain.alias_target.dns_name

    if params.routing_policy is RoutingPolicy.LATENCY:
        return {"Region": region, "SetIdentifier": set_identifier, **health_check}

    return {"Weight": params.weight, "SetIdentifier": set_identifier, **health_check}


def build_change_batch(
    action: ChangeAction,
    domain: DomainConfig,
    hosted_zone_id: str,
    target_hosted_zone_id: str,
    routing_options: Dict,
    comment_tag: str = DEFAULT_COMMENT_TAG,
) -> Dict:
    """Build the change_resource_record_sets request for one hosted zone."""
    changes = [
        {
            "Action": action.value,
            "ResourceRecordSet": {
                "AliasTarget": {
                    "DNSName": domain.alias_target.dns_name,
                    "EvaluateTargetHealth": False,
                    "HostedZoneId": target_hosted_zone_id,
                },
                "Name": domain.given_domain_name,
                "Type": record_type,
                **routing_options,
            },
        }
        for record_type in RECORD_TYPES
    ]
    return {
        "ChangeBatch": {
            "Changes": changes,
            "Comment": f'Record created by "{comment_tag}"',
        },
        "HostedZoneId": hosted_zone_id,
    }


class RecordReconciler:
    """Creates, updates and deletes a domain's alias record."""

    def __init__(
        self,
        route53,
        zone_resolver: ZoneResolver,
        retry_policy: Optional[RetryPolicy] = None,
        comment_tag: str = DEFAULT_COMMENT_TAG,
    ):
        self.route53 = route53
        self.zone_resolver = zone_resolver
        self.retry_policy = retry_policy
        self.comment_tag = comment_tag

    async def reconcile(self, action: Union[ChangeAction, str], domain: DomainConfig) -> None:
        """Apply the alias record change for a domain to every target zone."""
        action = ChangeAction(action)
        batches = await self.plan(action, domain)
        await self.submit(action, domain, batches)

    async def plan(self, action: Union[ChangeAction, str], domain: DomainConfig) -> List[Dict]:
        """
        Resolve target zones and build the change batches without submitting.

        Returns an empty list when record management is disabled for the domain.
        """
        action = ChangeAction(action)
        if not domain.create_route53_record:
            verb = "removal" if action is ChangeAction.DELETE else "creation"
            logger.info(f"Skipping {verb} of Route53 record.")
            return []

        hosted_zone_ids = await self._resolve_hosted_zone_ids(domain)

        target_hosted_zone_id = domain.alias_target.hosted_zone_id
        if target_hosted_zone_id is None:
            # Alias to a record in the domain's own zone
            if domain.split_horizon_dns:
                target_hosted_zone_id = await self.zone_resolver.resolve(
                    domain.given_domain_name, domain.hosted_zone_id, domain.zone_visibility
                )
            else:
                target_hosted_zone_id = hosted_zone_ids[0]

        routing_options = build_routing_options(domain, self.route53.meta.region_name)
        return [
            build_change_batch(
                action, domain, hosted_zone_id, target_hosted_zone_id, routing_options, self.comment_tag
            )
            for hosted_zone_id in hosted_zone_ids
        ]

    async def submit(self, action: Union[ChangeAction, str], domain: DomainConfig, batches: List[Dict]) -> None:
        """Submit planned change batches in order, stopping at the first failure."""
        action = ChangeAction(action)
        for params in batches:
            try:
                await throttled_call(self.route53, "change_resource_record_sets", params, self.retry_policy)
            except (BotoCoreError, ClientError) as e:
                raise RecordChangeError(
                    f"Failed to {action.value} {','.join(RECORD_TYPES)} Alias for "
                    f"'{domain.given_domain_name}':\n{e}"
                ) from e
            logger.debug(f"Submitted {action.value} for {domain.given_domain_name} to zone {params['HostedZoneId']}")

    async def _resolve_hosted_zone_ids(self, domain: DomainConfig) -> List[str]:
        if not domain.split_horizon_dns:
            return [
                await self.zone_resolver.resolve(
                    domain.given_domain_name, domain.hosted_zone_id, domain.zone_visibility
                )
            ]

        results = await asyncio.gather(
            self.zone_resolver.resolve(domain.given_domain_name, domain.hosted_zone_id, ZoneVisibility.PUBLIC),
            self.zone_resolver.resolve(domain.given_domain_name, domain.hosted_zone_id, ZoneVisibility.PRIVATE),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return list(results)
