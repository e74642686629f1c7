"""
Route53 Wrapper - public API for alias record management

One wrapper is bound to one Route53 client; it resolves hosted zones and
applies alias record changes for any number of domains using that client.
"""

from typing import Dict, List, Optional, Union

from ..models.domain_config import ChangeAction, DomainConfig, ZoneVisibility
from ..providers.aws_helpers import RetryPolicy
from .record_reconciler import DEFAULT_COMMENT_TAG, RecordReconciler
from .zone_resolver import ZoneResolver


class Route53Wrapper:
    """Alias record operations against a single Route53 client."""

    def __init__(
        self,
        route53,
        retry_policy: Optional[RetryPolicy] = None,
        comment_tag: str = DEFAULT_COMMENT_TAG,
    ):
        self.route53 = route53
        self.zone_resolver = ZoneResolver(route53, retry_policy)
        self.record_reconciler = RecordReconciler(route53, self.zone_resolver, retry_policy, comment_tag)

    async def change_resource_record_set(self, action: Union[ChangeAction, str], domain: DomainConfig) -> None:
        """
        Change the alias record for a domain.

        Args:
            action: "UPSERT" or "DELETE"
            domain: Domain entry describing the record
        """
        await self.record_reconciler.reconcile(action, domain)

    async def get_route53_hosted_zone_id(self, domain: DomainConfig, is_private: Optional[bool] = None) -> str:
        """Get the hosted zone id for a domain, from its config or from Route53."""
        return await self.zone_resolver.resolve(
            domain.given_domain_name, domain.hosted_zone_id, ZoneVisibility.from_flag(is_private)
        )

    async def plan_resource_record_set(self, action: Union[ChangeAction, str], domain: DomainConfig) -> List[Dict]:
        """Build the change batches a change_resource_record_set call would submit."""
        return await self.record_reconciler.plan(action, domain)

    async def submit_resource_record_set(
        self, action: Union[ChangeAction, str], domain: DomainConfig, batches: List[Dict]
    ) -> None:
        """Submit change batches produced by plan_resource_record_set."""
        await self.record_reconciler.submit(action, domain, batches)
