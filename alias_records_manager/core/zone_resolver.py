"""
Zone Resolver - hosted zone lookup for a domain name

Picks the most specific Route53 hosted zone for a domain: the explicit zone id
when one is configured, otherwise the longest zone name the domain ends with.
"""

import logging
from typing import List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import HostedZoneListError, HostedZoneNotFoundError
from ..models.domain_config import HostedZone, ZoneVisibility
from ..providers.aws_helpers import RetryPolicy, get_aws_paged_results

logger = logging.getLogger(__name__)


class ZoneResolver:
    """Resolves the hosted zone id that should hold a domain's alias record."""

    def __init__(self, route53, retry_policy: Optional[RetryPolicy] = None):
        self.route53 = route53
        self.retry_policy = retry_policy

    async def resolve(
        self,
        domain_name: str,
        hosted_zone_id: Optional[str] = None,
        visibility: Optional[ZoneVisibility] = None,
    ) -> str:
        """
        Resolve the hosted zone id for a domain.

        Args:
            domain_name: Domain the record is created for
            hosted_zone_id: Explicit zone id; returned as-is without any API call
            visibility: Only consider public or private zones; all zones when None

        Returns:
            Hosted zone id without the "/hostedzone/" prefix

        Raises:
            HostedZoneListError: If listing hosted zones fails
            HostedZoneNotFoundError: If no zone matches the domain
        """
        if hosted_zone_id:
            logger.info(f"Selected specific hostedZoneId {hosted_zone_id}")
            return hosted_zone_id

        if visibility is not None:
            logger.info(f"Filtering to only {visibility.value} zones.")

        hosted_zones = await self._list_hosted_zones()
        target_zone = self.select_zone(hosted_zones, domain_name, visibility)
        if target_zone is None:
            raise HostedZoneNotFoundError(domain_name)

        return target_zone.bare_id

    @staticmethod
    def select_zone(
        hosted_zones: List[HostedZone],
        domain_name: str,
        visibility: Optional[ZoneVisibility] = None,
    ) -> Optional[HostedZone]:
        """
        Select the longest hosted zone name the domain ends with.

        Zones with equal name length keep their listing order, so the first
        one listed wins.
        """
        candidates = [
            zone
            for zone in hosted_zones
            if (visibility is None or zone.private == visibility.is_private) and zone.matches(domain_name)
        ]
        if not candidates:
            return None
        return max(candidates, key=lambda zone: len(zone.name))

    async def _list_hosted_zones(self) -> List[HostedZone]:
        try:
            zones = await get_aws_paged_results(
                self.route53,
                "list_hosted_zones",
                "HostedZones",
                "Marker",
                "NextMarker",
                {},
                self.retry_policy,
            )
        except (BotoCoreError, ClientError) as e:
            raise HostedZoneListError(f"Unable to list hosted zones in Route53.\n{e}") from e

        return [HostedZone.from_api(zone) for zone in zones]
