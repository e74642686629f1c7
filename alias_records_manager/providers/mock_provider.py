"""
Mock Route53 provider for testing and demonstration.

This module provides an in-memory stand-in for a boto3 Route53 client. It
implements the calls the resolver and reconciler make, with the same
request and response shapes, so dry runs and tests exercise the real
resolution and change-batch code.
"""

import copy
import itertools
import logging
import threading
from types import SimpleNamespace
from typing import Dict, List, Optional

from botocore.exceptions import ClientError

from ..utils.validators import HOSTED_ZONE_PREFIX, strip_hosted_zone_prefix

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100


def _client_error(code: str, message: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


class MockRoute53Client:
    """In-memory Route53 client for testing and demonstration purposes."""

    def __init__(self, config: Dict = None, region: str = "us-east-1"):
        """Initialize mock client with optional hosted zones from config."""
        config = config or {}
        self.meta = SimpleNamespace(region_name=config.get("region", region))
        self.page_size = config.get("page_size", DEFAULT_PAGE_SIZE)
        self.hosted_zones: List[Dict] = []
        self.record_sets: Dict[str, Dict[tuple, Dict]] = {}
        self.change_batches: List[Dict] = []
        self.calls: List[str] = []
        self._pending_throttles = 0
        self._change_ids = itertools.count(1)
        self._lock = threading.Lock()

        for zone in config.get("hosted_zones", []):
            self.add_hosted_zone(zone["name"], zone.get("id"), zone.get("private", False))

        logger.info(f"Mock: Route53 client initialized with {len(self.hosted_zones)} hosted zones")

    def add_hosted_zone(self, name: str, zone_id: Optional[str] = None, private: bool = False) -> str:
        """Register a hosted zone and return its bare id."""
        if not name.endswith("."):
            name += "."
        zone_id = strip_hosted_zone_prefix(zone_id or f"Z{len(self.hosted_zones) + 1:012d}MOCK")
        self.hosted_zones.append(
            {
                "Id": f"{HOSTED_ZONE_PREFIX}{zone_id}",
                "Name": name,
                "Config": {"PrivateZone": private},
                "ResourceRecordSetCount": 2,
            }
        )
        self.record_sets[zone_id] = {}
        return zone_id

    def throttle_next(self, count: int = 1):
        """Make the next `count` calls fail with a Throttling error."""
        self._pending_throttles = count

    def get_records(self, zone_id: str) -> List[Dict]:
        """Get all alias record sets stored in a zone."""
        return [copy.deepcopy(record) for record in self.record_sets[zone_id].values()]

    def _check_throttle(self, operation: str):
        self.calls.append(operation)
        if self._pending_throttles > 0:
            self._pending_throttles -= 1
            raise _client_error("Throttling", "Rate exceeded", operation)

    def list_hosted_zones(self, Marker: Optional[str] = None, MaxItems: Optional[str] = None) -> Dict:
        with self._lock:
            self._check_throttle("ListHostedZones")
            page_size = int(MaxItems or self.page_size)

            start = 0
            if Marker:
                ids = [strip_hosted_zone_prefix(zone["Id"]) for zone in self.hosted_zones]
                if Marker not in ids:
                    raise _client_error("InvalidInput", f"Invalid marker {Marker}", "ListHostedZones")
                start = ids.index(Marker)

            page = self.hosted_zones[start:start + page_size]
            response = {
                "HostedZones": copy.deepcopy(page),
                "IsTruncated": start + page_size < len(self.hosted_zones),
                "MaxItems": str(page_size),
            }
            if Marker:
                response["Marker"] = Marker
            if response["IsTruncated"]:
                response["NextMarker"] = strip_hosted_zone_prefix(self.hosted_zones[start + page_size]["Id"])
            return response

    def change_resource_record_sets(self, HostedZoneId: str, ChangeBatch: Dict) -> Dict:
        with self._lock:
            self._check_throttle("ChangeResourceRecordSets")
            zone_id = strip_hosted_zone_prefix(HostedZoneId)
            if zone_id not in self.record_sets:
                raise _client_error(
                    "NoSuchHostedZone", f"No hosted zone found with ID: {zone_id}", "ChangeResourceRecordSets"
                )

            # Validate the whole batch against a copy so it applies atomically
            records = dict(self.record_sets[zone_id])
            for change in ChangeBatch["Changes"]:
                record_set = change["ResourceRecordSet"]
                key = (record_set["Name"].rstrip("."), record_set["Type"], record_set.get("SetIdentifier"))
                if change["Action"] == "UPSERT":
                    records[key] = copy.deepcopy(record_set)
                elif change["Action"] == "DELETE":
                    if records.get(key) != record_set:
                        raise _client_error(
                            "InvalidChangeBatch",
                            f"Tried to delete resource record set [name='{record_set['Name']}', "
                            f"type='{record_set['Type']}'] but it was not found",
                            "ChangeResourceRecordSets",
                        )
                    del records[key]
                else:
                    raise _client_error(
                        "InvalidInput", f"Unsupported action {change['Action']}", "ChangeResourceRecordSets"
                    )

            self.record_sets[zone_id] = records
            self.change_batches.append({"HostedZoneId": zone_id, "ChangeBatch": copy.deepcopy(ChangeBatch)})
            logger.info(f"Mock: Applied {len(ChangeBatch['Changes'])} change(s) to zone {zone_id}")

            return {
                "ChangeInfo": {
                    "Id": f"/change/C{next(self._change_ids):012d}",
                    "Status": "PENDING",
                    "Comment": ChangeBatch.get("Comment", ""),
                }
            }
