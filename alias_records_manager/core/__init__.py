"""
Core alias record management functionality.

This package contains the hosted zone resolution, change batch reconciliation
and orchestration logic.
"""

from .dns_manager import DNSManager
from .record_reconciler import RecordReconciler
from .route53_wrapper import Route53Wrapper
from .zone_resolver import ZoneResolver

__all__ = ["DNSManager", "RecordReconciler", "Route53Wrapper", "ZoneResolver"]
