"""
Utility functions and helpers.

This package contains validation helpers for domain configuration.
"""

from .validators import validate_fqdn, validate_hosted_zone_id, validate_weight

__all__ = ["validate_fqdn", "validate_hosted_zone_id", "validate_weight"]
