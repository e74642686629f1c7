"""
Validators - Input validation for alias record configuration

This module provides validation functions for domain names, hosted zone ids,
routing weights and routing policies so that invalid configuration is rejected
before any Route53 call is made.
"""

import logging
import re
from typing import Iterable

logger = logging.getLogger(__name__)

HOSTED_ZONE_PREFIX = "/hostedzone/"
MAX_RECORD_WEIGHT = 255


def validate_fqdn(fqdn: str) -> bool:
    """
    Validate Fully Qualified Domain Name (FQDN).

    A single leading wildcard label ("*.example.com") is accepted since
    Route53 alias records may be wildcards.

    Args:
        fqdn: The FQDN to validate

    Returns:
        True if valid, False otherwise
    """
    if not fqdn or not isinstance(fqdn, str):
        return False

    # Trailing dots belong to zone names, not to configured domains
    if fqdn.endswith("."):
        logger.warning(f"FQDN ends with dot: {fqdn}")
        return False

    if len(fqdn) > 253:
        logger.warning(f"FQDN too long: {fqdn}")
        return False

    labels = fqdn.split(".")

    if len(labels) < 2:
        logger.warning(f"FQDN must have at least 2 labels: {fqdn}")
        return False

    if any(label == "" for label in labels):
        logger.warning(f"FQDN contains empty labels: {fqdn}")
        return False

    for i, label in enumerate(labels):
        if i == 0 and label == "*":
            continue
        if not _validate_label(label):
            logger.warning(f"Invalid label '{label}' in FQDN: {fqdn}")
            return False

    return True


def _validate_label(label: str) -> bool:
    """
    Validate a single domain label.

    Labels can contain letters, digits, hyphens and underscores and cannot
    start or end with a hyphen.
    """
    if len(label) == 0 or len(label) > 63:
        return False

    return bool(re.match(r"^[a-zA-Z0-9_]([a-zA-Z0-9_-]*[a-zA-Z0-9_])?$", label))


def validate_hosted_zone_id(zone_id: str) -> bool:
    """
    Validate a Route53 hosted zone id.

    Both the bare form ("Z2FDTNDATAQYW2") and the API form
    ("/hostedzone/Z2FDTNDATAQYW2") are accepted.
    """
    if not zone_id or not isinstance(zone_id, str):
        return False

    bare_id = strip_hosted_zone_prefix(zone_id)
    if not re.match(r"^[A-Z0-9]{1,32}$", bare_id):
        logger.warning(f"Invalid hosted zone id: {zone_id}")
        return False

    return True


def validate_weight(weight) -> bool:
    """Validate a weighted routing weight (0-255 inclusive)."""
    if isinstance(weight, bool) or not isinstance(weight, int):
        return False
    return 0 <= weight <= MAX_RECORD_WEIGHT


def validate_choice(value: str, choices: Iterable[str]) -> bool:
    """Check that a value is one of the allowed choices."""
    return isinstance(value, str) and value in set(choices)


def strip_hosted_zone_prefix(zone_id: str) -> str:
    """Remove the "/hostedzone/" prefix the Route53 API puts on zone ids."""
    return zone_id.replace(HOSTED_ZONE_PREFIX, "")
