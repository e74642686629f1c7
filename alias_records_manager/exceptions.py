"""
Exceptions raised by the Alias Records Manager.

Every error the package raises on purpose derives from AliasRecordsError so
that an orchestrator can catch them per domain without hiding programming
errors.
"""


class AliasRecordsError(Exception):
    """Base class for alias record management errors."""


class DomainConfigError(AliasRecordsError, ValueError):
    """A domain configuration entry is missing or has invalid values."""


class HostedZoneNotFoundError(AliasRecordsError):
    """No hosted zone matches the domain name."""

    def __init__(self, domain_name: str):
        self.domain_name = domain_name
        super().__init__(f"Could not find hosted zone '{domain_name}'")


class HostedZoneListError(AliasRecordsError):
    """Listing hosted zones failed."""


class RecordChangeError(AliasRecordsError):
    """Submitting a change batch failed."""
