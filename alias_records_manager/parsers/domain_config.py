import logging
from typing import Dict, List

import yaml

from ..exceptions import DomainConfigError
from ..models.domain_config import DomainConfig

logger = logging.getLogger(__name__)


class DomainConfigParser:
    def __init__(self, path: str):
        self.path = path

    def parse(self) -> List[DomainConfig]:
        """Parse YAML domain file and validate entries."""
        try:
            with open(self.path, "r") as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            raise FileNotFoundError(f"Domain file not found: {self.path}")
        except yaml.YAMLError as e:
            raise DomainConfigError(f"Error parsing domain file: {e}") from e

        domains = []
        for index, entry in enumerate(self._entries(data), start=1):
            try:
                domains.append(DomainConfig.from_dict(entry))
            except DomainConfigError as e:
                logger.warning(f"Invalid domain entry #{index}, skipping: {e}")

        logger.info(f"Successfully parsed {len(domains)} domains from {self.path}")
        return domains

    def _entries(self, data: Dict) -> List:
        if not isinstance(data, dict):
            raise DomainConfigError("Domain file must contain a mapping at the top level")

        # Serverless-style keys are accepted alongside a plain "domains" list
        if "domains" in data:
            return data["domains"] or []
        if "customDomains" in data:
            return data["customDomains"] or []
        if "customDomain" in data:
            return [data["customDomain"]]

        raise DomainConfigError("Domain file must define 'domains', 'customDomains' or 'customDomain'")
