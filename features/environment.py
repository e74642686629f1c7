"""
Behave environment configuration for Alias Records Manager integration tests.
"""

import logging
import shutil
import tempfile
from pathlib import Path

import yaml

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def before_all(context):
    """Set up test environment before all tests."""
    context.base_dir = Path(__file__).parent.parent
    context.test_data_dir = Path(tempfile.mkdtemp(prefix="alias_records_"))

    context.test_config = {
        "dns_providers": {
            "mock": {
                "region": "us-west-2",
                "hosted_zones": [
                    {"id": "ZBANKPUBLIC", "name": "bigbank.com."},
                    {"id": "ZAPIPUBLIC", "name": "api.bigbank.com."},
                    {"id": "ZAPIPRIVATE", "name": "api.bigbank.com.", "private": True},
                ],
            }
        },
        "default_provider": "mock",
        "retry": {"min_wait": 0, "max_wait": 0, "max_attempts": 5},
        "record_comment_tag": "alias-records-manager",
    }

    context.test_config_file = context.test_data_dir / "test_config.yaml"
    with open(context.test_config_file, "w") as f:
        yaml.dump(context.test_config, f)

    logger.info("Test environment setup complete")


def before_scenario(context, scenario):
    """Set up each test scenario."""
    context.scenario_name = scenario.name
    context.domain_entries = []
    context.result = None

    logger.info(f"Starting scenario: {scenario.name}")


def after_scenario(context, scenario):
    """Clean up after each test scenario."""
    logger.info(f"Completed scenario: {scenario.name}")


def after_all(context):
    """Clean up test environment after all tests."""
    if context.test_data_dir.exists():
        shutil.rmtree(context.test_data_dir)

    logger.info("Test environment cleanup complete")
