#!/usr/bin/env python3
"""
Alias Records Manager - Command Line Interface

Main entry point for the alias-records CLI.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from ..core.dns_manager import DNSManager
from ..parsers.domain_config import DomainConfigParser

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="alias-records",
        description="Alias Records Manager - Route53 alias records for custom domains",
    )
    parser.add_argument(
        "action",
        choices=["deploy", "remove"],
        help="deploy upserts the alias records, remove deletes them",
    )
    parser.add_argument(
        "--domains", "-d", required=True, help="YAML file containing domain entries"
    )
    parser.add_argument(
        "--config",
        "-c",
        default="configs/config.yaml",
        help="Configuration file path (default: configs/config.yaml)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the planned change batches without submitting them",
    )
    parser.add_argument(
        "--output-file",
        "-o",
        help="Write the planned change batches as YAML (requires --dry-run)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    return parser


def validate_args(args: argparse.Namespace) -> Optional[str]:
    """Return an error message for unusable arguments, None when they are fine."""
    if args.output_file and not args.dry_run:
        return "--output-file can only be used with --dry-run"

    for label, path in (("Configuration file", args.config), ("Domain file", args.domains)):
        if not Path(path).exists():
            return f"{label} '{path}' not found"

    return None


def run(args: argparse.Namespace) -> int:
    """Run one deploy/remove pass and return the process exit status."""
    error = validate_args(args)
    if error:
        print(f"Error: {error}")
        return 1

    try:
        config = load_config(args.config)
        config_logger(config, verbose=args.verbose)

        dns_manager = DNSManager(config)
        domains = DomainConfigParser(args.domains).parse()
        success = dns_manager.process_domains(
            domains, args.action, dry_run=args.dry_run, output_file=args.output_file
        )
    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1

    if not success:
        print("Alias record management failed")
        return 1

    print("Alias record management completed successfully")
    return 0


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    sys.exit(run(args))


def load_config(config_path: str) -> Dict:
    """Load configuration from YAML file."""
    with open(config_path, "r") as f:
        config = yaml.safe_load(f) or {}
    logger.info(f"Configuration loaded from {config_path}")
    return config


def config_logger(config: Dict, verbose: bool = False):
    """Configure logging from the `logging` config section."""
    logging_config = config.get("logging") or {}
    level = "DEBUG" if verbose else logging_config.get("level", "INFO")

    handlers = [logging.StreamHandler(sys.stdout)]
    if logging_config.get("file"):
        handlers.insert(0, logging.FileHandler(logging_config["file"]))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)


if __name__ == "__main__":
    main()
