#!/usr/bin/env python3
"""
Alias Records Manager - Orchestration of alias record changes

This module plans and applies Route53 alias record changes for a list of
domain entries, one domain at a time, with a dry-run mode that only shows the
change batches that would be submitted.
"""

import asyncio
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from ..exceptions import AliasRecordsError
from ..models.domain_config import ChangeAction, DomainConfig
from ..providers.dns_client import DNSClient

# Initialize rich console and logger
console = Console()
logger = logging.getLogger(__name__)

ACTIONS = {
    "deploy": ChangeAction.UPSERT,
    "upsert": ChangeAction.UPSERT,
    "remove": ChangeAction.DELETE,
    "delete": ChangeAction.DELETE,
}


def resolve_action(action: Union[ChangeAction, str]) -> ChangeAction:
    """Map deploy/remove (or UPSERT/DELETE) to a change action."""
    if isinstance(action, ChangeAction):
        return action
    try:
        return ACTIONS[action.lower()]
    except (KeyError, AttributeError):
        raise ValueError(f"Unknown action {action!r}, use one of: {', '.join(ACTIONS)}")


class DNSManager:
    """Main DNS management class that orchestrates the entire process."""

    def __init__(self, config: Union[str, Path, Dict] = "configs/config.yaml"):
        """Initialize the DNS manager with a configuration mapping or file path."""
        if isinstance(config, dict):
            self.config = config
        else:
            self.config = self._load_config(str(config))
        self.dns_client = DNSClient(self.config)

    def _load_config(self, config_path: str) -> Dict:
        """Load configuration from YAML file."""
        try:
            with open(config_path, "r") as f:
                config = yaml.safe_load(f) or {}
            logger.info(f"Configuration loaded from {config_path}")
            return config
        except FileNotFoundError:
            logger.warning(f"Config file {config_path} not found, using defaults")
            return self._get_default_config()
        except yaml.YAMLError as e:
            logger.error(f"Error parsing config file: {e}")
            sys.exit(1)

    def _get_default_config(self) -> Dict:
        """Return default configuration."""
        return {
            "dns_providers": {"route53": {"region": "us-east-1"}},
            "default_provider": "route53",
        }

    def process_domains(
        self,
        domains: List[DomainConfig],
        action: Union[ChangeAction, str],
        dry_run: bool = False,
        output_file: Optional[str] = None,
    ) -> bool:
        """Plan and apply alias record changes for all domains."""
        return asyncio.run(self.apply_domains(domains, action, dry_run=dry_run, output_file=output_file))

    async def apply_domains(
        self,
        domains: List[DomainConfig],
        action: Union[ChangeAction, str],
        dry_run: bool = False,
        output_file: Optional[str] = None,
    ) -> bool:
        """Coroutine behind process_domains."""
        action = resolve_action(action)
        if not domains:
            console.print("[red]No valid domains to process[/red]")
            return False

        console.print(f"[green]Planning {action.value} for {len(domains)} domain(s)...[/green]")
        plans, failures = await self._plan_domains(domains, action)

        self._display_plan_summary(plans, action)

        if dry_run:
            console.print("[yellow]DRY RUN MODE - No changes will be applied[/yellow]")

            if output_file:
                self._save_dry_run_output(plans, action, output_file)
                console.print(f"[green]Dry run output saved to: {output_file}[/green]")

            return failures == 0

        success = await self._apply_plans(plans, action)
        if success and failures == 0:
            console.print("[green]All DNS changes applied successfully![/green]")
            return True

        console.print("[red]Some DNS changes failed to apply[/red]")
        return False

    async def _plan_domains(self, domains: List[DomainConfig], action: ChangeAction):
        plans = []
        failures = 0
        for domain in domains:
            try:
                batches = await self.dns_client.for_domain(domain).plan_resource_record_set(action, domain)
                plans.append((domain, batches))
            except AliasRecordsError as e:
                failures += 1
                logger.error(f"Failed to plan {action.value} for {domain.given_domain_name}: {e}")
                console.print(f"[red]Failed to plan {domain.given_domain_name}: {e}[/red]")
        return plans, failures

    def _display_plan_summary(self, plans: List, action: ChangeAction):
        """Display a summary of planned changes."""
        table = Table(title="Route53 Alias Changes")
        table.add_column("Domain", style="cyan")
        table.add_column("Hosted Zone", style="magenta")
        table.add_column("Action", style="white")
        table.add_column("Routing", style="white")

        total_batches = 0
        for domain, batches in plans:
            if not batches:
                table.add_row(domain.given_domain_name, "-", "Skip", "-")
                continue
            for params in batches:
                total_batches += 1
                table.add_row(
                    domain.given_domain_name,
                    params["HostedZoneId"],
                    action.value,
                    domain.route53_params.routing_policy.value,
                )

        console.print(table)
        console.print(f"\n[bold]Total change batches: {total_batches}[/bold]")

    async def _apply_plans(self, plans: List, action: ChangeAction) -> bool:
        """Apply planned change batches domain by domain."""
        success_count = 0
        pending = [(domain, batches) for domain, batches in plans if batches]

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Applying DNS changes...", total=len(pending))

            for domain, batches in pending:
                try:
                    await self.dns_client.for_domain(domain).submit_resource_record_set(action, domain, batches)
                    success_count += 1
                    progress.update(task, advance=1)
                    logger.info(f"Applied {action.value} for {domain.given_domain_name}")
                except AliasRecordsError as e:
                    logger.error(f"Failed to {action.value} record {domain.given_domain_name}: {e}")
                    console.print(f"[red]Failed to {action.value} {domain.given_domain_name}: {e}[/red]")

        console.print(f"[blue]Successfully applied {success_count}/{len(pending)} changes[/blue]")
        return success_count == len(pending)

    def _save_dry_run_output(self, plans: List, action: ChangeAction, output_file: str):
        """Save dry run output to a YAML file."""
        summary = {
            "action": action.value,
            "timestamp": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            "domains": [
                {
                    "domain": domain.given_domain_name,
                    "skipped": not batches,
                    "change_batches": batches,
                }
                for domain, batches in plans
            ],
        }
        try:
            with open(output_file, "w") as f:
                yaml.safe_dump(summary, f, sort_keys=False)
            logger.info(f"Dry run output saved to: {output_file}")
        except OSError as e:
            logger.error(f"Failed to save dry run output to {output_file}: {e}")
            console.print(f"[red]Warning: Failed to save dry run output to {output_file}: {e}[/red]")
