#!/usr/bin/env python3
"""
Alias Records Manager - Demo Script

This script walks through deploying and removing alias records using the
mock Route53 provider, so no AWS account is touched.
"""

import os

import yaml
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from alias_records_manager.core.dns_manager import DNSManager
from alias_records_manager.parsers.domain_config import DomainConfigParser

# Initialize rich console
console = Console()

DEMO_ZONES = [
    {"id": "ZBIGBANK000001", "name": "bigbank.com.", "private": False},
    {"id": "ZIBBIGBANK0001", "name": "ib.bigbank.com.", "private": False},
    {"id": "ZIBBIGBANK0002", "name": "ib.bigbank.com.", "private": True},
]


def create_demo_config():
    """Create a demo configuration file."""
    config = {
        "dns_providers": {"mock": {"region": "us-east-1", "hosted_zones": DEMO_ZONES}},
        "default_provider": "mock",
        "retry": {"min_wait": 0.1, "max_wait": 1},
        "logging": {"level": "INFO", "file": "demo.log"},
    }

    config_file = "demo_config.yaml"
    with open(config_file, "w") as f:
        yaml.dump(config, f)

    return config_file


def create_demo_domains():
    """Create a demo domain file covering each routing policy."""
    target = {"dnsName": "d-demo123.execute-api.us-east-1.amazonaws.com", "hostedZoneId": "Z1UJRXOUMOOFQ8"}
    domains = {
        "domains": [
            {"domainName": "www.bigbank.com", "aliasTarget": target},
            {
                "domainName": "payments.ib.bigbank.com",
                "splitHorizonDns": True,
                "aliasTarget": target,
                "route53Params": {"routingPolicy": "latency"},
            },
            {
                "domainName": "api.ib.bigbank.com",
                "hostedZonePrivate": False,
                "aliasTarget": target,
                "route53Params": {"routingPolicy": "weighted", "weight": 50, "setIdentifier": "blue"},
            },
            {"domainName": "legacy.bigbank.com", "createRoute53Record": False, "aliasTarget": target},
        ]
    }

    domain_file = "demo_domains.yaml"
    with open(domain_file, "w") as f:
        yaml.dump(domains, f, sort_keys=False)

    return domain_file


def display_demo_header():
    """Display the demo header."""
    console.print(
        Panel.fit(
            "[bold blue]Alias Records Manager - Demo[/bold blue]\n"
            "[cyan]Route53 alias records for custom domains on bigbank.com[/cyan]",
            border_style="blue",
        )
    )
    console.print()


def display_zone_records(dns_manager, title):
    """Display the alias records held by every mock hosted zone."""
    route53 = dns_manager.dns_client.default_wrapper.route53

    table = Table(title=title)
    table.add_column("Zone", style="magenta")
    table.add_column("Name", style="cyan")
    table.add_column("Target", style="green")
    table.add_column("Routing", style="yellow")

    for zone in DEMO_ZONES:
        for record in route53.get_records(zone["id"]):
            routing = {key: record[key] for key in ("Region", "Weight", "SetIdentifier") if key in record}
            table.add_row(
                f"{zone['name']} ({'private' if zone['private'] else 'public'})",
                record["Name"],
                record["AliasTarget"]["DNSName"],
                ", ".join(f"{key}={value}" for key, value in routing.items()) or "simple",
            )

    console.print(table)
    console.print()


def run_step(description, dns_manager, domains, action, dry_run=False):
    """Run one deploy/remove pass and report the outcome."""
    console.print(f"[bold]{description}[/bold]")
    if dns_manager.process_domains(domains, action, dry_run=dry_run):
        console.print(f"[green]✓ {description} completed successfully![/green]")
    else:
        console.print(f"[red]✗ {description} failed![/red]")
    console.print()


def cleanup_demo_files(*files):
    """Clean up demo files."""
    for path in files:
        if os.path.exists(path):
            os.remove(path)
    console.print("[blue]Demo files cleaned up[/blue]")


def main():
    """Main demo function."""
    display_demo_header()

    config_file = create_demo_config()
    domain_file = create_demo_domains()

    try:
        console.print("[blue]Initializing DNS Manager...[/blue]")
        dns_manager = DNSManager(config_file)
        domains = DomainConfigParser(domain_file).parse()
        console.print(f"[green]✓ Loaded {len(domains)} domain entries[/green]")
        console.print()

        run_step("Dry-run deploy", dns_manager, domains, "deploy", dry_run=True)
        run_step("Deploy", dns_manager, domains, "deploy")
        display_zone_records(dns_manager, "Alias records after deploy")

        # Simulate API rate limiting on the removal pass
        dns_manager.dns_client.default_wrapper.route53.throttle_next(2)
        run_step("Remove (with throttled calls)", dns_manager, domains, "remove")
        display_zone_records(dns_manager, "Alias records after remove")

    except (OSError, ValueError) as e:
        console.print(f"[red]Demo failed with error: {e}[/red]")
        console.print("[yellow]Check the logs for more details[/yellow]")

    finally:
        cleanup_demo_files(config_file, domain_file)
        console.print("[bold blue]Demo completed![/bold blue]")


if __name__ == "__main__":
    main()
