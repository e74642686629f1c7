"""
Step definitions for Alias Records Manager integration tests.
"""

import yaml
from behave import given, when, then

from alias_records_manager.core.dns_manager import DNSManager
from alias_records_manager.parsers.domain_config import DomainConfigParser


def _add_domain(context, domain_name, dns_name, **extra):
    entry = {"domainName": domain_name, "aliasTarget": {"dnsName": dns_name, "hostedZoneId": "Z2OJLYMUO9EFXC"}}
    entry.update(extra)
    context.domain_entries.append(entry)


def _domains(context):
    """Write the scenario's entries to a domain file and parse it back."""
    domain_file = context.test_data_dir / f"{context.scenario_name.lower().replace(' ', '_')}.yaml"
    with open(domain_file, "w") as f:
        yaml.dump({"domains": context.domain_entries}, f)
    return DomainConfigParser(str(domain_file)).parse()


def _route53(context):
    return context.dns_manager.dns_client.default_wrapper.route53


def _records_for(context, zone_id, domain_name):
    return [record for record in _route53(context).get_records(zone_id) if record["Name"] == domain_name]


@given("the Alias Records Manager is configured with the mock provider")
def step_impl(context):
    """Configure the manager from the scenario config file."""
    context.dns_manager = DNSManager(context.test_config_file)
    assert context.dns_manager.dns_client.provider_name == "mock"


@given('a domain "{domain_name}" aliased to "{dns_name}"')
def step_impl(context, domain_name, dns_name):
    _add_domain(context, domain_name, dns_name)


@given('a split-horizon domain "{domain_name}" aliased to "{dns_name}"')
def step_impl(context, domain_name, dns_name):
    _add_domain(context, domain_name, dns_name, splitHorizonDns=True)


@given('a weighted domain "{domain_name}" aliased to "{dns_name}" with weight {weight:d} and set identifier "{set_identifier}"')
def step_impl(context, domain_name, dns_name, weight, set_identifier):
    _add_domain(
        context,
        domain_name,
        dns_name,
        route53Params={"routingPolicy": "weighted", "weight": weight, "setIdentifier": set_identifier},
    )


@given('a disabled domain "{domain_name}" aliased to "{dns_name}"')
def step_impl(context, domain_name, dns_name):
    _add_domain(context, domain_name, dns_name, createRoute53Record=False)


@given("the alias records have been deployed")
def step_impl(context):
    assert context.dns_manager.process_domains(_domains(context), "deploy")


@given("Route53 throttles the next {count:d} calls")
def step_impl(context, count):
    _route53(context).throttle_next(count)


@when("I deploy the alias records")
def step_impl(context):
    context.result = context.dns_manager.process_domains(_domains(context), "deploy")


@when("I remove the alias records")
def step_impl(context):
    context.result = context.dns_manager.process_domains(_domains(context), "remove")


@when("I deploy the alias records in dry run mode")
def step_impl(context):
    context.dry_run_file = context.test_data_dir / "dry_run.yaml"
    context.result = context.dns_manager.process_domains(
        _domains(context), "deploy", dry_run=True, output_file=str(context.dry_run_file)
    )


@then("the run succeeds")
def step_impl(context):
    assert context.result is True, "Expected the run to succeed"


@then("the run fails")
def step_impl(context):
    assert context.result is False, "Expected the run to fail"


@then('zone "{zone_id}" holds 1 alias record for "{domain_name}"')
def step_impl(context, zone_id, domain_name):
    records = _records_for(context, zone_id, domain_name)
    assert len(records) == 1, f"Expected one record in {zone_id}, found {records}"
    assert records[0]["Type"] == "CNAME"
    assert records[0]["AliasTarget"]["EvaluateTargetHealth"] is False


@then('zone "{zone_id}" holds no alias records')
def step_impl(context, zone_id):
    records = _route53(context).get_records(zone_id)
    assert records == [], f"Expected no records in {zone_id}, found {records}"


@then('the record for "{domain_name}" in zone "{zone_id}" has weight {weight:d} and set identifier "{set_identifier}"')
def step_impl(context, domain_name, zone_id, weight, set_identifier):
    record = _records_for(context, zone_id, domain_name)[0]
    assert record["Weight"] == weight
    assert record["SetIdentifier"] == set_identifier
    assert "Region" not in record


@then("no change batches were submitted")
def step_impl(context):
    assert _route53(context).change_batches == []


@then('the dry run output lists {count:d} change batches for "{domain_name}"')
def step_impl(context, count, domain_name):
    with open(context.dry_run_file) as f:
        plan = yaml.safe_load(f)
    entry = next(item for item in plan["domains"] if item["domain"] == domain_name)
    assert len(entry["change_batches"]) == count
