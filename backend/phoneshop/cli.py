# Overview: Flask CLI command groups for key-value store bootstrap, inspection and maintenance.

# backend/phoneshop/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to phoneshop (PowerShell: $env:FLASK_APP="phoneshop").
# - Use: python -m flask <group> <command> [options]
#
# Store bootstrap/repair:
# - python -m flask kv init
#   Create the kv_store table if it does not exist (idempotent).
# - python -m flask kv wipe --yes
#   DEV/TEST only: delete every key (all resources, all data).
#
# Inspection:
# - python -m flask kv list product:
#   Print every value whose key starts with the prefix, one JSON document per line.
# - python -m flask kv get product:1700000000000
#   Print one value as JSON (exit code 1 if the key is absent).
# - python -m flask kv delete sale:1700000000000
#   Delete one key. Raw delete: no stock restore, unlike DELETE /sales/<id>.
# - python -m flask kv resources
#   Show resource types with their key prefixes and row counts.

import json

import click
from flask.cli import with_appcontext

from .extensions import db
from .services.kv_store import kv
from .services.resource_service import RESOURCE_TYPES


@click.group('kv')
def kv_group():
    """Key-value store bootstrap and inspection commands."""


@kv_group.command('init')
@with_appcontext
def init_store():
    """Create the durable key-value table."""
    db.create_all()
    click.echo("PASS kv_store table ready")


@kv_group.command('list')
@click.argument('prefix')
@with_appcontext
def list_values(prefix):
    """Print every value whose key starts with PREFIX."""
    values = kv.scan(prefix)
    for value in values:
        click.echo(json.dumps(value, ensure_ascii=False, sort_keys=True))
    click.echo(f"{len(values)} value(s)", err=True)


@kv_group.command('get')
@click.argument('key')
@with_appcontext
def get_value(key):
    """Print the value stored at KEY."""
    value = kv.get(key)
    if value is None:
        click.echo(f"FAIL No value at {key}", err=True)
        raise SystemExit(1)
    click.echo(json.dumps(value, ensure_ascii=False, indent=2, sort_keys=True))


@kv_group.command('delete')
@click.argument('key')
@with_appcontext
def delete_value(key):
    """Delete KEY (no-op when absent)."""
    kv.delete(key)
    click.echo(f"PASS Deleted {key}")


@kv_group.command('resources')
@with_appcontext
def list_resources():
    """Show resource types, key prefixes and row counts."""
    for resource in RESOURCE_TYPES.values():
        count = len(kv.scan(resource.scan_prefix))
        click.echo(f"{resource.name:<24} {resource.scan_prefix:<14} {count}")


@kv_group.command('wipe')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def wipe_store(yes):
    """
    DANGER: Delete every key in the store.

    This will DELETE ALL DATA!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    kv.clear()
    click.echo("PASS Store wiped")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(kv_group)
