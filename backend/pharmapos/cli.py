# Overview: Flask CLI command groups for inspection and maintenance.

# backend/pharmapos/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# State is in memory, so every command runs against a freshly seeded app.
#
# Data:
# - python -m flask data backup [--output epos_pharma_backup.json]
#   Write settings and users as a JSON backup.
#
# Catalog:
# - python -m flask catalog alerts
#   Low stock, near expiry and expired batches.
#
# Users:
# - python -m flask users list
#   List the user directory.
#
# Permission inspection:
# - python -m flask perms list [--role cashier] [--category SALES]
#   List actions (optionally filtered by role or category).
# - python -m flask perms check admin@epos.com DELETE_PRODUCT
#   Check whether a user may perform an action.

import json

import click
from flask import current_app
from flask.cli import with_appcontext

from .extensions import get_state
from .permissions import PERMISSION_DEFINITIONS, get_permission_definition, get_permissions_by_category
from .services import catalog_service, maintenance_service, permission_service
from .services.settings_service import get_expiry_alert_days, get_low_stock_default


@click.group('data')
def data_group():
    """Backup commands."""


@data_group.command('backup')
@click.option('--output', type=click.Path(dir_okay=False, writable=True), default=None,
              help='Destination file (defaults to BACKUP_FILENAME)')
@with_appcontext
def backup_cli(output):
    """Export settings and users to a JSON file."""
    document = maintenance_service.export_backup(get_state())
    path = output or current_app.config["BACKUP_FILENAME"]
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(document, fh, indent=2)
    click.echo(f"PASS Backup written to {path} "
               f"({len(document['settings'])} settings, {len(document['users'])} users)")


@click.group('catalog')
def catalog_group():
    """Catalog inspection commands."""


@catalog_group.command('alerts')
@with_appcontext
def alerts_cli():
    """Show low stock, near expiry and expired batches."""
    state = get_state()
    alerts = catalog_service.catalog_alerts(state)
    sections = (
        ("low_stock", f"LOW STOCK (default threshold {get_low_stock_default(state)})"),
        ("near_expiry", f"NEAR EXPIRY (within {get_expiry_alert_days(state)} days)"),
        ("expired", "EXPIRED"),
    )

    for key, title in sections:
        products = alerts[key]
        click.echo(f"\n{'='*80}")
        click.echo(title)
        click.echo(f"{'='*80}")
        if not products:
            click.echo("  none")
            continue
        click.echo(f"{'ID':<5} {'Name':<25} {'Batch':<12} {'Stock':<7} {'Expiry'}")
        click.echo("-"*80)
        for p in products:
            click.echo(f"{p.id:<5} {p.name:<25} {p.batch_number:<12} {p.stock:<7} {p.expiry_date.isoformat()}")

    click.echo("")


@click.group('users')
def users_group():
    """User inspection commands."""


@users_group.command('list')
@with_appcontext
def list_users():
    """List all users with their roles."""
    users = get_state().users.all()

    if not users:
        click.echo("No users found.")
        return

    click.echo("\n" + "="*90)
    click.echo(f"{'ID':<12} {'Name':<22} {'Email':<28} {'Role':<12} {'Status'}")
    click.echo("="*90)
    for user in users:
        click.echo(f"{user.id:<12} {user.name:<22} {user.email:<28} {user.role:<12} {user.status}")
    click.echo("="*90 + "\n")


@click.group('perms')
def perms_group():
    """Permission inspection commands."""


@perms_group.command('list')
@click.option('--role', help='Filter by role name')
@click.option('--category', help='Filter by category')
@with_appcontext
def list_permissions_cli(role, category):
    """List all actions, optionally filtered by role or category."""
    if role:
        codes = permission_service.get_role_permissions(role)
        if not codes:
            click.echo(f"FAIL Role '{role}' not found")
            return
        perms = [p for p in PERMISSION_DEFINITIONS if p[0] in codes]
        heading = f"Permissions for role: {role.upper()}"
    elif category:
        perms = get_permissions_by_category(category)
        heading = f"Permissions in category: {category}"
    else:
        perms = sorted(PERMISSION_DEFINITIONS, key=lambda p: (p[3], p[0]))
        heading = "All Permissions"

    click.echo(f"\n{'='*80}")
    click.echo(heading)
    click.echo(f"{'='*80}\n")

    click.echo(f"{'Code':<30} {'Name':<35} {'Category'}")
    click.echo("-"*80)
    for code, name, _description, cat in perms:
        click.echo(f"{code:<30} {name:<35} {cat}")

    click.echo(f"\n Total: {len(perms)} permissions\n")


@perms_group.command('check')
@click.argument('email')
@click.argument('permission_code')
@with_appcontext
def check_permission_cli(email, permission_code):
    """Check if a user has a specific permission."""
    if get_permission_definition(permission_code) is None:
        click.echo(f"FAIL Unknown permission '{permission_code}'")
        return

    user = get_state().users.find_by_email(email)

    if not user:
        click.echo(f"FAIL User '{email}' not found")
        return

    if permission_service.user_has_permission(user, permission_code):
        click.echo(f"PASS User '{email}' HAS permission '{permission_code}'")
    else:
        click.echo(f"FAIL User '{email}' DOES NOT HAVE permission '{permission_code}'")

    click.echo(f"\nUser role: {user.role}")
    click.echo(f"Total permissions: {len(permission_service.get_user_permissions(user))}")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(data_group)
    app.cli.add_command(catalog_group)
    app.cli.add_command(users_group)
    app.cli.add_command(perms_group)
