# Overview: Flask CLI command groups for bootstrap and tenant administration.

# backend/venuehub/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap:
# - python -m flask system init-db
#   Create all tables for the sql provider (use `flask db upgrade` for migrated deployments).
#
# Organization management (MULTI-TENANT):
# - python -m flask orgs list
#   List all organizations.
# - python -m flask orgs create --name "Acme Events"
#   Create a new organization (tenant).
#
# User onboarding:
# - python -m flask users create --email admin@venuehub.local --name "Admin" --org-id <id> --role super_admin
#   Create an identity and its profile (prompts for the password). This is how the first
#   super admin is created; later users can be onboarded over POST /api/admin/onboard-user.

import click
from flask.cli import with_appcontext

from .errors import AppError
from .extensions import db
from .providers import get_provider
from .roles import ROLE_VALUES
from .services import onboarding_service, organization_service


@click.group('system')
def system_group():
    """System bootstrap commands."""


@system_group.command('init-db')
@with_appcontext
def init_db():
    """Create all tables (sql provider only)."""
    provider = get_provider()
    if provider.name != "sql":
        click.echo(f"SKIP Provider '{provider.name}' manages its own schema")
        return
    db.create_all()
    click.echo("PASS Database tables created")


@click.group('orgs')
def orgs_group():
    """Organization (tenant) management."""


@orgs_group.command('list')
@with_appcontext
def list_orgs():
    organizations = organization_service.list_organizations()
    if not organizations:
        click.echo("No organizations found")
        return
    for org in organizations:
        click.echo(f"{org['id']}  {org['name']}")


@orgs_group.command('create')
@click.option('--name', required=True, help='Organization name')
@with_appcontext
def create_org(name):
    try:
        org = organization_service.create_organization(name)
    except AppError as e:
        click.echo(f"FAIL {e.message}")
        raise SystemExit(1)
    click.echo(f"PASS Created organization: {org['name']} (ID: {org['id']})")


@click.group('users')
def users_group():
    """User onboarding."""


@users_group.command('create')
@click.option('--email', prompt=True)
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True)
@click.option('--name', prompt=True)
@click.option('--org-id', 'org_id', prompt=True, help='Organization ID')
@click.option('--role', type=click.Choice(ROLE_VALUES), prompt=True)
@with_appcontext
def create_user_cmd(email, password, name, org_id, role):
    """Create an identity with its profile, rolling the identity back if the profile fails."""
    try:
        identity, profile = onboarding_service.onboard_user(
            email=email,
            password=password,
            name=name,
            organization_id=org_id,
            role=role,
        )
    except AppError as e:
        click.echo(f"FAIL {e.message}")
        raise SystemExit(1)
    click.echo(f"PASS Created user: {identity.email} (ID: {identity.id}, role: {profile['role']})")


def register_commands(app):
    app.cli.add_command(system_group)
    app.cli.add_command(orgs_group)
    app.cli.add_command(users_group)
