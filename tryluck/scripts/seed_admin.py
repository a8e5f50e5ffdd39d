"""CLI command for seeding the dashboard admin account.

Usage:
    flask seed-admin                                   # ADMIN_USERNAME / ADMIN_PASSWORD
    flask seed-admin --username ops --password secret
"""

from __future__ import annotations

import click
from flask import current_app
from flask.cli import with_appcontext


@click.command("seed-admin")
@click.option("--username", "-u", default=None, help="Admin username (defaults to ADMIN_USERNAME)")
@click.option("--password", "-p", default=None, help="Admin password (defaults to ADMIN_PASSWORD)")
@with_appcontext
def seed_admin_command(username: str | None, password: str | None):
    """Create the admin account if it does not exist yet."""
    from tryluck.core.auth.auth_service import ensure_admin

    username = username or current_app.config["ADMIN_USERNAME"]
    password = password or current_app.config["ADMIN_PASSWORD"]
    admin, created = ensure_admin(username, password)
    if created:
        click.echo(f"Created admin user {admin.username}")
    else:
        click.echo(f"Admin user {admin.username} already exists")


def register_commands(app):
    """Register CLI commands with the Flask app."""
    app.cli.add_command(seed_admin_command)
