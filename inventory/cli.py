"""
Custom Flask CLI commands.

These commands are registered with the app by the application factory.
Run them with ``flask <command_name>``.

Usage::

    flask api-check     # Verify the inventory API is reachable
"""

import click
from flask import current_app
from flask.cli import with_appcontext

from inventory.services import api_client
from inventory.services.api_client import ApiConnectionError, ApiError


@click.command("api-check")
@with_appcontext
def api_check_command():
    """
    Verify connectivity with the remote inventory API.

    Calls the API health endpoint using the configured base URL and
    reports the result.  Useful for confirming your environment
    variables before starting the server.
    """
    click.echo("=" * 60)
    click.echo("  Equipment Inventory — API Connectivity Check")
    click.echo("=" * 60)

    base_url = current_app.config["INVENTORY_API_BASE_URL"]
    click.echo(f"\n  API base URL: {base_url}\n")

    click.echo("[1/1] Calling health endpoint...")
    try:
        status = api_client.get_client().check_health()
    except ApiConnectionError as exc:
        click.secho(f"      ✗ Connection failed: {exc}", fg="red")
        click.echo("\n  Troubleshooting tips:")
        click.echo("    - Is the inventory API (backend) running?")
        click.echo("    - Does INVENTORY_API_BASE_URL include the /api prefix?")
        raise SystemExit(1) from exc
    except ApiError as exc:
        click.secho(f"      ✗ API answered with an error: {exc}", fg="red")
        raise SystemExit(1) from exc

    click.secho("      ✓ Inventory API reachable.", fg="green")
    if isinstance(status, dict):
        for key, value in status.items():
            click.echo(f"      {key:>10}: {value}")

    click.echo("\n" + "=" * 60)


def register_commands(app):
    """Register all custom CLI commands with the Flask application."""
    app.cli.add_command(api_check_command)
