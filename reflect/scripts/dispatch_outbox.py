"""CLI command for publishing staged domain events.

Usage:
    flask dispatch-outbox               # Publish up to 50 ready messages
    flask dispatch-outbox --limit 200
"""

from __future__ import annotations

import click
from flask.cli import with_appcontext


@click.command("dispatch-outbox")
@click.option("--limit", "-l", type=int, default=50, show_default=True, help="Maximum messages to publish")
@with_appcontext
def dispatch_outbox_command(limit: int):
    """Publish ready outbox messages to the in-process event bus."""
    from reflect.core.outbox import dispatch_ready

    sent = dispatch_ready(limit=limit)
    click.echo(f"Dispatched {len(sent)} message(s)")


def register_commands(app):
    """Register CLI commands with the app."""
    app.cli.add_command(dispatch_outbox_command)
