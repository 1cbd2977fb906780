"""aios-core sync command."""

from __future__ import annotations

import click

from aios_core.cli.context import run_handler
from aios_core.commands.sync import run_sync


@click.command(name="sync")
@click.pass_context
def sync_cmd(ctx):
    """Sync .claude/ into .aios-core/claude-config/ for distribution (dev only)."""
    run_handler(ctx, run_sync)
