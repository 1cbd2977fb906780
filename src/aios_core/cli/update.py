"""aios-core update command."""

from __future__ import annotations

import click

from aios_core.cli.context import run_handler
from aios_core.commands.update import run_update


@click.command(name="update")
@click.option(
    "--force",
    "-f",
    is_flag=True,
    default=False,
    help="Force overwrite all files including local configs",
)
@click.pass_context
def update_cmd(ctx, force: bool):
    """
    Update existing AIOS installation preserving local configs.

    core-config.yaml, local-config.yaml and .claude/settings.local.json are
    kept. .claude/commands, rules and hooks are replaced. A customized
    .claude/CLAUDE.md is kept unless --force is given.
    """
    run_handler(ctx, run_update, force=force)
