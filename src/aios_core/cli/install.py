"""aios-core install command."""

from __future__ import annotations

import click

from aios_core.cli.context import run_handler
from aios_core.commands.install import run_install


@click.command(name="install")
@click.option("--force", "-f", is_flag=True, default=False, help="Overwrite existing installation")
@click.option("--skip-deps", is_flag=True, default=False, help="Skip dependency install in .aios-core/")
@click.pass_context
def install_cmd(ctx, force: bool, skip_deps: bool):
    """
    Install AIOS framework into the current project.

    Copies the framework to .aios-core/ and its Claude Code configuration
    to .claude/, then writes .aios-core/install-manifest.yaml.

    Example:
        aios-core install
        aios-core install --force --skip-deps
    """
    run_handler(ctx, run_install, force=force, skip_deps=skip_deps)
