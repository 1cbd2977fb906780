"""aios-core info command."""

from __future__ import annotations

import json

import click
from rich.table import Table

from aios_core.cli.context import get_command_context
from aios_core.commands.info import collect_info


@click.command(name="info")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def info_cmd(ctx, as_json: bool):
    """Show system information."""
    context = get_command_context(ctx)
    info = collect_info(context)

    if as_json:
        click.echo(json.dumps(info, indent=2, default=str))
        return

    table = Table(title="AIOS Core", show_header=False)
    table.add_column("Key", style="cyan")
    table.add_column("Value")

    table.add_row("Version", info["version"])
    table.add_row("Package root", info["package_root"])
    table.add_row("Python", info["python"])
    table.add_row("Platform", info["platform"])
    table.add_row("Package manager", info["package_manager"])
    table.add_row("Project", info["project"])
    if info["installed"]:
        table.add_row("Installed version", info["installed_version"] or "unknown")
        table.add_row("Installed at", info["installed_at"] or "-")
        if info["updated_at"]:
            table.add_row("Updated at", info["updated_at"])
    else:
        table.add_row("Installed version", "[dim]not installed[/dim]")

    context.console.print(table)
