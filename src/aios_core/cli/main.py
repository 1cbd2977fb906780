"""AIOS Core CLI - main command-line interface.

Commands are registered from a fixed table. Each one is imported when the
CLI is built; a command whose module fails to import (a partial
installation, a missing optional dependency) is left out instead of breaking
the CLI, so install/update/sync stay available. Set AIOS_DEBUG to see why a
command was left out.
"""

from __future__ import annotations

import importlib
import logging
import sys
from dataclasses import dataclass
from typing import Iterable

import click
from dotenv import find_dotenv, load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from aios_core.config import AiosSettings
from aios_core.errors import AiosError
from aios_core.package import DEFAULT_VERSION, get_package_root, read_package_version

logger = logging.getLogger(__name__)

err_console = Console(stderr=True)

PROG_NAME = "aios-core"

HELP_EPILOG = """\b
Commands:
  install           Install AIOS framework into current project
  update            Update existing AIOS installation
  sync              Sync .claude/ to .aios-core/claude-config/ (dev only)
  info              Show system information
  doctor            Run system diagnostics

\b
For command help:
  $ aios-core <command> --help

\b
Examples:
  $ aios-core install
  $ aios-core install --force
  $ aios-core update
  $ aios-core sync
  $ aios-core doctor
"""


@dataclass(frozen=True)
class CommandSpec:
    """A subcommand: its name and where its click command lives."""

    name: str
    module: str
    attr: str

    def load(self, debug: bool = False) -> click.Command | None:
        """
        Import the command.

        Returns:
            The click command, or None if it could not be loaded
        """
        try:
            module = importlib.import_module(self.module)
            command = getattr(module, self.attr)
        except Exception as e:  # noqa: BLE001 - any import-time failure disables the command
            if debug:
                err_console.print(
                    f'Warning: Failed to load "{self.name}" command: {e}',
                    markup=False,
                    highlight=False,
                    soft_wrap=True,
                )
            logger.debug("Command %s unavailable: %s", self.name, e)
            return None

        if not isinstance(command, click.Command):
            if debug:
                err_console.print(
                    f'Warning: "{self.module}.{self.attr}" is not a command',
                    markup=False,
                    highlight=False,
                    soft_wrap=True,
                )
            return None
        return command


COMMANDS: tuple[CommandSpec, ...] = (
    # Core commands
    CommandSpec("install", "aios_core.cli.install", "install_cmd"),
    CommandSpec("update", "aios_core.cli.update", "update_cmd"),
    CommandSpec("sync", "aios_core.cli.sync", "sync_cmd"),
    # Diagnostics
    CommandSpec("info", "aios_core.cli.info", "info_cmd"),
    CommandSpec("doctor", "aios_core.cli.doctor", "doctor_cmd"),
)


def _package_version() -> str:
    try:
        return read_package_version(get_package_root())
    except AiosError:
        return DEFAULT_VERSION


def build_cli(specs: Iterable[CommandSpec] = COMMANDS, *, debug: bool = False) -> click.Group:
    """Create the CLI group with every command that loads."""

    @click.group(name=PROG_NAME, epilog=HELP_EPILOG, invoke_without_command=True)
    @click.version_option(version=_package_version(), prog_name=PROG_NAME)
    @click.pass_context
    def cli(ctx):
        """AIOS-FullStack: AI-Orchestrated System for Full Stack Development."""
        ctx.ensure_object(dict)
        # Bare `aios-core`: show help, exit 1
        if ctx.invoked_subcommand is None:
            click.echo(ctx.get_help())
            ctx.exit(1)

    for spec in specs:
        command = spec.load(debug=debug)
        if command is not None:
            cli.add_command(command, name=spec.name)

    return cli


def _configure_logging(debug: bool) -> None:
    if not debug:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def _print_error(message: str) -> None:
    err_console.print(f"[red]Error: {escape(message)}[/red]", soft_wrap=True)


def run(argv: list[str] | None = None) -> int:
    """
    Run the CLI and return its exit code.

    Usage errors, unknown commands and command exceptions are reported as a
    single error line with exit code 1.
    """
    load_dotenv(find_dotenv(usecwd=True))

    try:
        settings = AiosSettings.from_env()
    except ValueError as e:
        _print_error(str(e))
        return 1

    _configure_logging(settings.debug)
    cli = build_cli(debug=settings.debug)

    try:
        rv = cli.main(
            args=argv,
            prog_name=PROG_NAME,
            standalone_mode=False,
            obj={"settings": settings},
        )
    except click.Abort:
        _print_error("Aborted")
        return 1
    except click.ClickException as e:
        _print_error(e.format_message())
        return 1
    except Exception as e:
        logger.debug("Command failed", exc_info=True)
        _print_error(str(e))
        return 1

    return rv if isinstance(rv, int) else 0


def main() -> None:
    """Console script entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
