"""Install the aios-core framework into a project directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from rich.markup import escape

from aios_core.config import CommandContext, dependency_command
from aios_core.deps import DependencyInstallResult, install_dependencies
from aios_core.errors import PreconditionError
from aios_core.manifest import InstallManifest, build_install_manifest, write_manifest
from aios_core.package import read_package_version
from aios_core.sync.copier import CopyStats, copy_tree
from aios_core.sync.preservation import claude_config_excluder, framework_excluder

logger = logging.getLogger(__name__)


class ClaudeConfigState(str, Enum):
    """What install did with .claude/."""

    CREATED = "created"
    OVERWRITTEN = "overwritten"
    MERGED = "merged"
    MISSING = "missing"  # Package has no claude-config/


@dataclass
class InstallResult:
    version: str
    framework: CopyStats
    claude_state: ClaudeConfigState
    claude: CopyStats | None
    dependencies: DependencyInstallResult | None
    manifest: InstallManifest


def check_install_preconditions(context: CommandContext, *, force: bool) -> None:
    """
    Refuse to install over an existing framework or into the package itself.

    Raises:
        PreconditionError: If install must not proceed
    """
    if context.framework_dir.exists() and not force:
        raise PreconditionError(
            ".aios-core/ already exists in this directory.",
            hint="Use --force to overwrite.",
        )

    check_outside_package(context)


def check_outside_package(context: CommandContext) -> None:
    """
    Refuse a target inside the package tree (or its parent directory).

    Copying the package into a subdirectory of itself would recurse into the
    copy being written.

    Raises:
        PreconditionError: If the working directory belongs to the package
    """
    package_root = context.package_root.resolve()
    cwd = context.cwd.resolve()
    if cwd == package_root.parent or context.framework_dir.resolve().is_relative_to(package_root):
        raise PreconditionError(
            "Cannot install into the AIOS source directory.",
            hint="Run this command from your target project directory.",
        )


def install_claude_config(context: CommandContext, *, force: bool) -> tuple[ClaudeConfigState, CopyStats | None]:
    """Copy claude-config/ into .claude/ (fresh copy, merge, or overwrite)."""
    source = context.claude_config_source
    target = context.claude_dir

    if not source.is_dir():
        return ClaudeConfigState.MISSING, None

    if not target.exists():
        state = ClaudeConfigState.CREATED
        stats = copy_tree(source, target, exclude=claude_config_excluder())
    elif force:
        state = ClaudeConfigState.OVERWRITTEN
        stats = copy_tree(source, target, exclude=claude_config_excluder(), overwrite=True)
    else:
        # Merge: only files the project doesn't have yet
        state = ClaudeConfigState.MERGED
        stats = copy_tree(source, target, exclude=claude_config_excluder(), overwrite=False)

    return state, stats


def run_install(context: CommandContext, *, force: bool = False, skip_deps: bool = False) -> InstallResult:
    """
    Install the framework into context.cwd.

    Steps:
    1. Check preconditions (nothing is written if they fail)
    2. Copy the package root to .aios-core/
    3. Copy claude-config/ to .claude/
    4. Install dependencies (unless skip_deps)
    5. Write install-manifest.yaml

    Raises:
        PreconditionError: Already installed without force, or cwd is the package
        OSError: If copying fails; partial copies are not rolled back
    """
    console = context.console
    version = read_package_version(context.package_root)

    console.print("\n  [bold]AIOS Core Installer[/bold]")
    console.print(f"  [dim]Version: {version}[/dim]\n")

    check_install_preconditions(context, force=force)

    console.print("  [cyan]Copying .aios-core/ framework...[/cyan]")
    framework_stats = copy_tree(
        context.package_root,
        context.framework_dir,
        exclude=framework_excluder(),
        overwrite=force,
    )
    console.print("    [green]Done.[/green]")

    console.print("  [cyan]Setting up .claude/ configuration...[/cyan]")
    claude_state, claude_stats = install_claude_config(context, force=force)
    if claude_state == ClaudeConfigState.CREATED:
        console.print("    [green]Created .claude/ directory.[/green]")
    elif claude_state == ClaudeConfigState.OVERWRITTEN:
        console.print("    [green]Overwrote .claude/ directory.[/green]")
    elif claude_state == ClaudeConfigState.MERGED:
        console.print("    [green]Merged into existing .claude/ (no overwrites).[/green]")
    else:
        console.print("  [yellow]Warning: claude-config/ not found in package.[/yellow]")
        console.print('  [dim]Run "aios-core sync" in the hub to generate it first.[/dim]\n')

    deps_result = None
    if not skip_deps:
        console.print("  [cyan]Installing dependencies...[/cyan]")
        deps_result = install_dependencies(
            context.framework_dir, dependency_command(context.settings)
        )
        if deps_result.ok:
            console.print("    [green]Done.[/green]")
        else:
            console.print(
                f"    [yellow]Warning: dependency install failed: {escape(deps_result.error or '')}[/yellow]"
            )
            console.print(
                f"    [dim]You may need to run \"{context.settings.package_manager} install\" "
                "manually in .aios-core/[/dim]\n"
            )
    else:
        console.print("  [dim]Skipping dependency install (--skip-deps).[/dim]")

    manifest = build_install_manifest(
        version,
        context.package_root,
        force=force,
        skip_deps=skip_deps,
    )
    write_manifest(context.manifest_path, manifest)
    logger.debug("Wrote %s", context.manifest_path)

    _print_summary(context, version)

    return InstallResult(
        version=version,
        framework=framework_stats,
        claude_state=claude_state,
        claude=claude_stats,
        dependencies=deps_result,
        manifest=manifest,
    )


def _print_summary(context: CommandContext, version: str) -> None:
    console = context.console
    console.print("\n  [bold green]Installation complete![/bold green]\n")
    console.print("  Installed:")
    console.print(f"    [dim].aios-core/  (framework v{version})[/dim]")
    if context.claude_dir.exists():
        console.print("    [dim].claude/     (Claude Code configuration)[/dim]")
    console.print("    [dim]install-manifest.yaml[/dim]")
    console.print()
    console.print("  Next steps:")
    console.print("    [dim]1. Review .claude/CLAUDE.md and customize for your project[/dim]")
    console.print("    [dim]2. Add .claude/settings.local.json to .gitignore[/dim]")
    console.print('    [dim]3. Run "aios-core doctor" to verify installation[/dim]')
    console.print()
