"""Sync .claude/ into .aios-core/claude-config/ for distribution.

Development-only: run in the hub project that publishes the framework.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from aios_core.config import CLAUDE_CONFIG_DIR_NAME, CommandContext
from aios_core.errors import PreconditionError
from aios_core.sync.copier import copy_file, copy_tree, count_files, remove_tree
from aios_core.sync.policy import NEVER_SYNC, SYNC_ITEMS
from aios_core.sync.preservation import claude_config_excluder


@dataclass
class SyncResult:
    synced: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)  # Items missing from .claude/
    removed: list[str] = field(default_factory=list)  # Local-only files cleaned out


def run_sync(context: CommandContext) -> SyncResult:
    """
    Copy SYNC_ITEMS from .claude/ into .aios-core/claude-config/.

    Directories are removed and re-copied; files are overwritten. Local-only
    files (NEVER_SYNC) are filtered out and removed if already present.

    Raises:
        PreconditionError: .claude/ or .aios-core/ is missing (nothing written)
    """
    console = context.console
    claude_dir = context.claude_dir
    config_dir = context.framework_dir / CLAUDE_CONFIG_DIR_NAME

    console.print("\n  [bold]AIOS Sync: .claude/ → .aios-core/claude-config/[/bold]\n")

    if not claude_dir.is_dir():
        raise PreconditionError(
            ".claude/ not found in current directory.",
            hint="Run this from the AIOS hub directory.",
        )
    if not context.framework_dir.is_dir():
        raise PreconditionError(
            ".aios-core/ not found in current directory.",
            hint="Run this from the AIOS hub directory.",
        )

    config_dir.mkdir(parents=True, exist_ok=True)
    result = SyncResult()

    for item in SYNC_ITEMS:
        src = claude_dir / item
        dest = config_dir / item

        if not src.exists():
            console.print(f"  [dim]Skip: {item} (not found)[/dim]")
            result.skipped.append(item)
            continue

        if src.is_dir():
            remove_tree(dest)
            copy_tree(src, dest, exclude=claude_config_excluder())
            console.print(f"  [green]Synced: {item}/ ({count_files(dest)} items)[/green]")
        else:
            copy_file(src, dest, overwrite=True)
            console.print(f"  [green]Synced: {item}[/green]")
        result.synced.append(item)

    for item in NEVER_SYNC:
        forbidden = config_dir / item
        if forbidden.exists():
            remove_tree(forbidden)
            result.removed.append(item)
            console.print(f"  [yellow]Removed: {item} (local-only, should not be distributed)[/yellow]")

    console.print(
        f"\n  [bold green]Sync complete: {len(result.synced)} synced, "
        f"{len(result.skipped)} skipped.[/bold green]\n"
    )
    console.print(f"  [dim]The .aios-core/{CLAUDE_CONFIG_DIR_NAME}/ directory is ready for distribution.[/dim]")
    console.print("  [dim]Commit and push to make it available to other projects.[/dim]\n")

    return result
