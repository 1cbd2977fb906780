"""Update an existing aios-core installation, preserving local configs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from aios_core.config import MANIFEST_FILE_NAME, CommandContext
from aios_core.commands.install import check_outside_package
from aios_core.errors import PreconditionError
from aios_core.manifest import (
    InstallManifest,
    build_update_manifest,
    read_installed_version,
    write_manifest,
)
from aios_core.package import read_package_version
from aios_core.sync.copier import CopyStats, copy_file, copy_tree
from aios_core.sync.policy import (
    BASE_SETTINGS_FILE,
    CATALOG_DIRS,
    CUSTOMIZABLE_DOCS,
    LOCAL_CONFIGS,
    NEVER_SYNC,
)
from aios_core.sync.preservation import (
    framework_excluder,
    replace_catalog,
    restore_files,
    should_replace_document,
    snapshot_files,
)

logger = logging.getLogger(__name__)


@dataclass
class UpdateResult:
    previous_version: str
    version: str
    framework: CopyStats
    backed_up: list[str] = field(default_factory=list)
    restored: list[str] = field(default_factory=list)
    catalogs: list[str] = field(default_factory=list)  # Replaced .claude/ subtrees
    documents: dict[str, bool] = field(default_factory=dict)  # Name -> replaced?
    manifest: InstallManifest | None = None


def run_update(context: CommandContext, *, force: bool = False) -> UpdateResult:
    """
    Update the framework in context.cwd from the package.

    Local configs are snapshotted before the copy and written back after it,
    whatever the copy did. Catalog directories in .claude/ are replaced
    wholesale. CLAUDE.md is only replaced when it was not customized, or
    with force.

    Raises:
        PreconditionError: No .aios-core/ in the directory
        OSError: If copying fails; partial copies are not rolled back
    """
    console = context.console
    version = read_package_version(context.package_root)

    console.print("\n  [bold]AIOS Core Updater[/bold]")
    console.print(f"  [dim]Version: {version}[/dim]\n")

    if not context.framework_dir.exists():
        raise PreconditionError(
            "No .aios-core/ found in this directory.",
            hint='Run "aios-core install" first.',
        )
    check_outside_package(context)

    current_version = read_installed_version(context.manifest_path)
    console.print(f"  [dim]Current version: {current_version}[/dim]")
    console.print(f"  [dim]New version:     {version}[/dim]\n")

    # Backup
    console.print("  [cyan]Backing up local configs...[/cyan]")
    backups = snapshot_files(context.framework_dir, LOCAL_CONFIGS)
    for name in backups:
        console.print(f"    [dim]Backed up: {name}[/dim]")
    documents_before = snapshot_files(context.claude_dir, CUSTOMIZABLE_DOCS)
    local_settings = snapshot_files(context.claude_dir, NEVER_SYNC)

    # Sync
    console.print("  [cyan]Updating .aios-core/ framework...[/cyan]")
    framework_stats = copy_tree(
        context.package_root,
        context.framework_dir,
        exclude=framework_excluder(preserve_local_configs=not force),
        overwrite=True,
    )
    console.print("    [green]Done.[/green]")

    result = UpdateResult(
        previous_version=current_version,
        version=version,
        framework=framework_stats,
        backed_up=list(backups),
    )

    if context.claude_config_source.is_dir():
        console.print("  [cyan]Updating .claude/ configuration...[/cyan]")
        _update_claude_config(context, documents_before, force=force, result=result)
        console.print("    [green]Done.[/green]")

    # Restore
    console.print("  [cyan]Restoring local configs...[/cyan]")
    for name in restore_files(context.framework_dir, backups):
        console.print(f"    [dim]Restored: {name}[/dim]")
        result.restored.append(name)
    for name in restore_files(context.claude_dir, local_settings):
        console.print(f"    [dim]Restored: {name}[/dim]")
        result.restored.append(f".claude/{name}")

    # Manifest
    manifest = build_update_manifest(
        version,
        context.package_root,
        previous_manifest=backups.get(MANIFEST_FILE_NAME),
        previous_version=current_version,
    )
    write_manifest(context.manifest_path, manifest)
    result.manifest = manifest
    logger.debug("Wrote %s", context.manifest_path)

    console.print("\n  [bold green]Update complete![/bold green]\n")
    console.print(f"  [dim]{current_version} → {version}[/dim]")
    console.print()

    return result


def _update_claude_config(
    context: CommandContext,
    documents_before: dict[str, bytes],
    *,
    force: bool,
    result: UpdateResult,
) -> None:
    console = context.console
    source = context.claude_config_source
    target = context.claude_dir

    for catalog in CATALOG_DIRS:
        if (source / catalog).is_dir():
            replace_catalog(source / catalog, target / catalog)
            result.catalogs.append(catalog)
            console.print(f"    [dim]Updated: {catalog}/[/dim]")

    if (source / BASE_SETTINGS_FILE).is_file():
        copy_file(source / BASE_SETTINGS_FILE, target / BASE_SETTINGS_FILE, overwrite=True)
        console.print(f"    [dim]Updated: {BASE_SETTINGS_FILE}[/dim]")

    for name in CUSTOMIZABLE_DOCS:
        template_path = source / name
        if not template_path.is_file():
            continue

        template = template_path.read_bytes()
        if should_replace_document(documents_before.get(name), template, force):
            copy_file(template_path, target / name, overwrite=True)
            result.documents[name] = True
            console.print(f"    [dim]Updated: {name}[/dim]")
        else:
            result.documents[name] = False
            console.print(f"    [dim]Preserved: {name} (customized)[/dim]")
