"""System information for bug reports."""

from __future__ import annotations

import platform
import sys
from typing import Any

from aios_core.config import CommandContext
from aios_core.manifest import load_manifest
from aios_core.package import read_package_version


def collect_info(context: CommandContext) -> dict[str, Any]:
    """Gather package, runtime and project installation details."""
    manifest = load_manifest(context.manifest_path)

    return {
        "version": read_package_version(context.package_root),
        "package_root": str(context.package_root),
        "python": sys.version.split()[0],
        "platform": f"{platform.system()} {platform.release()}",
        "project": str(context.cwd),
        "installed": context.framework_dir.exists(),
        "installed_version": manifest.version if manifest else None,
        "installed_at": manifest.installed_at if manifest else None,
        "updated_at": manifest.updated_at if manifest else None,
        "package_manager": context.settings.package_manager,
    }
