"""Install the framework's Python dependencies with the host package manager."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from aios_core.config import REQUIREMENTS_FILE_NAME

logger = logging.getLogger(__name__)


@dataclass
class DependencyInstallResult:
    """Outcome of a dependency install. Failures never raise."""

    ok: bool
    skipped: bool = False
    error: str | None = None


def install_dependencies(framework_dir: Path, command: list[str]) -> DependencyInstallResult:
    """
    Run the package manager in framework_dir and wait for it to finish.

    The framework files are usable without their dependencies, so a failing
    or missing package manager is reported in the result instead of raised.
    """
    if not (framework_dir / REQUIREMENTS_FILE_NAME).exists():
        logger.debug("No %s in %s", REQUIREMENTS_FILE_NAME, framework_dir)
        return DependencyInstallResult(ok=True, skipped=True)

    logger.debug("Running %s in %s", " ".join(command), framework_dir)
    try:
        subprocess.run(
            command,
            cwd=framework_dir,
            capture_output=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        stderr = e.stderr.decode(errors="replace").strip() if e.stderr else ""
        error = stderr.splitlines()[-1] if stderr else f"exit code {e.returncode}"
        logger.warning("Dependency install failed: %s", error)
        return DependencyInstallResult(ok=False, error=error)
    except FileNotFoundError:
        error = f"{command[0]} not found"
        logger.warning("Dependency install failed: %s", error)
        return DependencyInstallResult(ok=False, error=error)

    return DependencyInstallResult(ok=True)
