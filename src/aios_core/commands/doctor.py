"""
Installation health checks.

Checks:
1. framework_installed: .aios-core/ exists
2. manifest_valid: install-manifest.yaml parses
3. version_current: installed version matches the package
4. claude_config: .claude/CLAUDE.md present
5. settings_local_ignored: .claude/settings.local.json is gitignored
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from aios_core.config import CommandContext
from aios_core.manifest import load_manifest
from aios_core.package import read_package_version
from aios_core.sync.policy import NEVER_SYNC


class CheckStatus(str, Enum):
    """Status of a doctor check."""

    PASS = "pass"
    FAIL = "fail"
    WARN = "warn"


@dataclass
class CheckResult:
    """Result of a single doctor check."""

    name: str
    status: CheckStatus
    message: str
    details: str | None = None


@dataclass
class DoctorReport:
    """Full doctor report with all checks."""

    checks: list[CheckResult]
    summary: dict[str, int]
    exit_code: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "checks": [
                {
                    "name": c.name,
                    "status": c.status.value,
                    "message": c.message,
                    "details": c.details,
                }
                for c in self.checks
            ],
            "summary": self.summary,
            "exit_code": self.exit_code,
        }


def check_framework_installed(context: CommandContext) -> CheckResult:
    if context.framework_dir.is_dir():
        return CheckResult("framework_installed", CheckStatus.PASS, ".aios-core/ present")
    return CheckResult(
        "framework_installed",
        CheckStatus.FAIL,
        ".aios-core/ not found",
        details='Run "aios-core install"',
    )


def check_manifest_valid(context: CommandContext) -> CheckResult:
    if not context.manifest_path.exists():
        return CheckResult(
            "manifest_valid",
            CheckStatus.FAIL,
            "install-manifest.yaml missing",
            details='Run "aios-core update" to regenerate it',
        )
    if load_manifest(context.manifest_path) is None:
        return CheckResult(
            "manifest_valid",
            CheckStatus.FAIL,
            "install-manifest.yaml is not a valid manifest",
            details='Run "aios-core update" to regenerate it',
        )
    return CheckResult("manifest_valid", CheckStatus.PASS, "install-manifest.yaml valid")


def check_version_current(context: CommandContext) -> CheckResult:
    package_version = read_package_version(context.package_root)
    manifest = load_manifest(context.manifest_path)
    installed = manifest.version if manifest else "unknown"

    if installed == package_version:
        return CheckResult("version_current", CheckStatus.PASS, f"v{installed}")
    return CheckResult(
        "version_current",
        CheckStatus.WARN,
        f"Installed {installed}, package is {package_version}",
        details='Run "aios-core update"',
    )


def check_claude_config(context: CommandContext) -> CheckResult:
    if (context.claude_dir / "CLAUDE.md").is_file():
        return CheckResult("claude_config", CheckStatus.PASS, ".claude/CLAUDE.md present")
    return CheckResult(
        "claude_config",
        CheckStatus.WARN,
        ".claude/CLAUDE.md not found",
        details='Run "aios-core install --force" to restore it',
    )


def check_settings_local_ignored(context: CommandContext) -> CheckResult:
    local_files = [name for name in NEVER_SYNC if (context.claude_dir / name).exists()]
    if not local_files:
        return CheckResult("settings_local_ignored", CheckStatus.PASS, "No local-only settings")

    gitignore = context.cwd / ".gitignore"
    content = gitignore.read_text() if gitignore.exists() else ""
    missing = [name for name in local_files if name not in content]
    if not missing:
        return CheckResult("settings_local_ignored", CheckStatus.PASS, "Local settings gitignored")
    return CheckResult(
        "settings_local_ignored",
        CheckStatus.WARN,
        f"Not in .gitignore: {', '.join('.claude/' + m for m in missing)}",
        details="Local settings may be committed by accident",
    )


def run_doctor(context: CommandContext) -> DoctorReport:
    """Run all checks. Exit code is 1 if any check failed."""
    checks = [
        check_framework_installed(context),
        check_manifest_valid(context),
        check_version_current(context),
        check_claude_config(context),
        check_settings_local_ignored(context),
    ]

    summary = {
        "passed": sum(1 for c in checks if c.status == CheckStatus.PASS),
        "failed": sum(1 for c in checks if c.status == CheckStatus.FAIL),
        "warnings": sum(1 for c in checks if c.status == CheckStatus.WARN),
    }

    return DoctorReport(
        checks=checks,
        summary=summary,
        exit_code=1 if summary["failed"] else 0,
    )
