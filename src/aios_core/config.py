"""
aios-core runtime configuration.

Settings come from environment variables (a .env file in the working
directory is loaded by the CLI at startup). Command handlers receive an
explicit CommandContext instead of reading the process state themselves.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar, Mapping

from pydantic import BaseModel, Field, field_validator
from rich.console import Console

FRAMEWORK_DIR_NAME = ".aios-core"
CLAUDE_DIR_NAME = ".claude"
CLAUDE_CONFIG_DIR_NAME = "claude-config"
MANIFEST_FILE_NAME = "install-manifest.yaml"
REQUIREMENTS_FILE_NAME = "requirements.txt"


def _is_truthy(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


class AiosSettings(BaseModel):
    """Settings read from the environment."""

    DEFAULT_PACKAGE_MANAGER: ClassVar[str] = "pip"
    VALID_PACKAGE_MANAGERS: ClassVar[list[str]] = ["pip", "uv"]

    debug: bool = Field(
        default=False,
        description="Verbose warnings for commands that fail to load (AIOS_DEBUG)",
    )
    package_manager: str = Field(
        default=DEFAULT_PACKAGE_MANAGER,
        description="Tool used to install framework dependencies (AIOS_PACKAGE_MANAGER)",
    )

    @field_validator("debug", mode="before")
    @classmethod
    def validate_debug(cls, v: Any) -> bool:
        return _is_truthy(v)

    @field_validator("package_manager")
    @classmethod
    def validate_package_manager(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in cls.VALID_PACKAGE_MANAGERS:
            raise ValueError(
                f"Unsupported package manager '{v}'. "
                f"Valid choices: {', '.join(cls.VALID_PACKAGE_MANAGERS)}"
            )
        return v

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AiosSettings":
        """Build settings from environment variables."""
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        if "AIOS_DEBUG" in env:
            values["debug"] = env["AIOS_DEBUG"]
        if env.get("AIOS_PACKAGE_MANAGER"):
            values["package_manager"] = env["AIOS_PACKAGE_MANAGER"]
        return cls(**values)


def dependency_command(settings: AiosSettings) -> list[str]:
    """Command that installs the framework's requirements in its directory."""
    if settings.package_manager == "uv":
        return ["uv", "pip", "install", "-r", REQUIREMENTS_FILE_NAME]
    return [sys.executable, "-m", "pip", "install", "-r", REQUIREMENTS_FILE_NAME]


@dataclass
class CommandContext:
    """Everything a command handler needs about its environment."""

    cwd: Path
    package_root: Path
    settings: AiosSettings = field(default_factory=AiosSettings)
    console: Console = field(default_factory=Console)

    @classmethod
    def create(
        cls,
        cwd: Path | None = None,
        package_root: Path | None = None,
        settings: AiosSettings | None = None,
        console: Console | None = None,
    ) -> "CommandContext":
        """Fill unset fields from the current process."""
        if package_root is None:
            from aios_core.package import get_package_root

            package_root = get_package_root()

        return cls(
            cwd=Path(cwd or Path.cwd()).resolve(),
            package_root=Path(package_root).resolve(),
            settings=settings or AiosSettings.from_env(),
            console=console or Console(),
        )

    @property
    def framework_dir(self) -> Path:
        return self.cwd / FRAMEWORK_DIR_NAME

    @property
    def claude_dir(self) -> Path:
        return self.cwd / CLAUDE_DIR_NAME

    @property
    def manifest_path(self) -> Path:
        return self.framework_dir / MANIFEST_FILE_NAME

    @property
    def claude_config_source(self) -> Path:
        """Packaged .claude template (claude-config/ in the package root)."""
        return self.package_root / CLAUDE_CONFIG_DIR_NAME
