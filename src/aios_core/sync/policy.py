"""Fixed file lists that decide what install, update and sync touch.

Membership here is policy, not something derived from the filesystem.
"""

from __future__ import annotations

# Top-level entries of the package root never copied into .aios-core/
COPY_EXCLUDE: tuple[str, ...] = (
    "__pycache__",
    ".DS_Store",
    "claude-config",
    "node_modules",
    "package-lock.json",
    "poetry.lock",
    "uv.lock",
)

# Skipped at any depth
JUNK_NAMES: tuple[str, ...] = (
    "__pycache__",
    ".DS_Store",
)

# Paths relative to .aios-core/ that users customize after install
LOCAL_CONFIGS: tuple[str, ...] = (
    "core-config.yaml",
    "local-config.yaml",
    "install-manifest.yaml",
)

# .claude/ subtrees that are replaced wholesale on update, never merged
CATALOG_DIRS: tuple[str, ...] = (
    "commands",
    "rules",
    "hooks",
)

# Base settings in .claude/, always overwritten on update
BASE_SETTINGS_FILE = "settings.json"

# .claude/ documents kept when the user has edited them
CUSTOMIZABLE_DOCS: tuple[str, ...] = ("CLAUDE.md",)

# Local-only settings; must never enter or leave claude-config/
NEVER_SYNC: tuple[str, ...] = ("settings.local.json",)

# Items copied from .claude/ into .aios-core/claude-config/ by `sync`
SYNC_ITEMS: tuple[str, ...] = (
    "commands",
    "rules",
    "hooks",
    "CLAUDE.md",
    "settings.json",
)
