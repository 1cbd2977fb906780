"""Keep user-customized files safe across a destructive sync.

Local files are snapshotted into memory before the framework is re-copied and
written back afterwards, regardless of what the copy did.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from .copier import (
    CopyStats,
    ExcludePredicate,
    basename_excluder,
    combine_excluders,
    copy_tree,
    relative_path_excluder,
    remove_tree,
    top_level_excluder,
)
from .policy import COPY_EXCLUDE, JUNK_NAMES, LOCAL_CONFIGS, NEVER_SYNC

logger = logging.getLogger(__name__)

# Relative path -> raw file contents
Snapshot = dict[str, bytes]


def snapshot_files(base_dir: Path, rel_paths: Iterable[str]) -> Snapshot:
    """
    Read existing files into memory.

    Args:
        base_dir: Directory the paths are relative to
        rel_paths: Candidate relative paths

    Returns:
        Mapping of relative path to contents. Missing files are left out.
    """
    snapshot: Snapshot = {}
    for rel_path in rel_paths:
        path = base_dir / rel_path
        if path.is_file():
            snapshot[rel_path] = path.read_bytes()
            logger.debug("Backed up %s", path)
    return snapshot


def restore_files(base_dir: Path, snapshot: Snapshot) -> list[str]:
    """Write every snapshotted file back to its original path."""
    restored = []
    for rel_path, content in snapshot.items():
        path = base_dir / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        restored.append(rel_path)
        logger.debug("Restored %s", path)
    return restored


def should_replace_document(local: bytes | None, template: bytes, force: bool) -> bool:
    """
    Decide whether a customizable document may be replaced by its template.

    True when there is no local copy, the local copy is byte-identical to the
    template, or force is set. No whitespace or line-ending normalization.
    """
    return local is None or local == template or force


def replace_catalog(src: Path, dest: Path) -> CopyStats:
    """Delete dest and copy src in its place. Catalogs are never merged."""
    remove_tree(dest)
    return copy_tree(src, dest, exclude=claude_config_excluder())


def framework_excluder(*, preserve_local_configs: bool = False) -> ExcludePredicate:
    """
    Exclusion predicate for copying the package root into .aios-core/.

    Args:
        preserve_local_configs: Also skip LOCAL_CONFIGS so existing copies
            are not overwritten
    """
    return combine_excluders(
        top_level_excluder(COPY_EXCLUDE),
        basename_excluder(JUNK_NAMES),
        relative_path_excluder(LOCAL_CONFIGS) if preserve_local_configs else None,
    )


def claude_config_excluder() -> ExcludePredicate:
    """Exclusion predicate for any copy into or out of claude-config/."""
    return basename_excluder((*NEVER_SYNC, *JUNK_NAMES))
