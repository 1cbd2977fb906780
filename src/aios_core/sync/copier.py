"""Recursive tree copy with exclusion and overwrite control."""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable

logger = logging.getLogger(__name__)

# Receives a path relative to the copy source, returns True to skip it
ExcludePredicate = Callable[[Path], bool]


@dataclass
class CopyStats:
    """Outcome of a copy_tree call."""

    copied: list[Path] = field(default_factory=list)  # Relative to the source root
    skipped: list[Path] = field(default_factory=list)  # Existing files left alone
    excluded: list[Path] = field(default_factory=list)


def top_level_excluder(names: Iterable[str]) -> ExcludePredicate:
    """Exclude any path whose first segment is in names."""
    excluded = frozenset(names)

    def _exclude(rel_path: Path) -> bool:
        return bool(rel_path.parts) and rel_path.parts[0] in excluded

    return _exclude


def relative_path_excluder(paths: Iterable[str]) -> ExcludePredicate:
    """Exclude exact relative paths (e.g. "core-config.yaml")."""
    excluded = frozenset(Path(p) for p in paths)

    def _exclude(rel_path: Path) -> bool:
        return rel_path in excluded

    return _exclude


def basename_excluder(names: Iterable[str]) -> ExcludePredicate:
    """Exclude any file or directory named in names, at any depth."""
    excluded = frozenset(names)

    def _exclude(rel_path: Path) -> bool:
        return rel_path.name in excluded

    return _exclude


def combine_excluders(*predicates: ExcludePredicate | None) -> ExcludePredicate:
    """Exclude a path when any predicate excludes it."""
    active = [p for p in predicates if p is not None]

    def _exclude(rel_path: Path) -> bool:
        return any(p(rel_path) for p in active)

    return _exclude


def copy_file(src: Path, dest: Path, *, overwrite: bool = True) -> bool:
    """
    Copy a single file, creating parent directories.

    Returns:
        True if the file was written, False if dest existed and overwrite is off
    """
    if dest.exists() and not overwrite:
        return False
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(src, dest)
    return True


def copy_tree(
    src: Path,
    dest: Path,
    *,
    exclude: ExcludePredicate | None = None,
    overwrite: bool = True,
) -> CopyStats:
    """
    Copy every file under src into dest, preserving relative structure.

    The walk is top-down: an excluded directory is pruned along with its whole
    subtree. Files in dest that are absent from src are left in place.

    Args:
        src: Source root directory
        dest: Destination root directory (created if missing)
        exclude: Predicate over paths relative to src
        overwrite: Replace existing destination files; when False they are skipped

    Returns:
        CopyStats listing copied, skipped and excluded paths

    Raises:
        OSError: On any read/write failure. Files copied so far stay on disk.
    """
    src = Path(src)
    dest = Path(dest)
    stats = CopyStats()

    dest.mkdir(parents=True, exist_ok=True)

    for dirpath, dirnames, filenames in os.walk(src):
        current = Path(dirpath)
        rel_dir = current.relative_to(src)

        kept_dirs = []
        for name in sorted(dirnames):
            rel = rel_dir / name
            if exclude and exclude(rel):
                stats.excluded.append(rel)
                continue
            (dest / rel).mkdir(parents=True, exist_ok=True)
            kept_dirs.append(name)
        # Prune in place so os.walk skips excluded subtrees
        dirnames[:] = kept_dirs

        for name in sorted(filenames):
            rel = rel_dir / name
            if exclude and exclude(rel):
                stats.excluded.append(rel)
                continue
            if copy_file(current / name, dest / rel, overwrite=overwrite):
                stats.copied.append(rel)
            else:
                stats.skipped.append(rel)

    logger.debug(
        "Copied %s -> %s: %d copied, %d skipped, %d excluded",
        src,
        dest,
        len(stats.copied),
        len(stats.skipped),
        len(stats.excluded),
    )
    return stats


def remove_tree(path: Path) -> None:
    """Remove a directory tree or a single file if it exists."""
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.is_dir():
        shutil.rmtree(path)


def count_files(path: Path) -> int:
    """Count regular files under path, recursively."""
    if not path.is_dir():
        return 0
    return sum(1 for p in path.rglob("*") if p.is_file())
