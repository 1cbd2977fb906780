"""
File synchronization for aios-core.

Copies the packaged framework tree into a project, protecting the files users
are expected to customize.
"""

from .copier import CopyStats, copy_file, copy_tree, count_files, remove_tree  # noqa: F401
from .preservation import (  # noqa: F401
    replace_catalog,
    restore_files,
    should_replace_document,
    snapshot_files,
)

__all__ = [
    "CopyStats",
    "copy_file",
    "copy_tree",
    "count_files",
    "remove_tree",
    "replace_catalog",
    "restore_files",
    "should_replace_document",
    "snapshot_files",
]
