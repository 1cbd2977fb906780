"""Command handlers. Each takes an explicit CommandContext."""

from .install import run_install  # noqa: F401
from .sync import run_sync  # noqa: F401
from .update import run_update  # noqa: F401

__all__ = ["run_install", "run_sync", "run_update"]
