"""Error types raised by aios-core commands."""

from __future__ import annotations


class AiosError(Exception):
    """Base error for aios-core."""


class PreconditionError(AiosError):
    """A command cannot run in the current directory state.

    Raised before any file is written, so the target is left untouched.
    """

    def __init__(self, message: str, hint: str | None = None):
        super().__init__(message)
        self.message = message
        self.hint = hint


class PackageNotFoundError(AiosError):
    """The aios-core package root could not be located."""
