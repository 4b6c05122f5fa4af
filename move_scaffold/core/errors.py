"""Error types raised by the scaffolding core.

Every error is fatal to the current scaffold run. Nothing is retried and
nothing written before the failure is removed.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for scaffold failures."""


class InvalidTargetError(ScaffoldError):
    """Target directory exists but is not an empty directory."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class FilesystemError(ScaffoldError):
    """A create/copy/read/write step failed."""

    def __init__(self, operation: str, path: Path, reason: object) -> None:
        super().__init__(f"Failed to {operation} {path}: {reason}")
        self.operation = operation
        self.path = path


class FetchError(ScaffoldError):
    """Remote template retrieval failed."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class ProfileInitError(ScaffoldError):
    """External profile initializer failed or recorded no address."""


class UserCancelledError(ScaffoldError):
    """User declined an interactive confirmation."""
