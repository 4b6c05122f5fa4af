"""Validated scaffold root directory."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from move_scaffold.core.errors import InvalidTargetError
from move_scaffold.helpers.naming import to_upper_camel


def is_empty_dir(path: Path) -> bool:
    """Return True if path is a directory with no entries."""
    with os.scandir(path) as entries:
        return next(entries, None) is None


@dataclass(frozen=True)
class TargetDirectory:
    """Absolute, normalized scaffold root.

    Only :meth:`validate` should construct this; holding an instance means
    the directory was absent or empty when the run started, so later writes
    into it may be additive.
    """

    path: Path

    @classmethod
    def validate(cls, raw: str | os.PathLike[str]) -> TargetDirectory:
        """Normalize raw and check the emptiness invariant.

        Raises:
            InvalidTargetError: If the path exists and is not an empty
                directory, or cannot be read.
        """
        path = Path(os.path.abspath(os.path.expanduser(os.fspath(raw))))

        if not path.exists():
            return cls(path)

        if not path.is_dir():
            raise InvalidTargetError(f"The path is not a directory {path}", path)

        try:
            empty = is_empty_dir(path)
        except OSError as err:
            raise InvalidTargetError(f"Couldn't read the directory {path}: {err}", path) from err

        if not empty:
            raise InvalidTargetError(f"The directory is not empty {path}", path)

        return cls(path)

    def derived_package_name(self) -> str:
        """Package name derived from the final path segment."""
        return to_upper_camel(self.path.name)

    def __str__(self) -> str:
        return str(self.path)
