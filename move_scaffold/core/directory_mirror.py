"""Recursive, non-destructive copy of a directory tree.

Every descendant of the source root is mirrored under the target. Entries
whose destination already exists are skipped, so re-applying a tree (or a
second tree) over a partially populated target only fills the gaps. A
failure aborts the walk; entries written before it stay in place.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from move_scaffold.core.errors import FilesystemError, InvalidTargetError
from move_scaffold.core.target import TargetDirectory, is_empty_dir


@dataclass(frozen=True)
class MirrorEntry:
    """One source node and where it lands.

    Attributes:
        source: Absolute source path.
        relative: Path relative to the source root.
        destination: Default target path, before any rename hook.
    """

    source: Path
    relative: Path
    destination: Path


@dataclass
class MirrorResult:
    """Destinations created and skipped by one mirror run."""

    created: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)


RenameFn = Callable[[MirrorEntry], Path]
WriteFileFn = Callable[[Path, Path], None]


def walk_tree(root: Path) -> Iterator[Path]:
    """Yield descendants of root depth-first, parents before children.

    Entries are sorted by name so runs are deterministic.
    """
    for child in sorted(root.iterdir(), key=lambda p: p.name):
        yield child
        if child.is_dir() and not child.is_symlink():
            yield from walk_tree(child)


def copy_file_bytes(source: Path, destination: Path) -> None:
    shutil.copyfile(source, destination)


def _resolve_target(target: TargetDirectory | Path) -> Path:
    """Return the write root, rejecting unvalidated non-empty targets."""
    if isinstance(target, TargetDirectory):
        return target.path

    path = Path(target)
    if path.exists():
        if not path.is_dir():
            raise InvalidTargetError(f"The path is not a directory {path}", path)
        if not is_empty_dir(path):
            raise InvalidTargetError(f"The directory is not empty {path}", path)
    return path


def mirror(
    source_root: Path,
    target: TargetDirectory | Path,
    rename: RenameFn | None = None,
    write_file: WriteFileFn | None = None,
) -> MirrorResult:
    """Mirror source_root into target.

    Args:
        source_root: Directory whose descendants are copied.
        target: Validated target, or a plain path that must be absent or
            empty.
        rename: Optional hook returning the final destination of an entry.
        write_file: Optional hook writing a file; defaults to a byte copy.

    Returns:
        MirrorResult listing created and skipped destinations.

    Raises:
        InvalidTargetError: Plain path target exists and is not empty.
        FilesystemError: Any create/copy failure, with path context.
    """
    dest_root = _resolve_target(target)
    write = write_file or copy_file_bytes
    result = MirrorResult()

    if not source_root.is_dir():
        raise FilesystemError("read template directory", source_root, "not a directory")

    try:
        dest_root.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        raise FilesystemError("create directory", dest_root, err) from err

    try:
        sources = list(walk_tree(source_root))
    except OSError as err:
        raise FilesystemError("read template directory", source_root, err) from err

    for source in sources:
        relative = source.relative_to(source_root)
        entry = MirrorEntry(source=source, relative=relative, destination=dest_root / relative)
        destination = rename(entry) if rename else entry.destination

        if os.path.lexists(destination):
            result.skipped.append(destination)
            continue

        if source.is_dir():
            try:
                destination.mkdir(parents=True)
            except OSError as err:
                raise FilesystemError("create directory", destination, err) from err
        else:
            try:
                destination.parent.mkdir(parents=True, exist_ok=True)
            except OSError as err:
                raise FilesystemError("create directory", destination.parent, err) from err
            try:
                write(source, destination)
            except OSError as err:
                raise FilesystemError("copy file", destination, err) from err

        result.created.append(destination)

    return result
