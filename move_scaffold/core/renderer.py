"""Render a template tree into a target directory.

Paths and file contents go through the same substitution, applied
independently: the relative destination path is rewritten before the
existence check, and each file is read as UTF-8 text, rewritten, and written.
"""

from __future__ import annotations

from pathlib import Path

from move_scaffold.core.directory_mirror import MirrorEntry, MirrorResult, mirror
from move_scaffold.core.errors import FilesystemError
from move_scaffold.core.substitution import SubstitutionContext, substitute
from move_scaffold.core.target import TargetDirectory


def render_path(relative: Path, context: SubstitutionContext) -> Path:
    """Substitute tokens in a relative path."""
    return Path(substitute(relative.as_posix(), context))


def render_file(source: Path, destination: Path, context: SubstitutionContext) -> None:
    """Write source to destination with tokens substituted.

    Raises:
        FilesystemError: Source is not valid UTF-8 text or I/O failed.
    """
    try:
        with source.open(encoding="utf-8", newline="") as f:
            content = f.read()
    except UnicodeDecodeError as err:
        raise FilesystemError("read template text", source, err) from err
    except OSError as err:
        raise FilesystemError("read template file", source, err) from err

    try:
        # newline="" keeps the template's own line endings on both sides
        with destination.open("w", encoding="utf-8", newline="") as f:
            f.write(substitute(content, context))
    except OSError as err:
        raise FilesystemError("write file", destination, err) from err


def render(
    source_root: Path,
    target: TargetDirectory | Path,
    context: SubstitutionContext,
) -> MirrorResult:
    """Render every entry of source_root into target.

    Existing destinations (after path substitution) are left untouched.

    Raises:
        FilesystemError: A substituted path escapes target, or any I/O
            failure from :func:`render_file`.
    """
    dest_root = target.path if isinstance(target, TargetDirectory) else Path(target)
    root = dest_root.resolve()

    def _rename(entry: MirrorEntry) -> Path:
        destination = dest_root / render_path(entry.relative, context)
        if not destination.resolve().is_relative_to(root):
            raise FilesystemError(
                "render path",
                destination,
                f"resolves outside the target directory {dest_root}",
            )
        return destination

    def _write(source: Path, destination: Path) -> None:
        render_file(source, destination, context)

    return mirror(source_root, target, rename=_rename, write_file=_write)
