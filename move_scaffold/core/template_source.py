"""Materialize template sources on local disk.

Remote templates are cloned once into a per-machine cache keyed by template
id. An existing cache directory is used as-is unless refreshing is enabled,
in which case it is updated once per process. Failed clones are not cleaned
up; ``move-new templates clear-cache`` removes the cache by hand.
"""

from __future__ import annotations

import re
import subprocess
from collections.abc import Callable
from pathlib import Path
from urllib.parse import urlparse

from move_scaffold.core.errors import FetchError
from move_scaffold.helpers.helpers_logging import print_info

FetchFn = Callable[[str, Path], None]
UpdateFn = Callable[[Path], None]

_UNSAFE_ID_RE = re.compile(r"[^A-Za-z0-9_.-]+")


def cache_key(template_id: str) -> str:
    """Turn a template id into a safe directory name.

    Example:
        >>> cache_key("aptos/move templates")
        'aptos_move_templates'
    """
    key = _UNSAFE_ID_RE.sub("_", template_id.strip()).strip("._")
    if not key:
        raise ValueError(f"Invalid template id: {template_id!r}")
    return key


def local_source_path(remote_url: str) -> Path | None:
    """Return the directory a local template location points at, if any."""
    parsed = urlparse(remote_url)
    if parsed.scheme == "file":
        candidate = Path(parsed.path)
    elif parsed.scheme and len(parsed.scheme) > 1:
        return None
    else:
        candidate = Path(remote_url).expanduser()
    return candidate if candidate.is_dir() else None


def _run_git(args: list[str], url: str) -> None:
    try:
        result = subprocess.run(
            ["git", *args],
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError as err:
        raise FetchError("git command not found. Please install git.", url) from err

    if result.returncode != 0:
        detail = (result.stderr or result.stdout).strip()
        raise FetchError(f"git {args[0]} failed for {url}: {detail}", url)


def git_clone(url: str, destination: Path, ref: str | None = None) -> None:
    """Shallow-clone url into destination.

    Raises:
        FetchError: git is missing or the clone failed.
    """
    args = ["clone", "--depth", "1"]
    if ref:
        args += ["--branch", ref]
    args += [url, str(destination)]
    _run_git(args, url)


def git_pull(destination: Path) -> None:
    """Fast-forward an existing clone."""
    _run_git(["-C", str(destination), "pull", "--ff-only"], str(destination))


class TemplateSourceResolver:
    """Resolve template ids to local template roots.

    Args:
        cache_dir: Per-machine cache root.
        fetch: Called as ``fetch(url, destination)`` when the cache is missing.
        update: Called with the cache path when refreshing an existing cache.
        refresh: Update existing caches once per process.
    """

    def __init__(
        self,
        cache_dir: Path,
        fetch: FetchFn | None = None,
        update: UpdateFn | None = None,
        refresh: bool = False,
    ) -> None:
        self.cache_dir = cache_dir
        self.fetch = fetch or git_clone
        self.update = update or git_pull
        self.refresh = refresh
        self._resolved: dict[str, Path] = {}

    def cache_path(self, template_id: str) -> Path:
        return self.cache_dir / cache_key(template_id)

    def resolve(self, template_id: str, remote_url: str) -> Path:
        """Return the local root for template_id, fetching it if needed.

        Raises:
            FetchError: The fetch (or refresh) failed.
        """
        if template_id in self._resolved:
            return self._resolved[template_id]

        local = local_source_path(remote_url)
        if local is not None:
            self._resolved[template_id] = local
            return local

        path = self.cache_path(template_id)
        if path.exists():
            if self.refresh:
                print_info(f"Refreshing template cache: {path}")
                self.update(path)
        else:
            print_info(f"Fetching templates from {remote_url}")
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as err:
                raise FetchError(f"Cannot create template cache {path.parent}: {err}", remote_url) from err
            self.fetch(remote_url, path)
            if not path.is_dir():
                raise FetchError(f"Fetch of {remote_url} produced no directory at {path}", remote_url)

        self._resolved[template_id] = path
        return path
