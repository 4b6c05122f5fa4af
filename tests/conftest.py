"""Shared fixtures for the move-new test suite.

Provides:
- ``make_tree``: write a dict of relative path -> content (None = directory)
- ``RecordingPrompter``: scripted answers, records every question
- ``FakeFetcher``: stands in for ``git clone`` by copying a local tree
- automatic isolation of config env vars and terminal colors
"""

from __future__ import annotations

import shutil
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest

TreeSpec = dict[str, str | None]
MakeTree = Callable[[Path, TreeSpec], Path]


def _make_tree(root: Path, spec: TreeSpec) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    for relative, content in spec.items():
        path = root / relative
        if content is None:
            path.mkdir(parents=True, exist_ok=True)
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture()
def make_tree() -> MakeTree:
    """Return a helper that writes a directory tree from a spec dict."""
    return _make_tree


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep tests away from the user's config, cache, and color settings."""
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setenv("MOVE_SCAFFOLD_CONFIG", str(tmp_path / "_config" / "config.yaml"))
    for name in (
        "MOVE_SCAFFOLD_CACHE_DIR",
        "MOVE_SCAFFOLD_TEMPLATE_REPOSITORY",
        "MOVE_SCAFFOLD_TEMPLATE_REF",
        "MOVE_SCAFFOLD_REFRESH_TEMPLATES",
        "MOVE_SCAFFOLD_APTOS_COMMAND",
    ):
        monkeypatch.delenv(name, raising=False)


class RecordingPrompter:
    """Prompter with scripted answers.

    Unscripted questions get their default. Every call is recorded in
    ``asked`` as ``(kind, question)``.
    """

    def __init__(
        self,
        text: str | None = None,
        yes_no: dict[str, bool] | None = None,
        choice: int | None = None,
        confirm: bool = True,
    ) -> None:
        self.text = text
        self.yes_no = yes_no or {}
        self.choice = choice
        self.confirm = confirm
        self.asked: list[tuple[str, str]] = []
        self.plans: list[Any] = []

    def ask_text(self, question: str, default: str) -> str:
        self.asked.append(("text", question))
        return self.text if self.text is not None else default

    def ask_yes_no(self, question: str, default: bool) -> bool:
        self.asked.append(("yes_no", question))
        return self.yes_no.get(question, default)

    def ask_choice(self, question: str, options: Sequence[str], default: int) -> int:
        self.asked.append(("choice", question))
        return self.choice if self.choice is not None else default

    def confirm_plan(self, plan: Any) -> bool:
        self.asked.append(("confirm", str(plan.target)))
        self.plans.append(plan)
        return self.confirm


class FakeFetcher:
    """Copy a local directory instead of cloning; counts calls."""

    def __init__(self, source: Path | None = None, error: Exception | None = None) -> None:
        self.source = source
        self.error = error
        self.calls: list[tuple[str, Path]] = []

    def __call__(self, url: str, destination: Path) -> None:
        self.calls.append((url, destination))
        if self.error is not None:
            raise self.error
        if self.source is not None:
            shutil.copytree(self.source, destination)


class FakeProfileInitializer:
    """Returns a fixed address, or raises, without running anything."""

    def __init__(self, address: str = "0xcafe", error: Exception | None = None) -> None:
        self.address = address
        self.error = error
        self.calls: list[tuple[Path, str]] = []

    def initialize(self, workdir: Path, network: str) -> str:
        self.calls.append((workdir, network))
        if self.error is not None:
            raise self.error
        return self.address


@pytest.fixture()
def recording_prompter() -> type[RecordingPrompter]:
    return RecordingPrompter


@pytest.fixture()
def fake_fetcher() -> type[FakeFetcher]:
    return FakeFetcher


@pytest.fixture()
def fake_profile() -> type[FakeProfileInitializer]:
    return FakeProfileInitializer


@pytest.fixture()
def remote_templates(tmp_path: Path) -> Path:
    """A fake remote template repository with coin and companion-app variants."""
    return _make_tree(
        tmp_path / "remote-templates",
        {
            "coin/sources/{{package_name}}_coin.move": (
                "module {{ package_lowercase_name }}::{{package_lowercase_name}}_coin {\n"
                "    // owner: {{ default_address }}\n"
                "}\n"
            ),
            "coin/README.md": "# {{package_name}} coin\n",
            "companion-app/js/package.json": '{ "name": "{{ package_lowercase_name }}-app" }\n',
            "companion-app/js/src/index.js": "// {{package_name}} at {{ address }}\n",
        },
    )
