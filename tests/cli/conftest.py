"""Shared fixtures for in-process CLI tests.

Commands run through ``click.testing.CliRunner`` against temporary
directories. The aptos CLI is never invoked: tests either pass
``--skip-profile-creation`` or patch the profile initializer.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest
from click.testing import CliRunner, Result

from move_scaffold.cli.commands import _click_cli

RunCli = Callable[..., Result]


@pytest.fixture()
def run_cli() -> RunCli:
    """Return a helper invoking ``move-new`` with the given arguments."""
    runner = CliRunner()

    def _run(*args: str, input: str | None = None) -> Result:
        return runner.invoke(_click_cli, list(args), input=input, catch_exceptions=False)

    return _run
