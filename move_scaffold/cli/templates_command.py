"""Inspect template variants and manage the template cache."""

from __future__ import annotations

import shutil

import click

from move_scaffold.core.template_source import cache_key
from move_scaffold.core.variants import REMOTE_TEMPLATE_ID, VARIANTS
from move_scaffold.helpers.helpers_logging import (
    fg_bold,
    fg_cyan,
    print_error,
    print_info,
    print_success,
)
from move_scaffold.helpers.scaffold_config import load_scaffold_config


@click.group(name="templates", help="Template variants and cache")
def templates_group() -> None:
    pass


@templates_group.command(name="list", help="List the template variants")
def list_templates() -> None:
    for variant in VARIANTS:
        if not variant.optional:
            default = "always"
        else:
            default = "yes" if variant.default else "no"
        click.echo(
            f"  {fg_cyan(f'{variant.key:15}')} {fg_bold(variant.label)}"
            + f"  [{variant.source.value}, default: {default}]"
        )


@templates_group.command(name="clear-cache", help="Delete the cached template repository")
def clear_cache() -> None:
    try:
        config = load_scaffold_config()
    except ValueError as err:
        print_error(str(err))
        raise SystemExit(1) from err

    path = config.cache_dir / cache_key(REMOTE_TEMPLATE_ID)
    if not path.exists():
        print_info(f"Nothing to clear: {path} does not exist")
        return

    try:
        shutil.rmtree(path)
    except OSError as err:
        print_error(f"Failed to delete {path}: {err}")
        raise SystemExit(1) from err
    print_success(f"Deleted template cache {path}")
