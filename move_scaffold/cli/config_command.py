"""Show and edit the move-new config file."""

from __future__ import annotations

from dataclasses import asdict

import click

from move_scaffold.helpers.helpers_logging import fg_cyan, print_error, print_info, print_success
from move_scaffold.helpers.scaffold_config import (
    CONFIG_KEYS,
    config_path,
    load_scaffold_config,
    set_config_value,
)


@click.group(name="config", help="Show or edit configuration")
def config_group() -> None:
    pass


@config_group.command(name="show", help="Print the effective configuration")
def show_config() -> None:
    try:
        config = load_scaffold_config()
    except ValueError as err:
        print_error(str(err))
        raise SystemExit(1) from err

    print_info(f"Config file: {config_path()}")
    for key, value in asdict(config).items():
        click.echo(f"  {fg_cyan(f'{key:20}')} {value}")


@config_group.command(name="set", help="Write KEY=VALUE to the config file")
@click.argument("key", type=click.Choice(CONFIG_KEYS))
@click.argument("value")
def set_config(key: str, value: str) -> None:
    try:
        path = set_config_value(key, value)
    except ValueError as err:
        print_error(str(err))
        raise SystemExit(1) from err
    print_success(f"Set {key} in {path}")
