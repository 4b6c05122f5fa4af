#!/usr/bin/env python3
"""move-new CLI - Main Entry Point.

Usage:
    move-new <command> [options]

Commands:
    new                  Create a new Move package from templates
    templates list       List the template variants
    templates clear-cache
                         Delete the cached template repository
    config show          Print the effective configuration
    config set KEY VALUE Write a value to the config file
"""

from __future__ import annotations

import sys

import click

from move_scaffold import __version__
from move_scaffold.cli.config_command import config_group
from move_scaffold.cli.new_command import new_command
from move_scaffold.cli.templates_command import templates_group


@click.group(name="move-new", help="Scaffold Move packages from templates")
@click.version_option(__version__, prog_name="move-new")
def _click_cli() -> None:
    pass


_click_cli.add_command(new_command)
_click_cli.add_command(templates_group)
_click_cli.add_command(config_group)


def main() -> int:
    """Console script entry point."""
    try:
        _click_cli.main(prog_name="move-new", standalone_mode=False)
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except click.ClickException as err:
        err.show()
        return err.exit_code
    except SystemExit as exit_:
        return exit_.code if isinstance(exit_.code, int) else 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
