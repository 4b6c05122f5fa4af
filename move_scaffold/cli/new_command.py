"""
Create a new Move package at the given location.

Examples:
    move-new new my_package
    move-new new ~/demo/my_package2 --named-addresses alice=0x1234,bob=_
    move-new new /tmp/my_package3 --name DemoPackage --assume-yes
    move-new new /tmp/my_package --name ExampleProject --coin-example \\
        --assume-yes --skip-profile-creation
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import click

from move_scaffold.cli.prompter import ClickPrompter
from move_scaffold.core.errors import ScaffoldError, UserCancelledError
from move_scaffold.core.profile import NETWORKS, to_hex_literal
from move_scaffold.core.prompts import DefaultsPrompter, Prompter
from move_scaffold.core.scaffolder import PackageScaffolder, ScaffoldRequest, ScaffoldResult
from move_scaffold.core.variants import OPTIONAL_VARIANTS, bundled_templates_root
from move_scaffold.helpers.helpers_logging import (
    print_error,
    print_header,
    print_info,
    print_success,
    print_warning,
)
from move_scaffold.helpers.naming import is_move_identifier
from move_scaffold.helpers.scaffold_config import ScaffoldConfig, load_scaffold_config

PLACEHOLDER_ADDRESS = "_"


def parse_named_addresses(raw: str) -> dict[str, str]:
    """Parse ``alice=0x1234,bob=_`` into a mapping.

    Raises:
        ValueError: Malformed entry, invalid name or address, or duplicate
            name.
    """
    named: dict[str, str] = {}
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        name, sep, value = item.partition("=")
        name = name.strip()
        value = value.strip()
        if not sep or not name or not value:
            raise ValueError(f"Expected NAME=ADDRESS, got '{item}'")
        if not is_move_identifier(name):
            raise ValueError(f"Invalid named address '{name}': not a Move identifier")
        if name in named:
            raise ValueError(f"Duplicate named address '{name}'")
        named[name] = value if value == PLACEHOLDER_ADDRESS else to_hex_literal(value)
    return named


def _named_addresses_callback(
    _ctx: click.Context,
    _param: click.Parameter,
    value: str | None,
) -> dict[str, str]:
    if not value:
        return {}
    try:
        return parse_named_addresses(value)
    except ValueError as err:
        raise click.BadParameter(str(err)) from err


def _print_next_steps(result: ScaffoldResult) -> None:
    print_success(f"Package '{result.package_name}' created in {result.target}")
    print_info("\nNext steps:")
    print_info(f"  1. cd {result.target}")
    print_info("  2. aptos move compile")
    print_info("  3. aptos move test")


def run_new(
    request: ScaffoldRequest,
    config: ScaffoldConfig,
    prompter: Prompter,
) -> int:
    """Run the scaffolder and turn its outcome into an exit code."""
    scaffolder = PackageScaffolder(config, prompter)
    try:
        result = scaffolder.run(request)
    except UserCancelledError:
        print_warning("Cancelled")
        return 1
    except ScaffoldError as err:
        print_error(str(err))
        return 1

    _print_next_steps(result)
    return 0


def _variant_options(func: click.decorators.FC) -> click.decorators.FC:
    """Add an --X/--no-X flag per optional variant."""
    for variant in reversed(OPTIONAL_VARIANTS):
        func = click.option(
            f"--{variant.key}/--no-{variant.key}",
            f"variant_{variant.key.replace('-', '_')}",
            default=None,
            help=f"{variant.label} (default: {'yes' if variant.default else 'no'})",
        )(func)
    return func


@click.command(name="new", help="Create a new Move package at PACKAGE_DIR")
@click.argument("package_dir", type=click.Path(path_type=Path))
@click.option("--name", help="Name of the new Move package (default: directory name)")
@_variant_options
@click.option("--skip-profile-creation", is_flag=True,
              help="Do not create a `default` profile; use `_` as the address")
@click.option("--network", type=click.Choice(NETWORKS),
              help="Network for the `default` profile")
@click.option("--named-addresses", callback=_named_addresses_callback,
              help="Extra named addresses, e.g. alice=0x1234,bob=_")
@click.option("--framework-git-rev", help="Git revision of the AptosFramework dependency")
@click.option("--framework-local-dir", type=click.Path(path_type=Path, file_okay=False),
              help="Local AptosFramework package instead of git")
@click.option("--template-repository", help="Location of the remote template variants")
@click.option("--refresh-templates", is_flag=True, default=None,
              help="Update the cached template repository before use")
@click.option("--assume-yes", is_flag=True, help="Answer every prompt with its default and confirm")
@click.option("--assume-no", is_flag=True, help="Answer every prompt with its default and decline")
def new_command(
    package_dir: Path,
    name: str | None,
    skip_profile_creation: bool,
    network: str | None,
    named_addresses: dict[str, str],
    framework_git_rev: str | None,
    framework_local_dir: Path | None,
    template_repository: str | None,
    refresh_templates: bool | None,
    assume_yes: bool,
    assume_no: bool,
    **variant_flags: bool | None,
) -> None:
    if assume_yes and assume_no:
        raise click.UsageError("--assume-yes and --assume-no are mutually exclusive")
    if framework_git_rev and framework_local_dir:
        raise click.UsageError("--framework-git-rev and --framework-local-dir are mutually exclusive")

    try:
        config = load_scaffold_config()
    except ValueError as err:
        print_error(str(err))
        raise SystemExit(1) from err

    if template_repository:
        config = replace(config, template_repository=template_repository)
    if refresh_templates:
        config = replace(config, refresh_templates=True)

    variants = {
        variant.key: variant_flags[f"variant_{variant.key.replace('-', '_')}"]
        for variant in OPTIONAL_VARIANTS
    }
    request = ScaffoldRequest(
        package_dir=package_dir,
        name=name,
        variants={key: value for key, value in variants.items() if value is not None},
        skip_profile_creation=skip_profile_creation,
        network=network,
        named_addresses=named_addresses,
        framework_git_rev=framework_git_rev,
        framework_local_dir=framework_local_dir,
    )

    prompter: Prompter
    if assume_yes or assume_no:
        prompter = DefaultsPrompter(confirm=assume_yes)
    else:
        prompter = ClickPrompter(bundled_templates_root())

    print_header("Creating a new Move package")
    raise SystemExit(run_new(request, config, prompter))
