"""Profile initialization through the aptos CLI.

The initializer runs ``aptos init`` non-interactively inside the target
directory, then reads the account of the requested profile from
``.aptos/config.yaml`` in that directory.
"""

from __future__ import annotations

import re
import subprocess
from pathlib import Path
from typing import Any, Protocol, cast

import yaml

from move_scaffold.core.errors import ProfileInitError

NETWORKS: tuple[str, ...] = ("devnet", "testnet", "mainnet", "local")

_HEX_RE = re.compile(r"^(0x)?[0-9a-fA-F]{1,64}$")


class ProfileInitializer(Protocol):
    """Creates a profile scoped to a directory and returns its address."""

    def initialize(self, workdir: Path, network: str) -> str:
        ...


def to_hex_literal(account: str) -> str:
    """Format an account address as a short hex literal.

    Example:
        >>> to_hex_literal("000000000000000000000000000000000000000000000000000000000000000a")
        '0xa'

    Raises:
        ValueError: account is not a hex address.
    """
    raw = account.strip()
    if not _HEX_RE.match(raw):
        raise ValueError(f"Not a hex account address: {account!r}")
    digits = raw[2:] if raw.lower().startswith("0x") else raw
    return "0x" + (digits.lower().lstrip("0") or "0")


def read_profile_address(workdir: Path, profile: str = "default") -> str:
    """Read the account of profile from ``<workdir>/.aptos/config.yaml``.

    Raises:
        ProfileInitError: Config file, profile, or account missing/invalid.
    """
    config_file = workdir / ".aptos" / "config.yaml"
    if not config_file.exists():
        raise ProfileInitError(f"The config file could not be found {config_file}")

    try:
        # BaseLoader keeps every scalar a string, so hex accounts are not read as ints
        raw_data: object = yaml.load(config_file.read_text(encoding="utf-8"), Loader=yaml.BaseLoader)
    except (OSError, yaml.YAMLError) as err:
        raise ProfileInitError(f"Cannot read {config_file}: {err}") from err

    profiles: object = None
    if isinstance(raw_data, dict):
        profiles = cast(dict[str, Any], raw_data).get("profiles")
    entry = cast(dict[str, Any], profiles).get(profile) if isinstance(profiles, dict) else None
    if not isinstance(entry, dict):
        raise ProfileInitError(f"The profile `{profile}` is not defined in {config_file}")

    account = cast(dict[str, Any], entry).get("account")
    if not account:
        raise ProfileInitError(f"the address is not specified in the profile `{profile}`")

    try:
        return to_hex_literal(str(account))
    except ValueError as err:
        raise ProfileInitError(f"Invalid account in profile `{profile}`: {err}") from err


class AptosCliProfileInitializer:
    """Run ``aptos init`` and return the resulting profile address."""

    def __init__(self, command: str = "aptos", profile: str = "default") -> None:
        self.command = command
        self.profile = profile

    def build_command(self, network: str) -> list[str]:
        return [
            self.command,
            "init",
            "--profile",
            self.profile,
            "--network",
            network,
            "--assume-yes",
        ]

    def initialize(self, workdir: Path, network: str) -> str:
        cmd = self.build_command(network)
        try:
            result = subprocess.run(cmd, cwd=workdir, check=False)
        except FileNotFoundError as err:
            raise ProfileInitError(
                f"{self.command} command not found. Install the Aptos CLI "
                + "or pass --skip-profile-creation."
            ) from err
        except OSError as err:
            raise ProfileInitError(f"Failed to run {' '.join(cmd)}: {err}") from err

        if result.returncode != 0:
            raise ProfileInitError(
                f"'{' '.join(cmd)}' exited with code {result.returncode}"
            )

        return read_profile_address(workdir, self.profile)
