"""User configuration for move-new.

Values are resolved in this order (later wins):
defaults -> config file -> environment variables -> CLI flags.

The config file lives at ``$MOVE_SCAFFOLD_CONFIG`` or
``~/.move-scaffold/config.yaml`` and is optional.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path

from move_scaffold.helpers.yaml_loader import ConfigMapping, load_yaml_file, save_yaml_file

CONFIG_ENV_VAR = "MOVE_SCAFFOLD_CONFIG"
DEFAULT_HOME = Path("~/.move-scaffold")

DEFAULT_TEMPLATE_REPOSITORY = "https://github.com/aptos-labs/move-package-templates.git"

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass(frozen=True)
class ScaffoldConfig:
    """Effective configuration for one run.

    Attributes:
        cache_dir: Per-machine template cache root.
        template_repository: Remote (or local directory) holding the
            remote template variants.
        template_ref: Branch or tag to clone, None for the remote default.
        refresh_templates: Update an existing cache once per run instead of
            using it as-is.
        aptos_command: Executable used to initialize the profile.
        profile_name: Profile whose account becomes the default address.
        default_network: Network used when none is given or asked for.
    """

    cache_dir: Path = (DEFAULT_HOME / "templates").expanduser()
    template_repository: str = DEFAULT_TEMPLATE_REPOSITORY
    template_ref: str | None = None
    refresh_templates: bool = False
    aptos_command: str = "aptos"
    profile_name: str = "default"
    default_network: str = "devnet"


CONFIG_KEYS: tuple[str, ...] = tuple(f.name for f in fields(ScaffoldConfig))

_ENV_OVERRIDES: dict[str, str] = {
    "cache_dir": "MOVE_SCAFFOLD_CACHE_DIR",
    "template_repository": "MOVE_SCAFFOLD_TEMPLATE_REPOSITORY",
    "template_ref": "MOVE_SCAFFOLD_TEMPLATE_REF",
    "refresh_templates": "MOVE_SCAFFOLD_REFRESH_TEMPLATES",
    "aptos_command": "MOVE_SCAFFOLD_APTOS_COMMAND",
}


def config_path() -> Path:
    """Return the config file location (which may not exist)."""
    raw = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if raw:
        return Path(raw).expanduser()
    return (DEFAULT_HOME / "config.yaml").expanduser()


def parse_bool(raw: str) -> bool:
    """Parse a boolean config value.

    Raises:
        ValueError: If the value is not a recognized boolean spelling.
    """
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Expected a boolean (true/false), got '{raw}'")


def _coerce(key: str, raw: object) -> object:
    """Convert a raw file/env value to the field's type."""
    if key == "cache_dir":
        return Path(str(raw)).expanduser()
    if key == "refresh_templates":
        if isinstance(raw, bool):
            return raw
        return parse_bool(str(raw))
    if key == "template_ref":
        text = str(raw or "").strip()
        return text or None
    return str(raw).strip()


def load_scaffold_config(path: Path | None = None) -> ScaffoldConfig:
    """Load the effective configuration.

    Args:
        path: Config file to read; defaults to :func:`config_path`.

    Returns:
        ScaffoldConfig with file values and environment overrides applied.

    Raises:
        ValueError: If the file is unreadable or malformed, or contains
            unknown keys or invalid values.
    """
    file_path = path or config_path()
    overrides: dict[str, object] = {}

    if file_path.exists():
        for key, value in load_yaml_file(file_path).items():
            if key not in CONFIG_KEYS:
                raise ValueError(f"Unknown config key '{key}' in {file_path}")
            overrides[key] = _coerce(key, value)

    for key, env_name in _ENV_OVERRIDES.items():
        raw_env = os.environ.get(env_name)
        if raw_env is not None and raw_env.strip():
            overrides[key] = _coerce(key, raw_env)

    return replace(ScaffoldConfig(), **overrides)  # type: ignore[arg-type]


def set_config_value(key: str, value: str, path: Path | None = None) -> Path:
    """Persist one key to the config file, keeping existing comments.

    Returns:
        Path of the written config file.

    Raises:
        ValueError: On unknown keys, invalid values, or an unreadable or
            unwritable config file.
    """
    if key not in CONFIG_KEYS:
        raise ValueError(f"Unknown config key '{key}'. Valid keys: {', '.join(CONFIG_KEYS)}")

    coerced = _coerce(key, value)
    file_path = path or config_path()
    data: ConfigMapping = load_yaml_file(file_path) if file_path.exists() else {}

    if isinstance(coerced, bool):
        data[key] = coerced
    elif coerced is None:
        data.pop(key, None)
    else:
        data[key] = str(coerced)

    save_yaml_file(data, file_path)
    return file_path
