"""Round-trip YAML access for the move-new config file.

The config file is a flat mapping of scalar values. It is loaded with
ruamel.yaml's round-trip loader so ``config set`` can rewrite one key and
keep the user's comments, key order, and quoting.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union, cast

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.error import YAMLError

ConfigScalar = Union[str, int, float, bool, None]
ConfigMapping = dict[str, ConfigScalar]

yaml = YAML()
yaml.preserve_quotes = True
yaml.default_flow_style = False


def load_yaml_file(file_path: Path) -> ConfigMapping:
    """Load a flat config mapping.

    An empty file loads as an empty mapping. The returned mapping is a
    ruamel ``CommentedMap``, so saving it back keeps comments.

    Raises:
        FileNotFoundError: If file_path does not exist.
        ValueError: If the file cannot be read, is not valid YAML, or is
            not a mapping of scalar values.
    """
    if not file_path.exists():
        raise FileNotFoundError(f"YAML file not found: {file_path}")

    try:
        with file_path.open(encoding="utf-8") as f:
            raw: object = yaml.load(f)
    except (OSError, YAMLError) as err:
        raise ValueError(f"Cannot read {file_path}: {err}") from err

    if raw is None:
        return cast(ConfigMapping, CommentedMap())
    if not isinstance(raw, dict):
        raise ValueError(f"Config file {file_path} must contain a mapping")

    for key, value in raw.items():
        if not isinstance(key, str):
            raise ValueError(f"Config file {file_path} has a non-text key: {key!r}")
        if isinstance(value, (dict, list)):
            raise ValueError(f"Config key '{key}' in {file_path} must be a single value")
    return cast(ConfigMapping, raw)


def save_yaml_file(data: ConfigMapping, file_path: Path) -> None:
    """Write data to file_path, creating parent directories.

    Raises:
        ValueError: If the file cannot be written.
    """
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with file_path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
    except OSError as err:
        raise ValueError(f"Cannot write {file_path}: {err}") from err
