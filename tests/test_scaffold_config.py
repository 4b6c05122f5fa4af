"""Tests for config file loading, env overrides, and ``config set``."""

from __future__ import annotations

from pathlib import Path

import pytest

from move_scaffold.helpers.scaffold_config import (
    DEFAULT_TEMPLATE_REPOSITORY,
    ScaffoldConfig,
    config_path,
    load_scaffold_config,
    parse_bool,
    set_config_value,
)


class TestConfigPath:
    def test_env_var_wins(self, tmp_path: Path) -> None:
        assert config_path() == tmp_path / "_config" / "config.yaml"

    def test_default_under_home(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.delenv("MOVE_SCAFFOLD_CONFIG")
        monkeypatch.setenv("HOME", str(tmp_path))

        assert config_path() == tmp_path / ".move-scaffold" / "config.yaml"


class TestParseBool:
    @pytest.mark.parametrize("raw", ["1", "true", "Yes", " ON "])
    def test_true(self, raw: str) -> None:
        assert parse_bool(raw) is True

    @pytest.mark.parametrize("raw", ["0", "false", "No", "off"])
    def test_false(self, raw: str) -> None:
        assert parse_bool(raw) is False

    def test_invalid(self) -> None:
        with pytest.raises(ValueError, match="Expected a boolean"):
            parse_bool("maybe")


class TestLoadScaffoldConfig:
    def test_defaults_without_file(self) -> None:
        config = load_scaffold_config()

        assert config == ScaffoldConfig()
        assert config.template_repository == DEFAULT_TEMPLATE_REPOSITORY
        assert config.template_ref is None
        assert "~" not in str(config.cache_dir)

    def test_file_values(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            "# local overrides\n"
            + "cache_dir: ~/tpl-cache\n"
            + "template_ref: v2\n"
            + "refresh_templates: true\n"
            + "default_network: testnet\n",
            encoding="utf-8",
        )

        config = load_scaffold_config(path)

        assert config.cache_dir == Path("~/tpl-cache").expanduser()
        assert config.template_ref == "v2"
        assert config.refresh_templates is True
        assert config.default_network == "testnet"

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")

        assert load_scaffold_config(path) == ScaffoldConfig()

    def test_unknown_key(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("colour: blue\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Unknown config key 'colour'"):
            load_scaffold_config(path)

    def test_non_mapping_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError, match="must contain a mapping"):
            load_scaffold_config(path)

    def test_yaml_syntax_error(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("cache_dir: [unclosed\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Cannot read"):
            load_scaffold_config(path)

    def test_nested_value(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("cache_dir:\n  nested: x\n", encoding="utf-8")

        with pytest.raises(ValueError, match="must be a single value"):
            load_scaffold_config(path)

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("aptos_command: /usr/bin/aptos\nrefresh_templates: true\n", encoding="utf-8")
        monkeypatch.setenv("MOVE_SCAFFOLD_APTOS_COMMAND", "/opt/aptos")
        monkeypatch.setenv("MOVE_SCAFFOLD_REFRESH_TEMPLATES", "no")
        monkeypatch.setenv("MOVE_SCAFFOLD_CACHE_DIR", str(tmp_path / "cache"))

        config = load_scaffold_config(path)

        assert config.aptos_command == "/opt/aptos"
        assert config.refresh_templates is False
        assert config.cache_dir == tmp_path / "cache"

    def test_blank_env_is_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MOVE_SCAFFOLD_TEMPLATE_REPOSITORY", "  ")

        assert load_scaffold_config().template_repository == DEFAULT_TEMPLATE_REPOSITORY

    def test_invalid_env_bool(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MOVE_SCAFFOLD_REFRESH_TEMPLATES", "sometimes")

        with pytest.raises(ValueError):
            load_scaffold_config()


class TestSetConfigValue:
    def test_creates_file(self, tmp_path: Path) -> None:
        written = set_config_value("template_ref", "main")

        assert written == tmp_path / "_config" / "config.yaml"
        assert load_scaffold_config().template_ref == "main"

    def test_keeps_comments_and_other_keys(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("# my settings\naptos_command: aptos-dev\n", encoding="utf-8")

        set_config_value("refresh_templates", "yes", path)

        content = path.read_text(encoding="utf-8")
        assert "# my settings" in content
        assert "aptos_command: aptos-dev" in content
        assert "refresh_templates: true" in content

    def test_empty_ref_removes_key(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("template_ref: v1\ndefault_network: local\n", encoding="utf-8")

        set_config_value("template_ref", "", path)

        assert "template_ref" not in path.read_text(encoding="utf-8")
        assert load_scaffold_config(path).default_network == "local"

    def test_rejects_unknown_key(self) -> None:
        with pytest.raises(ValueError, match="Valid keys"):
            set_config_value("colour", "blue")

    def test_broken_file_is_not_overwritten(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("cache_dir: [unclosed\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Cannot read"):
            set_config_value("template_ref", "main", path)

        assert path.read_text(encoding="utf-8") == "cache_dir: [unclosed\n"

    def test_rejects_bad_bool_without_writing(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            set_config_value("refresh_templates", "perhaps")

        assert not (tmp_path / "_config" / "config.yaml").exists()
