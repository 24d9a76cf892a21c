"""Tests for global configuration"""
import json
from pathlib import Path

import pytest

from devtree.config import GlobalConfig, config_dir
from devtree.exceptions import ConfigError


class TestConfigDir:
    def test_uses_xdg_config_home(self, config_home):
        assert config_dir() == config_home

    def test_default_location(self, monkeypatch):
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        assert config_dir() == Path.home() / ".config" / "dev"


class TestGlobalConfigValidation:
    """Test validation in __post_init__."""

    def test_defaults(self):
        config = GlobalConfig()

        assert config.editor == "zed"
        assert config.dev_path == Path.home() / "Development"
        assert config.auto_install_deps is True
        assert config.auto_devbox is True
        assert config.shell == "zsh"

    def test_empty_editor(self):
        with pytest.raises(ConfigError, match="editor cannot be empty"):
            GlobalConfig(editor="  ")

    def test_unknown_shell(self):
        with pytest.raises(ConfigError, match="Unknown shell"):
            GlobalConfig(shell="tcsh")

    def test_shell_normalized(self):
        assert GlobalConfig(shell="BASH").shell == "bash"

    def test_from_dict_ignores_unknown_keys(self):
        config = GlobalConfig.from_dict({"editor": "code", "theme": "dark"})
        assert config.editor == "code"


class TestGlobalConfigPersistence:
    """Test loading and saving the config file."""

    def test_load_creates_defaults(self, config_home):
        config = GlobalConfig.load()

        path = config_home / "config.json"
        assert path.exists()
        assert json.loads(path.read_text())["editor"] == config.editor
        assert (config_home / "projects").is_dir()

    def test_load_existing(self, config_home):
        config_home.mkdir(parents=True)
        (config_home / "config.json").write_text(
            json.dumps({"editor": "code", "dev_path": "/src", "shell": "fish"})
        )

        config = GlobalConfig.load()

        assert config.editor == "code"
        assert config.dev_path == Path("/src")
        assert config.shell == "fish"
        assert config.auto_devbox is True

    def test_load_invalid_json(self, config_home):
        config_home.mkdir(parents=True)
        (config_home / "config.json").write_text("{not json")

        with pytest.raises(ConfigError, match="Invalid JSON"):
            GlobalConfig.load()

    @pytest.mark.parametrize(
        "data,message",
        [
            ({"shell": None}, "shell must be a string"),
            ({"editor": 42}, "editor must be a string"),
            ({"dev_path": ["/src"]}, "dev_path must be a string"),
            ({"auto_install_deps": "false"}, "auto_install_deps must be true or false"),
            ({"auto_devbox": 0}, "auto_devbox must be true or false"),
        ],
    )
    def test_load_wrong_value_type(self, config_home, data, message):
        """Test a value of the wrong JSON type is rejected, not coerced."""
        config_home.mkdir(parents=True)
        (config_home / "config.json").write_text(json.dumps(data))

        with pytest.raises(ConfigError, match=message):
            GlobalConfig.load()

    def test_load_json_booleans(self, config_home):
        config_home.mkdir(parents=True)
        (config_home / "config.json").write_text(json.dumps({"auto_install_deps": False}))

        assert GlobalConfig.load().auto_install_deps is False


class TestGlobalConfigGetSet:
    """Test key-based access used by `dev config`."""

    def test_get_values(self):
        config = GlobalConfig(editor="code", auto_devbox=False)

        assert config.get("editor") == "code"
        assert config.get("auto_devbox") == "false"
        assert config.get("unknown") is None

    def test_set_persists(self, config_home):
        config = GlobalConfig()

        config.set("editor", "code")
        config.set("auto_install_deps", "FALSE")

        reloaded = GlobalConfig.load()
        assert reloaded.editor == "code"
        assert reloaded.auto_install_deps is False

    def test_set_dev_path(self):
        config = GlobalConfig()
        config.set("dev_path", "/work")
        assert config.dev_path == Path("/work")

    def test_set_invalid_bool(self):
        with pytest.raises(ConfigError, match="Invalid boolean value"):
            GlobalConfig().set("auto_devbox", "yes")

    def test_set_unknown_key(self):
        with pytest.raises(ConfigError, match="Unknown config key"):
            GlobalConfig().set("theme", "dark")

    def test_set_invalid_shell(self):
        config = GlobalConfig()
        with pytest.raises(ConfigError):
            config.set("shell", "tcsh")
        assert config.shell == "zsh"
