"""Configuration handling for devtree"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from devtree.exceptions import ConfigError
from devtree.logging_config import get_logger

logger = get_logger(__name__)

SHELLS = ["zsh", "bash", "fish"]
CONFIG_KEYS = ["editor", "dev_path", "auto_install_deps", "auto_devbox", "shell"]


def config_dir() -> Path:
    """Get the config directory path ($XDG_CONFIG_HOME/dev or ~/.config/dev)."""
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / "dev"
    return Path.home() / ".config" / "dev"


def ensure_config_dirs() -> Path:
    """Create the config directory structure and return its root."""
    root = config_dir()
    (root / "projects").mkdir(parents=True, exist_ok=True)
    return root


def _default_dev_path() -> Path:
    return Path.home() / "Development"


def _parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    raise ConfigError("Invalid boolean value")


@dataclass
class GlobalConfig:
    """Global configuration for devtree with validation."""

    editor: str = "zed"
    dev_path: Path = field(default_factory=_default_dev_path)
    auto_install_deps: bool = True
    auto_devbox: bool = True
    shell: str = "zsh"  # zsh, bash, fish

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_types()
        self.dev_path = Path(self.dev_path).expanduser()
        self._validate_editor()
        self._validate_shell()

    def _validate_types(self):
        """Validate each value has the type its key expects."""
        for key in ("editor", "shell"):
            if not isinstance(getattr(self, key), str):
                raise ConfigError(f"{key} must be a string")
        if not isinstance(self.dev_path, (str, Path)):
            raise ConfigError("dev_path must be a string")
        for key in ("auto_install_deps", "auto_devbox"):
            if not isinstance(getattr(self, key), bool):
                raise ConfigError(f"{key} must be true or false")

    def _validate_editor(self):
        """Validate editor is not empty."""
        if not self.editor or not self.editor.strip():
            raise ConfigError("editor cannot be empty")
        self.editor = self.editor.strip()

    def _validate_shell(self):
        """Validate shell is one of allowed values."""
        self.shell = self.shell.lower()
        if self.shell not in SHELLS:
            raise ConfigError(f"Unknown shell: {self.shell}. Valid options: {', '.join(SHELLS)}")

    @staticmethod
    def config_path() -> Path:
        """Path to the global config file."""
        return config_dir() / "config.json"

    @classmethod
    def load(cls) -> "GlobalConfig":
        """Load the global config, writing defaults if the file doesn't exist."""
        path = cls.config_path()
        if not path.exists():
            logger.debug(f"No config at {path}, creating defaults")
            config = cls()
            config.save()
            return config

        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}")
        if not isinstance(data, dict):
            raise ConfigError(f"Invalid config file {path}")
        return cls.from_dict(data)

    def save(self) -> None:
        """Write the config as pretty-printed JSON."""
        ensure_config_dirs()
        self.config_path().write_text(json.dumps(self.to_dict(), indent=2) + "\n")
        logger.debug(f"Saved config to {self.config_path()}")

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "editor": self.editor,
            "dev_path": str(self.dev_path),
            "auto_install_deps": self.auto_install_deps,
            "auto_devbox": self.auto_devbox,
            "shell": self.shell,
        }

    @classmethod
    def from_dict(cls, config_dict: dict) -> "GlobalConfig":
        """Create GlobalConfig from dictionary, ignoring unknown keys."""
        filtered = {k: v for k, v in config_dict.items() if k in CONFIG_KEYS}
        return cls(**filtered)

    def get(self, key: str) -> Optional[str]:
        """Get a config value by key as display text."""
        if key not in CONFIG_KEYS:
            return None
        value = getattr(self, key)
        if isinstance(value, bool):
            return str(value).lower()
        return str(value)

    def set(self, key: str, value: str) -> None:
        """Set a config value by key and save."""
        value = value.strip()
        if key == "editor":
            if not value:
                raise ConfigError("editor cannot be empty")
            self.editor = value
        elif key == "dev_path":
            self.dev_path = Path(value).expanduser()
        elif key == "auto_install_deps":
            self.auto_install_deps = _parse_bool(value)
        elif key == "auto_devbox":
            self.auto_devbox = _parse_bool(value)
        elif key == "shell":
            if value.lower() not in SHELLS:
                raise ConfigError(f"Unknown shell: {value}. Valid options: {', '.join(SHELLS)}")
            self.shell = value.lower()
        else:
            raise ConfigError(f"Unknown config key: {key}")
        self.save()
