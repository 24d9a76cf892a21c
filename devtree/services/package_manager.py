"""JavaScript package manager detection and dependency installation."""

import subprocess
from enum import Enum
from pathlib import Path
from typing import Optional

from devtree.logging_config import get_logger
from devtree.ui.output import console

logger = get_logger(__name__)


class PackageManager(Enum):
    """Detected package manager type."""
    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"

    @property
    def install_command(self) -> list:
        return [self.value, "install"]


# Checked in order; first lock file found wins
LOCK_FILES = [
    ("yarn.lock", PackageManager.YARN),
    ("pnpm-lock.yaml", PackageManager.PNPM),
    ("package-lock.json", PackageManager.NPM),
]


def detect_package_manager(path: Path) -> Optional[PackageManager]:
    """Detect the package manager used in a project, or None without a package.json."""
    for lock_file, manager in LOCK_FILES:
        if (path / lock_file).exists():
            return manager
    if has_package_json(path):
        # package.json without a lock file
        return PackageManager.NPM
    return None


def has_package_json(path: Path) -> bool:
    return (path / "package.json").exists()


def has_node_modules(path: Path) -> bool:
    return (path / "node_modules").exists()


def install_dependencies(path: Path) -> bool:
    """Install dependencies for a project.

    Args:
        path: Project or worktree directory

    Returns:
        True if dependencies were installed, False if there was nothing to
        install or the install command failed
    """
    manager = detect_package_manager(path)
    if manager is None:
        logger.debug(f"No package.json in {path}")
        return False

    console.print(f"[blue]Installing dependencies using {manager.value}...[/blue]")
    try:
        result = subprocess.run(manager.install_command, cwd=str(path))
    except OSError as e:
        logger.warning(f"Could not run {manager.value}: {e}")
        console.print(f"[red]Failed to install dependencies with {manager.value}[/red]")
        return False

    if result.returncode == 0:
        console.print(f"[green]Dependencies installed successfully using {manager.value}[/green]")
        return True

    console.print(f"[red]Failed to install dependencies with {manager.value}[/red]")
    return False
