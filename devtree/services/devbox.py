"""Devbox environment helpers."""

import json
import os
import shlex
import shutil
from pathlib import Path
from typing import List, Optional

from rich.markup import escape

from devtree.ui.output import console

DEVBOX_SCHEMA = "https://raw.githubusercontent.com/jetify-com/devbox/0.13.0/.schema/devbox.schema.json"


def is_devbox_installed() -> bool:
    return shutil.which("devbox") is not None


def has_devbox_config(path: Path) -> bool:
    return (path / "devbox.json").exists()


def in_devbox_shell() -> bool:
    return "DEVBOX_SHELL_ENABLED" in os.environ


def init_devbox(path: Path, packages: Optional[List[str]] = None) -> bool:
    """Create a starter devbox.json in ``path``.

    Returns:
        False if a devbox.json was already there (left untouched)
    """
    devbox_json = path / "devbox.json"
    if devbox_json.exists():
        return False

    content = {
        "$schema": DEVBOX_SCHEMA,
        "packages": list(packages or []),
        "shell": {
            "init_hook": ["echo 'Welcome to devbox!'"],
            "scripts": {"test": "echo \"No tests configured\""},
        },
    }
    devbox_json.write_text(json.dumps(content, indent=2) + "\n")
    return True


def get_devbox_shell_command(path: Path) -> str:
    return f"cd {shlex.quote(str(path))} && devbox shell"


def print_devbox_instructions(path: Path) -> None:
    """Print how to enter the devbox shell for ``path``."""
    if in_devbox_shell():
        console.print("[yellow]Already in devbox shell. Navigate to the project:[/yellow]")
        console.print(f"  cd {escape(shlex.quote(str(path)))}")
    else:
        console.print("[blue]Enter devbox shell:[/blue]")
        console.print(f"  {escape(get_devbox_shell_command(path))}")
        if not is_devbox_installed():
            console.print("[dim]devbox is not installed: https://www.jetify.com/devbox[/dim]")
