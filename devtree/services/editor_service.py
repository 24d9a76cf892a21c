"""Open paths in the configured editor."""

import shutil
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from devtree.exceptions import DevError, EditorNotFoundError
from devtree.logging_config import get_logger

logger = get_logger(__name__)


class EditorKind(Enum):
    ZED = "zed"
    VSCODE = "vscode"
    GENERIC = "generic"


@dataclass(frozen=True)
class Editor:
    """An editor and the command that launches it."""

    kind: EditorKind
    name: str
    command: str

    def is_installed(self) -> bool:
        return shutil.which(self.command) is not None

    def open(self, path: Path) -> None:
        """Launch the editor on ``path`` without waiting for it to exit."""
        if not self.is_installed():
            raise EditorNotFoundError(self.name)

        logger.info(f"Opening {path} with {self.command}")
        try:
            subprocess.Popen([self.command, str(path)])
        except OSError as e:
            raise DevError(f"Failed to open editor: {e}")


# Known editors by lowercase config name; anything else runs as a generic command
EDITORS = {
    "zed": Editor(EditorKind.ZED, "Zed", "zed"),
    "code": Editor(EditorKind.VSCODE, "VSCode", "code"),
    "vscode": Editor(EditorKind.VSCODE, "VSCode", "code"),
}


def get_editor(name: str) -> Editor:
    """Get an editor by config name."""
    known = EDITORS.get(name.strip().lower())
    if known:
        return known
    return Editor(EditorKind.GENERIC, name, name)


def open_in_editor(path: Path, editor_name: str, override: Optional[str] = None) -> Editor:
    """Open ``path`` in the project override editor if set, else ``editor_name``."""
    editor = get_editor(override or editor_name)
    editor.open(path)
    return editor
