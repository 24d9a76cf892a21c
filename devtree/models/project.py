"""Project data models."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ProjectConfig:
    """A registered project."""

    name: str
    path: Path
    remote_url: Optional[str] = None
    editor: Optional[str] = None  # Overrides the global editor
    auto_install_deps: Optional[bool] = None  # Overrides the global setting
    uses_devbox: bool = False
    env: Dict[str, str] = field(default_factory=dict)
    created_at: datetime = field(default_factory=_utcnow)
    last_accessed: datetime = field(default_factory=_utcnow)

    def __post_init__(self):
        self.path = Path(self.path)

    def touch(self) -> None:
        """Mark the project as accessed now."""
        self.last_accessed = _utcnow()

    def contains(self, path: Path) -> bool:
        """Check if ``path`` is the project directory or inside it."""
        path = Path(path)
        return path == self.path or self.path in path.parents

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        data = {
            "name": self.name,
            "path": str(self.path),
            "uses_devbox": self.uses_devbox,
            "created_at": self.created_at.isoformat(),
            "last_accessed": self.last_accessed.isoformat(),
        }
        if self.remote_url is not None:
            data["remote_url"] = self.remote_url
        if self.editor is not None:
            data["editor"] = self.editor
        if self.auto_install_deps is not None:
            data["auto_install_deps"] = self.auto_install_deps
        if self.env:
            data["env"] = dict(self.env)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ProjectConfig":
        """Create a ProjectConfig from a dictionary read from disk."""
        now = _utcnow()
        return cls(
            name=data["name"],
            path=Path(data["path"]),
            remote_url=data.get("remote_url"),
            editor=data.get("editor"),
            auto_install_deps=data.get("auto_install_deps"),
            uses_devbox=bool(data.get("uses_devbox", False)),
            env=dict(data.get("env") or {}),
            created_at=_parse_timestamp(data.get("created_at"), now),
            last_accessed=_parse_timestamp(data.get("last_accessed"), now),
        )


def _parse_timestamp(value: Optional[str], default: datetime) -> datetime:
    if not value:
        return default
    # Python < 3.11 does not accept the "Z" suffix
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
