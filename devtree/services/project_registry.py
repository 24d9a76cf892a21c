"""Registry of projects stored as JSON files."""

import json
from pathlib import Path
from typing import List, Optional

from devtree.config import config_dir
from devtree.exceptions import ConfigError, ProjectNotFoundError
from devtree.models.project import ProjectConfig
from devtree.logging_config import get_logger

logger = get_logger(__name__)


class ProjectRegistry:
    """Stores one ``<name>.json`` file per project under the config directory."""

    def __init__(self, projects_dir: Optional[Path] = None):
        """Initialize the registry.

        Args:
            projects_dir: Directory holding project files (defaults to ``<config_dir>/projects``)
        """
        self.projects_dir = projects_dir or config_dir() / "projects"

    def config_path(self, name: str) -> Path:
        """Get the path to a project's config file."""
        return self.projects_dir / f"{name}.json"

    def exists(self, name: str) -> bool:
        return self.config_path(name).exists()

    def load(self, name: str) -> ProjectConfig:
        """Load a project by name.

        Raises:
            ProjectNotFoundError: If the project is not registered
            ConfigError: If the project file cannot be read
        """
        path = self.config_path(name)
        if not path.exists():
            raise ProjectNotFoundError(name)

        try:
            return ProjectConfig.from_dict(json.loads(path.read_text()))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid project file {path}: {e}")

    def save(self, project: ProjectConfig) -> None:
        """Write a project's config file."""
        self.projects_dir.mkdir(parents=True, exist_ok=True)
        self.config_path(project.name).write_text(json.dumps(project.to_dict(), indent=2) + "\n")
        logger.debug(f"Saved project {project.name}")

    def list_all(self) -> List[ProjectConfig]:
        """List registered projects, most recently accessed first.

        Unreadable project files are skipped.
        """
        if not self.projects_dir.exists():
            return []

        projects = []
        for path in sorted(self.projects_dir.glob("*.json")):
            try:
                projects.append(ProjectConfig.from_dict(json.loads(path.read_text())))
            except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                logger.debug(f"Skipping unreadable project file {path}: {e}")

        projects.sort(key=lambda p: p.last_accessed, reverse=True)
        return projects

    def touch_accessed(self, project: ProjectConfig) -> None:
        """Update the last accessed timestamp and save."""
        project.touch()
        self.save(project)

    def find_by_path(self, path: Path) -> Optional[ProjectConfig]:
        """Find the project containing ``path``."""
        return next((p for p in self.list_all() if p.contains(Path(path))), None)
