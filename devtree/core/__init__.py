"""Command implementations for devtree."""

from .dev_manager import DevManager
from .project_manager import ProjectManager

__all__ = ["DevManager", "ProjectManager"]
