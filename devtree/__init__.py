"""
devtree - git worktree and project management CLI
"""

from .__version__ import __version__
from .core import DevManager, ProjectManager
from .cli.main import main

__all__ = ["DevManager", "ProjectManager", "main", "__version__"]
