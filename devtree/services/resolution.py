"""Resolve branch and project targets to worktree paths."""

from pathlib import Path
from typing import Iterable, List, Optional

from devtree.exceptions import NotGitRepositoryError
from devtree.models.project import ProjectConfig
from devtree.models.worktree import WorktreeInfo
from devtree.services.git.status import StatusClassifier
from devtree.services.git.worktrees import WorktreeService
from devtree.logging_config import get_logger

logger = get_logger(__name__)

# Order in which a project's default worktree is picked
MAIN_BRANCH_PREFERENCE = ("main", "master")


def find_by_branch(worktrees: Iterable[WorktreeInfo], branch: str) -> Optional[WorktreeInfo]:
    """Return the first worktree on ``branch`` (exact match)."""
    return next((wt for wt in worktrees if wt.branch == branch), None)


def select_main_worktree(worktrees: List[WorktreeInfo], fallback: Path) -> Path:
    """Pick the main worktree path: main, then master, then first non-bare entry.

    A candidate only counts if its directory exists; otherwise ``fallback``.
    """
    for preferred in MAIN_BRANCH_PREFERENCE:
        wt = find_by_branch(worktrees, preferred)
        if wt and wt.exists:
            return wt.path

    first_checkout = next((wt for wt in worktrees if not wt.is_bare), None)
    if first_checkout and first_checkout.exists:
        return first_checkout.path

    return fallback


def switchable_worktrees(worktrees: Iterable[WorktreeInfo]) -> List[WorktreeInfo]:
    """Worktrees that can be switched to by branch name."""
    return [wt for wt in worktrees if wt.branch and not wt.is_bare and not wt.is_detached]


def find_main_worktree(project: ProjectConfig, classifier: Optional[StatusClassifier] = None) -> Path:
    """Find the worktree to open for a project, falling back to its root."""
    service = WorktreeService(project.path, classifier)
    try:
        worktrees = service.list_worktrees()
    except NotGitRepositoryError:
        logger.debug(f"Project {project.name} has no worktree listing, using {project.path}")
        return project.path
    return select_main_worktree(worktrees, project.path)
