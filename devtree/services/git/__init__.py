"""Git-related services for devtree."""

from .branch_queries import BranchQueries
from .repository import (
    clone_repository,
    get_repository_root,
    git_runner,
    init_repository,
    is_git_repository,
    run_git_command,
)
from .status import StatusClassifier, parse_ahead_behind
from .worktrees import WorktreeService, parse_worktree_list, sanitize_branch_name

__all__ = [
    "BranchQueries",
    "StatusClassifier",
    "WorktreeService",
    "clone_repository",
    "get_repository_root",
    "git_runner",
    "init_repository",
    "is_git_repository",
    "parse_ahead_behind",
    "parse_worktree_list",
    "run_git_command",
    "sanitize_branch_name",
]
