"""Worktree sync status classification."""

import git
from pathlib import Path
from typing import Union

from devtree.models.worktree import SyncStatus
from devtree.services.git.repository import git_runner
from devtree.logging_config import get_logger

logger = get_logger(__name__)


def parse_ahead_behind(output: str) -> SyncStatus:
    """Map ``git rev-list --left-right --count`` output to a status.

    The output is ``"<behind>\\t<ahead>"`` for the range
    ``<upstream>...HEAD``. Anything else is treated as clean.
    """
    parts = output.strip().split("\t")
    if len(parts) != 2:
        return SyncStatus.clean()

    behind = _parse_count(parts[0])
    ahead = _parse_count(parts[1])
    return SyncStatus.from_counts(ahead=ahead, behind=behind)


def _parse_count(value: str) -> int:
    try:
        return max(int(value.strip()), 0)
    except ValueError:
        return 0


class StatusClassifier:
    """Classifies a worktree as clean, ahead, behind, diverged or modified.

    Never raises: git failures degrade to ``Clean`` so that a missing
    upstream or an unreadable worktree does not block a listing.
    """

    def __init__(self, remote_name: str = "origin"):
        """Initialize the classifier.

        Args:
            remote_name: Remote whose ``<remote>/<branch>`` ref is compared against
        """
        self.remote_name = remote_name

    def _get_git(self, worktree_path: Union[str, Path]) -> git.Git:
        """Get a git command runner rooted in the worktree."""
        return git_runner(worktree_path)

    def classify(self, worktree_path: Union[str, Path], branch: str) -> SyncStatus:
        """Get the sync status of a worktree.

        Uncommitted changes take priority over ahead/behind counts.

        Args:
            worktree_path: Path to the worktree checkout
            branch: Local branch checked out in the worktree

        Returns:
            SyncStatus for the worktree
        """
        if self.has_uncommitted_changes(worktree_path):
            return SyncStatus.modified()
        return self.ahead_behind_status(worktree_path, branch)

    def has_uncommitted_changes(self, worktree_path: Union[str, Path]) -> bool:
        """Check for staged, unstaged or untracked changes in the worktree."""
        try:
            status = self._get_git(worktree_path).status("--porcelain")
        except (git.exc.GitError, OSError) as e:
            logger.debug(f"Could not check changes in {worktree_path}: {e}")
            return False
        return bool(status.strip())

    def ahead_behind_status(self, worktree_path: Union[str, Path], branch: str) -> SyncStatus:
        """Compare HEAD of the worktree against ``<remote>/<branch>``."""
        upstream = f"{self.remote_name}/{branch}"
        try:
            output = self._get_git(worktree_path).rev_list(
                "--left-right", "--count", f"{upstream}...HEAD"
            )
        except (git.exc.GitError, OSError) as e:
            # No remote tracking branch; nothing to compare against
            logger.debug(f"No ahead/behind for {branch} in {worktree_path}: {e}")
            return SyncStatus.clean()
        return parse_ahead_behind(output)
