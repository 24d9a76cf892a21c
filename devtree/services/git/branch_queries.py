"""Branch existence probes for devtree."""

import git
from pathlib import Path
from typing import Union

from devtree.services.git.repository import git_runner
from devtree.logging_config import get_logger

logger = get_logger(__name__)


class BranchQueries:
    """Advisory branch lookups used to pick a worktree creation path.

    Every probe answers ``False`` when git fails instead of raising.
    """

    def __init__(self, repo_path: Union[str, Path], remote_name: str = "origin"):
        """Initialize the branch queries service.

        Args:
            repo_path: Any path inside the repository
            remote_name: Remote checked by ``branch_exists_on_remote``
        """
        self.repo_path = Path(repo_path)
        self.remote_name = remote_name

    def _get_git(self) -> git.Git:
        return git_runner(self.repo_path)

    def _ref_exists(self, ref: str) -> bool:
        try:
            self._get_git().show_ref("--verify", "--quiet", ref)
            return True
        except (git.exc.GitError, OSError) as e:
            logger.debug(f"Ref {ref} not found: {e}")
            return False

    def branch_exists_locally(self, name: str) -> bool:
        """Check if ``refs/heads/<name>`` exists."""
        return self._ref_exists(f"refs/heads/{name}")

    def branch_exists_on_remote(self, name: str) -> bool:
        """Check if ``refs/remotes/<remote>/<name>`` exists."""
        return self._ref_exists(f"refs/remotes/{self.remote_name}/{name}")
