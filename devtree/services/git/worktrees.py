"""Worktree inventory and lifecycle service for devtree."""

import git
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Union

from devtree.exceptions import (
    GitOperationError,
    NotGitRepositoryError,
    WorktreeDirectoryExistsError,
)
from devtree.models.worktree import SyncStatus, WorktreeInfo
from devtree.services.git.repository import extract_stderr, get_repository_root, git_runner
from devtree.services.git.status import StatusClassifier
from devtree.logging_config import get_logger

logger = get_logger(__name__)

Classifier = Callable[[Path, str], SyncStatus]

BRANCH_REF_PREFIX = "refs/heads/"


def sanitize_branch_name(branch: str) -> str:
    """Turn a branch name into a single directory name (``feature/x`` -> ``feature-x``)."""
    return branch.replace("/", "-")


def is_within(current_dir: Optional[Path], path: Path) -> bool:
    """Check if ``current_dir`` is ``path`` or nested under it."""
    if current_dir is None:
        return False
    return current_dir == path or path in current_dir.parents


@dataclass
class _WorktreeAccumulator:
    """Fields of one porcelain record, filled in as lines are seen."""

    path: Path
    branch: Optional[str] = None
    commit: Optional[str] = None
    is_bare: bool = False
    is_detached: bool = False

    def build(self, current_dir: Optional[Path], classify: Classifier) -> WorktreeInfo:
        if self.is_bare or self.is_detached or not self.branch:
            status = SyncStatus.unknown()
        else:
            status = classify(self.path, self.branch)

        return WorktreeInfo(
            path=self.path,
            branch=self.branch,
            commit=self.commit or "",
            is_current=is_within(current_dir, self.path),
            is_bare=self.is_bare,
            is_detached=self.is_detached,
            status=status,
        )


def parse_worktree_list(
    output: str,
    current_dir: Optional[Path],
    classify: Classifier,
) -> List[WorktreeInfo]:
    """Parse ``git worktree list --porcelain`` output.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name    (or a bare "detached" line)
        bare                             (administrative entry only)
        (blank line between worktrees)

    Unrecognized lines are ignored. Records without a path are skipped.

    Args:
        output: Raw porcelain listing
        current_dir: Working directory used to flag the current worktree
        classify: Called as ``classify(path, branch)`` for entries on a branch

    Returns:
        One WorktreeInfo per ``worktree`` header, in listing order
    """
    worktrees: List[WorktreeInfo] = []
    current: Optional[_WorktreeAccumulator] = None

    def finish():
        if current is not None:
            worktrees.append(current.build(current_dir, classify))

    for line in output.splitlines():
        if line.startswith("worktree "):
            finish()
            path_text = line[len("worktree "):]
            current = _WorktreeAccumulator(path=Path(path_text)) if path_text else None
            continue

        if current is None:
            continue

        if line.startswith("HEAD "):
            current.commit = line[len("HEAD "):]
        elif line.startswith("branch "):
            ref = line[len("branch "):]
            if ref.startswith(BRANCH_REF_PREFIX):
                ref = ref[len(BRANCH_REF_PREFIX):]
            current.branch = ref or None
        elif line == "bare":
            current.is_bare = True
        elif line == "detached":
            current.is_detached = True

    # Last entry has no following header
    finish()

    logger.debug(f"Parsed {len(worktrees)} worktrees")
    for wt in worktrees:
        logger.debug(f"  {wt}")
    return worktrees


class WorktreeService:
    """Service for listing, creating and removing git worktrees."""

    def __init__(
        self,
        repo_path: Optional[Union[str, Path]] = None,
        classifier: Optional[StatusClassifier] = None,
    ):
        """Initialize the worktree service.

        Args:
            repo_path: Any path inside the repository (defaults to the working directory)
            classifier: Status classifier used for each listed worktree
        """
        self.repo_path = Path(repo_path) if repo_path is not None else Path(os.getcwd())
        self.classifier = classifier or StatusClassifier()

    def _get_git(self, cwd: Optional[Path] = None) -> git.Git:
        """Get a git command runner rooted in ``cwd`` or the repository path."""
        return git_runner(cwd or self.repo_path)

    def list_worktrees(self, current_dir: Optional[Path] = None) -> List[WorktreeInfo]:
        """Get information about all worktrees.

        Args:
            current_dir: Directory used to flag the current worktree
                (defaults to the process working directory)

        Returns:
            List of WorktreeInfo objects, freshly read from git

        Raises:
            NotGitRepositoryError: If the listing could not be obtained
        """
        try:
            output = self._get_git().worktree("list", "--porcelain")
        except (git.exc.GitError, OSError) as e:
            logger.debug(f"Could not list worktrees: {e}")
            raise NotGitRepositoryError(str(self.repo_path))

        if current_dir is None:
            try:
                current_dir = Path(os.getcwd())
            except OSError:
                current_dir = None

        return parse_worktree_list(output, current_dir, self.classifier.classify)

    def find_worktree_by_branch(self, branch: str) -> Optional[WorktreeInfo]:
        """Find the worktree that has ``branch`` checked out."""
        return next((wt for wt in self.list_worktrees() if wt.branch == branch), None)

    def worktree_path_for(self, branch: str, repo_root: Path) -> Path:
        """Directory a new worktree for ``branch`` goes to: a sibling of the repository root."""
        parent = repo_root.parent
        if parent == repo_root:
            raise GitOperationError("worktree add", branch, "Cannot determine parent directory")
        return parent / sanitize_branch_name(branch)

    def create_worktree(self, branch: str, create_branch: bool) -> Path:
        """Create a worktree for a branch next to the repository root.

        Args:
            branch: Branch to check out
            create_branch: Create ``branch`` from HEAD instead of checking out an existing one

        Returns:
            Path of the new worktree

        Raises:
            WorktreeDirectoryExistsError: If the target directory is already there
            GitOperationError: If ``git worktree add`` fails
        """
        repo_root = get_repository_root(self.repo_path)
        worktree_path = self.worktree_path_for(branch, repo_root)

        if worktree_path.exists():
            raise WorktreeDirectoryExistsError(str(worktree_path))

        if create_branch:
            args = ["add", "-b", branch, str(worktree_path)]
        else:
            args = ["add", str(worktree_path), branch]

        try:
            self._get_git(repo_root).worktree(*args)
        except git.exc.GitCommandError as e:
            stderr = extract_stderr(e)
            logger.error(f"Failed to create worktree for {branch}: {stderr}")
            raise GitOperationError("worktree add", branch, stderr)

        logger.info(f"Created worktree for {branch} at {worktree_path}")
        return worktree_path

    def remove_worktree(self, path: Union[str, Path], force: bool = False) -> None:
        """Remove a worktree at the specified path.

        Args:
            path: Path to the worktree directory
            force: Force removal even if working tree is dirty or locked

        Raises:
            GitOperationError: With git's diagnostic if removal fails
        """
        args = ["remove", str(path)]
        if force:
            args.append("--force")

        try:
            self._get_git().worktree(*args)
        except git.exc.GitCommandError as e:
            stderr = extract_stderr(e)
            logger.error(f"Failed to remove worktree at {path}: {stderr}")
            raise GitOperationError("worktree remove", message=stderr)

        logger.info(f"Removed worktree at {path}")

    def prune_worktrees(self) -> None:
        """Prune stale worktree metadata.

        Raises:
            GitOperationError: With git's diagnostic if pruning fails
        """
        try:
            self._get_git().worktree("prune")
        except git.exc.GitCommandError as e:
            stderr = extract_stderr(e)
            logger.warning(f"Failed to prune worktrees: {stderr}")
            raise GitOperationError("worktree prune", message=stderr)

        logger.info("Pruned stale worktree metadata")
