"""Repository-level git helpers for devtree."""

import git
from pathlib import Path
from typing import List, Optional, Union

from devtree.exceptions import GitOperationError, NotGitRepositoryError
from devtree.logging_config import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]


def extract_stderr(error: Exception) -> str:
    """Get git's own stderr text out of a GitCommandError.

    GitPython wraps stderr as ``"\\n  stderr: '<text>'"``; the wrapper is
    removed so the diagnostic can be shown verbatim.
    """
    stderr = (getattr(error, "stderr", "") or "").strip()
    prefix = "stderr: '"
    if stderr.startswith(prefix) and stderr.endswith("'"):
        stderr = stderr[len(prefix):-1]
    return stderr.strip() or str(error)


def git_runner(path: PathLike) -> git.Git:
    """Get a git command runner rooted at ``path``.

    GitPython silently falls back to the process working directory when the
    directory is missing, so that case raises here instead.
    """
    if not Path(path).is_dir():
        raise FileNotFoundError(f"No such directory: {path}")
    return git.Git(str(path))


def is_git_repository(path: PathLike) -> bool:
    """Check if a directory is inside a git repository."""
    try:
        git_runner(path).rev_parse("--git-dir")
        return True
    except (git.exc.GitError, OSError) as e:
        logger.debug(f"{path} is not a git repository: {e}")
        return False


def get_repository_root(path: PathLike) -> Path:
    """Get the top-level directory of the repository containing ``path``."""
    try:
        root = git_runner(path).rev_parse("--show-toplevel")
    except (git.exc.GitError, OSError) as e:
        logger.debug(f"Could not resolve repository root for {path}: {e}")
        raise NotGitRepositoryError(str(path))
    return Path(root.strip())


def init_repository(path: PathLike) -> None:
    """Initialize a new git repository."""
    try:
        git.Repo.init(str(path))
        logger.info(f"Initialized repository at {path}")
    except git.exc.GitCommandError as e:
        raise GitOperationError("init", message=extract_stderr(e))


def clone_repository(url: str, path: PathLike) -> None:
    """Clone a repository from a URL into ``path``."""
    try:
        git.Repo.clone_from(url, str(path))
        logger.info(f"Cloned {url} to {path}")
    except git.exc.GitCommandError as e:
        raise GitOperationError("clone", message=extract_stderr(e))


def run_git_command(args: List[str], cwd: Optional[PathLike] = None) -> str:
    """Run an arbitrary git command and return its stdout."""
    runner = git_runner(cwd) if cwd is not None else git.Git()
    try:
        return runner.execute(["git", *args])
    except git.exc.GitCommandError as e:
        raise GitOperationError(" ".join(args[:1]) or "git", message=extract_stderr(e))
