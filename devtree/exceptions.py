"""Custom exceptions for devtree"""

from typing import Optional


class DevError(Exception):
    """Base exception for all devtree errors."""
    pass


class NotGitRepositoryError(DevError):
    """Exception raised when the working directory is not inside a git repository."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        super().__init__("Not in a git repository")


class GitOperationError(DevError):
    """Exception raised for errors in Git operations.

    ``message`` holds git's own diagnostic text, unmodified.
    """

    def __init__(self, operation: str, branch: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.branch = branch
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if branch:
            error_msg += f" for branch '{branch}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class BranchExistsLocallyError(DevError):
    """Exception raised when creating a worktree for a branch that already exists locally."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(f"Branch '{branch}' already exists locally")


class WorktreeNotFoundError(DevError):
    """Exception raised when no worktree is checked out on the requested branch."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(f"Worktree not found for branch '{branch}'")


class WorktreeDirectoryExistsError(DevError):
    """Exception raised when the target directory for a new worktree is occupied."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Worktree directory already exists: {path}")


class WorktreePathMissingError(DevError):
    """Exception raised when a listed worktree's directory is gone."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Worktree path does not exist: {path}")


class ProjectNotFoundError(DevError):
    """Exception raised when a project is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Project '{name}' not found")


class ProjectExistsError(DevError):
    """Exception raised when registering a project name twice."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Project '{name}' already exists")


class ConfigError(DevError):
    """Exception raised for invalid configuration keys or values."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Config error: {message}")


class EditorNotFoundError(DevError):
    """Exception raised when the configured editor is not installed."""

    def __init__(self, editor: str):
        self.editor = editor
        super().__init__(f"Editor '{editor}' not found. Is it installed?")


class UserCancelledError(DevError):
    """Exception raised when the user aborts an interactive prompt."""

    def __init__(self):
        super().__init__("Operation cancelled")
