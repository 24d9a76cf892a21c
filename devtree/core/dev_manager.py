"""Worktree commands: list, create, switch and cleanup."""

from pathlib import Path
from typing import List, Optional, Tuple, Union

from rich.markup import escape

from devtree.config import GlobalConfig
from devtree.exceptions import (
    BranchExistsLocallyError,
    DevError,
    GitOperationError,
    NotGitRepositoryError,
    WorktreeNotFoundError,
    WorktreePathMissingError,
)
from devtree.formatters import short_commit, status_label
from devtree.models.project import ProjectConfig
from devtree.models.worktree import WorktreeInfo
from devtree.services import package_manager
from devtree.services.display_service import DisplayService
from devtree.services.editor_service import open_in_editor
from devtree.services.git import BranchQueries, WorktreeService, is_git_repository
from devtree.services.resolution import find_by_branch
from devtree.ui.output import console, info, success, warning
from devtree.ui.prompts import Prompts, RemoteBranchAction, prompt_remote_branch_action
from devtree.logging_config import get_logger

logger = get_logger(__name__)


class DevManager:
    """Runs worktree commands against the repository at ``repo_path``."""

    def __init__(
        self,
        repo_path: Union[str, Path],
        config: GlobalConfig,
        project: Optional[ProjectConfig] = None,
        prompts: Optional[Prompts] = None,
        worktree_service: Optional[WorktreeService] = None,
        branch_queries: Optional[BranchQueries] = None,
        display_service: Optional[DisplayService] = None,
    ):
        """Initialize DevManager.

        Args:
            repo_path: Directory inside the repository
            config: Global configuration
            project: Registered project containing ``repo_path``, if any
            prompts: Interactive prompts (replaced in tests)
            worktree_service: Worktree service (defaults to one rooted at repo_path)
            branch_queries: Branch probes (defaults to one rooted at repo_path)
            display_service: Output renderer
        """
        self.repo_path = Path(repo_path)
        self.config = config
        self.project = project
        self.prompts = prompts or Prompts()
        self.worktree_service = worktree_service or WorktreeService(self.repo_path)
        self.branch_queries = branch_queries or BranchQueries(self.repo_path)
        self.display_service = display_service or DisplayService()

    def _require_repository(self) -> None:
        if not is_git_repository(self.repo_path):
            raise NotGitRepositoryError(str(self.repo_path))

    @property
    def auto_install_deps(self) -> bool:
        """Project override if set, else the global setting."""
        if self.project is not None and self.project.auto_install_deps is not None:
            return self.project.auto_install_deps
        return self.config.auto_install_deps

    def _open_editor(self, path: Path) -> None:
        info("Opening in editor...")
        override = self.project.editor if self.project is not None else None
        open_in_editor(path, self.config.editor, override)

    def list_worktrees(self) -> List[WorktreeInfo]:
        """Print all worktrees with their status."""
        self._require_repository()
        worktrees = self.worktree_service.list_worktrees()
        self.display_service.display_worktree_table(worktrees)
        return worktrees

    def create(self, branch: str) -> Optional[Path]:
        """Create a worktree for a new or remote-only branch and open it.

        Returns:
            The new worktree path, or None if the user cancelled
        """
        self._require_repository()

        branch = branch.strip()
        if not branch:
            raise DevError("Branch name is required")

        if self.branch_queries.branch_exists_locally(branch):
            raise BranchExistsLocallyError(branch)

        create_new_branch = True
        if self.branch_queries.branch_exists_on_remote(branch):
            action = prompt_remote_branch_action(self.prompts, branch)
            if action == RemoteBranchAction.CANCEL:
                warning("Operation cancelled")
                return None
            create_new_branch = action == RemoteBranchAction.CREATE_DIVERGENT

        info(f"Creating worktree for branch '{branch}'...")
        worktree_path = self.worktree_service.create_worktree(branch, create_new_branch)
        success(f"Worktree created at: {worktree_path}")

        if self.auto_install_deps:
            info("Checking for dependencies...")
            if package_manager.install_dependencies(worktree_path):
                success("Dependencies installed")

        self._open_editor(worktree_path)

        console.print()
        success(f"Ready to work on '{branch}'!")
        console.print(f"   [dim]Path[/dim]: {escape(str(worktree_path))}")
        return worktree_path

    def switch(self, branch: str) -> WorktreeInfo:
        """Open the worktree that has ``branch`` checked out.

        Raises:
            WorktreeNotFoundError: No worktree is on ``branch``
            WorktreePathMissingError: The worktree directory is gone
        """
        self._require_repository()

        branch = branch.strip()
        if not branch:
            raise DevError("Branch name is required")

        worktrees = self.worktree_service.list_worktrees()
        worktree = find_by_branch(worktrees, branch)

        if worktree is None:
            console.print(f"[red]No worktree found for branch '{escape(branch)}'[/red]")
            self.display_service.display_available_branches(worktrees, branch)
            raise WorktreeNotFoundError(branch)

        if worktree.is_current:
            console.print(f"[yellow]Already on branch '{escape(branch)}'[/yellow]")
            return worktree

        if not worktree.exists:
            raise WorktreePathMissingError(str(worktree.path))

        info(f"Switching to branch '{branch}'...")

        if self.auto_install_deps and not package_manager.has_node_modules(worktree.path):
            info("Dependencies not found, installing...")
            package_manager.install_dependencies(worktree.path)

        self._open_editor(worktree.path)

        console.print()
        success(f"Switched to '{branch}'")
        console.print(f"  [dim]Path[/dim]: {escape(str(worktree.path))}")
        console.print(f"  [dim]Commit[/dim]: {short_commit(worktree.commit)}")
        if not worktree.status.is_clean:
            console.print("  [dim]Status[/dim]:", status_label(worktree.status))
        return worktree

    def find_problematic_worktrees(self) -> List[WorktreeInfo]:
        """Worktrees whose directory is missing or whose HEAD is detached."""
        worktrees = self.worktree_service.list_worktrees()
        return [wt for wt in worktrees if not wt.exists or wt.is_detached]

    def cleanup(self) -> Tuple[int, int]:
        """Remove problematic worktrees after confirmation, then prune.

        Returns:
            Tuple of (removed, failed) counts
        """
        self._require_repository()

        problematic = self.find_problematic_worktrees()
        if not problematic:
            success("All worktrees are in good condition")
            return 0, 0

        console.print(f"[yellow]Found {len(problematic)} problematic worktree(s):[/yellow]\n")
        for wt in problematic:
            reason = "[red]directory missing[/red]" if not wt.exists else "[yellow]detached HEAD[/yellow]"
            name = escape(wt.branch or "unknown")
            console.print(f"  [cyan]{name}[/cyan] - {escape(str(wt.path))} ({reason})")
        console.print()

        if not self.prompts.confirm("Remove these problematic worktrees?", default=False):
            warning("Cleanup cancelled")
            return 0, 0

        info("Cleaning up worktrees...")

        cleaned = 0
        failed = 0
        for wt in problematic:
            name = escape(wt.branch or "unknown")
            try:
                self.worktree_service.remove_worktree(wt.path)
            except GitOperationError as e:
                console.print(f"[red]✗[/red] Failed to remove: {name} - {escape(str(e))}")
                failed += 1
            else:
                console.print(f"[green]✓[/green] Removed: {name} ({escape(str(wt.path))})")
                cleaned += 1

        console.print()
        success(f"Cleanup complete: {cleaned} removed")
        if failed:
            console.print(f"[red]✗ Failed to remove: {failed}[/red]")

        info("Running git worktree prune...")
        try:
            self.worktree_service.prune_worktrees()
        except GitOperationError as e:
            warning(f"git worktree prune failed: {e}")
        else:
            success("Pruned worktree references")

        return cleaned, failed
