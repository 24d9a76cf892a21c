"""Project commands: init, open and list."""

from pathlib import Path
from typing import List, Optional

from rich.markup import escape

from devtree.config import GlobalConfig
from devtree.exceptions import DevError, ProjectExistsError, ProjectNotFoundError
from devtree.models.project import ProjectConfig
from devtree.services import devbox
from devtree.services.display_service import DisplayService
from devtree.services.editor_service import open_in_editor
from devtree.services.git import (
    clone_repository,
    init_repository,
    is_git_repository,
    run_git_command,
)
from devtree.services.project_registry import ProjectRegistry
from devtree.services.resolution import find_main_worktree
from devtree.ui.output import console, info, success
from devtree.ui.prompts import Prompts
from devtree.logging_config import get_logger

logger = get_logger(__name__)


class ProjectManager:
    """Manages registered projects."""

    def __init__(
        self,
        config: GlobalConfig,
        registry: Optional[ProjectRegistry] = None,
        prompts: Optional[Prompts] = None,
        display_service: Optional[DisplayService] = None,
    ):
        self.config = config
        self.registry = registry or ProjectRegistry()
        self.prompts = prompts or Prompts()
        self.display_service = display_service or DisplayService()

    def list_projects(self) -> List[ProjectConfig]:
        projects = self.registry.list_all()
        self.display_service.display_projects(projects)
        return projects

    def open_project(self, name: str) -> Path:
        """Open a registered project's main worktree in the editor.

        Raises:
            ProjectNotFoundError: If no project is registered under ``name``
        """
        try:
            project = self.registry.load(name)
        except ProjectNotFoundError:
            console.print(f"[red]Project '{escape(name)}' not found[/red]")
            console.print()
            self.display_service.display_project_names(self.registry.list_all())
            raise

        self.registry.touch_accessed(project)

        if not project.path.exists():
            raise DevError(f"Project directory does not exist: {project.path}")

        info(f"Opening project '{name}'...")
        target_path = find_main_worktree(project)

        open_in_editor(target_path, self.config.editor, project.editor)

        success(f"Opened project '{name}'")
        console.print(f"  [dim]Path[/dim]: {escape(str(target_path))}")

        if project.uses_devbox and self.config.auto_devbox and devbox.has_devbox_config(target_path):
            console.print()
            devbox.print_devbox_instructions(target_path)

        return target_path

    def init_project(
        self,
        name: Optional[str] = None,
        clone_url: Optional[str] = None,
        existing_path: Optional[Path] = None,
        no_devbox: bool = False,
    ) -> ProjectConfig:
        """Create, clone or adopt a repository and register it as a project."""
        project_name = name if name is not None else self.prompts.input("Project name")
        project_name = project_name.strip()
        if not project_name:
            raise DevError("Project name cannot be empty")

        if self.registry.exists(project_name):
            raise ProjectExistsError(project_name)

        if clone_url:
            project_path = self._init_from_clone(project_name, clone_url)
        elif existing_path is not None:
            project_path = self._init_from_existing(Path(existing_path))
        else:
            project_path = self._init_new_repo(project_name)

        uses_devbox = False
        if not no_devbox and self.prompts.confirm("Set up devbox for this project?", default=True):
            info("Creating devbox.json...")
            devbox.init_devbox(project_path)
            success("devbox.json created")
            uses_devbox = True

        project = ProjectConfig(
            name=project_name,
            path=project_path,
            remote_url=clone_url,
            uses_devbox=uses_devbox,
        )
        self.registry.save(project)
        success(f"Project '{project_name}' registered")

        info("Opening in editor...")
        open_in_editor(project_path, self.config.editor)

        console.print()
        success(f"Project '{project_name}' is ready!")
        console.print(f"  [dim]Path[/dim]: {escape(str(project_path))}")

        if uses_devbox:
            console.print()
            devbox.print_devbox_instructions(project_path)

        return project

    def _init_new_repo(self, name: str) -> Path:
        project_path = (self.config.dev_path / name).resolve()
        if project_path.exists():
            raise DevError(f"Directory already exists: {project_path}")

        info(f"Creating new repository at {project_path}...")
        project_path.mkdir(parents=True)
        init_repository(project_path)

        (project_path / "README.md").write_text(f"# {name}\n")
        run_git_command(["add", "."], cwd=project_path)
        run_git_command(["commit", "-m", "Initial commit"], cwd=project_path)

        success("Repository initialized")
        return project_path

    def _init_from_clone(self, name: str, url: str) -> Path:
        project_path = (self.config.dev_path / name).resolve()
        if project_path.exists():
            raise DevError(f"Directory already exists: {project_path}")

        info(f"Cloning {url} to {project_path}...")
        project_path.parent.mkdir(parents=True, exist_ok=True)
        clone_repository(url, project_path)

        success("Repository cloned")
        return project_path

    def _init_from_existing(self, path: Path) -> Path:
        if not path.exists():
            raise DevError(f"Directory does not exist: {path}")

        abs_path = path.resolve()
        if not is_git_repository(abs_path):
            info("Initializing git repository...")
            init_repository(abs_path)
            success("Repository initialized")

        info(f"Registering existing project at {abs_path}...")
        return abs_path
