"""Tests for project commands"""
from pathlib import Path
from unittest.mock import Mock, patch

import git
import pytest

from devtree.core import ProjectManager
from devtree.exceptions import DevError, ProjectExistsError, ProjectNotFoundError
from devtree.models.project import ProjectConfig
from devtree.services.display_service import DisplayService
from devtree.services.project_registry import ProjectRegistry


@pytest.fixture
def registry(config_home):
    return ProjectRegistry()


@pytest.fixture
def display_service():
    return Mock(spec=DisplayService)


@pytest.fixture
def mock_editor():
    with patch("devtree.core.project_manager.open_in_editor") as mock:
        yield mock


@pytest.fixture
def git_identity(monkeypatch):
    """Commit identity for repositories created by the code under test."""
    for var in ("GIT_AUTHOR_NAME", "GIT_COMMITTER_NAME"):
        monkeypatch.setenv(var, "Test User")
    for var in ("GIT_AUTHOR_EMAIL", "GIT_COMMITTER_EMAIL"):
        monkeypatch.setenv(var, "test@example.com")


@pytest.fixture
def manager(global_config, registry, mock_prompts, display_service):
    return ProjectManager(global_config, registry, prompts=mock_prompts, display_service=display_service)


class TestOpenProject:
    """Test opening registered projects."""

    def test_opens_main_worktree(self, manager, registry, git_repo, mock_editor):
        repo_path = Path(git_repo.working_dir)
        registry.save(ProjectConfig(name="app", path=repo_path, editor="code"))

        assert manager.open_project("app") == repo_path
        mock_editor.assert_called_once_with(repo_path, "zed", "code")

    def test_updates_last_accessed(self, manager, registry, git_repo, mock_editor):
        project = ProjectConfig(name="app", path=Path(git_repo.working_dir))
        before = project.last_accessed
        registry.save(project)

        manager.open_project("app")

        assert registry.load("app").last_accessed >= before

    def test_not_a_repository_opens_root(self, manager, registry, temp_dir, mock_editor):
        plain = temp_dir / "plain"
        plain.mkdir()
        registry.save(ProjectConfig(name="plain", path=plain))

        assert manager.open_project("plain") == plain

    def test_unknown_project(self, manager, display_service, mock_editor):
        with pytest.raises(ProjectNotFoundError, match="ghost"):
            manager.open_project("ghost")

        display_service.display_project_names.assert_called_once()
        mock_editor.assert_not_called()

    def test_missing_directory(self, manager, registry, temp_dir, mock_editor):
        registry.save(ProjectConfig(name="gone", path=temp_dir / "gone"))

        with pytest.raises(DevError, match="does not exist"):
            manager.open_project("gone")
        mock_editor.assert_not_called()


class TestInitProject:
    """Test project initialization."""

    def test_new_repository(self, manager, registry, global_config, mock_editor, git_identity):
        project = manager.init_project("fresh")

        path = global_config.dev_path / "fresh"
        assert project.path == path
        assert project.uses_devbox is True
        assert (path / "devbox.json").exists()
        assert git.Repo(path).head.commit.message.strip() == "Initial commit"
        assert registry.load("fresh").path == path
        mock_editor.assert_called_once_with(path, "zed")

    def test_no_devbox(self, manager, global_config, mock_prompts, mock_editor, git_identity):
        project = manager.init_project("plain", no_devbox=True)

        assert project.uses_devbox is False
        assert not (global_config.dev_path / "plain" / "devbox.json").exists()
        mock_prompts.confirm.assert_not_called()

    def test_name_prompted(self, manager, mock_prompts, mock_editor, git_identity):
        mock_prompts.input.return_value = "prompted"

        assert manager.init_project(no_devbox=True).name == "prompted"

    def test_existing_directory(self, manager, temp_dir, mock_editor):
        """Test adopting a directory that is not yet a repository."""
        existing = temp_dir / "existing"
        existing.mkdir()

        project = manager.init_project("existing", existing_path=existing, no_devbox=True)

        assert project.path == existing
        assert (existing / ".git").exists()

    def test_existing_repository_kept(self, manager, git_repo, mock_editor):
        repo_path = Path(git_repo.working_dir)
        head = git_repo.head.commit.hexsha

        manager.init_project("repo", existing_path=repo_path, no_devbox=True)

        assert git.Repo(repo_path).head.commit.hexsha == head

    def test_clone(self, manager, git_repo, global_config, mock_editor):
        project = manager.init_project("cloned", clone_url=git_repo.working_dir, no_devbox=True)

        assert project.remote_url == git_repo.working_dir
        assert (global_config.dev_path / "cloned" / "README.md").exists()

    def test_symlinked_dev_path_stored_resolved(self, manager, registry, global_config, temp_dir,
                                                mock_editor, git_identity):
        """Test a new project is registered under its real path so cwd lookups match it."""
        real_dir = temp_dir / "real"
        real_dir.mkdir()
        (temp_dir / "linked").symlink_to(real_dir)
        global_config.dev_path = temp_dir / "linked"

        project = manager.init_project("fresh", no_devbox=True)

        assert project.path == real_dir / "fresh"
        assert registry.find_by_path(real_dir / "fresh" / "src").name == "fresh"

    def test_clone_into_symlinked_dev_path(self, manager, global_config, git_repo, temp_dir, mock_editor):
        real_dir = temp_dir / "real"
        real_dir.mkdir()
        (temp_dir / "linked").symlink_to(real_dir)
        global_config.dev_path = temp_dir / "linked"

        project = manager.init_project("cloned", clone_url=git_repo.working_dir, no_devbox=True)

        assert project.path == real_dir / "cloned"
        assert (real_dir / "cloned" / "README.md").exists()

    def test_duplicate_name(self, manager, registry, temp_dir):
        registry.save(ProjectConfig(name="dup", path=temp_dir))

        with pytest.raises(ProjectExistsError, match="dup"):
            manager.init_project("dup")

    def test_directory_taken(self, manager, global_config):
        (global_config.dev_path / "taken").mkdir(parents=True)

        with pytest.raises(DevError, match="already exists"):
            manager.init_project("taken")

    def test_empty_name(self, manager):
        with pytest.raises(DevError):
            manager.init_project("   ")


class TestListProjects:
    def test_lists_registry(self, manager, registry, display_service, temp_dir):
        registry.save(ProjectConfig(name="app", path=temp_dir))

        projects = manager.list_projects()

        assert [p.name for p in projects] == ["app"]
        display_service.display_projects.assert_called_once_with(projects)
