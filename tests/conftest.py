"""Pytest fixtures for devtree tests"""
import tempfile
from pathlib import Path
from unittest.mock import Mock

import git
import pytest

from devtree.config import GlobalConfig
from devtree.models.worktree import SyncStatus
from devtree.ui.prompts import Prompts


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing (resolved, so git paths compare equal)."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture(autouse=True)
def config_home(temp_dir, monkeypatch):
    """Point the config directory at a temporary location."""
    home = temp_dir / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home))
    return home / "dev"


def _configure_user(repo: git.Repo) -> None:
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository with one commit on main."""
    repo_path = temp_dir / "workspace" / "test_repo"
    repo_path.mkdir(parents=True)

    repo = git.Repo.init(repo_path)
    _configure_user(repo)

    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    repo.git.branch("-M", "main")

    yield repo

    repo.close()


@pytest.fixture
def git_repo_with_remote(git_repo, temp_dir):
    """Repository whose main branch is pushed to a bare ``origin``."""
    origin_path = temp_dir / "origin.git"
    git.Repo.init(origin_path, bare=True)

    git_repo.create_remote("origin", str(origin_path))
    git_repo.git.push("origin", "main")
    git_repo.remotes.origin.fetch()

    yield git_repo


def _commit_file(repo: git.Repo, name: str, content: str = "content\n", message: str = "Add file") -> None:
    """Write a file in the repo's working tree and commit it."""
    path = Path(repo.working_dir) / name
    path.write_text(content)
    repo.index.add([name])
    repo.index.commit(message)


@pytest.fixture
def global_config(temp_dir):
    """Global configuration with a temporary dev path."""
    return GlobalConfig(editor="zed", dev_path=temp_dir / "Development")


@pytest.fixture
def mock_prompts():
    """Prompts that never touch the terminal."""
    prompts = Mock(spec=Prompts)
    prompts.confirm.return_value = True
    prompts.select.return_value = 0
    prompts.input.return_value = "project"
    return prompts


@pytest.fixture
def clean_classifier():
    """Classifier stand-in reporting every worktree as clean."""
    return Mock(return_value=SyncStatus.clean())


@pytest.fixture
def commit_file():
    """Helper that writes and commits a file in a repo."""
    return _commit_file
