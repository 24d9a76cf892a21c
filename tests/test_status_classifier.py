"""Tests for worktree sync status classification"""
from unittest.mock import Mock, patch

import git
import pytest

from devtree.models.worktree import SyncState, SyncStatus
from devtree.services.git.status import StatusClassifier, parse_ahead_behind


class TestParseAheadBehind:
    """Test mapping of rev-list counts (behind first, ahead second)."""

    @pytest.mark.parametrize(
        "output,expected",
        [
            ("0\t0", SyncStatus.clean()),
            ("0\t3", SyncStatus(SyncState.AHEAD, ahead=3)),
            ("5\t0", SyncStatus(SyncState.BEHIND, behind=5)),
            ("4\t2\n", SyncStatus(SyncState.DIVERGED, ahead=2, behind=4)),
        ],
    )
    def test_counts(self, output, expected):
        assert parse_ahead_behind(output) == expected

    def test_malformed_output_is_clean(self):
        """Test output without two fields is treated as clean."""
        assert parse_ahead_behind("") == SyncStatus.clean()
        assert parse_ahead_behind("garbage") == SyncStatus.clean()

    def test_unparseable_count_is_zero(self):
        """Test a non-numeric count field is read as zero."""
        assert parse_ahead_behind("x\t2") == SyncStatus(SyncState.AHEAD, ahead=2)


class TestSyncStatusLabels:
    """Test human-readable status labels."""

    def test_labels(self):
        assert str(SyncStatus.clean()) == "clean"
        assert str(SyncStatus.from_counts(ahead=2, behind=0)) == "ahead 2"
        assert str(SyncStatus.from_counts(ahead=0, behind=7)) == "behind 7"
        assert str(SyncStatus.from_counts(ahead=1, behind=3)) == "diverged +1 -3"
        assert str(SyncStatus.modified()) == "modified"
        assert str(SyncStatus.unknown()) == "unknown"

    def test_is_clean(self):
        assert SyncStatus.clean().is_clean is True
        assert SyncStatus.modified().is_clean is False


class TestStatusClassifierMocked:
    """Test classifier decisions with git mocked out."""

    def _classifier_with(self, status_output="", rev_list_output="0\t0"):
        classifier = StatusClassifier()
        mock_git = Mock()
        mock_git.status.return_value = status_output
        mock_git.rev_list.return_value = rev_list_output
        return classifier, mock_git

    def test_modified_takes_priority(self):
        """Test uncommitted changes win over ahead/behind counts."""
        classifier, mock_git = self._classifier_with(" M file.txt\n", "4\t2")

        with patch.object(classifier, "_get_git", return_value=mock_git):
            result = classifier.classify("/repo", "main")

        assert result == SyncStatus.modified()
        mock_git.rev_list.assert_not_called()

    def test_compares_against_origin(self):
        """Test the upstream range is origin/<branch>...HEAD."""
        classifier, mock_git = self._classifier_with("", "0\t3")

        with patch.object(classifier, "_get_git", return_value=mock_git):
            result = classifier.classify("/repo", "feature/x")

        assert result == SyncStatus(SyncState.AHEAD, ahead=3)
        mock_git.rev_list.assert_called_once_with("--left-right", "--count", "origin/feature/x...HEAD")

    def test_missing_upstream_is_clean(self):
        """Test a failing rev-list (no remote branch) reports clean."""
        classifier, mock_git = self._classifier_with()
        mock_git.rev_list.side_effect = git.exc.GitCommandError("rev-list", 128)

        with patch.object(classifier, "_get_git", return_value=mock_git):
            assert classifier.classify("/repo", "main") == SyncStatus.clean()

    def test_status_failure_falls_through(self):
        """Test a failing status check is read as no changes."""
        classifier, mock_git = self._classifier_with(rev_list_output="2\t0")
        mock_git.status.side_effect = git.exc.GitCommandError("status", 128)

        with patch.object(classifier, "_get_git", return_value=mock_git):
            result = classifier.classify("/repo", "main")

        assert result == SyncStatus(SyncState.BEHIND, behind=2)


class TestStatusClassifierIntegration:
    """Test classification against real repositories."""

    def test_clean_without_remote(self, git_repo):
        """Test a committed repo without a remote is clean."""
        assert StatusClassifier().classify(git_repo.working_dir, "main") == SyncStatus.clean()

    def test_untracked_file_is_modified(self, git_repo, temp_dir):
        """Test untracked files count as uncommitted changes."""
        (temp_dir / "workspace" / "test_repo" / "new.txt").write_text("new\n")
        assert StatusClassifier().classify(git_repo.working_dir, "main") == SyncStatus.modified()

    def test_ahead_of_remote(self, git_repo_with_remote, commit_file):
        """Test a local commit not yet pushed shows as ahead."""
        commit_file(git_repo_with_remote, "feature.txt")

        result = StatusClassifier().classify(git_repo_with_remote.working_dir, "main")

        assert result == SyncStatus(SyncState.AHEAD, ahead=1)

    def test_nonexistent_path_is_clean(self, temp_dir):
        """Test an unreadable worktree does not raise."""
        assert StatusClassifier().classify(temp_dir / "missing", "main") == SyncStatus.clean()
