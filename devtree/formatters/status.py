"""Sync status formatting utilities."""

from rich.text import Text

from devtree.constants import SHORT_COMMIT_LENGTH, STATUS_COLORS, STATUS_ICONS
from devtree.models.worktree import SyncStatus


def status_style(status: SyncStatus) -> str:
    """Rich style for a status."""
    return STATUS_COLORS[status.state]


def status_icon(status: SyncStatus) -> Text:
    """
    Format a status as a colored single-character icon.

    Args:
        status: Worktree sync status

    Returns:
        Styled icon text
    """
    return Text(STATUS_ICONS[status.state], style=status_style(status))


def status_label(status: SyncStatus) -> Text:
    """
    Format a status as a colored label.

    Args:
        status: Worktree sync status

    Returns:
        Styled label like "ahead 3" or "diverged +2 -4"
    """
    return Text(str(status), style=status_style(status))


def short_commit(commit: str) -> str:
    """Abbreviate a commit id for display."""
    return commit[:SHORT_COMMIT_LENGTH]
