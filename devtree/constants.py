"""Shared constants for devtree."""

from devtree.models.worktree import SyncState

# Status icons shown in worktree listings
STATUS_ICONS = {
    SyncState.CLEAN: "✓",
    SyncState.AHEAD: "↑",
    SyncState.BEHIND: "↓",
    SyncState.DIVERGED: "⇅",
    SyncState.MODIFIED: "●",
    SyncState.UNKNOWN: "?",
}

# Rich color names per status
STATUS_COLORS = {
    SyncState.CLEAN: "green",
    SyncState.AHEAD: "blue",
    SyncState.BEHIND: "yellow",
    SyncState.DIVERGED: "magenta",
    SyncState.MODIFIED: "red",
    SyncState.UNKNOWN: "dim",
}

SHORT_COMMIT_LENGTH = 7

SYMBOL_CURRENT_WORKTREE = "*"
SYMBOL_DEVBOX = "📦"

# Legend text for the worktree listing
LEGEND_TEXT = """Legend:
  * = current worktree
  ✓ = clean  ↑ = ahead  ↓ = behind  ⇅ = diverged  ● = modified"""
