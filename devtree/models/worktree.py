"""Worktree data models."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class SyncState(Enum):
    """Synchronization state of a worktree with its upstream."""
    CLEAN = "clean"
    AHEAD = "ahead"
    BEHIND = "behind"
    DIVERGED = "diverged"
    MODIFIED = "modified"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class SyncStatus:
    """Sync status of a worktree; ``ahead``/``behind`` are only set where the state carries counts."""

    state: SyncState
    ahead: int = 0
    behind: int = 0

    @classmethod
    def clean(cls) -> "SyncStatus":
        return cls(SyncState.CLEAN)

    @classmethod
    def modified(cls) -> "SyncStatus":
        return cls(SyncState.MODIFIED)

    @classmethod
    def unknown(cls) -> "SyncStatus":
        return cls(SyncState.UNKNOWN)

    @classmethod
    def from_counts(cls, ahead: int, behind: int) -> "SyncStatus":
        """Map ahead/behind commit counts to a status."""
        if ahead > 0 and behind > 0:
            return cls(SyncState.DIVERGED, ahead=ahead, behind=behind)
        if ahead > 0:
            return cls(SyncState.AHEAD, ahead=ahead)
        if behind > 0:
            return cls(SyncState.BEHIND, behind=behind)
        return cls.clean()

    @property
    def is_clean(self) -> bool:
        return self.state == SyncState.CLEAN

    def __str__(self) -> str:
        if self.state == SyncState.AHEAD:
            return f"ahead {self.ahead}"
        if self.state == SyncState.BEHIND:
            return f"behind {self.behind}"
        if self.state == SyncState.DIVERGED:
            return f"diverged +{self.ahead} -{self.behind}"
        return self.state.value


@dataclass(frozen=True)
class WorktreeInfo:
    """Information about a git worktree."""

    path: Path
    branch: Optional[str]
    commit: str
    is_current: bool = False
    is_bare: bool = False
    is_detached: bool = False
    status: SyncStatus = field(default_factory=SyncStatus.unknown)

    @property
    def display_name(self) -> str:
        """Branch name, or a placeholder for branchless entries."""
        if self.branch:
            return self.branch
        if self.is_detached:
            return "detached"
        if self.is_bare:
            return "bare"
        return "unknown"

    @property
    def exists(self) -> bool:
        """Whether the worktree directory is still on disk."""
        return self.path.exists()

    def __str__(self) -> str:
        """String representation of worktree."""
        current_marker = " (current)" if self.is_current else ""
        return f"{self.display_name} @ {self.path}{current_marker} [{self.status}]"
