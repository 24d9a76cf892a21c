"""Formatting utilities for devtree output."""

from .status import short_commit, status_icon, status_label, status_style

__all__ = ["short_commit", "status_icon", "status_label", "status_style"]
