"""Data models for devtree."""
