"""Version information for devtree."""

__version__ = "0.1.0"
