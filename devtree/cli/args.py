"""Command-line argument parsing for devtree."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from devtree.__version__ import __version__
from devtree.config import SHELLS

SUBCOMMANDS = ("init", "projects", "config")
OPTIONS_WITH_VALUE = ("-c", "--create")


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )


def build_parser() -> argparse.ArgumentParser:
    """Parser for ``dev [TARGET] [options]``."""
    parser = argparse.ArgumentParser(
        prog="dev",
        description="Git worktree and project management CLI",
        epilog="Subcommands: init, projects, config (see 'dev <subcommand> --help')",
    )
    parser.add_argument(
        "target",
        nargs="?",
        metavar="TARGET",
        help="Branch to switch to inside a repository, or project to open outside one",
    )
    parser.add_argument("-l", "--list", action="store_true", help="List all worktrees with status")
    parser.add_argument(
        "-c", "--create", metavar="BRANCH", help="Create new branch and worktree"
    )
    parser.add_argument("--cleanup", action="store_true", help="Remove unused worktrees")
    parser.add_argument(
        "--completion",
        nargs="?",
        const="",
        choices=["", *SHELLS],
        metavar="SHELL",
        help="Generate shell completion script (zsh, bash or fish; default from config)",
    )
    parser.add_argument("--version", action="version", version=f"dev {__version__}")
    _add_common_options(parser)
    parser.set_defaults(command=None)
    return parser


def build_subcommand_parser() -> argparse.ArgumentParser:
    """Parser for ``dev init|projects|config``."""
    parser = argparse.ArgumentParser(prog="dev", description="Git worktree and project management CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init", help="Initialize a new project")
    init_parser.add_argument("name", nargs="?", help="Project name")
    init_parser.add_argument("--clone", metavar="URL", help="Clone from remote URL")
    init_parser.add_argument(
        "--existing", metavar="PATH", type=Path, help="Initialize in existing directory"
    )
    init_parser.add_argument("--no-devbox", action="store_true", help="Skip devbox setup")
    _add_common_options(init_parser)

    projects_parser = subparsers.add_parser("projects", help="List registered projects")
    _add_common_options(projects_parser)

    config_parser = subparsers.add_parser("config", help="Show/edit configuration")
    config_group = config_parser.add_mutually_exclusive_group()
    config_group.add_argument("--set", metavar="KEY=VALUE", help="Set a config value")
    config_group.add_argument("--get", metavar="KEY", help="Get a config value")
    _add_common_options(config_parser)

    return parser


def _first_positional(argv: List[str]) -> Optional[str]:
    skip_next = False
    for arg in argv:
        if skip_next:
            skip_next = False
            continue
        if arg in OPTIONS_WITH_VALUE:
            skip_next = True
            continue
        if not arg.startswith("-"):
            return arg
    return None


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    A first positional argument naming a subcommand selects the subcommand
    parser; anything else is a branch or project TARGET.
    """
    argv = list(sys.argv[1:] if argv is None else argv)

    if _first_positional(argv) in SUBCOMMANDS:
        return build_subcommand_parser().parse_args(argv)
    return build_parser().parse_args(argv)
