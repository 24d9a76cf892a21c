"""Command-line interface for devtree"""

import os
import sys
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

from rich.markup import escape

from devtree.cli.args import build_parser, parse_args
from devtree.config import GlobalConfig, config_dir
from devtree.core import DevManager, ProjectManager
from devtree.exceptions import ConfigError, DevError, UserCancelledError
from devtree.logging_config import get_logger, setup_logging
from devtree.models.project import ProjectConfig
from devtree.services.completion import completion_script
from devtree.services.git import is_git_repository
from devtree.services.project_registry import ProjectRegistry
from devtree.ui.output import console, err_console

logger = get_logger(__name__)


class Context(Enum):
    """Where the command runs, which decides how TARGET is read."""
    PROJECT = "project"  # Inside a registered project
    GIT_REPO = "git-repo"  # Inside an unregistered git repository
    GLOBAL = "global"


def detect_context(current_dir: Path, registry: ProjectRegistry) -> Tuple[Context, Optional[ProjectConfig]]:
    """Detect whether ``current_dir`` is in a project, a repository, or neither."""
    project = registry.find_by_path(current_dir)
    if project is not None:
        return Context.PROJECT, project
    if is_git_repository(current_dir):
        return Context.GIT_REPO, None
    return Context.GLOBAL, None


def run_config(config: GlobalConfig, set_value: Optional[str], get_key: Optional[str]) -> None:
    """Show, get or set global configuration values."""
    if set_value is not None:
        key, sep, value = set_value.partition("=")
        if not sep:
            raise ConfigError("Invalid format. Use: --set key=value")
        key = key.strip()
        value = value.strip()
        config.set(key, value)
        console.print(f"[green]✓[/green] {escape(key)} = {escape(value)}")
        return

    if get_key is not None:
        value = config.get(get_key)
        if value is None:
            raise ConfigError(f"Unknown config key: {get_key}")
        console.print(escape(value))
        return

    console.print("\n[bold]⚙️  Configuration:[/bold]\n")
    for key in config.to_dict():
        console.print(f"  [cyan]{key}[/cyan]: {escape(str(config.get(key)))}")
    console.print()
    console.print("[dim]Config file:[/dim]")
    console.print(f"  {escape(str(GlobalConfig.config_path()))}")


def run(argv: Optional[List[str]] = None) -> int:
    """Dispatch parsed arguments to the matching command."""
    args = parse_args(argv)
    setup_logging(verbose=args.verbose, debug=args.debug, log_dir=config_dir())

    config = GlobalConfig.load()
    registry = ProjectRegistry()
    current_dir = Path(os.getcwd())

    if args.command == "init":
        ProjectManager(config, registry).init_project(
            name=args.name,
            clone_url=args.clone,
            existing_path=args.existing,
            no_devbox=args.no_devbox,
        )
        return 0
    if args.command == "projects":
        ProjectManager(config, registry).list_projects()
        return 0
    if args.command == "config":
        run_config(config, args.set, args.get)
        return 0

    if args.completion is not None:
        console.print(
            completion_script(args.completion or config.shell),
            markup=False,
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )
        return 0

    context, project = detect_context(current_dir, registry)
    logger.debug(f"Context: {context.value} ({project.name if project else 'no project'})")

    if args.list or args.create or args.cleanup:
        manager = DevManager(current_dir, config, project=project)
        if args.list:
            manager.list_worktrees()
        elif args.create:
            manager.create(args.create)
        else:
            manager.cleanup()
        return 0

    if args.target:
        if context == Context.GLOBAL:
            ProjectManager(config, registry).open_project(args.target)
        else:
            DevManager(current_dir, config, project=project).switch(args.target)
        return 0

    build_parser().print_help()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    debug = "--debug" in (sys.argv[1:] if argv is None else argv)
    try:
        return run(argv)
    except (KeyboardInterrupt, UserCancelledError):
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except (DevError, OSError) as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        if debug:
            err_console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
