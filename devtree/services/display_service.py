"""Display service for worktree and project listings"""
from typing import List

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from devtree.constants import LEGEND_TEXT, SYMBOL_CURRENT_WORKTREE, SYMBOL_DEVBOX
from devtree.formatters import short_commit, status_icon, status_label
from devtree.models.project import ProjectConfig
from devtree.models.worktree import WorktreeInfo
from devtree.services.resolution import switchable_worktrees
from devtree.ui.output import console as default_console


class DisplayService:
    def __init__(self, console: Console = default_console):
        self.console = console

    def display_worktree_table(self, worktrees: List[WorktreeInfo]) -> None:
        """Display a table of worktrees with their sync status."""
        if not worktrees:
            self.console.print("[yellow]No worktrees found[/yellow]")
            return

        self.console.print("\n[bold]📁 Git Worktrees:[/bold]\n")

        table = Table(box=None, show_header=False, pad_edge=False)
        table.add_column("current", width=1)
        table.add_column("branch")
        table.add_column("path", style="dim")
        table.add_column("icon")
        table.add_column("status")
        table.add_column("commit", style="dim")

        for wt in worktrees:
            if wt.is_current:
                marker = Text(SYMBOL_CURRENT_WORKTREE, style="green")
                branch = Text(wt.display_name, style="bold green")
            else:
                marker = Text(" ")
                branch = Text(wt.display_name, style="cyan")

            table.add_row(
                marker,
                branch,
                Text(str(wt.path)),
                status_icon(wt.status),
                status_label(wt.status),
                short_commit(wt.commit),
            )

        self.console.print(table)
        self.console.print()
        self.console.print(Text(LEGEND_TEXT, style="dim"))

    def display_available_branches(self, worktrees: List[WorktreeInfo], branch: str) -> None:
        """Show branches that have a worktree, after a failed switch."""
        self.console.print("[yellow]Available branches:[/yellow]")
        for wt in switchable_worktrees(worktrees):
            marker = "[green]* [/green]" if wt.is_current else "  "
            self.console.print(f"{marker}{escape(wt.branch)}")
        self.console.print()
        self.console.print(f"[dim]To create a new worktree: dev --create {escape(branch)}[/dim]")

    def display_projects(self, projects: List[ProjectConfig]) -> None:
        """Display registered projects."""
        if not projects:
            self.console.print("[yellow]No projects registered[/yellow]")
            self.console.print()
            self.console.print("[dim]Use 'dev init <name>' to create a new project[/dim]")
            return

        self.console.print("\n[bold]📁 Registered Projects:[/bold]\n")
        for project in projects:
            devbox_indicator = f" {SYMBOL_DEVBOX}" if project.uses_devbox else ""
            self.console.print(f"  [cyan]{escape(project.name)}[/cyan]{devbox_indicator}")
            self.console.print(f"    [dim]{escape(str(project.path))}[/dim]")

        self.console.print()
        self.console.print(f"[dim]Legend: {SYMBOL_DEVBOX} = uses devbox[/dim]")

    def display_project_names(self, projects: List[ProjectConfig]) -> None:
        """Compact project list shown when a project lookup fails."""
        self.console.print("[yellow]Registered projects:[/yellow]")
        if not projects:
            self.console.print("  [dim](no projects registered)[/dim]")
            self.console.print()
            self.console.print("[dim]Use 'dev init <name>' to create a new project[/dim]")
            return
        for project in projects:
            self.console.print(f"  [cyan]{escape(project.name)}[/cyan] - [dim]{escape(str(project.path))}[/dim]")
