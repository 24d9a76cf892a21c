"""Interactive prompts built on rich."""

from enum import Enum
from typing import List, Optional, Sequence

from rich.prompt import Confirm, IntPrompt, Prompt

from devtree.exceptions import UserCancelledError
from devtree.ui.output import console


class Prompts:
    """Interactive prompts; interrupting any prompt raises UserCancelledError."""

    def confirm(self, message: str, default: bool = False) -> bool:
        try:
            return Confirm.ask(message, default=default, console=console)
        except (KeyboardInterrupt, EOFError):
            raise UserCancelledError()

    def input(self, message: str, default: Optional[str] = None) -> str:
        try:
            if default is None:
                return Prompt.ask(message, console=console)
            return Prompt.ask(message, default=default, console=console)
        except (KeyboardInterrupt, EOFError):
            raise UserCancelledError()

    def select(self, message: str, items: Sequence[object]) -> int:
        """Show a numbered menu and return the chosen index."""
        console.print(message)
        for number, item in enumerate(items, start=1):
            console.print(f"  [cyan]{number}[/cyan]) {item}")

        choices: List[str] = [str(n) for n in range(1, len(items) + 1)]
        try:
            choice = IntPrompt.ask("Select", choices=choices, default=1, console=console)
        except (KeyboardInterrupt, EOFError):
            raise UserCancelledError()
        return choice - 1


class RemoteBranchAction(Enum):
    """What to do when the branch to create already exists on the remote."""
    CHECKOUT = "Checkout existing remote branch"
    CREATE_DIVERGENT = "Create new local branch (will diverge)"
    CANCEL = "Cancel"

    def __str__(self) -> str:
        return self.value


def prompt_remote_branch_action(prompts: Prompts, branch: str) -> RemoteBranchAction:
    """Ask what to do when a branch exists on the remote."""
    actions = list(RemoteBranchAction)
    index = prompts.select(
        f"Branch '{branch}' exists on remote. What would you like to do?",
        actions,
    )
    return actions[index]
