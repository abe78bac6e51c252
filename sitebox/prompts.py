"""Rich-backed terminal prompts for the site wizard."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.prompt import Confirm, Prompt

from sitebox.wizard import Prompter


class RichPrompter(Prompter):
    """Asks wizard questions on the terminal.

    List questions are shown as a numbered menu and answered by number.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def ask_input(self, message: str, default: Optional[str] = None) -> str:
        if default:
            return Prompt.ask(message, default=default, console=self.console)
        return Prompt.ask(message, console=self.console)

    def ask_list(self, message: str, choices: list, default: Optional[str] = None) -> str:
        self.console.print(f"\n[bold]{message}[/bold]")
        keys = []
        default_key = None
        for i, (value, label) in enumerate(choices, start=1):
            keys.append(str(i))
            if value == default:
                default_key = str(i)
                self.console.print(f"  {i}) {label} [dim](default)[/dim]")
            else:
                self.console.print(f"  {i}) {label}")

        if default_key:
            selected = Prompt.ask("Select", choices=keys, default=default_key, console=self.console)
        else:
            selected = Prompt.ask("Select", choices=keys, console=self.console)
        return choices[int(selected) - 1][0]

    def ask_confirm(self, message: str, default: bool = False) -> bool:
        return Confirm.ask(message, default=default, console=self.console)

    def show_error(self, message: str) -> None:
        self.console.print(f"[red]>>[/red] {message}")
