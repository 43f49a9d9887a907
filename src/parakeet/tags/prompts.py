"""Interactive prompts used by the tag editor."""

from __future__ import annotations

from typing import AbstractSet, Protocol, Sequence

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from .errors import TagPromptError

NONE_KEYWORD = "none"
TOGGLE_PROMPT = "Numbers to toggle (comma-separated; blank keeps marked, 'none' clears)"


class TagPrompter(Protocol):
    """Capabilities the tag editor needs from an interactive front end."""

    def select_multiple(
        self, message: str, options: Sequence[str], defaults: Sequence[str]
    ) -> list[str]:
        """Return the subset of ``options`` the user selected."""
        ...

    def input_text(self, message: str) -> str:
        """Return one line of free text."""
        ...

    def warn(self, message: str) -> None:
        """Show a recoverable problem to the user."""
        ...


class RichTagPrompter:
    """Numbered-list prompts rendered with Rich.

    Options marked ``[x]`` start out selected. The answer is a comma-separated
    list of option numbers to toggle: a listed number selects an unmarked
    option and deselects a marked one. A blank answer keeps the marked options
    as they are and ``none`` clears the selection.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def select_multiple(
        self, message: str, options: Sequence[str], defaults: Sequence[str]
    ) -> list[str]:
        default_set = set(defaults)
        self.console.print(f"[bold]{message}[/bold]")
        for index, option in enumerate(options, start=1):
            marker = "[green]x[/green]" if option in default_set else " "
            self.console.print(f"  [{marker}] {index:>2}. {escape(option)}", highlight=False)

        while True:
            answer = self._ask(TOGGLE_PROMPT, default="")
            try:
                return self._toggle_selection(answer, options, default_set)
            except ValueError as exc:
                self.warn(str(exc))

    def input_text(self, message: str) -> str:
        return self._ask(message, default="")

    def warn(self, message: str) -> None:
        self.console.print(f"[yellow]{escape(message)}[/yellow]")

    def _ask(self, message: str, *, default: str) -> str:
        try:
            return Prompt.ask(
                message, default=default, console=self.console, show_default=bool(default)
            )
        except (EOFError, KeyboardInterrupt) as exc:
            raise TagPromptError("prompt aborted by user") from exc

    @staticmethod
    def _toggle_selection(
        answer: str, options: Sequence[str], selected: AbstractSet[str]
    ) -> list[str]:
        text = answer.strip()
        if text.lower() == NONE_KEYWORD:
            return []
        toggled: set[int] = set()
        for part in text.split(","):
            part = part.strip()
            if not part:
                continue
            if not part.isdigit():
                raise ValueError(f"Not an option number: {part!r}")
            index = int(part)
            if not 1 <= index <= len(options):
                raise ValueError(f"Option {index} is out of range (1-{len(options)}).")
            toggled.add(index)
        return [
            option
            for index, option in enumerate(options, start=1)
            if (option in selected) != (index in toggled)
        ]


__all__ = ["TagPrompter", "RichTagPrompter"]
