"""Terminal prompt for picking a version by hand."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from rich.console import Console
from rich.prompt import Prompt

from nextver.core.resolve import SelectionCancelled

if TYPE_CHECKING:
    from nextver.core.version import VersionOption


class RichSelector:
    """Numbered single-choice prompt rendered with rich."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)

    def select(
        self,
        message: str,
        options: Sequence[VersionOption],
        default: str,
    ) -> str | SelectionCancelled:
        if not options:
            raise ValueError("Nothing to select from")

        values = [option.value for option in options]
        default_index = values.index(default) + 1 if default in values else 1

        self.console.print(f"[bold]{message}[/]")
        for i, option in enumerate(options, start=1):
            hint = f" [dim]{option.hint}[/]" if option.hint and option.hint != option.value else ""
            self.console.print(f"  [cyan]{i}.[/] {option.label}{hint}")

        try:
            answer = Prompt.ask(
                "Select",
                console=self.console,
                choices=[str(i) for i in range(1, len(options) + 1)],
                default=str(default_index),
            )
        except (KeyboardInterrupt, EOFError):
            self.console.print()
            return SelectionCancelled(message)

        return options[int(answer) - 1].value
