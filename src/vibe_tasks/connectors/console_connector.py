# src/vibe_tasks/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

logger = logging.getLogger(__name__)


class ConsoleNotifier:
    """Prints alerts to the terminal. Used when desktop notifications are off or unavailable."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def notify(self, *, summary: str, body: str) -> None:
        self.console.print(f"⏰ [bold yellow]{escape(summary)}[/] {escape(body)}")


class RichPrompter:
    """Interactive prompts on top of rich.prompt."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def ask(self, prompt: str, *, default: str | None = None) -> str:
        if default is None:
            return Prompt.ask(prompt, console=self.console)
        return Prompt.ask(prompt, console=self.console, default=default, show_default=bool(default))

    def choose(self, prompt: str, choices: Sequence[str], *, default: str | None = None) -> str:
        lookup = {c.lower(): c for c in choices}
        while True:
            answer = Prompt.ask(
                f"{prompt} ({'/'.join(choices)})",
                console=self.console,
                default=default or choices[0],
            )
            picked = lookup.get(answer.strip().lower())
            if picked is not None:
                return picked
            self.console.print(f"[red]Please pick one of: {', '.join(choices)}[/]")

    def choose_many(self, prompt: str, choices: Sequence[str]) -> list[str]:
        for i, c in enumerate(choices, start=1):
            self.console.print(f"  {i}. {c}")
        while True:
            answer = Prompt.ask(
                f"{prompt} (numbers or names, comma separated; empty for none)",
                console=self.console,
                default="",
                show_default=False,
            )
            picked: list[str] = []
            bad: list[str] = []
            for part in answer.replace(",", " ").split():
                if part.isdigit() and 1 <= int(part) <= len(choices):
                    picked.append(choices[int(part) - 1])
                else:
                    picked.append(part)
                    if part.lower() not in {c.lower() for c in choices}:
                        bad.append(part)
            if not bad:
                return picked
            self.console.print(f"[red]Unknown choice: {escape(', '.join(bad))}[/]")
