# tests/fakes.py

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from vibe_tasks.tasks.errors import NotificationError


@dataclass(slots=True)
class SentNotification:
    summary: str
    body: str


@dataclass(slots=True)
class FakeNotifier:
    """
    Fake Notifier used by notification tests.

    Set `fail=True` to simulate a delivery error.
    """

    sent: list[SentNotification] = field(default_factory=list)
    fail: bool = False

    def notify(self, *, summary: str, body: str) -> None:
        if self.fail:
            raise NotificationError("simulated failure")
        self.sent.append(SentNotification(summary=summary, body=body))


class FakePrompter:
    """
    Deterministic Prompter for command tests.

    - Replays `answers` in order, whatever the prompt type
    - An exception instance in `answers` is raised instead (closed stdin, Ctrl-C)
    - Captures prompts for assertions
    """

    def __init__(self, answers: list[str | list[str] | BaseException] | None = None) -> None:
        self.answers = list(answers or [])
        self.prompts: list[str] = []

    def _next(self, prompt: str):
        self.prompts.append(prompt)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {prompt}")
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer

    def ask(self, prompt: str, *, default: str | None = None) -> str:
        answer = self._next(prompt)
        return default if answer == "" and default is not None else str(answer)

    def choose(self, prompt: str, choices: Sequence[str], *, default: str | None = None) -> str:
        answer = self._next(prompt)
        return str(answer) or (default or choices[0])

    def choose_many(self, prompt: str, choices: Sequence[str]) -> list[str]:
        answer = self._next(prompt)
        return list(answer) if isinstance(answer, list) else [answer] if answer else []
