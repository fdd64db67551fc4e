from __future__ import annotations

import sys
from typing import Callable, Protocol, TextIO


class FailureNotifier(Protocol):
    def notify(self, step_id: str, reason: str) -> None:
        ...


class PauseNotifier:
    """Show the failure and wait for Enter so the console window stays readable."""

    def __init__(self, *, stream: TextIO | None = None, prompt: Callable[[str], str] = input) -> None:
        self._stream = stream or sys.stderr
        self._prompt = prompt

    def notify(self, step_id: str, reason: str) -> None:
        print(f"\nSetup failed at step {step_id}:\n  {reason}\n", file=self._stream)
        try:
            self._prompt("Press Enter to exit...")
        except EOFError:
            pass


class NullNotifier:
    def notify(self, step_id: str, reason: str) -> None:
        return None
