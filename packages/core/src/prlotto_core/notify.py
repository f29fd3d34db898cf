"""Notification collaborator: delivers reminders to a chat channel."""

from __future__ import annotations

from abc import ABC, abstractmethod

from rich.console import Console
from rich.markup import escape


class Notifier(ABC):
    @abstractmethod
    async def send(self, channel: str, text: str) -> None:
        """Deliver text to channel (a user alias, room or handle)."""


class ConsoleNotifier(Notifier):
    """Prints notifications to the terminal; used by the CLI chat loop."""

    def __init__(self, console: Console | None = None):
        self._console = console or Console()

    async def send(self, channel: str, text: str) -> None:
        self._console.print(f"[bold magenta]→ {escape(channel)}[/bold magenta]  {escape(text)}")
