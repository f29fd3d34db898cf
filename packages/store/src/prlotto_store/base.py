"""Abstract store interface.

Every backend (in-memory, SQLite, Gist) implements this interface. The bot
depends on BaseStore, not on a concrete backend, so backends are swappable
without touching the lottery or reminder code.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class BaseStore(ABC):
    """Pluggable key/value persistence for the bot's state regions.

    Values are JSON-serialisable blobs (dicts, lists, strings, numbers).
    Keys are the fixed region names defined in prlotto_store.state.
    """

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the blob stored under key, or None if nothing is stored."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Replace the blob stored under key."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key. Deleting a missing key is not an error."""

    def close(self) -> None:
        """Release any resources held by the store (connections, file handles).

        Optional: subclasses that need cleanup should override this.
        Default is a no-op so callers can always call close() safely.
        """
