"""In-memory store: the default when no store is configured.

State lives for the lifetime of the process only.
"""

from __future__ import annotations

import json
from typing import Any

from prlotto_store.base import BaseStore


class MemoryStore(BaseStore):
    """Dict-backed store that round-trips every value through JSON.

    The round-trip means callers never hold a reference to the stored object,
    and a value that would not survive a real backend fails here too.
    """

    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Any | None:
        raw = self._data.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)
