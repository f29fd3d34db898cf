"""SQLiteStore: local file-based store for a single bot process.

State survives restarts. Each state region is one row.

Schema:
  state: key/value table, value holds the JSON-encoded blob.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from typing import Any

from prlotto_store.base import BaseStore

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS state (
    key         TEXT PRIMARY KEY,
    value       TEXT NOT NULL,
    updated_at  TEXT DEFAULT CURRENT_TIMESTAMP
);
"""


class SQLiteStore(BaseStore):
    """Stores state regions in a local SQLite database file.

    The database file path defaults to `.prlotto.db` in the current working
    directory. Configure via .prlotto.yml: `store_path: /path/to/prlotto.db`.
    """

    def __init__(self, db_path: str = ".prlotto.db"):
        self._conn = sqlite3.connect(db_path)
        self._conn.row_factory = sqlite3.Row
        self._conn.executescript(_SCHEMA)
        self._conn.commit()

    def get(self, key: str) -> Any | None:
        row = self._conn.execute("SELECT value FROM state WHERE key=?", (key,)).fetchone()
        if row is None:
            return None
        try:
            return json.loads(row["value"])
        except json.JSONDecodeError:
            logger.warning("SQLiteStore: discarding unreadable value for %r", key)
            return None

    def set(self, key: str, value: Any) -> None:
        self._conn.execute(
            """
            INSERT INTO state (key, value, updated_at)
            VALUES (?, ?, CURRENT_TIMESTAMP)
            ON CONFLICT(key) DO UPDATE SET
              value = excluded.value,
              updated_at = excluded.updated_at
            """,
            (key, json.dumps(value)),
        )
        self._conn.commit()

    def delete(self, key: str) -> None:
        self._conn.execute("DELETE FROM state WHERE key=?", (key,))
        self._conn.commit()

    def close(self) -> None:
        self._conn.close()
