"""Typed access to the four persisted state regions.

Each region is an independent blob under a fixed key, so a backend only
needs to implement BaseStore's get/set/delete. Key names are part of the
persisted format: changing one orphans existing state.
"""

from __future__ import annotations

import logging

from prlotto_store.base import BaseStore
from prlotto_store.models import QueuedReview

logger = logging.getLogger(__name__)

LEDGER_KEY = "prlotto.stats"
QUEUE_KEY = "prlotto.queue"
TEAMS_KEY = "prlotto.teams"
ALIASES_KEY = "prlotto.aliases"


class ReviewState:
    """Typed load/save/clear per region over an injected BaseStore.

    Usage:
        state = ReviewState(SQLiteStore(".prlotto.db"))
        counts = state.load_ledger()
        counts["alice"] = counts.get("alice", 0) + 1
        state.save_ledger(counts)
    """

    def __init__(self, store: BaseStore) -> None:
        self._store = store

    @property
    def store(self) -> BaseStore:
        return self._store

    # ------------------------------------------------------------------
    # Fairness ledger
    # ------------------------------------------------------------------

    def load_ledger(self) -> dict[str, int]:
        raw = self._store.get(LEDGER_KEY) or {}
        return {str(identity): int(count) for identity, count in raw.items()}

    def save_ledger(self, counts: dict[str, int]) -> None:
        self._store.set(LEDGER_KEY, dict(counts))

    def clear_ledger(self) -> None:
        self._store.delete(LEDGER_KEY)

    # ------------------------------------------------------------------
    # Review queue
    # ------------------------------------------------------------------

    def load_queue(self) -> dict[str, list[QueuedReview]]:
        raw = self._store.get(QUEUE_KEY) or {}
        queue: dict[str, list[QueuedReview]] = {}
        for repo, entries in raw.items():
            reviews = []
            for entry in entries:
                try:
                    reviews.append(QueuedReview.from_dict(entry))
                except (KeyError, TypeError, ValueError) as e:
                    logger.warning("Dropping malformed queue entry for %s: %r (%s)", repo, entry, e)
            queue[repo] = reviews
        return queue

    def save_queue(self, queue: dict[str, list[QueuedReview]]) -> None:
        self._store.set(
            QUEUE_KEY,
            {repo: [review.to_dict() for review in reviews] for repo, reviews in queue.items()},
        )

    def clear_queue(self) -> None:
        self._store.delete(QUEUE_KEY)

    # ------------------------------------------------------------------
    # Team and alias registries
    # ------------------------------------------------------------------

    def load_teams(self) -> dict[str, str]:
        return {str(k): str(v) for k, v in (self._store.get(TEAMS_KEY) or {}).items()}

    def save_teams(self, teams: dict[str, str]) -> None:
        self._store.set(TEAMS_KEY, dict(teams))

    def load_aliases(self) -> dict[str, str]:
        return {str(k): str(v) for k, v in (self._store.get(ALIASES_KEY) or {}).items()}

    def save_aliases(self, aliases: dict[str, str]) -> None:
        self._store.set(ALIASES_KEY, dict(aliases))
