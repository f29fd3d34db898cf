"""Review queue: assigned pull requests still waiting for their review."""

from __future__ import annotations

import logging
from datetime import datetime

from prlotto_store.models import QueuedReview
from prlotto_store.state import ReviewState

logger = logging.getLogger(__name__)

Queue = dict[str, list[QueuedReview]]


class ReviewQueue:
    """Outstanding reviews per repository, unique by PR number.

    The reminder sweep takes a checkpoint and a snapshot, awaits the tracker
    for every entry, then publishes a rebuilt queue. Commands can change the
    queue in between, so publish() starts from the live queue rather than
    overwriting it:

    - entries cleared since the snapshot stay gone
    - entries added since the snapshot are kept
    - entries enqueued again since the checkpoint are kept, even if the
      sweep dropped them
    """

    def __init__(self, state: ReviewState) -> None:
        self._state = state
        self._generation = 0
        self._touched: dict[tuple[str, int], int] = {}

    def enqueue(self, repo: str, pr_number: int, submitted_at: datetime) -> bool:
        """Queue a review. Returns False if the PR was already queued.

        An existing entry keeps its original submitted_at, so re-assigning a
        PR does not reset how long it has been waiting. Either way the entry
        is marked as touched for any sweep in progress.
        """
        self._generation += 1
        self._touched[(repo, pr_number)] = self._generation
        queue = self._state.load_queue()
        reviews = queue.setdefault(repo, [])
        if any(r.pr_number == pr_number for r in reviews):
            logger.debug("%s#%d already queued; keeping original timestamp", repo, pr_number)
            return False
        reviews.append(QueuedReview(pr_number=pr_number, submitted_at=submitted_at))
        self._state.save_queue(queue)
        return True

    def checkpoint(self) -> int:
        """Marker for publish(): enqueues after it win over the sweep's verdict."""
        return self._generation

    def snapshot(self) -> Queue:
        """A copy of the current queue, safe to iterate across awaits."""
        return {repo: list(reviews) for repo, reviews in self._state.load_queue().items()}

    def publish(self, rebuilt: Queue, snapshot: Queue, since: int | None = None) -> Queue:
        """Apply a sweep's rebuilt queue on top of the live queue.

        A live entry survives if the sweep kept it, if it was not in the
        snapshot, or if it was enqueued after the `since` checkpoint. Runs
        without awaiting, so on a single event loop the read and the write
        cannot interleave with another command.
        """
        seen = {(repo, r.pr_number) for repo, reviews in snapshot.items() for r in reviews}
        kept = {(repo, r.pr_number) for repo, reviews in rebuilt.items() for r in reviews}

        merged: Queue = {}
        for repo, reviews in self._state.load_queue().items():
            for review in reviews:
                key = (repo, review.pr_number)
                if key in kept or key not in seen or self._touched_since(key, since):
                    merged.setdefault(repo, []).append(review)
        self._state.save_queue(merged)
        self._forget_touched(since)
        return merged

    def _touched_since(self, key: tuple[str, int], since: int | None) -> bool:
        return since is not None and self._touched.get(key, 0) > since

    def _forget_touched(self, since: int | None) -> None:
        if since is None:
            return
        self._touched = {key: stamp for key, stamp in self._touched.items() if stamp > since}

    def clear(self) -> None:
        self._state.clear_queue()

    def __len__(self) -> int:
        return sum(len(reviews) for reviews in self._state.load_queue().values())
