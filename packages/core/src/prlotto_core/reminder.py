"""Reminder sweep: nudges reviewers whose assigned PRs have gone stale.

Each tick walks a snapshot of the review queue:

- review label gone      → the review is done; the entry is dropped
- label still present    → the entry stays; if it is older than the stale
                           threshold, the assignee's alias gets a reminder
- tracker lookup failed  → logged, entry kept unchanged (fail-open)

The rebuilt queue is published once at the end of the tick.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

from prlotto_core.gh.tracker import IssueTracker
from prlotto_core.messages import reminder_text
from prlotto_core.notify import Notifier
from prlotto_core.registry import AliasRegistry
from prlotto_core.review_queue import Queue, ReviewQueue
from prlotto_store.models import QueuedReview

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def is_stale(review: QueuedReview, now: datetime, stale_after: timedelta) -> bool:
    return now - review.submitted_at >= stale_after


@dataclass
class SweepReport:
    checked: int = 0
    resolved: int = 0
    reminded: int = 0
    skipped_no_alias: int = 0
    failed: int = 0

    def summary(self) -> str:
        return (
            f"Checked {self.checked} queued review(s): {self.resolved} resolved, "
            f"{self.reminded} reminded, {self.skipped_no_alias} without alias, {self.failed} failed."
        )


class ReminderSweep:
    def __init__(
        self,
        tracker: IssueTracker,
        queue: ReviewQueue,
        aliases: AliasRegistry,
        notifier: Notifier,
        stale_after: timedelta = timedelta(hours=24),
        review_label: str = "awaiting review",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._tracker = tracker
        self._queue = queue
        self._aliases = aliases
        self._notifier = notifier
        self._stale_after = stale_after
        self._review_label = review_label
        self._clock = clock

    async def sweep(self, now: datetime | None = None) -> SweepReport:
        """Run one pass over the queue and publish the rebuilt queue."""
        now = now or self._clock()
        report = SweepReport()
        since = self._queue.checkpoint()
        snapshot = self._queue.snapshot()
        rebuilt: Queue = {}

        for repo, reviews in snapshot.items():
            for review in reviews:
                report.checked += 1
                if await self._process(repo, review, now, report):
                    rebuilt.setdefault(repo, []).append(review)

        self._queue.publish(rebuilt, snapshot, since=since)
        logger.info(report.summary())
        return report

    async def _process(self, repo: str, review: QueuedReview, now: datetime, report: SweepReport) -> bool:
        """Handle one queued review. Returns True if it stays queued."""
        try:
            current = await self._tracker.get_issue_labels(repo, review.pr_number)
        except Exception as e:
            logger.warning("Could not check %s#%d, keeping it queued: %s", repo, review.pr_number, e)
            report.failed += 1
            return True

        if self._review_label not in current.labels:
            logger.info("%s#%d no longer awaits review; dropping it from the queue", repo, review.pr_number)
            report.resolved += 1
            return False

        if not is_stale(review, now, self._stale_after):
            return True

        channel = self._aliases.get(current.assignee) if current.assignee else None
        if channel is None:
            logger.warning(
                "%s#%d is stale but %s has no alias; no reminder sent",
                repo,
                review.pr_number,
                current.assignee or "nobody (unassigned)",
            )
            report.skipped_no_alias += 1
            return True

        try:
            await self._notifier.send(channel, reminder_text(repo, review.pr_number, now - review.submitted_at))
        except Exception as e:
            logger.warning("Reminder for %s#%d to %s failed: %s", repo, review.pr_number, channel, e)
            report.failed += 1
            return True

        logger.debug("Reminded %s (%s) about %s#%d", current.assignee, channel, repo, review.pr_number)
        report.reminded += 1
        return True


class ReminderScheduler:
    """Runs a ReminderSweep every `interval` seconds until stopped."""

    def __init__(self, sweep: ReminderSweep, interval: float) -> None:
        if interval <= 0:
            raise ValueError(f"Reminder interval must be positive, got {interval}")
        self._sweep = sweep
        self._interval = interval
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                await self._sweep.sweep()
            except Exception:
                logger.exception("Reminder sweep failed; retrying on the next tick")
