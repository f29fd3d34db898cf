"""Wires configuration, store, tracker and notifier into a running bot."""

from __future__ import annotations

import logging
import random
from datetime import timedelta

from prlotto_core.commands import CommandDispatcher
from prlotto_core.config import validate_config
from prlotto_core.gh.tracker import GitHubTracker, IssueTracker
from prlotto_core.notify import ConsoleNotifier, Notifier
from prlotto_core.registry import AliasRegistry, TeamRegistry
from prlotto_core.reminder import ReminderScheduler, ReminderSweep
from prlotto_core.review_queue import ReviewQueue
from prlotto_core.workflow import AssignmentWorkflow
from prlotto_store.base import BaseStore
from prlotto_store.state import ReviewState

logger = logging.getLogger(__name__)


class LottoBot:
    """Everything one bot process needs, built from a config dict.

    Usage:
        bot = LottoBot.from_config(config, store)   # raises ConfigurationMissing
        bot.start()                                 # inside a running event loop
        reply = await bot.dispatcher.handle("reviewer for api 42")
        await bot.stop()
    """

    def __init__(
        self,
        state: ReviewState,
        tracker: IssueTracker,
        notifier: Notifier,
        config: dict,
        rng: random.Random | None = None,
    ) -> None:
        self.state = state
        self.tracker = tracker
        self.notifier = notifier
        self.teams = TeamRegistry(state, default_team=config.get("default_team"))
        self.aliases = AliasRegistry(state)
        self.queue = ReviewQueue(state)
        self.workflow = AssignmentWorkflow(
            tracker,
            state,
            self.teams,
            self.queue,
            review_label=config["review_label"],
            message=config["message"],
            polite_message=config["polite_message"],
            rng=rng,
        )
        self.sweep = ReminderSweep(
            tracker,
            self.queue,
            self.aliases,
            notifier,
            stale_after=timedelta(hours=config["stale_after_hours"]),
            review_label=config["review_label"],
        )
        self.scheduler = ReminderScheduler(self.sweep, interval=config["reminder_interval_minutes"] * 60)
        self.dispatcher = CommandDispatcher(
            state,
            self.teams,
            self.aliases,
            self.queue,
            workflow=self.workflow,
            with_avatar=config.get("with_avatar", False),
            debug=config.get("debug", False),
        )

    @classmethod
    def from_config(
        cls,
        config: dict,
        store: BaseStore,
        notifier: Notifier | None = None,
        tracker: IssueTracker | None = None,
    ) -> LottoBot:
        """Validate config and build the bot.

        Raises ConfigurationMissing before anything else is constructed.
        """
        validate_config(config)
        if tracker is None:
            tracker = GitHubTracker(token=config["github_token"], org=config["github_org"])
        if not config.get("default_team"):
            logger.info("No default team configured; repositories need a `set team` override")
        return cls(ReviewState(store), tracker, notifier or ConsoleNotifier(), config)

    def start(self) -> None:
        """Start the reminder scheduler on the running event loop."""
        self.scheduler.start()
        logger.info("Reminder scheduler started")

    async def stop(self) -> None:
        await self.scheduler.stop()
        logger.info("Reminder scheduler stopped")
