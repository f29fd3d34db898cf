"""Helpers that pull shared objects out of the click context."""

from __future__ import annotations

import logging

import click

from prlotto_core.bot import LottoBot
from prlotto_core.config import DEFAULT_CONFIG
from prlotto_core.errors import ConfigurationMissing
from prlotto_core.registry import AliasRegistry, TeamRegistry
from prlotto_core.review_queue import ReviewQueue
from prlotto_store.memory import MemoryStore
from prlotto_store.state import ReviewState

logger = logging.getLogger(__name__)


def get_config(ctx: click.Context) -> dict:
    config = (ctx.obj or {}).get("config")
    return config if config is not None else dict(DEFAULT_CONFIG)


def get_state(ctx: click.Context) -> ReviewState:
    store = (ctx.obj or {}).get("store")
    if store is None:
        store = MemoryStore()
    return ReviewState(store)


def get_teams(ctx: click.Context) -> TeamRegistry:
    return TeamRegistry(get_state(ctx), default_team=get_config(ctx).get("default_team"))


def get_aliases(ctx: click.Context) -> AliasRegistry:
    return AliasRegistry(get_state(ctx))


def get_queue(ctx: click.Context) -> ReviewQueue:
    return ReviewQueue(get_state(ctx))


def get_bot(ctx: click.Context) -> LottoBot:
    """Build the full bot, or stop the command if required settings are missing."""
    try:
        return LottoBot.from_config(get_config(ctx), get_state(ctx).store)
    except ConfigurationMissing as e:
        logger.error("%s", e)
        raise click.ClickException(str(e))
