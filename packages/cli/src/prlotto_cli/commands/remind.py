"""remind command: run one reminder sweep, e.g. from cron."""

from __future__ import annotations

import asyncio

import click
from rich.console import Console

from prlotto_cli.context import get_bot

console = Console()


@click.command("remind")
@click.pass_context
def remind_cmd(ctx):
    """Check every queued review once and remind stale assignees.

    Reviews whose label has been removed are dropped from the queue; lookup
    failures leave the entry queued for the next run.
    """
    bot = get_bot(ctx)
    report = asyncio.run(bot.sweep.sweep())
    style = "yellow" if report.failed or report.skipped_no_alias else "green"
    console.print(f"[{style}]{report.summary()}[/{style}]")
