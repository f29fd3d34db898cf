"""assign command: run the reviewer lottery for one pull request."""

from __future__ import annotations

import asyncio

import click
from rich.console import Console

from prlotto_cli.context import get_bot, get_config
from prlotto_core.errors import LottoError
from prlotto_core.messages import assignment_reply

console = Console()


@click.command("assign")
@click.argument("repo")
@click.argument("pr_number", type=int)
@click.option("--polite", is_flag=True, help="Use the polite review-request message.")
@click.pass_context
def assign_cmd(ctx, repo: str, pr_number: int, polite: bool):
    """Pick a reviewer for REPO#PR_NUMBER and assign them on GitHub.

    REPO is either `name` (inside the configured organisation) or `owner/name`.
    """
    bot = get_bot(ctx)
    config = get_config(ctx)

    try:
        result = asyncio.run(bot.workflow.assign(repo, pr_number, polite=polite))
    except LottoError as e:
        raise click.ClickException(str(e))

    console.print(
        assignment_reply(result, with_avatar=config.get("with_avatar", False), debug=config.get("debug", False)),
        markup=False,
    )
