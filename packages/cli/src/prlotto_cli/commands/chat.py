"""chat command: a line-oriented chat session with the reminder scheduler running.

Each stdin line is handled as one chat command; replies go to stdout. The
session ends at EOF (Ctrl-D) or on `quit`/`exit`. Lines that are not
addressed to the bot (`reviewer ...`) are ignored, as a chat adapter would.
"""

from __future__ import annotations

import asyncio

import click
from rich.console import Console

from prlotto_cli.context import get_bot
from prlotto_core.bot import LottoBot

console = Console()

_QUIT = {"quit", "exit"}


async def _session(bot: LottoBot, stream) -> None:
    bot.start()
    try:
        while True:
            line = await asyncio.to_thread(stream.readline)
            if not line or line.strip().lower() in _QUIT:
                break
            reply = await bot.dispatcher.handle(line)
            if reply is not None:
                console.print(reply, markup=False, highlight=False)
    finally:
        await bot.stop()


@click.command("chat")
@click.pass_context
def chat_cmd(ctx):
    """Answer `reviewer ...` commands typed on stdin.

    Reminders for stale reviews fire in the background every
    reminder_interval_minutes while the session is open.
    """
    bot = get_bot(ctx)
    console.print("[dim]prlotto chat: type `reviewer help`, Ctrl-D to quit.[/dim]")
    asyncio.run(_session(bot, click.get_text_stream("stdin")))
