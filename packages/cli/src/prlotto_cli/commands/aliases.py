"""alias commands: where review reminders are delivered."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from prlotto_cli.context import get_aliases

console = Console()


@click.group("alias")
def alias_group():
    """Manage reminder aliases (GitHub login → chat channel)."""


@alias_group.command("set")
@click.argument("login")
@click.argument("channel")
@click.pass_context
def alias_set_cmd(ctx, login: str, channel: str):
    """Send review reminders for LOGIN to CHANNEL."""
    login = login.lstrip("@")
    get_aliases(ctx).set(login, channel)
    console.print(f"[green]Reminders for {login} will go to {channel}.[/green]")


@alias_group.command("clear")
@click.argument("login")
@click.pass_context
def alias_clear_cmd(ctx, login: str):
    """Stop sending reminders for LOGIN."""
    login = login.lstrip("@")
    if not get_aliases(ctx).clear(login):
        console.print(f"[yellow]{login} has no alias.[/yellow]")
        return
    console.print(f"[green]Removed the alias for {login}.[/green]")


@alias_group.command("list")
@click.pass_context
def alias_list_cmd(ctx):
    """Show every registered alias."""
    aliases = get_aliases(ctx).all()
    if not aliases:
        console.print("[yellow]No aliases registered.[/yellow]")
        return

    table = Table(title="Reminder Aliases", show_header=True, header_style="bold cyan")
    table.add_column("Login", style="bold")
    table.add_column("Channel")
    for login, channel in sorted(aliases.items()):
        table.add_row(login, channel)

    console.print(table)
