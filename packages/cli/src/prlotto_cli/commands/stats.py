"""stats command: show how reviews have been spread across reviewers."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from prlotto_cli.context import get_state
from prlotto_core import lottery
from prlotto_core.ledger import FairnessLedger
from prlotto_core.lottery import Candidate

console = Console()


@click.command("stats")
@click.option("--reset", is_flag=True, help="Forget all assignment counts.")
@click.pass_context
def stats_cmd(ctx, reset: bool):
    """Show the fairness ledger.

    Lists every reviewer with their assignment count and the odds they would
    have if all of them were candidates for the next draw.
    """
    state = get_state(ctx)

    if reset:
        click.confirm("Reset all reviewer stats?", abort=True)
        state.clear_ledger()
        console.print("[green]Reviewer stats have been reset.[/green]")
        return

    ledger = FairnessLedger(state.load_ledger())
    if not len(ledger):
        console.print("[yellow]No reviews have been assigned yet.[/yellow]")
        return

    ranked = ledger.ranked()
    candidates = [Candidate(identity) for identity, _ in ranked]
    odds = lottery.probabilities(candidates, ledger)

    table = Table(title="Reviewer Stats", show_header=True, header_style="bold cyan")
    table.add_column("Reviewer", style="bold")
    table.add_column("Assigned", justify="right")
    table.add_column("Next-draw odds", justify="right")
    for (identity, count), p in zip(ranked, odds):
        table.add_row(identity, str(count), f"{p * 100:.1f}%")

    console.print(table)
    console.print(f"  Total assignments: {sum(count for _, count in ranked)}")
