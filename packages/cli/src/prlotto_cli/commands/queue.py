"""queue command: show reviews still waiting for their reviewer."""

from __future__ import annotations

from datetime import datetime, timezone

import click
from rich.console import Console
from rich.table import Table

from prlotto_cli.context import get_config, get_queue

console = Console()


@click.command("queue")
@click.option("--clear", "clear_queue", is_flag=True, help="Forget every queued review.")
@click.pass_context
def queue_cmd(ctx, clear_queue: bool):
    """Show the review queue that drives reminders."""
    queue = get_queue(ctx)

    if clear_queue:
        click.confirm("Clear the review queue?", abort=True)
        queue.clear()
        console.print("[green]The review queue has been cleared.[/green]")
        return

    snapshot = queue.snapshot()
    if not any(snapshot.values()):
        console.print("[yellow]The review queue is empty.[/yellow]")
        return

    stale_hours = get_config(ctx).get("stale_after_hours", 24)
    now = datetime.now(timezone.utc)

    table = Table(title="Review Queue", show_header=True, header_style="bold cyan")
    table.add_column("Repository", style="bold")
    table.add_column("PR", width=8)
    table.add_column("Submitted At", width=20)
    table.add_column("Waiting", justify="right")

    for repo in sorted(snapshot):
        for review in sorted(snapshot[repo], key=lambda r: r.pr_number):
            hours = (now - review.submitted_at).total_seconds() / 3600
            style = "red" if hours >= stale_hours else "white"
            table.add_row(
                repo,
                f"#{review.pr_number}",
                review.submitted_at.isoformat()[:19].replace("T", " "),
                f"[{style}]{hours:.1f}h[/{style}]",
            )

    console.print(table)
