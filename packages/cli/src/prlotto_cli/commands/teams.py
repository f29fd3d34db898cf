"""team commands: per-repository reviewer team overrides."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from prlotto_cli.context import get_teams

console = Console()


@click.group("team")
def team_group():
    """Manage which team reviews each repository."""


@team_group.command("set")
@click.argument("team")
@click.argument("repo")
@click.pass_context
def team_set_cmd(ctx, team: str, repo: str):
    """Draw reviewers for REPO from TEAM (slug or numeric id)."""
    get_teams(ctx).set(repo, team)
    console.print(f"[green]{repo} will now draw reviewers from team {team}.[/green]")


@team_group.command("clear")
@click.argument("repo")
@click.pass_context
def team_clear_cmd(ctx, repo: str):
    """Remove the team override for REPO."""
    teams = get_teams(ctx)
    if not teams.clear(repo):
        console.print(f"[yellow]{repo} has no team override.[/yellow]")
        return
    console.print(f"[green]{repo} will now use the default team {teams.default_team or '(none)'}.[/green]")


@team_group.command("list")
@click.pass_context
def team_list_cmd(ctx):
    """Show every team override and the default team."""
    teams = get_teams(ctx)
    overrides = teams.all()

    table = Table(title="Reviewer Teams", show_header=True, header_style="bold cyan")
    table.add_column("Repository", style="bold")
    table.add_column("Team")
    for repo, team in sorted(overrides.items()):
        table.add_row(repo, team)
    table.add_row("[dim](default)[/dim]", teams.default_team or "[dim](none)[/dim]")

    console.print(table)
