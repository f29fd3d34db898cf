"""CLI entry point for prlotto.

Commands:
  assign   run the reviewer lottery for one pull request
  stats    show (or reset) the fairness ledger
  queue    show (or clear) reviews waiting for their reviewer
  team     manage per-repository reviewer teams
  alias    manage reminder aliases
  remind   run one reminder sweep
  chat     answer chat commands from stdin while reminders run
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from prlotto_cli.commands.aliases import alias_group
from prlotto_cli.commands.assign import assign_cmd
from prlotto_cli.commands.chat import chat_cmd
from prlotto_cli.commands.queue import queue_cmd
from prlotto_cli.commands.remind import remind_cmd
from prlotto_cli.commands.stats import stats_cmd
from prlotto_cli.commands.teams import team_group

console = Console()


def _build_store(config: dict):
    """Instantiate the configured store from .prlotto.yml settings.

    Store selection hierarchy:
      store: gist   → GistStore   (requires gist_id and github_token)
      store: sqlite → SQLiteStore (uses store_path or .prlotto.db)
      (default)     → MemoryStore (state lasts for this process only)
    """
    from prlotto_store.memory import MemoryStore

    store_type = config.get("store", "memory")

    if store_type == "gist":
        from prlotto_store.gist import GistStore

        gist_id = config.get("gist_id")
        token = config.get("github_token")
        if not gist_id or not token:
            console.print(
                "[yellow]GistStore requires gist_id and a GitHub token. Falling back to in-memory state.[/yellow]"
            )
            return MemoryStore()
        return GistStore(gist_id=gist_id, token=token)

    if store_type == "sqlite":
        from prlotto_store.sqlite import SQLiteStore

        db_path = config.get("store_path", ".prlotto.db")
        return SQLiteStore(db_path=db_path)

    return MemoryStore()


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=debug)],
    )


def _package_version() -> str:
    try:
        return importlib.metadata.version("prlotto")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0"


@click.group()
@click.version_option(version=_package_version(), prog_name="prlotto")
@click.option(
    "--config",
    "config_path",
    default=".prlotto.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PRLOTTO_CONFIG",
)
@click.option("--debug", is_flag=True, help="Verbose logging and lottery odds in replies.")
@click.pass_context
def main(ctx: click.Context, config_path: str, debug: bool):
    """Weighted-random reviewer assignment for GitHub pull requests."""
    from prlotto_core.config import load_config
    from prlotto_core.errors import ConfigurationInvalid
    from prlotto_cli.auth import resolve_github_token

    ctx.ensure_object(dict)

    try:
        config = load_config(config_path, cli_overrides={"debug": True if debug else None})
    except ConfigurationInvalid as e:
        raise click.ClickException(str(e)) from e
    _setup_logging(config["debug"])

    # Resolve token early so all subcommands share the same resolution.
    token = resolve_github_token()
    if token:
        config["github_token"] = token

    store = _build_store(config)
    ctx.obj["store"] = store
    ctx.obj["config"] = config
    ctx.call_on_close(store.close)


main.add_command(assign_cmd)
main.add_command(stats_cmd)
main.add_command(queue_cmd)
main.add_command(team_group)
main.add_command(alias_group)
main.add_command(remind_cmd)
main.add_command(chat_cmd)
