"""Chat command dispatcher.

Every command is one case-insensitive line starting with `reviewer` and
produces a plain-text reply. Lottery failures become `Error: ...` replies
instead of exceptions, so a chat adapter only ever has text to post.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Awaitable, Callable

from prlotto_core import messages
from prlotto_core.errors import LottoError
from prlotto_core.ledger import FairnessLedger

if TYPE_CHECKING:
    from prlotto_core.registry import AliasRegistry, TeamRegistry
    from prlotto_core.review_queue import ReviewQueue
    from prlotto_core.workflow import AssignmentWorkflow
    from prlotto_store.state import ReviewState

logger = logging.getLogger(__name__)

PREFIX = "reviewer"

# Command definitions - single source of truth for the help text.
# Format: "usage": "description"
COMMANDS = {
    "for <repo> <number> [polite]": "Assign a reviewer to a pull request",
    "show stats": "Show how many reviews each reviewer has been assigned",
    "reset stats": "Forget all assignment counts",
    "set team <team> for <repo>": "Draw reviewers for <repo> from <team> (slug or id)",
    "clear team <repo>": "Use the default team for <repo> again",
    "list teams": "Show per-repository team overrides",
    "show queue": "Show pull requests waiting for review",
    "clear queue": "Forget every queued review",
    "set alias <login> <channel>": "Send review reminders for <login> to <channel>",
    "clear alias <login>": "Stop sending reminders for <login>",
    "show aliases": "Show reminder aliases",
    "help": "Show this help",
}


def get_commands_help() -> str:
    """Generate help text from the COMMANDS dict."""
    return "\n".join(f"{PREFIX} {usage} - {description}" for usage, description in COMMANDS.items())


Handler = Callable[..., Awaitable[str]]


class CommandDispatcher:
    """Parses chat lines and runs the matching operation."""

    def __init__(
        self,
        state: ReviewState,
        teams: TeamRegistry,
        aliases: AliasRegistry,
        queue: ReviewQueue,
        workflow: AssignmentWorkflow | None = None,
        with_avatar: bool = False,
        debug: bool = False,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._state = state
        self._teams = teams
        self._aliases = aliases
        self._queue = queue
        self._workflow = workflow
        self._with_avatar = with_avatar
        self._debug = debug
        self._clock = clock
        self._routes: list[tuple[re.Pattern, Handler]] = [
            (re.compile(r"for\s+(\S+)\s+#?(\d+)(\s+polite)?", re.IGNORECASE), self._assign),
            (re.compile(r"show\s+stats", re.IGNORECASE), self._show_stats),
            (re.compile(r"reset\s+stats", re.IGNORECASE), self._reset_stats),
            (re.compile(r"set\s+team\s+(\S+)\s+for\s+(\S+)", re.IGNORECASE), self._set_team),
            (re.compile(r"clear\s+team\s+(?:for\s+)?(\S+)", re.IGNORECASE), self._clear_team),
            (re.compile(r"list\s+teams", re.IGNORECASE), self._list_teams),
            (re.compile(r"show\s+queue", re.IGNORECASE), self._show_queue),
            (re.compile(r"clear\s+queue", re.IGNORECASE), self._clear_queue),
            (re.compile(r"set\s+alias\s+@?(\S+)\s+(\S+)", re.IGNORECASE), self._set_alias),
            (re.compile(r"clear\s+alias\s+@?(\S+)", re.IGNORECASE), self._clear_alias),
            (re.compile(r"show\s+aliases", re.IGNORECASE), self._show_aliases),
            (re.compile(r"help", re.IGNORECASE), self._help),
        ]

    async def handle(self, line: str) -> str | None:
        """Run the command on line and return the reply.

        Returns None when the line is not addressed to the bot at all.
        """
        match = re.match(rf"\s*{PREFIX}\b\s*(.*?)\s*$", line, re.IGNORECASE)
        if not match:
            return None
        body = match.group(1)

        for pattern, handler in self._routes:
            args = pattern.fullmatch(body)
            if args is None:
                continue
            try:
                return await handler(*args.groups())
            except LottoError as e:
                logger.info("Command %r failed: %s", line.strip(), e)
                return f"Error: {e}"

        return f"Unknown command: {body!r}. Try `{PREFIX} help`."

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    async def _assign(self, repo: str, number: str, polite: str | None) -> str:
        if self._workflow is None:
            return "Error: reviewer assignment is not configured (GitHub token and organisation required)."
        result = await self._workflow.assign(repo, int(number), polite=polite is not None)
        return messages.assignment_reply(result, with_avatar=self._with_avatar, debug=self._debug)

    async def _show_stats(self) -> str:
        return messages.format_stats(FairnessLedger(self._state.load_ledger()))

    async def _reset_stats(self) -> str:
        self._state.clear_ledger()
        logger.info("Fairness ledger reset")
        return "Reviewer stats have been reset."

    async def _set_team(self, team: str, repo: str) -> str:
        self._teams.set(repo, team)
        return f"{repo} will now draw reviewers from team {team}."

    async def _clear_team(self, repo: str) -> str:
        if not self._teams.clear(repo):
            return f"{repo} has no team override."
        default = self._teams.default_team or "(none)"
        return f"{repo} will now use the default team {default}."

    async def _list_teams(self) -> str:
        listing = messages.format_mapping(self._teams.all(), empty="No team overrides.")
        return f"{listing}\ndefault → {self._teams.default_team or '(none)'}"

    async def _show_queue(self) -> str:
        return messages.format_queue(self._queue.snapshot(), self._clock())

    async def _clear_queue(self) -> str:
        self._queue.clear()
        logger.info("Review queue cleared")
        return "The review queue has been cleared."

    async def _set_alias(self, identity: str, channel: str) -> str:
        self._aliases.set(identity, channel)
        return f"Reminders for {identity} will go to {channel}."

    async def _clear_alias(self, identity: str) -> str:
        if not self._aliases.clear(identity):
            return f"{identity} has no alias."
        return f"Removed the alias for {identity}."

    async def _show_aliases(self) -> str:
        return messages.format_mapping(self._aliases.all(), empty="No aliases registered.")

    async def _help(self) -> str:
        return get_commands_help()
