"""Issue-tracker collaborator consumed by the workflow and the reminder sweep.

IssueTracker is the async capability set the core depends on. GitHubTracker
implements it with PyGithub; because PyGithub is synchronous, each call runs
in a worker thread via asyncio.to_thread, and those awaits are the only
points where another command can interleave.

Tracker errors are not translated here: the caller knows which step failed
and raises the matching LottoError.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from prlotto_core.gh.pull_request import (
    assignee_login,
    get_client,
    get_issue,
    get_pull,
    get_repo,
    get_team,
    label_names,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TeamMember:
    identity: str
    avatar_url: str | None = None


@dataclass(frozen=True)
class PullRequestInfo:
    creator: str
    assignee: str | None
    url: str
    title: str = ""


@dataclass(frozen=True)
class IssueLabels:
    labels: frozenset[str] = field(default_factory=frozenset)
    assignee: str | None = None


class IssueTracker(ABC):
    """Async view of the issue tracker."""

    @abstractmethod
    async def get_team_members(self, team: str) -> list[TeamMember]:
        """Return the team roster in the tracker's order."""

    @abstractmethod
    async def get_pull_request(self, repo: str, number: int) -> PullRequestInfo:
        """Return creator, current assignee and link of a pull request."""

    @abstractmethod
    async def get_issue_labels(self, repo: str, number: int) -> IssueLabels:
        """Return the current labels and assignee of an issue or pull request."""

    @abstractmethod
    async def post_comment(self, repo: str, number: int, body: str) -> None:
        """Post a comment on an issue or pull request."""

    @abstractmethod
    async def update_issue(
        self,
        repo: str,
        number: int,
        assignee: str | None = None,
        labels: list[str] | None = None,
    ) -> None:
        """Set the assignee and/or replace the labels. None leaves a field unchanged."""


class GitHubTracker(IssueTracker):
    """IssueTracker backed by the GitHub REST API through PyGithub.

    Repository names without an owner are resolved inside `org`, which is
    also the organisation whose teams provide reviewer rosters.
    """

    def __init__(self, token: str, org: str, gh=None):
        self._org = org
        self._gh = gh if gh is not None else get_client(token)

    async def get_team_members(self, team: str) -> list[TeamMember]:
        def _fetch() -> list[TeamMember]:
            members = get_team(self._gh, self._org, team).get_members()
            return [TeamMember(identity=m.login, avatar_url=getattr(m, "avatar_url", None)) for m in members]

        members = await asyncio.to_thread(_fetch)
        logger.debug("Team %s has %d member(s)", team, len(members))
        return members

    async def get_pull_request(self, repo: str, number: int) -> PullRequestInfo:
        def _fetch() -> PullRequestInfo:
            pr = get_pull(get_repo(self._gh, repo, self._org), number)
            return PullRequestInfo(
                creator=pr.user.login,
                assignee=assignee_login(pr),
                url=pr.html_url,
                title=pr.title or "",
            )

        return await asyncio.to_thread(_fetch)

    async def get_issue_labels(self, repo: str, number: int) -> IssueLabels:
        def _fetch() -> IssueLabels:
            issue = get_issue(get_repo(self._gh, repo, self._org), number)
            return IssueLabels(labels=frozenset(label_names(issue)), assignee=assignee_login(issue))

        return await asyncio.to_thread(_fetch)

    async def post_comment(self, repo: str, number: int, body: str) -> None:
        def _post() -> None:
            get_issue(get_repo(self._gh, repo, self._org), number).create_comment(body)

        await asyncio.to_thread(_post)

    async def update_issue(
        self,
        repo: str,
        number: int,
        assignee: str | None = None,
        labels: list[str] | None = None,
    ) -> None:
        changes: dict = {}
        if assignee is not None:
            changes["assignees"] = [assignee]
        if labels is not None:
            changes["labels"] = list(labels)
        if not changes:
            return

        def _edit() -> None:
            get_issue(get_repo(self._gh, repo, self._org), number).edit(**changes)

        await asyncio.to_thread(_edit)
