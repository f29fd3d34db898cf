"""Shared fakes for the core tests: an in-memory tracker and a recording notifier."""

from __future__ import annotations

import pytest

from prlotto_core.gh.tracker import IssueLabels, IssueTracker, PullRequestInfo, TeamMember
from prlotto_core.notify import Notifier
from prlotto_core.registry import AliasRegistry, TeamRegistry
from prlotto_core.review_queue import ReviewQueue
from prlotto_store.memory import MemoryStore
from prlotto_store.state import ReviewState


class FakeTracker(IssueTracker):
    """IssueTracker over plain dicts; set `fail` to make a method raise."""

    def __init__(self):
        self.teams: dict[str, list[str]] = {}
        self.pulls: dict[tuple[str, int], PullRequestInfo] = {}
        self.labels: dict[tuple[str, int], set[str]] = {}
        self.assignees: dict[tuple[str, int], str | None] = {}
        self.comments: list[tuple[str, int, str]] = []
        self.updates: list[tuple[str, int, str | None, list[str] | None]] = []
        self.fail: dict[str, Exception] = {}
        self.label_calls: list[tuple[str, int]] = []

    def _maybe_fail(self, name: str) -> None:
        if name in self.fail:
            raise self.fail[name]

    def add_pull(self, repo, number, creator, assignee=None, labels=()):
        self.pulls[(repo, number)] = PullRequestInfo(
            creator=creator,
            assignee=assignee,
            url=f"https://github.com/acme/{repo}/pull/{number}",
            title=f"PR {number}",
        )
        self.labels[(repo, number)] = set(labels)
        self.assignees[(repo, number)] = assignee

    async def get_team_members(self, team):
        self._maybe_fail("get_team_members")
        return [
            TeamMember(identity=login, avatar_url=f"https://avatars.example/{login}")
            for login in self.teams[team]
        ]

    async def get_pull_request(self, repo, number):
        self._maybe_fail("get_pull_request")
        return self.pulls[(repo, number)]

    async def get_issue_labels(self, repo, number):
        self.label_calls.append((repo, number))
        self._maybe_fail("get_issue_labels")
        key = f"labels:{repo}#{number}"
        if key in self.fail:
            raise self.fail[key]
        return IssueLabels(
            labels=frozenset(self.labels.get((repo, number), set())),
            assignee=self.assignees.get((repo, number)),
        )

    async def post_comment(self, repo, number, body):
        self._maybe_fail("post_comment")
        self.comments.append((repo, number, body))

    async def update_issue(self, repo, number, assignee=None, labels=None):
        self._maybe_fail("update_issue")
        self.updates.append((repo, number, assignee, labels))
        if assignee is not None:
            self.assignees[(repo, number)] = assignee
        if labels is not None:
            self.labels[(repo, number)] = set(labels)


class RecordingNotifier(Notifier):
    def __init__(self):
        self.sent: list[tuple[str, str]] = []

    async def send(self, channel, text):
        self.sent.append((channel, text))


@pytest.fixture
def tracker():
    return FakeTracker()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def state():
    return ReviewState(MemoryStore())


@pytest.fixture
def teams(state):
    return TeamRegistry(state, default_team="reviewers")


@pytest.fixture
def aliases(state):
    return AliasRegistry(state)


@pytest.fixture
def queue(state):
    return ReviewQueue(state)
