"""Assignment workflow: one reviewer lottery for one pull request.

Steps run strictly in order and the first failure aborts the rest:

    resolve team → fetch roster → fetch PR → exclude creator/assignee
    → draw → post review request → label + assign → enqueue → commit ledger

Nothing is rolled back on failure. A comment that was already posted stays
posted; the ledger is only touched in the final step, so a failed
assignment never counts against the reviewer.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Sequence

from prlotto_core import lottery
from prlotto_core.errors import (
    AssignmentUpdateFailed,
    NoEligibleCandidates,
    PullRequestLookupFailed,
    TeamLookupFailed,
)
from prlotto_core.gh.tracker import IssueTracker, TeamMember
from prlotto_core.ledger import FairnessLedger
from prlotto_core.lottery import Candidate
from prlotto_core.messages import review_request_comment
from prlotto_core.registry import TeamRegistry
from prlotto_core.review_queue import ReviewQueue
from prlotto_store.state import ReviewState

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class AssignmentResult:
    """Outcome of a successful assignment."""

    repo: str
    pr_number: int
    reviewer: str
    url: str
    team: str
    avatar_url: str | None = None
    newly_queued: bool = True
    probabilities: list[tuple[str, float]] = field(default_factory=list)


def build_candidates(roster: Sequence[TeamMember], creator: str, assignee: str | None) -> list[Candidate]:
    """Roster minus the PR creator and its current assignee, in roster order."""
    excluded = {creator}
    if assignee:
        excluded.add(assignee)
    return [Candidate(identity=m.identity) for m in roster if m.identity not in excluded]


class AssignmentWorkflow:
    """Runs the assignment steps against the tracker and persisted state.

    Usage:
        workflow = AssignmentWorkflow(tracker, state, teams, queue,
                                      review_label="awaiting review")
        result = await workflow.assign("api", 42, polite=True)
    """

    def __init__(
        self,
        tracker: IssueTracker,
        state: ReviewState,
        teams: TeamRegistry,
        queue: ReviewQueue,
        review_label: str = "awaiting review",
        message: str = "Please review this.",
        polite_message: str = "Would you mind reviewing this when you have a moment?",
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._tracker = tracker
        self._state = state
        self._teams = teams
        self._queue = queue
        self._review_label = review_label
        self._message = message
        self._polite_message = polite_message
        self._rng = rng or random.Random()
        self._clock = clock

    async def assign(self, repo: str, pr_number: int, polite: bool = False) -> AssignmentResult:
        """Pick a reviewer for repo#pr_number and record the assignment.

        Raises:
            TeamLookupFailed, PullRequestLookupFailed, NoEligibleCandidates,
            AssignmentUpdateFailed: see prlotto_core.errors.
        """
        team = self._teams.resolve(repo)
        if not team:
            raise TeamLookupFailed(
                f"No reviewer team configured for {repo}. "
                f"Use `reviewer set team <team> for {repo}` or set a default team."
            )

        try:
            roster = await self._tracker.get_team_members(team)
        except Exception as e:
            logger.error("Fetching team %s failed: %s", team, e)
            raise TeamLookupFailed(f"Could not fetch members of team {team}: {e}") from e

        try:
            pr = await self._tracker.get_pull_request(repo, pr_number)
        except Exception as e:
            logger.error("Fetching %s#%d failed: %s", repo, pr_number, e)
            raise PullRequestLookupFailed(f"Could not fetch pull request {repo}#{pr_number}: {e}") from e

        candidates = build_candidates(roster, pr.creator, pr.assignee)
        if not candidates:
            raise NoEligibleCandidates(
                f"No eligible reviewers in team {team} for {repo}#{pr_number} "
                f"once {pr.creator} (author) and {pr.assignee or 'nobody'} (assignee) are excluded."
            )

        ledger = FairnessLedger(self._state.load_ledger())
        chosen = lottery.draw(candidates, ledger, rng=self._rng)
        probabilities = list(
            zip((c.identity for c in candidates), lottery.probabilities(candidates, ledger))
        )
        logger.info("Selected %s for %s#%d from %d candidate(s)", chosen.identity, repo, pr_number, len(candidates))

        message = self._polite_message if polite else self._message
        try:
            await self._tracker.post_comment(repo, pr_number, review_request_comment(chosen.identity, message))
        except Exception as e:
            logger.error("Posting review request on %s#%d failed: %s", repo, pr_number, e)
            raise AssignmentUpdateFailed(f"Could not post the review request on {repo}#{pr_number}: {e}") from e

        try:
            current = await self._tracker.get_issue_labels(repo, pr_number)
            labels = sorted(current.labels | {self._review_label})
            await self._tracker.update_issue(repo, pr_number, assignee=chosen.identity, labels=labels)
        except Exception as e:
            logger.error("Updating %s#%d failed: %s", repo, pr_number, e)
            raise AssignmentUpdateFailed(f"Could not assign {chosen.identity} to {repo}#{pr_number}: {e}") from e

        newly_queued = self._queue.enqueue(repo, pr_number, self._clock())

        # Other assignments may have committed while the tracker calls above were pending.
        ledger = FairnessLedger(self._state.load_ledger())
        ledger.increment(chosen.identity)
        self._state.save_ledger(ledger.to_dict())

        avatars = {m.identity: m.avatar_url for m in roster}
        return AssignmentResult(
            repo=repo,
            pr_number=pr_number,
            reviewer=chosen.identity,
            url=pr.url,
            team=team,
            avatar_url=avatars.get(chosen.identity),
            newly_queued=newly_queued,
            probabilities=probabilities,
        )
