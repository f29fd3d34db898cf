"""Plain-text replies shared by the chat dispatcher and the reminder sweep."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prlotto_core.ledger import FairnessLedger
    from prlotto_core.workflow import AssignmentResult
    from prlotto_store.models import QueuedReview


def review_request_comment(reviewer: str, message: str) -> str:
    """Body of the comment that asks the reviewer to look at the PR."""
    return f"@{reviewer} {message}"


def assignment_reply(result: AssignmentResult, with_avatar: bool = False, debug: bool = False) -> str:
    lines = [f"{result.reviewer} has been assigned for {result.url} as a reviewer"]
    if with_avatar and result.avatar_url:
        lines.append(result.avatar_url)
    if debug:
        lines.append(f"team: {result.team}")
        for identity, p in result.probabilities:
            lines.append(f"  {identity}: {p:.4f}")
    return "\n".join(lines)


def reminder_text(repo: str, pr_number: int, waited: timedelta) -> str:
    hours = int(waited.total_seconds() // 3600)
    return f"Reminder: {repo}#{pr_number} has been waiting for your review for {hours}h."


def format_stats(ledger: FairnessLedger) -> str:
    if not len(ledger):
        return "No reviews have been assigned yet."
    return "\n".join(f"{identity}: {count}" for identity, count in ledger.ranked())


def format_mapping(mapping: dict[str, str], empty: str, separator: str = " → ") -> str:
    if not mapping:
        return empty
    return "\n".join(f"{key}{separator}{value}" for key, value in sorted(mapping.items()))


def format_queue(queue: dict[str, list[QueuedReview]], now: datetime) -> str:
    lines = []
    for repo in sorted(queue):
        for review in sorted(queue[repo], key=lambda r: r.pr_number):
            waited = now - review.submitted_at
            hours = int(waited.total_seconds() // 3600)
            lines.append(f"{repo}#{review.pr_number} (waiting {hours}h)")
    return "\n".join(lines) if lines else "The review queue is empty."
