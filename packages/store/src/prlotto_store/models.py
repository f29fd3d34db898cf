"""Persisted state models.

Decoupled from prlotto_core so the store layer can be used independently
and the lottery has no knowledge of persistence concerns.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class QueuedReview:
    """A pull request waiting for its assigned reviewer.

    Identified by (repository, pr_number); the repository is the key of the
    queue mapping that holds it.
    """

    pr_number: int
    submitted_at: datetime  # timezone-aware, UTC

    def to_dict(self) -> dict:
        return {"pr_number": self.pr_number, "submitted_at": self.submitted_at.isoformat()}

    @classmethod
    def from_dict(cls, d: dict) -> QueuedReview:
        submitted_at = datetime.fromisoformat(d["submitted_at"])
        if submitted_at.tzinfo is None:
            submitted_at = submitted_at.replace(tzinfo=timezone.utc)
        return cls(pr_number=int(d["pr_number"]), submitted_at=submitted_at)
