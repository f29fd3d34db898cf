"""Fairness ledger: how many reviews each reviewer has been assigned."""

from __future__ import annotations

from typing import Iterator, Mapping


class FairnessLedger(Mapping[str, int]):
    """Read-mostly mapping of reviewer login → assignment count.

    Counts only ever grow, one at a time, through increment(). The lottery
    reads the ledger; only the assignment workflow's commit step writes it.
    """

    def __init__(self, counts: Mapping[str, int] | None = None) -> None:
        self._counts: dict[str, int] = {}
        for identity, count in (counts or {}).items():
            if count < 0:
                raise ValueError(f"Assignment count for {identity!r} must be non-negative, got {count}")
            self._counts[identity] = int(count)

    def __getitem__(self, identity: str) -> int:
        return self._counts[identity]

    def __iter__(self) -> Iterator[str]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def count(self, identity: str) -> int:
        """Assignment count for identity; reviewers never picked count as 0."""
        return self._counts.get(identity, 0)

    def max_count(self) -> int:
        return max(self._counts.values(), default=0)

    def increment(self, identity: str) -> int:
        """Record one more assignment for identity and return the new count."""
        self._counts[identity] = self._counts.get(identity, 0) + 1
        return self._counts[identity]

    def ranked(self) -> list[tuple[str, int]]:
        """Entries sorted by count (highest first), then login."""
        return sorted(self._counts.items(), key=lambda item: (-item[1], item[0]))

    def to_dict(self) -> dict[str, int]:
        return dict(self._counts)
