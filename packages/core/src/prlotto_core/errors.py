"""Error taxonomy for reviewer assignment.

Every error is terminal for the command in progress: nothing is retried and
side effects already applied (a posted comment, for instance) are not undone.
The chat dispatcher turns any LottoError into a plain-text reply.
"""

from __future__ import annotations


class LottoError(Exception):
    """Base class for every failure surfaced to the invoking user."""


class TeamLookupFailed(LottoError):
    """No team is configured for the repository, or its roster could not be fetched."""


class PullRequestLookupFailed(LottoError):
    """The pull request (creator, assignee, URL) could not be fetched."""


class NoEligibleCandidates(LottoError):
    """The roster is empty once the creator and current assignee are excluded."""


class AssignmentUpdateFailed(LottoError):
    """Posting the review request or updating labels/assignee failed."""


class ConfigurationMissing(LottoError):
    """Required settings are absent; the bot refuses to start."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(
            "Missing required configuration: "
            + ", ".join(self.missing)
            + ". Set them in .prlotto.yml or via PRLOTTO_* environment variables."
        )


class ConfigurationInvalid(LottoError):
    """A setting is present but cannot be used, e.g. a non-numeric interval."""

    def __init__(self, key: str, value, reason: str = "expected a number"):
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration for {key}: {value!r} ({reason}).")
