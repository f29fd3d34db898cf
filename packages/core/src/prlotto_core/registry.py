"""Repository → team overrides and login → chat-channel aliases.

Both registries read through ReviewState on every call and write back
immediately, so the store stays the single source of truth.
"""

from __future__ import annotations

from prlotto_store.state import ReviewState


class TeamRegistry:
    """Which reviewer team serves each repository.

    Repositories without an override fall back to the configured default
    team. Entries are only created by set(); nothing is auto-populated.
    """

    def __init__(self, state: ReviewState, default_team: str | None = None) -> None:
        self._state = state
        self._default_team = default_team or None

    @property
    def default_team(self) -> str | None:
        return self._default_team

    def get(self, repo: str) -> str | None:
        """The override for repo, without falling back to the default."""
        return self._state.load_teams().get(repo)

    def resolve(self, repo: str) -> str | None:
        """The team to draw reviewers from for repo."""
        return self.get(repo) or self._default_team

    def set(self, repo: str, team: str) -> None:
        teams = self._state.load_teams()
        teams[repo] = team
        self._state.save_teams(teams)

    def clear(self, repo: str) -> bool:
        """Remove the override for repo. Returns False if there was none."""
        teams = self._state.load_teams()
        if repo not in teams:
            return False
        del teams[repo]
        self._state.save_teams(teams)
        return True

    def all(self) -> dict[str, str]:
        return self._state.load_teams()


class AliasRegistry:
    """Where to deliver reminders for each tracker login.

    A login without an alias simply cannot be reminded.
    """

    def __init__(self, state: ReviewState) -> None:
        self._state = state

    def get(self, identity: str) -> str | None:
        return self._state.load_aliases().get(identity)

    def set(self, identity: str, channel: str) -> None:
        aliases = self._state.load_aliases()
        aliases[identity] = channel
        self._state.save_aliases(aliases)

    def clear(self, identity: str) -> bool:
        """Remove the alias for identity. Returns False if there was none."""
        aliases = self._state.load_aliases()
        if identity not in aliases:
            return False
        del aliases[identity]
        self._state.save_aliases(aliases)
        return True

    def all(self) -> dict[str, str]:
        return self._state.load_aliases()
