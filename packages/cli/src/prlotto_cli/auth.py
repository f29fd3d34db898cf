"""GitHub token resolution with gh CLI fallback.

Resolution order (stops at first success):
  1. PRLOTTO_GITHUB_TOKEN environment variable (dedicated bot token)
  2. GITHUB_TOKEN environment variable (CI / explicit override)
  3. `gh auth token` (GitHub CLI session, works after `gh auth login`)
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)

_TOKEN_ENV_VARS = ("PRLOTTO_GITHUB_TOKEN", "GITHUB_TOKEN")


def resolve_github_token() -> str | None:
    """Return a GitHub token or None if no valid source is available.

    Never raises: callers decide whether a missing token is fatal.
    """
    for env_var in _TOKEN_ENV_VARS:
        token = os.environ.get(env_var)
        if token:
            return token

    # A local operator who can run `gh pr view` can run the bot without a PAT.
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        if result.returncode == 0:
            gh_token = result.stdout.strip()
            if gh_token:
                logger.debug("Resolved GitHub token via gh CLI session.")
                return gh_token
    except (FileNotFoundError, subprocess.TimeoutExpired):
        # gh is not installed or timed out.
        pass

    return None
