"""GistStore: zero-infrastructure shared bot state via GitHub Gist.

Needs a token with `gist` scope, usually the same token the tracker uses.
Operators can read the ledger or the review queue straight from the Gist page.

Data format: a single JSON file named `prlotto_state.json` inside the Gist,
holding one JSON object keyed by state-region name.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from prlotto_store.base import BaseStore

logger = logging.getLogger(__name__)

_GIST_FILENAME = "prlotto_state.json"


class GistStore(BaseStore):
    """Stores every state region in one JSON document inside a GitHub Gist.

    The document is loaded once and cached; each set()/delete() rewrites the
    whole file. If the document cannot be loaded, reads return None and
    writes are skipped, so a transient GitHub outage never overwrites the
    shared state with an empty document.
    """

    def __init__(self, gist_id: str, token: str):
        try:
            from github import Github
        except ImportError:
            raise ImportError("PyGithub is required for GistStore. Install prlotto.")
        self._gist_id = gist_id
        self._gh = Github(token)
        self._cache: dict[str, Any] | None = None

    def _get_gist(self):
        return self._gh.get_gist(self._gist_id)

    def _document(self) -> dict[str, Any] | None:
        if self._cache is not None:
            return self._cache
        try:
            gist = self._get_gist()
            self._cache = self._read_document(gist)
        except Exception as e:
            logger.warning("GistStore: could not load %s (%s): %s", self._gist_id, type(e).__name__, e)
            return None
        return self._cache

    def get(self, key: str) -> Any | None:
        document = self._document()
        if document is None:
            return None
        return document.get(key)

    def set(self, key: str, value: Any) -> None:
        document = self._document()
        if document is None:
            logger.warning("GistStore: skipping write of %r, state document unavailable", key)
            return
        document[key] = value
        self._write(document)

    def delete(self, key: str) -> None:
        document = self._document()
        if document is None or key not in document:
            return
        del document[key]
        self._write(document)

    def _write(self, document: dict[str, Any]) -> None:
        try:
            gist = self._get_gist()
            gist.edit(files={_GIST_FILENAME: {"content": json.dumps(document, indent=2, sort_keys=True)}})
        except Exception as e:
            # The in-process cache already holds the new value; the next
            # successful write carries it to the Gist.
            logger.warning("GistStore: write failed (%s): %s", type(e).__name__, e)

    @staticmethod
    def _read_document(gist) -> dict[str, Any]:
        """Read the JSON object from the Gist file, or return {}."""
        file_obj = gist.files.get(_GIST_FILENAME)
        if file_obj is None:
            return {}
        try:
            document = json.loads(file_obj.content) or {}
        except (json.JSONDecodeError, AttributeError):
            return {}
        return document if isinstance(document, dict) else {}
