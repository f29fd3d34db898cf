"""Weighted lottery: picks one reviewer, favouring the under-assigned.

Weight of a candidate c, with M the highest count anywhere in the ledger:

    w(c) = exp(M - count(c))

so a reviewer tied with M weighs 1 and every assignment a reviewer is behind
multiplies their weight by e. Probabilities are the normalised weights, and
a single uniform draw walks the cumulative distribution in candidate order.

The draw is a pure function of (candidates, ledger, rng): it never writes
the ledger. Recording the outcome is the caller's job.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Mapping, Sequence

from prlotto_core.errors import NoEligibleCandidates

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    """A reviewer eligible for one draw."""

    identity: str


def _count(ledger: Mapping[str, int], identity: str) -> int:
    return ledger.get(identity, 0)


def _ceiling(ledger: Mapping[str, int]) -> int:
    return max(ledger.values(), default=0)


# Largest x for which math.exp(x) is a finite float.
_MAX_EXPONENT = 709


def weights(candidates: Sequence[Candidate], ledger: Mapping[str, int]) -> list[float]:
    """Raw lottery weights, exp(M - count), in candidate order.

    Gaps wider than _MAX_EXPONENT are clamped to it, so a reviewer more than
    709 assignments behind weighs exp(709) instead of overflowing. Use
    probabilities() for the odds; it is exact for any gap.
    """
    ceiling = _ceiling(ledger)
    return [math.exp(min(ceiling - _count(ledger, c.identity), _MAX_EXPONENT)) for c in candidates]


def probabilities(candidates: Sequence[Candidate], ledger: Mapping[str, int]) -> list[float]:
    """Normalised selection probabilities, in candidate order.

    Equal to weights()/sum(weights()), computed with every exponent shifted
    down by the largest one so a wide count gap cannot overflow math.exp.
    """
    if not candidates:
        return []
    ceiling = _ceiling(ledger)
    exponents = [ceiling - _count(ledger, c.identity) for c in candidates]
    top = max(exponents)
    scaled = [math.exp(e - top) for e in exponents]
    total = sum(scaled)
    if total <= 0:
        return [1.0 / len(candidates)] * len(candidates)
    return [w / total for w in scaled]


def draw(
    candidates: Sequence[Candidate],
    ledger: Mapping[str, int],
    rng: random.Random | None = None,
) -> Candidate:
    """Select one candidate at random, weighted towards lower ledger counts.

    Args:
        candidates: Non-empty, ordered candidate list.
        ledger: Reviewer login → assignment count. Read only.
        rng: Random source; pass a seeded random.Random for repeatable draws.

    Raises:
        NoEligibleCandidates: if candidates is empty.
    """
    if not candidates:
        raise NoEligibleCandidates("No eligible reviewers to draw from.")

    rng = rng or random.Random()
    probs = probabilities(candidates, ledger)
    roll = rng.random()

    cumulative = 0.0
    for candidate, p in zip(candidates, probs):
        cumulative += p
        if cumulative > roll:
            logger.debug("Lottery roll %.4f picked %s (p=%.4f)", roll, candidate.identity, p)
            return candidate

    # Rounding can leave the cumulative sum a hair below 1.0.
    logger.debug("Lottery roll %.4f fell past the cumulative total; picking the last candidate", roll)
    return candidates[-1]
