"""
Verdict policies: reduce normalized classifier results to "real" or "ai".

consensus        AI wins with a majority backed by at least one high-confidence
                 AI vote, or with a plain majority of two or more votes; REAL
                 otherwise. REAL is the default when evidence is thin.
strict_majority  AI needs a majority AND at least one high-confidence AI vote.
first_match      The first (highest-priority) result decides; no voting.
"""
from __future__ import annotations

from typing import Callable, Sequence

from truecheck.labels import round_half_up
from truecheck.models import AI, REAL, NormalizedResult, VoteTally

VerdictPolicy = Callable[[Sequence[NormalizedResult]], str]


def vote_tally(results: Sequence[NormalizedResult]) -> VoteTally:
    """Count votes by verdict and by high-confidence flag."""
    return VoteTally(
        ai_votes=sum(1 for r in results if r.verdict == AI),
        real_votes=sum(1 for r in results if r.verdict == REAL),
        unknown_votes=sum(1 for r in results if r.verdict not in (AI, REAL)),
        high_confidence_ai=sum(1 for r in results if r.verdict == AI and r.high_confidence),
        high_confidence_real=sum(1 for r in results if r.verdict == REAL and r.high_confidence),
    )


def consensus_vote(results: Sequence[NormalizedResult]) -> str:
    t = vote_tally(results)
    if t.high_confidence_ai > 0 and t.ai_votes > t.real_votes:
        return AI
    if t.ai_votes > t.real_votes and t.ai_votes >= 2:
        return AI
    if t.high_confidence_real > t.high_confidence_ai:
        return REAL
    return REAL


def strict_majority_vote(results: Sequence[NormalizedResult]) -> str:
    t = vote_tally(results)
    if t.ai_votes > t.real_votes and t.high_confidence_ai > 0:
        return AI
    return REAL


def first_match_vote(results: Sequence[NormalizedResult]) -> str:
    if results and results[0].verdict == AI:
        return AI
    return REAL


POLICIES: dict[str, VerdictPolicy] = {
    "consensus": consensus_vote,
    "strict_majority": strict_majority_vote,
    "first_match": first_match_vote,
}

DEFAULT_POLICY = "consensus"


def get_policy(name: str) -> VerdictPolicy:
    try:
        return POLICIES[name]
    except KeyError:
        raise ValueError(f"Unknown verdict policy {name!r}; choose one of {sorted(POLICIES)}") from None


def mean_confidence(results: Sequence[NormalizedResult]) -> int:
    """Arithmetic mean of confidences, rounded half up."""
    if not results:
        raise ValueError("cannot average an empty result list")
    return round_half_up(sum(r.confidence for r in results) / len(results))
