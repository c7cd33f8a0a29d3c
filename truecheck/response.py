from __future__ import annotations

from truecheck.annotate import CosmeticAnnotator
from truecheck.errors import NoClassifiersAvailable
from truecheck.models import ConsensusOutcome


def build_response(
    outcome: ConsensusOutcome,
    media_type: str,
    annotator: CosmeticAnnotator | None = None,
) -> dict:
    """JSON-ready body for a successful analysis."""
    body = {
        "verdict": outcome.verdict,
        "score": outcome.score,
        "model_used": ", ".join(outcome.models_used),
        "media_type": media_type,
        "model_details": [d.to_dict() for d in outcome.model_details],
        "summary": outcome.summary_text,
    }
    if annotator is not None:
        body.update(annotator.annotate(outcome, media_type))
    return body


def build_retry_response(exc: NoClassifiersAvailable) -> dict:
    return {
        "error": "AI models are loading" if exc.cold_start else "No classifiers available",
        "details": str(exc),
        "retry": True,
        "retry_after": exc.retry_after_seconds,
        "wait": exc.wait_suggestion,
    }
