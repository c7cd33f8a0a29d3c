"""Langfuse observability logging for consensus traces."""
from __future__ import annotations

import logging
from typing import Any, Optional

from truecheck.models import AI, REAL, ConsensusOutcome

logger = logging.getLogger(__name__)


def maybe_create_langfuse(
    public_key: Optional[str],
    secret_key: Optional[str],
    host: Optional[str] = None,
):
    """Langfuse client if credentials are set and the package is installed, else None."""
    if not public_key or not secret_key:
        return None
    try:
        from langfuse import Langfuse
    except ImportError:
        logger.info("langfuse not installed; tracing disabled")
        return None
    return Langfuse(public_key=public_key, secret_key=secret_key, host=host or "https://cloud.langfuse.com")


def start_trace(langfuse, name: str, user_id: Optional[str] = None, metadata: Optional[dict] = None,
                tags: Optional[list[str]] = None, input: Any = None):
    if langfuse is None:
        return None
    return langfuse.trace(name=name, user_id=user_id, metadata=metadata or {}, tags=tags or [], input=input)


def log_generation(trace, name: str, model: str, input_payload: Any, output_payload: Any,
                   metadata: Optional[dict] = None) -> None:
    if trace is None:
        return
    trace.generation(name=name, model=model, input=input_payload, output=output_payload, metadata=metadata or {})


def log_span(trace, name: str, input_payload: Any, output_payload: Any) -> None:
    if trace is None:
        return
    trace.span(name=name, input=input_payload, output=output_payload)


def log_score(trace, name: str, value: float, comment: Optional[str] = None) -> None:
    if trace is None:
        return
    trace.score(name=name, value=value, comment=comment)


def flush(langfuse) -> None:
    if langfuse is not None:
        langfuse.flush()


def log_consensus_trace(
    langfuse,
    outcome: ConsensusOutcome,
    media_type: str,
    size_bytes: Optional[int] = None,
    ground_truth: Optional[str] = None,
    user_id: Optional[str] = None,
) -> Optional[str]:
    """Log one analysis (per-model generations, vote span, scores). Returns trace id or None."""
    if langfuse is None:
        return None

    try:
        trace = start_trace(
            langfuse,
            name="media_consensus",
            user_id=user_id,
            input={"media_type": media_type, "size_bytes": size_bytes},
            metadata={"ground_truth": ground_truth},
            tags=["truecheck", media_type],
        )
        trace.update(output={"verdict": outcome.verdict, "score": outcome.score})

        for detail in outcome.model_details:
            log_generation(
                trace,
                name=detail.model_name,
                model=detail.model_name,
                input_payload={"media_type": media_type},
                output_payload=detail.to_dict(),
            )
            log_score(trace, name=f"{detail.model_name}_confidence", value=float(detail.confidence),
                      comment=detail.verdict)

        log_span(
            trace,
            name="vote_aggregation",
            input_payload={"verdicts": [d.verdict for d in outcome.model_details]},
            output_payload={"verdict": outcome.verdict, "tally": outcome.tally.to_dict()},
        )

        log_score(trace, name="final_score", value=float(outcome.score), comment=outcome.verdict)

        verdicts = {d.verdict for d in outcome.model_details}
        log_score(trace, name="inter_model_agreement", value=1.0 if len(verdicts) == 1 else 0.0)

        if ground_truth in (AI, REAL):
            correct = 1.0 if outcome.verdict == ground_truth else 0.0
            log_score(trace, name="final_correct", value=correct,
                      comment=f"final={outcome.verdict} gt={ground_truth}")

        flush(langfuse)
        return trace.id
    except Exception as exc:
        logger.warning("Langfuse tracing failed: %s", exc)
        return None
