"""
Label interpretation for classifier outputs.

Hosted classifiers do not share a label vocabulary ("Real", "FAKE",
"artificial", "label_1", ...). Labels are matched by substring against two
keyword sets; ambiguous labels (both or neither set matched) fall back to the
score, which leans toward "real".
"""
from __future__ import annotations

import math
from typing import Iterable

from truecheck.models import AI, REAL, NormalizedResult, RawClassification

REAL_KEYWORDS = ("real", "authentic", "genuine")
FAKE_KEYWORDS = ("fake", "deepfake", "synthetic", "ai")

DEFAULT_HIGH_CONFIDENCE = 0.65
AMBIGUOUS_SCORE_CUTOFF = 0.5


def interpret_label(label: str, score: float, threshold: float = DEFAULT_HIGH_CONFIDENCE) -> tuple[str, bool]:
    """Return (verdict, high_confidence) for one classifier label."""
    text = label.lower()
    is_real = any(k in text for k in REAL_KEYWORDS)
    is_fake = any(k in text for k in FAKE_KEYWORDS)

    if is_real and not is_fake:
        verdict = REAL
    elif is_fake and not is_real:
        verdict = AI
    elif score > AMBIGUOUS_SCORE_CUTOFF:
        verdict = AI if is_fake else REAL
    else:
        verdict = REAL

    return verdict, score > threshold


def round_half_up(value: float) -> int:
    # halves round up, not to even
    return int(math.floor(value + 0.5))


def top_classification(items: Iterable[RawClassification]) -> RawClassification:
    """Highest-scoring entry; the first one wins ties."""
    best: RawClassification | None = None
    for item in items:
        if best is None or item.score > best.score:
            best = item
    if best is None:
        raise ValueError("no classifications to choose from")
    return best


def normalize(model_name: str, raw: RawClassification, threshold: float = DEFAULT_HIGH_CONFIDENCE) -> NormalizedResult:
    verdict, high = interpret_label(raw.label, raw.score, threshold)
    return NormalizedResult(
        model_name=model_name,
        verdict=verdict,
        confidence=round_half_up(raw.score * 100),
        label=raw.label,
        high_confidence=high,
    )
