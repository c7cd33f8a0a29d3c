from __future__ import annotations

from dataclasses import dataclass, field

REAL = "real"
AI = "ai"
UNKNOWN = "unknown"

IMAGE = "image"
VIDEO = "video"
MEDIA_KINDS = (IMAGE, VIDEO)


@dataclass(frozen=True)
class ClassifierDescriptor:
    name: str
    endpoint: str
    media_kind: str  # "image" or "video"


@dataclass(frozen=True)
class RawClassification:
    label: str
    score: float


@dataclass(frozen=True)
class NormalizedResult:
    model_name: str
    verdict: str  # "real" | "ai" | "unknown"
    confidence: int
    label: str
    high_confidence: bool

    def to_dict(self) -> dict:
        return {
            "model": self.model_name,
            "verdict": self.verdict,
            "confidence": self.confidence,
            "label": self.label,
            "highConfidence": self.high_confidence,
        }


@dataclass(frozen=True)
class VoteTally:
    ai_votes: int = 0
    real_votes: int = 0
    unknown_votes: int = 0
    high_confidence_ai: int = 0
    high_confidence_real: int = 0

    def to_dict(self) -> dict:
        return {
            "ai": self.ai_votes,
            "real": self.real_votes,
            "unknown": self.unknown_votes,
            "high_confidence_ai": self.high_confidence_ai,
            "high_confidence_real": self.high_confidence_real,
        }


@dataclass(frozen=True)
class ConsensusOutcome:
    verdict: str  # "real" | "ai"
    score: int
    model_details: tuple[NormalizedResult, ...]
    summary_text: str
    tally: VoteTally = field(default_factory=VoteTally)

    @property
    def models_used(self) -> list[str]:
        return [d.model_name for d in self.model_details]
