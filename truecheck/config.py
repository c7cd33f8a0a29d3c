from __future__ import annotations

import os
from dataclasses import dataclass

from truecheck.classifiers import (
    DEFAULT_IMAGE_MODELS,
    DEFAULT_INFERENCE_BASE_URL,
    DEFAULT_VIDEO_MODELS,
    build_classifiers,
)
from truecheck.labels import DEFAULT_HIGH_CONFIDENCE
from truecheck.models import IMAGE, VIDEO, ClassifierDescriptor
from truecheck.voting import DEFAULT_POLICY, POLICIES


@dataclass(frozen=True)
class Settings:
    image_classifiers: tuple[ClassifierDescriptor, ...]
    video_classifiers: tuple[ClassifierDescriptor, ...]
    api_token: str | None = None
    result_quota: int = 3
    timeout_seconds: float = 20.0
    high_confidence_threshold: float = DEFAULT_HIGH_CONFIDENCE
    verdict_policy: str = DEFAULT_POLICY
    concurrent: bool = False
    max_media_mb: float = 4.0
    langfuse_public_key: str | None = None
    langfuse_secret_key: str | None = None
    langfuse_host: str | None = None


def _split_models(raw: str | None, default: tuple[str, ...]) -> tuple[str, ...]:
    if not raw or not raw.strip():
        return default
    return tuple(m.strip() for m in raw.split(",") if m.strip())


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def load_settings() -> Settings:
    base_url = os.getenv("TRUECHECK_INFERENCE_BASE_URL", DEFAULT_INFERENCE_BASE_URL)

    image_models = _split_models(os.getenv("TRUECHECK_IMAGE_MODELS"), DEFAULT_IMAGE_MODELS)
    video_models = _split_models(os.getenv("TRUECHECK_VIDEO_MODELS"), DEFAULT_VIDEO_MODELS)

    api_token = os.getenv("HF_API_TOKEN", "").strip() or None

    result_quota = int(os.getenv("TRUECHECK_RESULT_QUOTA", "3"))
    if result_quota < 1:
        raise ValueError("TRUECHECK_RESULT_QUOTA must be at least 1.")

    timeout_seconds = float(os.getenv("TRUECHECK_TIMEOUT_SECONDS", "20"))
    if timeout_seconds <= 0:
        raise ValueError("TRUECHECK_TIMEOUT_SECONDS must be positive.")

    threshold = float(os.getenv("TRUECHECK_HIGH_CONFIDENCE", str(DEFAULT_HIGH_CONFIDENCE)))
    if not 0.0 <= threshold <= 1.0:
        raise ValueError("TRUECHECK_HIGH_CONFIDENCE must be between 0 and 1.")

    verdict_policy = os.getenv("TRUECHECK_VERDICT_POLICY", DEFAULT_POLICY).strip()
    if verdict_policy not in POLICIES:
        raise ValueError(f"TRUECHECK_VERDICT_POLICY must be one of {sorted(POLICIES)}.")

    max_media_mb = float(os.getenv("TRUECHECK_MAX_MEDIA_MB", "4"))

    return Settings(
        image_classifiers=build_classifiers(image_models, IMAGE, base_url),
        video_classifiers=build_classifiers(video_models, VIDEO, base_url),
        api_token=api_token,
        result_quota=result_quota,
        timeout_seconds=timeout_seconds,
        high_confidence_threshold=threshold,
        verdict_policy=verdict_policy,
        concurrent=_env_bool("TRUECHECK_CONCURRENT"),
        max_media_mb=max_media_mb,
        langfuse_public_key=os.getenv("LANGFUSE_PUBLIC_KEY"),
        langfuse_secret_key=os.getenv("LANGFUSE_SECRET_KEY"),
        langfuse_host=os.getenv("LANGFUSE_HOST"),
    )
