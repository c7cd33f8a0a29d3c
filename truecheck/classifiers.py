"""Classifier registry: hosted inference endpoints, in query priority order."""
from __future__ import annotations

from typing import Iterable

from truecheck.models import VIDEO, ClassifierDescriptor

DEFAULT_INFERENCE_BASE_URL = "https://api-inference.huggingface.co/models"

DEFAULT_IMAGE_MODELS = (
    "umm-maybe/AI-image-detector",
    "Organika/sdxl-detector",
    "dima806/deepfake_vs_real_image_detection",
    "prithivMLmods/Deep-Fake-Detector-Model",
)

DEFAULT_VIDEO_MODELS = (
    "Wvolf/ViT_Deepfake_Detection",
)


def build_classifiers(
    model_ids: Iterable[str],
    media_kind: str,
    base_url: str = DEFAULT_INFERENCE_BASE_URL,
) -> tuple[ClassifierDescriptor, ...]:
    base = base_url.rstrip("/")
    out = []
    for model_id in model_ids:
        model_id = model_id.strip()
        if not model_id:
            continue
        endpoint = model_id if model_id.startswith(("http://", "https://")) else f"{base}/{model_id}"
        out.append(ClassifierDescriptor(name=model_id, endpoint=endpoint, media_kind=media_kind))
    return tuple(out)


def candidates_for(
    media_type: str,
    image_classifiers: Iterable[ClassifierDescriptor],
    video_classifiers: Iterable[ClassifierDescriptor],
) -> list[ClassifierDescriptor]:
    """Video goes to the video models first, then falls back to the image models."""
    if media_type == VIDEO:
        return [*video_classifiers, *image_classifiers]
    return list(image_classifiers)

