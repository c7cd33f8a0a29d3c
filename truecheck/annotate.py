"""
Cosmetic annotations for verdict responses.

"ai" verdicts get a platform guess and an anomaly list; "real" verdicts get a
`details` block (device, date, authenticity note). All of it is illustrative
text for display only. It is randomly chosen and carries no detection signal;
nothing in the verdict or score depends on it.
"""
from __future__ import annotations

import datetime
import random
from typing import Callable

from truecheck.models import AI, VIDEO, ConsensusOutcome

IMAGE_PLATFORMS = ("Midjourney", "DALL-E", "Stable Diffusion", "Adobe Firefly", "Leonardo AI")
VIDEO_PLATFORMS = ("Sora", "Runway", "Pika", "HeyGen", "Synthesia")

IMAGE_ANOMALIES = (
    "Irregular texture patterns",
    "Inconsistent lighting and shadows",
    "Unnatural skin smoothing",
    "Distorted background details",
    "Malformed hands or fingers",
    "Repeating pixel artifacts",
)
VIDEO_ANOMALIES = (
    "Temporal flicker between frames",
    "Lip-sync drift",
    "Blurred face boundaries",
    "Unnatural blinking pattern",
    "Inconsistent motion blur",
)

CAMERA_DEVICES = ("Authentic Camera", "Smartphone Camera", "Digital SLR", "Mirrorless Camera")


class CosmeticAnnotator:
    """Adds decorative fields to verdict responses."""

    def __init__(
        self,
        rng: random.Random | None = None,
        max_anomalies: int = 3,
        today: Callable[[], datetime.date] = datetime.date.today,
    ) -> None:
        self.rng = rng or random.Random()
        self.max_anomalies = max_anomalies
        self.today = today

    def annotate(self, outcome: ConsensusOutcome, media_type: str) -> dict:
        if outcome.verdict != AI:
            kind = "Video" if media_type == VIDEO else "Image"
            return {
                "details": {
                    "device": self.rng.choice(CAMERA_DEVICES),
                    "date": self.today().isoformat(),
                    "authenticity": f"{kind} appears to be genuine",
                }
            }
        platforms = VIDEO_PLATFORMS if media_type == VIDEO else IMAGE_PLATFORMS
        anomalies = VIDEO_ANOMALIES if media_type == VIDEO else IMAGE_ANOMALIES
        return {
            "platform": self.rng.choice(platforms),
            "anomalies": self.rng.sample(anomalies, min(self.max_anomalies, len(anomalies))),
        }
