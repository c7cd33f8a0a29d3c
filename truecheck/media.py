"""Decoding and validation of submitted media payloads."""
from __future__ import annotations

import base64
import binascii
import re

from truecheck.errors import MediaError
from truecheck.models import MEDIA_KINDS

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?:;[\w=.-]+)*;base64,", re.IGNORECASE)


def strip_data_url(media: str) -> tuple[str, str | None]:
    """Return (base64 payload, mime type or None) for a data URL or bare base64."""
    match = _DATA_URL_RE.match(media)
    if match:
        return media[match.end():], match.group("mime")
    return media, None


def decode_media(media: str | None, media_type: str | None, max_mb: float = 4.0) -> tuple[str, int]:
    """Validate an inbound payload. Returns (bare base64 payload, decoded size in bytes)."""
    if not media or not isinstance(media, str):
        raise MediaError("No media provided.")
    if media_type not in MEDIA_KINDS:
        raise MediaError(f"Unsupported media type {media_type!r}; expected 'image' or 'video'.")

    payload, mime = strip_data_url(media.strip())
    if mime and not mime.lower().startswith(f"{media_type}/"):
        raise MediaError(f"Media is {mime} but type {media_type!r} was requested.")

    payload = "".join(payload.split())
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MediaError("Media is not valid base64.") from exc
    if not raw:
        raise MediaError("Media is empty.")

    size_mb = len(raw) / (1024 * 1024)
    if size_mb > max_mb:
        raise MediaError(f"File too large. Max {max_mb:g}MB.")
    return payload, len(raw)
