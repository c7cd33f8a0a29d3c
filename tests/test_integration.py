"""
Integration tests: call the real hosted classifiers.

Run with:
    pytest tests/test_integration.py -v -m integration

Skipped automatically if HF_API_TOKEN is not set in the environment or .env file.
"""
from __future__ import annotations

import base64
import os
import struct
import zlib

import pytest
from dotenv import load_dotenv

load_dotenv()

pytestmark = pytest.mark.integration

HF_API_TOKEN = os.getenv("HF_API_TOKEN", "")
if not HF_API_TOKEN:
    pytest.skip("HF_API_TOKEN not set, skipping integration tests", allow_module_level=True)


def _solid_png(width: int = 64, height: int = 64) -> bytes:
    """A small grey PNG built by hand so no image library is needed."""
    def chunk(kind: bytes, data: bytes) -> bytes:
        return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", zlib.crc32(kind + data) & 0xFFFFFFFF)

    raw = b"".join(b"\x00" + b"\x80\x80\x80" * width for _ in range(height))
    header = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    return b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", header) + chunk(b"IDAT", zlib.compress(raw)) + chunk(b"IEND", b"")


@pytest.fixture(scope="module")
def settings():
    from truecheck.config import load_settings
    return load_settings()


class TestLiveConsensus:
    def test_image_returns_valid_outcome_or_retryable(self, settings):
        from truecheck.consensus import ConsensusAggregator
        from truecheck.errors import NoClassifiersAvailable

        payload = base64.b64encode(_solid_png()).decode()
        try:
            outcome = ConsensusAggregator(settings).aggregate("image", payload)
        except NoClassifiersAvailable as exc:
            assert exc.retry is True
            return

        assert outcome.verdict in ("real", "ai")
        assert 0 <= outcome.score <= 100
        assert 1 <= len(outcome.model_details) <= settings.result_quota
