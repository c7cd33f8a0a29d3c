"""Serverless entry point (Netlify / AWS Lambda style events)."""
from __future__ import annotations

import json
import logging
from typing import Any

from truecheck.annotate import CosmeticAnnotator
from truecheck.config import Settings, load_settings
from truecheck.consensus import ConsensusAggregator
from truecheck.errors import MediaError, NoClassifiersAvailable
from truecheck.langfuse_logger import log_consensus_trace, maybe_create_langfuse
from truecheck.media import decode_media
from truecheck.response import build_response, build_retry_response

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


def _reply(status_code: int, body: dict | None = None) -> dict:
    return {
        "statusCode": status_code,
        "headers": {**CORS_HEADERS, "Content-Type": "application/json"},
        "body": json.dumps(body) if body is not None else "",
    }


def make_handler(
    settings: Settings | None = None,
    aggregator: ConsensusAggregator | None = None,
    annotator: CosmeticAnnotator | None = None,
):
    """Build a handler bound to one settings object and aggregator."""
    state: dict[str, Any] = {"settings": settings, "aggregator": aggregator, "langfuse_ready": False, "langfuse": None}
    annotator = annotator or CosmeticAnnotator()

    def _aggregator() -> ConsensusAggregator:
        if state["aggregator"] is None:
            if state["settings"] is None:
                state["settings"] = load_settings()
            state["aggregator"] = ConsensusAggregator(state["settings"])
        return state["aggregator"]

    def _langfuse(agg: ConsensusAggregator):
        # one client per warm process
        if not state["langfuse_ready"]:
            state["langfuse"] = maybe_create_langfuse(
                agg.settings.langfuse_public_key,
                agg.settings.langfuse_secret_key,
                agg.settings.langfuse_host,
            )
            state["langfuse_ready"] = True
        return state["langfuse"]

    def handler(event: dict, context: Any = None) -> dict:
        method = (event.get("httpMethod") or "").upper()
        if method == "OPTIONS":
            return _reply(200)
        if method != "POST":
            return _reply(405, {"error": "Method not allowed"})

        try:
            body = json.loads(event.get("body") or "{}")
        except json.JSONDecodeError:
            return _reply(400, {"error": "Request body must be JSON."})
        if not isinstance(body, dict):
            return _reply(400, {"error": "Request body must be a JSON object."})

        try:
            agg = _aggregator()
        except ValueError as exc:
            logger.exception("Invalid configuration")
            return _reply(500, {"error": "Analysis failed", "details": str(exc)})

        media_type = body.get("type")
        try:
            payload, size = decode_media(body.get("media"), media_type, agg.settings.max_media_mb)
        except MediaError as exc:
            return _reply(400, {"error": str(exc)})

        logger.info("Analyzing %s (%d bytes)", media_type, size)
        try:
            outcome = agg.aggregate(media_type, payload)
        except NoClassifiersAvailable as exc:
            return _reply(503, build_retry_response(exc))
        except Exception as exc:
            logger.exception("Analysis error")
            return _reply(500, {"error": "Analysis failed", "details": str(exc)})

        log_consensus_trace(_langfuse(agg), outcome, media_type=media_type, size_bytes=size)

        return _reply(200, build_response(outcome, media_type, annotator))

    return handler


handler = make_handler()
