from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

from truecheck.annotate import CosmeticAnnotator
from truecheck.config import load_settings
from truecheck.consensus import ConsensusAggregator
from truecheck.dataset import encode_file, media_type_for, normalize_label
from truecheck.errors import NoClassifiersAvailable
from truecheck.langfuse_logger import log_consensus_trace, maybe_create_langfuse
from truecheck.media import decode_media
from truecheck.response import build_response, build_retry_response


def main() -> int:
    load_dotenv()

    p = argparse.ArgumentParser(description="Run the classifier consensus on one local image or video.")
    p.add_argument("--media", type=str, required=True)
    p.add_argument("--type", type=str, choices=["image", "video"], default="")
    p.add_argument("--ground_truth", type=str, default="")  # optional: real|ai|fake, evaluation only
    p.add_argument("--user_id", type=str, default="cli-user")
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    settings = load_settings()
    media_path = Path(args.media)
    media_type = args.type or media_type_for(media_path)
    ground_truth = normalize_label(args.ground_truth) if args.ground_truth else None

    payload, size = decode_media(encode_file(media_path), media_type, settings.max_media_mb)

    aggregator = ConsensusAggregator(settings)
    try:
        outcome = aggregator.aggregate(media_type, payload)
    except NoClassifiersAvailable as exc:
        print(json.dumps(build_retry_response(exc), indent=2))
        return 2

    langfuse = maybe_create_langfuse(settings.langfuse_public_key, settings.langfuse_secret_key, settings.langfuse_host)
    trace_id = log_consensus_trace(langfuse, outcome, media_type=media_type, size_bytes=size,
                                   ground_truth=ground_truth, user_id=args.user_id)

    result = build_response(outcome, media_type, CosmeticAnnotator())
    result["tally"] = outcome.tally.to_dict()
    result["ground_truth"] = ground_truth
    if trace_id:
        result["trace_id"] = trace_id

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
