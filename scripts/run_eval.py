"""
Batch evaluation of the consensus over a labelled media folder.

Usage:
    python -m scripts.run_eval --labels data/labels.csv --media_dir data/media
"""
from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path

import pandas as pd
from dotenv import load_dotenv
from tqdm import tqdm

from truecheck.config import load_settings
from truecheck.consensus import ConsensusAggregator
from truecheck.dataset import build_records, encode_file, load_label_table
from truecheck.errors import MediaError, NoClassifiersAvailable
from truecheck.langfuse_logger import log_consensus_trace, maybe_create_langfuse
from truecheck.media import decode_media
from truecheck.voting import get_policy


def main() -> None:
    load_dotenv()

    p = argparse.ArgumentParser()
    p.add_argument("--labels", type=str, required=True, help="CSV with columns: media,label (or image,forged)")
    p.add_argument("--media_dir", type=str, required=True)
    p.add_argument("--out_csv", type=str, default="reports/eval_results.csv")
    p.add_argument("--policy", type=str, default="", help="override TRUECHECK_VERDICT_POLICY")
    args = p.parse_args()

    logging.basicConfig(level=logging.WARNING)

    settings = load_settings()
    if args.policy:
        get_policy(args.policy)
        settings = replace(settings, verdict_policy=args.policy)

    aggregator = ConsensusAggregator(settings)
    langfuse = maybe_create_langfuse(settings.langfuse_public_key, settings.langfuse_secret_key, settings.langfuse_host)

    records = build_records(load_label_table(Path(args.labels)), [Path(args.media_dir)])

    rows = []
    for rec in tqdm(records, desc="Evaluating"):
        row = {"media": rec.media_id, "media_type": rec.media_type, "ground_truth": rec.label}
        try:
            payload, size = decode_media(encode_file(rec.media_path), rec.media_type, settings.max_media_mb)
            outcome = aggregator.aggregate(rec.media_type, payload)
        except (MediaError, NoClassifiersAvailable) as exc:
            tqdm.write(f"  SKIP {rec.media_id}: {exc}")
            row.update({"verdict": None, "score": None, "error": str(exc)})
            rows.append(row)
            continue

        log_consensus_trace(langfuse, outcome, media_type=rec.media_type, size_bytes=size, ground_truth=rec.label)
        row.update({
            "verdict": outcome.verdict,
            "score": outcome.score,
            "models": ";".join(outcome.models_used),
            "ai_votes": outcome.tally.ai_votes,
            "real_votes": outcome.tally.real_votes,
            "error": None,
        })
        rows.append(row)

    df = pd.DataFrame(rows)
    out_path = Path(args.out_csv)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out_path, index=False)

    scored = df[df["verdict"].notna()]
    correct = int((scored["verdict"] == scored["ground_truth"]).sum()) if len(scored) else 0
    print("Evaluated:", len(scored), "of", len(df))
    print("Accuracy:", float(correct) / float(len(scored)) if len(scored) else 0.0)
    if len(scored):
        print(pd.crosstab(scored["ground_truth"], scored["verdict"]))
    print("Wrote:", out_path.resolve())


if __name__ == "__main__":
    main()
