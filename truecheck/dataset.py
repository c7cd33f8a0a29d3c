from __future__ import annotations

import base64
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import pandas as pd

from truecheck.models import AI, IMAGE, REAL, VIDEO

VIDEO_SUFFIXES = {".mp4", ".mov", ".webm", ".avi", ".mkv", ".m4v"}

_LABEL_ALIASES = {
    "ai": AI,
    "fake": AI,
    "synthetic": AI,
    "1": AI,
    "real": REAL,
    "authentic": REAL,
    "0": REAL,
}


@dataclass(frozen=True)
class MediaRecord:
    media_id: str
    media_path: Path
    media_type: str  # "image" or "video"
    label: str  # "real" or "ai"


def media_type_for(path: Path) -> str:
    return VIDEO if path.suffix.lower() in VIDEO_SUFFIXES else IMAGE


def normalize_label(value) -> str:
    key = str(value).strip().lower()
    if key not in _LABEL_ALIASES:
        raise ValueError(f"Unrecognized ground-truth label {value!r}")
    return _LABEL_ALIASES[key]


def load_label_table(label_csv: Path) -> pd.DataFrame:
    """Read a labels CSV with columns media|image and label|forged."""
    df = pd.read_csv(label_csv)
    if "media" not in df.columns and "image" in df.columns:
        df = df.rename(columns={"image": "media"})
    if "media" not in df.columns:
        raise ValueError("Label table must include a media (or image) column")

    df = df.copy()
    if "label" in df.columns:
        df["label"] = df["label"].apply(normalize_label)
    elif "forged" in df.columns:
        df["label"] = df["forged"].apply(lambda x: AI if int(x) == 1 else REAL)
    else:
        raise ValueError("Label table must include a label or forged (0/1) column")
    df["media"] = df["media"].astype(str).str.strip()
    return df


def resolve_media_path(media_id: str, roots: Iterable[Path]) -> Path:
    roots = list(roots)
    for root in roots:
        candidate = root / media_id
        if candidate.exists():
            return candidate
    raise FileNotFoundError(f"Could not find media {media_id} in any of: {roots}")


def build_records(label_table: pd.DataFrame, roots: Iterable[Path]) -> list[MediaRecord]:
    roots = list(roots)
    records: list[MediaRecord] = []
    for _, row in label_table.iterrows():
        media_id = str(row["media"])
        path = resolve_media_path(media_id, roots)
        records.append(MediaRecord(media_id=media_id, media_path=path, media_type=media_type_for(path), label=row["label"]))
    return records


def encode_file(path: Path) -> str:
    return base64.b64encode(path.read_bytes()).decode("utf-8")
