"""Tests for labelled dataset loading."""
import base64

import pytest

from truecheck.dataset import (
    build_records,
    encode_file,
    load_label_table,
    media_type_for,
    normalize_label,
    resolve_media_path,
)


class TestLoadLabelTable:
    def test_media_label_columns(self, tmp_path):
        csv_file = tmp_path / "labels.csv"
        csv_file.write_text("media,label\na.png,FAKE\nb.mp4,real\nc.jpg,ai\n")
        df = load_label_table(csv_file)
        assert list(df["label"]) == ["ai", "real", "ai"]

    def test_image_forged_columns(self, tmp_path):
        csv_file = tmp_path / "labels.csv"
        csv_file.write_text("image,forged\na.png,1\nb.png,0\n")
        df = load_label_table(csv_file)
        assert list(df["media"]) == ["a.png", "b.png"]
        assert list(df["label"]) == ["ai", "real"]

    def test_missing_columns(self, tmp_path):
        csv_file = tmp_path / "labels.csv"
        csv_file.write_text("file,truth\na.png,1\n")
        with pytest.raises(ValueError):
            load_label_table(csv_file)

    def test_unknown_label(self, tmp_path):
        csv_file = tmp_path / "labels.csv"
        csv_file.write_text("media,label\na.png,maybe\n")
        with pytest.raises(ValueError, match="Unrecognized"):
            load_label_table(csv_file)


class TestHelpers:
    def test_media_type_for(self, tmp_path):
        assert media_type_for(tmp_path / "clip.MP4") == "video"
        assert media_type_for(tmp_path / "photo.jpg") == "image"

    def test_normalize_label(self):
        assert normalize_label(" Fake ") == "ai"
        assert normalize_label(0) == "real"

    def test_resolve_media_path(self, tmp_path):
        (tmp_path / "b").mkdir()
        target = tmp_path / "b" / "x.png"
        target.write_bytes(b"x")
        assert resolve_media_path("x.png", [tmp_path / "a", tmp_path / "b"]) == target
        with pytest.raises(FileNotFoundError):
            resolve_media_path("y.png", [tmp_path])

    def test_build_records_and_encode(self, tmp_path):
        (tmp_path / "a.png").write_bytes(b"img")
        (tmp_path / "b.mp4").write_bytes(b"vid")
        csv_file = tmp_path / "labels.csv"
        csv_file.write_text("media,label\na.png,real\nb.mp4,fake\n")
        records = build_records(load_label_table(csv_file), [tmp_path])
        assert [(r.media_type, r.label) for r in records] == [("image", "real"), ("video", "ai")]
        assert encode_file(records[0].media_path) == base64.b64encode(b"img").decode()
