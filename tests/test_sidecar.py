"""Tests for provenance sidecar files."""

import json
from datetime import datetime

from font_manager import Font
from font_manager.sidecar import read_sidecars
from font_manager.sidecar import write_sidecars


def test_write_and_read_sidecars(tmp_path):
    """Test sidecars persist source, metadata and an RFC3339 timestamp."""
    font = Font(name="Inter", source="fontsource", meta={"id": "inter", "subset": "latin"})

    write_sidecars(tmp_path, font)
    sidecars = read_sidecars(tmp_path)

    assert sidecars.source == "fontsource"
    assert sidecars.metadata == {"id": "inter", "subset": "latin"}
    assert sidecars.installed_at is not None
    parsed = datetime.fromisoformat(sidecars.installed_at)
    assert parsed.tzinfo is not None


def test_to_meta_merges_in_order(tmp_path):
    (tmp_path / ".installed").write_text("2025-11-08T12:00:00+00:00")
    (tmp_path / ".metadata").write_text(json.dumps({"id": "x"}))

    meta = read_sidecars(tmp_path).to_meta()

    assert list(meta) == ["installed_at", "id"]


def test_read_sidecars_missing_files(tmp_path):
    sidecars = read_sidecars(tmp_path)

    assert sidecars.source == ""
    assert sidecars.installed_at is None
    assert sidecars.metadata == {}


def test_read_sidecars_non_object_metadata(tmp_path, caplog):
    (tmp_path / ".metadata").write_text(json.dumps(["not", "an", "object"]))

    sidecars = read_sidecars(tmp_path)

    assert sidecars.metadata == {}
    assert "non-object metadata" in caplog.text


def test_source_is_stripped(tmp_path):
    (tmp_path / ".source").write_text("nerdfonts\n")

    assert read_sidecars(tmp_path).source == "nerdfonts"


def test_sidecars_are_utf8(tmp_path):
    write_sidecars(tmp_path, Font(name="Ünïcode", source="fönts", meta={"family": "Ünïcode Sans"}))

    assert (tmp_path / ".source").read_bytes() == "fönts".encode()
    sidecars = read_sidecars(tmp_path)
    assert sidecars.source == "fönts"
    assert sidecars.metadata == {"family": "Ünïcode Sans"}
