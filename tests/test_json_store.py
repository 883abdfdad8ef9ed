from __future__ import annotations

import json
import os
from pathlib import Path

from catalog.services.json_store import JsonStore


def test_load_returns_document(tmp_path: Path) -> None:
    (tmp_path / "doc.json").write_text('{"usa": []}', encoding="utf-8")
    assert JsonStore(tmp_path).load("doc.json") == {"usa": []}


def test_load_missing_or_corrupt_returns_none(tmp_path: Path) -> None:
    store = JsonStore(tmp_path)
    (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")

    assert store.load("missing.json") is None
    assert store.load("broken.json") is None


def test_save_replaces_target_and_leaves_no_temp_file(tmp_path: Path) -> None:
    store = JsonStore(tmp_path)
    target = tmp_path / "nested" / "doc.json"

    assert store.save("nested/doc.json", {"usa": [{"id": 1}]}) is True
    assert store.save("nested/doc.json", {"usa": [{"id": 2}]}) is True

    assert json.loads(target.read_text(encoding="utf-8")) == {"usa": [{"id": 2}]}
    assert sorted(os.listdir(target.parent)) == ["doc.json"]


def test_unserializable_document_keeps_previous_content(tmp_path: Path) -> None:
    store = JsonStore(tmp_path)
    store.save("doc.json", {"usa": []})

    assert store.save("doc.json", {"usa": [object()]}) is False
    assert json.loads((tmp_path / "doc.json").read_text(encoding="utf-8")) == {"usa": []}


def test_failed_rename_keeps_previous_content(tmp_path: Path, monkeypatch) -> None:
    store = JsonStore(tmp_path)
    store.save("doc.json", {"usa": []})

    def broken_replace(src, dst):
        raise OSError("rename failed")

    monkeypatch.setattr(os, "replace", broken_replace)

    assert store.save("doc.json", {"usa": [{"id": 1}]}) is False
    assert json.loads((tmp_path / "doc.json").read_text(encoding="utf-8")) == {"usa": []}
    assert not (tmp_path / "doc.json.tmp").exists()


def test_non_finite_numbers_are_not_written(tmp_path: Path) -> None:
    store = JsonStore(tmp_path)
    store.save("doc.json", {"usa": []})

    assert store.save("doc.json", {"usa": [{"id": 1, "weight": float("nan")}]}) is False
    assert (tmp_path / "doc.json").read_text(encoding="utf-8") == json.dumps({"usa": []}, indent=2)
