from __future__ import annotations

import json
from pathlib import Path

import pytest

from qr_bingo.serialize import grid_hash, sheet_from_dict, sheet_to_dict
from qr_bingo.store import JsonFileSheetStore, MemorySheetStore


def test_memory_store_starts_empty():
    store = MemorySheetStore()
    assert store.find() is None
    assert store.exists() is False


def test_memory_store_hands_out_working_copies(grid3):
    store = MemorySheetStore()
    assert store.save(grid3) is grid3
    copy = store.find()
    copy.slots[0][0].punched = True
    assert store.find().slots[0][0].punched is False
    store.save(copy)
    assert store.find().slots[0][0].punched is True
    store.clear()
    assert store.find() is None


def test_json_store_persists_flags_and_metadata(tmp_path: Path, grid3):
    grid3.slots[1][1].punched = True
    grid3.slots[1][1].bingo = True
    path = tmp_path / "nested" / "sheet.json"
    store = JsonFileSheetStore(path, params_hash="sha256:abc")
    store.save(grid3)

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["grid_hash"] == grid_hash(grid3)
    assert data["run_meta"]["params_hash"] == "sha256:abc"

    loaded = JsonFileSheetStore(path).find()
    assert [s.value for s in loaded.flat()] == [s.value for s in grid3.flat()]
    assert loaded.slots[1][1].punched and loaded.slots[1][1].bingo
    assert loaded.initialized == grid3.initialized


def test_json_store_keeps_params_hash_across_saves(tmp_path: Path, grid3):
    path = tmp_path / "sheet.json"
    JsonFileSheetStore(path, params_hash="sha256:keep").save(grid3)
    store = JsonFileSheetStore(path)
    store.save(store.find())
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["run_meta"]["params_hash"] == "sha256:keep"


def test_json_store_missing_file_is_none(tmp_path: Path):
    assert JsonFileSheetStore(tmp_path / "none.json").find() is None


def test_json_store_corrupt_file_raises(tmp_path: Path):
    path = tmp_path / "sheet.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        JsonFileSheetStore(path).find()
    path.write_text('{"sheet": {"width": 2, "height": 1, "slots": [[]]}}', encoding="utf-8")
    with pytest.raises(ValueError):
        JsonFileSheetStore(path).find()


def test_sheet_dict_uses_image_url_key(grid3):
    grid3.slots[0][0].image_url = "https://example.com/p.png"
    data = sheet_to_dict(grid3)
    assert data["slots"][0][0]["imageURL"] == "https://example.com/p.png"
    assert sheet_from_dict(data).slots[0][0].image_url == "https://example.com/p.png"


def test_incomplete_store_cannot_be_created():
    from qr_bingo.store import SheetStore

    class FindOnly(SheetStore):
        def find(self):
            return None

    with pytest.raises(TypeError):
        FindOnly()
