"""Tests for the JSON folder registry."""

import json

from logmycode.collector.folders import FolderStore


def test_load_missing_file_is_empty(tmp_path):
    assert FolderStore(tmp_path / "folders.json").load() == []


def test_add_resolves_and_dedupes_in_order(tmp_path):
    store = FolderStore(tmp_path / "config" / "folders.json")
    a = tmp_path / "a"
    b = tmp_path / "b"

    store.add(a, b)
    folders = store.add(a, tmp_path / "x" / ".." / "b")

    assert folders == [str(a.resolve()), str(b.resolve())]
    assert json.loads(store.path.read_text())["folders"] == folders


def test_clear(tmp_path):
    store = FolderStore(tmp_path / "folders.json")
    store.add(tmp_path)

    store.clear()

    assert store.load() == []
