"""
Unit tests for persisted UI preferences and atomic JSON writes.
"""

import json
from pathlib import Path

import pytest
from resosorter.preferences import PreferenceStore
from resosorter.utils import atomic_write_json


@pytest.mark.unit
class TestPreferenceStore:
    """Test cases for PreferenceStore."""

    def test_defaults_without_file(self, tmp_path: Path):
        store = PreferenceStore(tmp_path / "prefs.json")

        assert store.theme == "light"
        assert store.collapsed is False
        assert not (tmp_path / "prefs.json").exists()

    def test_theme_persisted(self, tmp_path: Path):
        path = tmp_path / "prefs.json"
        PreferenceStore(path).theme = "dark"

        assert PreferenceStore(path).theme == "dark"
        assert json.loads(path.read_text())["theme"] == "dark"

    def test_unknown_theme_rejected(self, tmp_path: Path):
        store = PreferenceStore(tmp_path / "prefs.json")
        with pytest.raises(ValueError, match="Unknown theme"):
            store.theme = "sepia"

    def test_toggle_collapsed(self, tmp_path: Path):
        path = tmp_path / "prefs.json"
        store = PreferenceStore(path)

        assert store.toggle_collapsed() is True
        assert PreferenceStore(path).collapsed is True
        assert store.toggle_collapsed() is False
        assert PreferenceStore(path).collapsed is False

    def test_opaque_keys(self, tmp_path: Path):
        path = tmp_path / "prefs.json"
        PreferenceStore(path).set("window", {"x": 20, "y": 20})

        assert PreferenceStore(path).get("window") == {"x": 20, "y": 20}
        assert PreferenceStore(path).get("missing", "fallback") == "fallback"

    def test_corrupt_file_falls_back_to_defaults(self, tmp_path: Path):
        path = tmp_path / "prefs.json"
        path.write_text("{not json")

        store = PreferenceStore(path)
        assert store.theme == "light"

        store.theme = "dark"
        assert json.loads(path.read_text()) == {"theme": "dark"}

    def test_non_object_file_ignored(self, tmp_path: Path):
        path = tmp_path / "prefs.json"
        path.write_text("[1, 2, 3]")
        assert PreferenceStore(path).collapsed is False

    def test_invalid_stored_theme(self, tmp_path: Path):
        path = tmp_path / "prefs.json"
        path.write_text(json.dumps({"theme": "neon"}))
        assert PreferenceStore(path).theme == "light"


@pytest.mark.unit
class TestAtomicWrite:
    """Test atomic JSON writing."""

    def test_atomic_write_json_basic(self, tmp_path: Path):
        target = tmp_path / "test.json"
        data = {"theme": "dark", "collapsed": True}

        atomic_write_json(target, data)

        assert json.loads(target.read_text()) == data

    def test_atomic_write_json_creates_parent_dir(self, tmp_path: Path):
        nested = tmp_path / "nested" / "deep" / "test.json"
        atomic_write_json(nested, {"created": "nested"})
        assert nested.exists()

    def test_atomic_write_json_invalid_data(self, tmp_path: Path):
        target = tmp_path / "test.json"
        with pytest.raises(ValueError, match="Cannot serialize data to JSON"):
            atomic_write_json(target, {"function": lambda x: x})
        assert not target.exists()

    def test_no_temp_files_left_behind(self, tmp_path: Path):
        target = tmp_path / "test.json"
        atomic_write_json(target, {"a": 1})
        atomic_write_json(target, {"a": 2})

        assert [p.name for p in tmp_path.iterdir()] == ["test.json"]
        assert json.loads(target.read_text()) == {"a": 2}
