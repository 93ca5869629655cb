"""Tests for key-value storage backends and atomic writes."""

import json
from unittest.mock import patch

import pytest

from tasklist.persistence import FileDefaults, MemoryDefaults
from tasklist.persistence._utils import atomic_write_text


class TestMemoryDefaults:
    def test_get_set_remove(self):
        defaults = MemoryDefaults()
        assert defaults.get("k") is None
        defaults.set("k", "v")
        assert defaults.get("k") == "v"
        assert "k" in defaults
        defaults.remove("k")
        defaults.remove("k")
        assert defaults.get("k") is None

    def test_initial_values_copied(self):
        initial = {"k": "v"}
        defaults = MemoryDefaults(initial)
        defaults.set("k", "changed")
        assert initial["k"] == "v"


class TestFileDefaults:
    def test_missing_file_reads_empty(self, tmp_path):
        defaults = FileDefaults(tmp_path / "defaults.json")
        assert defaults.get("tasks") is None
        assert "tasks" not in defaults

    def test_set_creates_file_and_parents(self, tmp_path):
        path = tmp_path / "a" / "b" / "defaults.json"
        defaults = FileDefaults(path)
        defaults.set("tasks", "[]")
        assert json.loads(path.read_text()) == {"tasks": "[]"}

    def test_set_keeps_other_keys(self, tmp_path):
        defaults = FileDefaults(tmp_path / "defaults.json")
        defaults.set("a", "1")
        defaults.set("b", "2")
        defaults.set("a", "3")
        assert defaults.get("a") == "3"
        assert defaults.get("b") == "2"

    def test_values_survive_new_instance(self, tmp_path):
        path = tmp_path / "defaults.json"
        FileDefaults(path).set("tasks", '{"version": 1, "tasks": []}')
        assert FileDefaults(path).get("tasks") == '{"version": 1, "tasks": []}'

    def test_remove(self, tmp_path):
        defaults = FileDefaults(tmp_path / "defaults.json")
        defaults.set("a", "1")
        defaults.set("b", "2")
        defaults.remove("a")
        defaults.remove("missing")
        assert defaults.get("a") is None
        assert defaults.get("b") == "2"

    @pytest.mark.parametrize("content", ["", "{broken", "[1, 2]", '"text"'])
    def test_unreadable_file_reads_empty(self, tmp_path, content):
        path = tmp_path / "defaults.json"
        path.write_text(content)
        defaults = FileDefaults(path)
        assert defaults.get("tasks") is None

    def test_non_string_values_ignored(self, tmp_path):
        path = tmp_path / "defaults.json"
        path.write_text(json.dumps({"tasks": [1, 2], "name": "x"}))
        defaults = FileDefaults(path)
        assert defaults.get("tasks") is None
        assert defaults.get("name") == "x"

    def test_corrupt_file_replaced_on_write(self, tmp_path):
        path = tmp_path / "defaults.json"
        path.write_text("{broken")
        defaults = FileDefaults(path)
        defaults.set("tasks", "[]")
        assert json.loads(path.read_text()) == {"tasks": "[]"}

    def test_deeply_nested_file_reads_empty(self, tmp_path):
        path = tmp_path / "defaults.json"
        path.write_text("[" * 100000)
        defaults = FileDefaults(path)
        assert defaults.get("tasks") is None

    def test_unencodable_value_raises_and_keeps_file(self, tmp_path):
        path = tmp_path / "defaults.json"
        defaults = FileDefaults(path)
        defaults.set("tasks", "old")

        with pytest.raises(UnicodeEncodeError):
            defaults.set("tasks", "bad \ud800")

        assert defaults.get("tasks") == "old"
        assert not (tmp_path / "defaults.json.tmp").exists()

    def test_failed_write_keeps_previous_file(self, tmp_path):
        path = tmp_path / "defaults.json"
        defaults = FileDefaults(path)
        defaults.set("tasks", "old")

        with patch("pathlib.Path.replace", side_effect=OSError("no space")):
            with pytest.raises(OSError):
                defaults.set("tasks", "new")

        assert defaults.get("tasks") == "old"


class TestAtomicWrite:
    def test_no_tmp_left_behind(self, tmp_path):
        path = tmp_path / "defaults.json"
        atomic_write_text(path, "{}")
        assert path.read_text() == "{}"
        assert not (tmp_path / "defaults.json.tmp").exists()

    def test_tmp_removed_when_rename_fails(self, tmp_path):
        path = tmp_path / "defaults.json"
        with patch("pathlib.Path.replace", side_effect=OSError("no space")):
            with pytest.raises(OSError):
                atomic_write_text(path, "{}")
        assert not path.exists()
        assert not (tmp_path / "defaults.json.tmp").exists()
