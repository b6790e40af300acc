"""
Tests for JSON state persistence.
"""

import json

import pytest

from duocalc.lang import StorageError
from duocalc.storage import CalcState, FileStorage


class TestLoad:
    """Test reading the state file."""

    def test_missing_file_is_empty_state(self, tmp_path):
        state = FileStorage(tmp_path / "nope.json").load()
        assert state == CalcState()

    def test_load_full_state_file(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text(json.dumps({
            "variables": {"x": 5, "y": 2.5},
            "string_variables": {"s": "hello"},
            "history": ["x = 5", "y = 2.5"],
        }))
        state = FileStorage(path).load()
        assert state.numbers == {"x": 5.0, "y": 2.5}
        assert isinstance(state.numbers["x"], float)
        assert state.strings == {"s": "hello"}
        assert state.history == ["x = 5", "y = 2.5"]

    def test_null_sections(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text('{"variables": null, "string_variables": null, "history": null}')
        assert FileStorage(path).load() == CalcState()

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("{not json")
        with pytest.raises(StorageError) as exc_info:
            FileStorage(path).load()
        assert exc_info.value.code == "E401"

    @pytest.mark.parametrize("document", [
        [],
        {"variables": {"x": "five"}},
        {"variables": {"x": True}},
        {"string_variables": {"s": 1}},
        {"history": "x = 1"},
        {"history": [1, 2]},
        {"variables": []},
        {"variables": 0},
        {"string_variables": ""},
        {"string_variables": []},
        {"history": 0},
        {"history": ""},
        {"history": {}},
        {"variables": [], "history": 0},
    ])
    def test_wrong_shapes(self, tmp_path, document):
        path = tmp_path / "state.json"
        path.write_text(json.dumps(document))
        with pytest.raises(StorageError):
            FileStorage(path).load()


class TestSave:
    """Test writing the state file."""

    def test_round_trip(self, tmp_path):
        storage = FileStorage(tmp_path / "state.json")
        state = CalcState({"x": 1.5}, {"s": "text"}, ["x = 1.5"])
        storage.save(state)
        assert storage.load() == state

    def test_file_layout(self, tmp_path):
        path = tmp_path / "state.json"
        FileStorage(path).save(CalcState({"x": 1.0}, {}, ["x = 1"]))
        data = json.loads(path.read_text())
        assert data == {"variables": {"x": 1.0}, "string_variables": {}, "history": ["x = 1"]}
        assert '\n  "variables"' in path.read_text()

    def test_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "state.json"
        FileStorage(path).save(CalcState())
        assert path.exists()

    def test_no_temporary_files_left(self, tmp_path):
        storage = FileStorage(tmp_path / "state.json")
        storage.save(CalcState({"x": 1.0}, {}, ["x = 1"]))
        storage.save(CalcState({"x": 2.0}, {}, ["x = 2"]))
        assert [p.name for p in tmp_path.iterdir()] == ["state.json"]

    def test_failed_write_keeps_previous_state(self, tmp_path, monkeypatch):
        storage = FileStorage(tmp_path / "state.json")
        before = CalcState({"x": 1.0}, {"s": "kept"}, ["x = 1"])
        storage.save(before)

        def broken_dump(obj, fp, **kwargs):
            fp.write('{"variables": {"x"')
            raise OSError("disk full")

        monkeypatch.setattr("duocalc.storage.json.dump", broken_dump)
        with pytest.raises(OSError):
            storage.save(CalcState({"x": 2.0}, {}, ["x = 2"]))

        monkeypatch.undo()
        assert storage.load() == before
        assert [p.name for p in tmp_path.iterdir()] == ["state.json"]
