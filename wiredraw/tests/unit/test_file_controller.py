"""Tests for FileController."""

import json
from unittest.mock import MagicMock

import pytest
from wiredraw.controllers.drawing_controller import DrawingController
from wiredraw.controllers.file_controller import FileController, validate_drawing_data
from wiredraw.models.drawing import DrawingModel
from wiredraw.models.geometry import Point
from wiredraw.models.wire import Wire

from wiredraw.tests.conftest import make_component


def _build_simple_drawing():
    """Build R1 -> R2 with one bend, plus a free wire and a temporary wire."""
    model = DrawingModel()
    r1 = make_component("R1", (0.0, 0.0))
    r2 = make_component("R2", (100.0, 0.0))
    model.add_component(r1)
    model.add_component(r2)
    model.component_counter = {"R": 2}

    connected = Wire(r1.get_terminal("R1.B"), r2.get_terminal("R2.A"), unique_id="w-connected")
    connected.add_point(70, 10)
    connected.color = "#ff0000"
    free = Wire(unique_id="w-free")
    free.path = [(0, 100), (50, 100)]
    free.line_dash = [4, 2]
    temporary = Wire(unique_id="w-temp")
    temporary.path = [(0, 0), (1, 1)]
    temporary.is_temporary = True
    for wire in (connected, free, temporary):
        model.add_wire(wire)
    return model


def _write(tmp_path, data, name="drawing.json"):
    filepath = tmp_path / name
    filepath.write_text(json.dumps(data))
    return filepath


class TestSaveLoad:
    def test_save_creates_file(self, tmp_path):
        ctrl = FileController(_build_simple_drawing())
        filepath = tmp_path / "test.json"
        ctrl.save_drawing(filepath)
        assert filepath.exists()
        assert ctrl.current_file == filepath

    def test_save_skips_temporary_wires(self, tmp_path):
        ctrl = FileController(_build_simple_drawing())
        filepath = tmp_path / "test.json"
        ctrl.save_drawing(filepath)
        data = json.loads(filepath.read_text())
        assert [w["id"] for w in data["wires"]] == ["w-connected", "w-free"]
        assert data["counters"] == {"R": 2}

    def test_load_reconnects_terminals(self, tmp_path):
        filepath = tmp_path / "test.json"
        FileController(_build_simple_drawing()).save_drawing(filepath)

        model = DrawingModel()
        ctrl = FileController(model)
        unresolved = ctrl.load_drawing(filepath)

        assert unresolved == []
        wire = model.get_wire("w-connected")
        r1, r2 = model.components["R1"], model.components["R2"]
        assert wire.start_terminal is r1.get_terminal("R1.B")
        assert wire.end_terminal is r2.get_terminal("R2.A")
        assert r1.get_terminal("R1.B").has_wire(wire)
        assert wire.color == "#ff0000"
        assert wire.get_all_points() == [Point(40, 10), Point(70, 10), Point(100, 10)]
        assert model.get_wire("w-free").line_dash == [4, 2]

    def test_load_replaces_model_in_place(self, tmp_path):
        filepath = tmp_path / "test.json"
        FileController(_build_simple_drawing()).save_drawing(filepath)

        model = DrawingModel()
        model.add_wire(Wire(unique_id="stale"))
        ctrl = FileController(model)
        ctrl.load_drawing(filepath)
        assert ctrl.model is model
        assert model.get_wire("stale") is None
        assert len(model.wires) == 2

    def test_load_reports_unresolved_terminals(self, tmp_path, caplog):
        data = {
            "components": [],
            "wires": [{"id": "w1", "startTerminalId": "R9.A", "endTerminalId": None, "path": [{"x": 0, "y": 0}]}],
        }
        ctrl = FileController(DrawingModel())
        unresolved = ctrl.load_drawing(_write(tmp_path, data))
        assert len(unresolved) == 1
        assert (unresolved[0].wire_id, unresolved[0].end, unresolved[0].terminal_id) == ("w1", "start", "R9.A")
        assert ctrl.model.get_wire("w1").start_terminal is None
        assert "could not be resolved" in caplog.text

    def test_load_invalid_json_raises(self, tmp_path):
        filepath = tmp_path / "broken.json"
        filepath.write_text("{ not json")
        with pytest.raises(json.JSONDecodeError):
            FileController().load_drawing(filepath)

    def test_load_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            FileController().load_drawing(tmp_path / "missing.json")

    def test_failed_load_keeps_current_drawing(self, tmp_path):
        model = _build_simple_drawing()
        ctrl = FileController(model)
        with pytest.raises(ValueError):
            ctrl.load_drawing(_write(tmp_path, {"components": "nope", "wires": []}))
        assert len(model.wires) == 3
        assert ctrl.current_file is None

    def test_load_rejects_non_string_terminal_id(self, tmp_path):
        model = _build_simple_drawing()
        ctrl = FileController(model)
        data = {"components": [], "wires": [{"id": "w", "startTerminalId": ["x"], "path": []}]}
        with pytest.raises(ValueError, match="invalid 'startTerminalId'"):
            ctrl.load_drawing(_write(tmp_path, data))
        assert len(model.wires) == 3


class TestControllerIntegration:
    def test_notifies_observers(self, tmp_path, settings):
        drawing_ctrl = DrawingController(settings=settings)
        observer = MagicMock()
        drawing_ctrl.add_observer(observer)
        ctrl = FileController(drawing_ctrl.model, drawing_ctrl)

        filepath = tmp_path / "test.json"
        ctrl.save_drawing(filepath)
        observer.assert_called_with("model_saved", None)
        ctrl.load_drawing(filepath)
        observer.assert_called_with("model_loaded", None)

    def test_load_resets_history_and_active_wire(self, tmp_path, settings):
        drawing_ctrl = DrawingController(settings=settings)
        ctrl = FileController(drawing_ctrl.model, drawing_ctrl)
        wire = drawing_ctrl.begin_wire(x=0, y=0)
        drawing_ctrl.extend_wire(10, 0)
        drawing_ctrl.finish_wire()
        drawing_ctrl.begin_wire(x=50, y=50)

        filepath = tmp_path / "test.json"
        FileController(_build_simple_drawing()).save_drawing(filepath)
        ctrl.load_drawing(filepath)

        assert drawing_ctrl.active_wire is None
        assert wire.unique_id not in drawing_ctrl.history
        assert drawing_ctrl.model.get_wire("w-connected") is not None

    def test_new_drawing_clears(self, tmp_path, settings):
        drawing_ctrl = DrawingController(settings=settings)
        ctrl = FileController(drawing_ctrl.model, drawing_ctrl)
        drawing_ctrl.add_component("Resistor", (0, 0))
        ctrl.current_file = tmp_path / "old.json"
        ctrl.new_drawing()
        assert drawing_ctrl.model.components == {}
        assert not ctrl.has_file()

    def test_new_drawing_without_controller(self):
        model = _build_simple_drawing()
        ctrl = FileController(model)
        ctrl.new_drawing()
        assert model.wires == []


class TestWindowTitle:
    def test_untitled(self):
        assert FileController().get_window_title() == "wiredraw"

    def test_with_file(self, tmp_path):
        ctrl = FileController(_build_simple_drawing())
        ctrl.save_drawing(tmp_path / "amp.json")
        assert ctrl.get_window_title() == "wiredraw - amp.json"
        assert ctrl.get_window_title("Editor") == "Editor - amp.json"


class TestValidateDrawingData:
    def test_valid_data(self):
        validate_drawing_data(_build_simple_drawing().to_dict())

    def test_empty_drawing_is_valid(self):
        validate_drawing_data({"components": [], "wires": []})

    @pytest.mark.parametrize(
        "data,message",
        [
            ([], "valid drawing object"),
            ({"wires": []}, "'components'"),
            ({"components": []}, "'wires'"),
            ({"components": ["R1"], "wires": []}, "Component #1 is not an object"),
            ({"components": [{"pos": {"x": 0, "y": 0}}], "wires": []}, "missing required field 'id'"),
            ({"components": [{"id": "R1"}], "wires": []}, "missing required field 'pos'"),
            ({"components": [{"id": "R1", "pos": {"x": "0", "y": 0}}], "wires": []}, "invalid position"),
            (
                {"components": [{"id": "R1", "pos": {"x": 0, "y": 0}, "terminals": {}}], "wires": []},
                "invalid 'terminals'",
            ),
            (
                {"components": [{"id": "R1", "pos": {"x": 0, "y": 0}, "terminals": [{"x": 0}]}], "wires": []},
                "terminal without an id",
            ),
            ({"components": [], "wires": [5]}, "Wire #1 is not an object"),
            ({"components": [], "wires": [{"path": []}]}, "Wire #1 is missing required field 'id'"),
            ({"components": [], "wires": [{"id": "w", "path": "0,0"}]}, "invalid 'path'"),
            ({"components": [], "wires": [{"id": "w", "path": [{"x": 0, "y": True}]}]}, "non-numeric path point"),
            (
                {"components": [], "wires": [{"id": "w", "startTerminalId": ["x"], "path": []}]},
                "invalid 'startTerminalId'",
            ),
            ({"components": [], "wires": [{"id": "w", "endTerminalId": 5, "path": []}]}, "invalid 'endTerminalId'"),
        ],
    )
    def test_invalid_data(self, data, message):
        with pytest.raises(ValueError, match=message):
            validate_drawing_data(data)

    def test_dangling_terminal_ids_are_not_rejected(self):
        validate_drawing_data({"components": [], "wires": [{"id": "w", "startTerminalId": "ghost", "path": []}]})
