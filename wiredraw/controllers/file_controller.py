"""
FileController - Handles drawing file I/O.

File dialog interaction is the responsibility of the view layer.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from ..models.drawing import DrawingModel

logger = logging.getLogger(__name__)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_drawing_data(data) -> None:
    """
    Validate JSON structure before loading.

    Terminal references must be strings or null. An id that no terminal
    carries is reported after loading, not rejected.

    Raises:
        ValueError: With a descriptive message if the structure is invalid.
    """
    if not isinstance(data, dict):
        raise ValueError("File does not contain a valid drawing object.")

    if "components" not in data or not isinstance(data["components"], list):
        raise ValueError("Missing or invalid 'components' list.")
    if "wires" not in data or not isinstance(data["wires"], list):
        raise ValueError("Missing or invalid 'wires' list.")

    for i, comp in enumerate(data["components"]):
        if not isinstance(comp, dict):
            raise ValueError(f"Component #{i + 1} is not an object.")
        for key in ("id", "pos"):
            if key not in comp:
                raise ValueError(f"Component #{i + 1} is missing required field '{key}'.")
        pos = comp["pos"]
        if not isinstance(pos, dict) or not _is_number(pos.get("x")) or not _is_number(pos.get("y")):
            raise ValueError(f"Component '{comp['id']}' has invalid position data.")
        terminals = comp.get("terminals", [])
        if not isinstance(terminals, list):
            raise ValueError(f"Component '{comp['id']}' has an invalid 'terminals' list.")
        for term in terminals:
            if not isinstance(term, dict) or "id" not in term:
                raise ValueError(f"Component '{comp['id']}' has a terminal without an id.")

    for i, wire in enumerate(data["wires"]):
        if not isinstance(wire, dict):
            raise ValueError(f"Wire #{i + 1} is not an object.")
        if "id" not in wire:
            raise ValueError(f"Wire #{i + 1} is missing required field 'id'.")
        path = wire.get("path", [])
        if not isinstance(path, list):
            raise ValueError(f"Wire '{wire['id']}' has an invalid 'path' list.")
        for key in ("startTerminalId", "endTerminalId"):
            ref = wire.get(key)
            if ref is not None and not isinstance(ref, str):
                raise ValueError(f"Wire '{wire['id']}' has an invalid '{key}'.")
        for point in path:
            if not isinstance(point, dict) or not _is_number(point.get("x")) or not _is_number(point.get("y")):
                raise ValueError(f"Wire '{wire['id']}' has a non-numeric path point.")


class FileController:
    """
    Saves and loads drawings as JSON.

    Loading replaces the controller's model contents in place so views
    holding a reference to the model stay connected.
    """

    def __init__(self, model: Optional[DrawingModel] = None, drawing_ctrl=None):
        self.model = model or DrawingModel()
        self.drawing_ctrl = drawing_ctrl  # for observer notifications
        self.current_file: Optional[Path] = None

    def new_drawing(self) -> None:
        """Clear the drawing and reset file state."""
        if self.drawing_ctrl:
            self.drawing_ctrl.clear()
        else:
            self.model.clear()
        self.current_file = None

    def save_drawing(self, filepath) -> None:
        """
        Save the drawing to a JSON file. Temporary wires are not written.

        Raises:
            OSError: If the file cannot be written.
        """
        filepath = Path(filepath)
        data = self.model.to_dict()
        with open(filepath, "w") as f:
            json.dump(data, f, indent=2)
        self.current_file = filepath
        logger.info("Saved drawing to %s", filepath)

        if self.drawing_ctrl:
            self.drawing_ctrl._notify("model_saved", None)

    def load_drawing(self, filepath) -> list:
        """
        Load a drawing from a JSON file.

        Returns:
            The unresolved terminal references found while loading.

        Raises:
            json.JSONDecodeError: If the file is not valid JSON.
            ValueError: If the file structure is invalid.
            OSError: If the file cannot be read.
        """
        filepath = Path(filepath)
        with open(filepath, "r") as f:
            data = json.load(f)

        validate_drawing_data(data)
        new_model = DrawingModel.from_dict(data)

        if self.drawing_ctrl:
            self.drawing_ctrl.active_wire = None
            self.drawing_ctrl.history.clear_all()
        self.model.clear()
        self.model.components = new_model.components
        self.model.wires = new_model.wires
        self.model.component_counter = new_model.component_counter
        self.model.unresolved = new_model.unresolved

        self.current_file = filepath
        logger.info("Loaded drawing from %s (%d wires)", filepath, len(self.model.wires))

        if self.drawing_ctrl:
            self.drawing_ctrl._notify("model_loaded", None)
        return list(self.model.unresolved)

    def has_file(self) -> bool:
        return self.current_file is not None

    def get_window_title(self, base: str = "wiredraw") -> str:
        if self.current_file:
            return f"{base} - {self.current_file.name}"
        return base
