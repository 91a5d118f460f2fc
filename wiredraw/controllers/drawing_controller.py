"""
DrawingController - Orchestrates component and wire editing for a session.

This module contains no Qt dependencies. It mutates the DrawingModel,
keeps terminal back-references consistent when wires are created or
deleted, records per-wire snapshots in a HistoryStore, and notifies views
of changes through an observer pattern.
"""

import logging
from typing import Any, Callable, Optional, Union

from ..models.component import COMPONENT_PREFIXES, DEFAULT_TERMINALS, TWO_TERMINAL_LAYOUT, ComponentData
from ..models.drawing import DrawingModel
from ..models.geometry import snap_to_grid
from ..models.surface import RecordingSurface, RenderSurface
from ..models.terminal import Terminal
from ..models.validation import SetterResult
from ..models.wire import Wire
from .editor_settings import EditorSettings
from .history_store import HistoryStore

logger = logging.getLogger(__name__)

Element = Union[Wire, Terminal, ComponentData]


class DrawingController:
    """
    Controller for the editing session.

    Observer events:
        component_added (ComponentData) - A component was placed
        component_removed (str) - A component was removed (by ID)
        component_moved (ComponentData) - A component (and its terminals) moved
        wire_started (Wire) - A temporary wire was created
        wire_extended (Wire) - A point was added to the temporary wire
        wire_added (Wire) - The temporary wire was committed
        wire_cancelled (Wire) - The temporary wire was abandoned
        wire_removed (Wire) - A wire was deleted
        wire_moved (Wire) - A free wire was translated
        wire_edited (Wire) - Wire properties or nodes changed
        wire_restored (Wire) - A history snapshot was applied
        selection_changed (list) - Selected wires changed
        drawing_cleared (None) - Everything was removed
    """

    def __init__(
        self,
        model: Optional[DrawingModel] = None,
        settings: Optional[EditorSettings] = None,
        history: Optional[HistoryStore] = None,
    ):
        self.model = model or DrawingModel()
        self.settings = settings or EditorSettings()
        if history is None:
            depth = self.settings.get("history_max_depth")
            history = HistoryStore(max_depth=depth if depth and depth > 0 else None)
        self.history: HistoryStore[str, dict] = history
        self.active_wire: Optional[Wire] = None
        self._observers: list[Callable[[str, Any], None]] = []
        # Hit-testing only needs geometry, not a real backend
        self._probe = RecordingSurface()

    def add_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Register a callback for model change events."""
        if callback not in self._observers:
            self._observers.append(callback)

    def remove_observer(self, callback: Callable[[str, Any], None]) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self, event: str, data: Any) -> None:
        """Notify all observers of a model change."""
        for observer in self._observers:
            try:
                observer(event, data)
            except (TypeError, AttributeError, RuntimeError) as e:
                logger.error("Error notifying observer: %s", e)

    def snap(self, value: float) -> float:
        """Round a coordinate to the grid when snapping is enabled."""
        if not self.settings.get("snap_to_grid"):
            return value
        return snap_to_grid(value, self.settings.get("grid_size"))

    # --- Component operations ---

    def add_component(
        self,
        component_type: str,
        position: tuple[float, float],
        terminal_layout: Optional[list[tuple[str, float, float]]] = None,
        width: float = 40.0,
        height: float = 20.0,
    ) -> ComponentData:
        """
        Create and place a component with its terminals.

        Ids come from a per-prefix counter (R1, R2, ...). Terminal ids are
        ``<component id>.<terminal name>`` so they are unique per drawing.
        """
        prefix = COMPONENT_PREFIXES.get(component_type, "X")
        count = self.model.component_counter.get(prefix, 0) + 1
        self.model.component_counter[prefix] = count
        component_id = f"{prefix}{count}"

        component = ComponentData(
            component_id=component_id,
            component_type=component_type,
            position=(self.snap(position[0]), self.snap(position[1])),
            width=width,
            height=height,
            hit_margin=self.settings.get("hit_margin"),
        )
        layout = terminal_layout
        if layout is None:
            layout = DEFAULT_TERMINALS.get(component_type, TWO_TERMINAL_LAYOUT)
        for name, x, y in layout:
            component.add_terminal(f"{component_id}.{name}", x, y)

        self.model.add_component(component)
        self._notify("component_added", component)
        return component

    def remove_component(self, component_id: str) -> None:
        """Remove a component and delete every wire attached to it."""
        for wire in self.model.remove_component(component_id):
            self.delete_wire(wire)
        self._notify("component_removed", component_id)

    def move_component(self, component_id: str, dx: float, dy: float) -> None:
        """Move a component; attached wires follow through their terminals."""
        component = self.model.components.get(component_id)
        if component is None:
            return
        component.move(dx, dy)
        self._notify("component_moved", component)

    # --- Wire drawing gesture ---

    def begin_wire(self, start_terminal: Optional[Terminal] = None, x=None, y=None) -> Wire:
        """
        Start a temporary wire, anchored to ``start_terminal`` if given,
        otherwise starting at the free point (x, y).
        """
        if self.active_wire is not None:
            self.cancel_wire()

        wire = Wire(start_terminal, hit_margin=self.settings.get("hit_margin"))
        wire.edit(
            {
                "color": self.settings.get("wire_color"),
                "line_width": self.settings.get("wire_line_width"),
                "line_dash": self.settings.get("wire_line_dash"),
                "is_temporary": True,
            }
        )
        if start_terminal is not None:
            start_terminal.add_wire(wire)
        elif x is not None and y is not None:
            wire.add_point(self.snap(x), self.snap(y))

        self.active_wire = wire
        self.model.add_wire(wire)
        self._notify("wire_started", wire)
        return wire

    def extend_wire(self, x: float, y: float) -> None:
        """Add a bend point to the wire being drawn."""
        if self.active_wire is None:
            return
        self.active_wire.add_point(self.snap(x), self.snap(y))
        self._notify("wire_extended", self.active_wire)

    def finish_wire(self, end_terminal: Optional[Terminal] = None) -> Optional[Wire]:
        """
        Commit the wire being drawn.

        A wire that would render fewer than two points is discarded instead.

        Returns:
            The committed wire, or None if nothing was committed.
        """
        wire = self.active_wire
        if wire is None:
            return None

        if end_terminal is not None:
            wire.end_terminal = end_terminal
            end_terminal.add_wire(wire)

        if len(wire.get_all_points()) < 2:
            self.cancel_wire()
            return None

        wire.is_temporary = False
        self.active_wire = None
        self.history.initialize(wire.unique_id, self.snapshot(wire))
        self._notify("wire_added", wire)
        return wire

    def cancel_wire(self) -> None:
        """Abandon the wire being drawn (e.g. Escape mid-gesture)."""
        wire = self.active_wire
        if wire is None:
            return
        self.active_wire = None
        self._detach(wire)
        self.model.remove_wire(wire)
        self._notify("wire_cancelled", wire)

    # --- Wire operations ---

    def _detach(self, wire: Wire) -> None:
        for terminal in (wire.start_terminal, wire.end_terminal):
            if terminal is not None and hasattr(terminal, "remove_wire"):
                terminal.remove_wire(wire)

    def delete_wire(self, wire: Wire) -> None:
        """Delete a wire, dropping it from both terminals and from history."""
        if wire is self.active_wire:
            self.cancel_wire()
            return
        self._detach(wire)
        if not self.model.remove_wire(wire):
            return
        if wire.unique_id in self.history:
            self.history.clear(wire.unique_id)
        self._notify("wire_removed", wire)

    def delete_selected(self) -> int:
        """Delete all selected wires. Returns the number deleted."""
        selected = self.selected_wires()
        for wire in selected:
            self.delete_wire(wire)
        if selected:
            self._notify("selection_changed", [])
        return len(selected)

    def move_wire(self, wire: Wire, dx: float, dy: float) -> bool:
        """Translate a free wire and record the result. Attached wires ignore this."""
        self.ensure_history(wire)
        if not wire.move(dx, dy):
            return False
        self._commit(wire)
        self._notify("wire_moved", wire)
        return True

    def move_selection(self, dx: float, dy: float) -> int:
        """Move every selected free wire. Returns how many moved."""
        return sum(1 for wire in self.selected_wires() if self.move_wire(wire, dx, dy))

    def edit_wire(self, wire: Wire, properties: dict) -> dict[str, SetterResult]:
        """
        Apply property edits and record a snapshot if anything was accepted.
        """
        self.ensure_history(wire)
        results = wire.edit(properties)
        if any(result.ok for result in results.values()):
            self._commit(wire)
            self._notify("wire_edited", wire)
        return results

    def move_wire_node(self, wire: Wire, index: int, x: float, y: float) -> bool:
        """Drag one interior node to (x, y), snapped."""
        self.ensure_history(wire)
        if not wire.move_point(index, self.snap(x), self.snap(y)):
            return False
        self._commit(wire)
        self._notify("wire_edited", wire)
        return True

    def insert_wire_node(self, wire: Wire, index: int, x: float, y: float) -> None:
        self.ensure_history(wire)
        wire.insert_point(index, self.snap(x), self.snap(y))
        self._commit(wire)
        self._notify("wire_edited", wire)

    def remove_wire_node(self, wire: Wire, index: int) -> bool:
        self.ensure_history(wire)
        if wire.remove_point(index) is None:
            return False
        self._commit(wire)
        self._notify("wire_edited", wire)
        return True

    def find_node_at(self, wire: Wire, x: float, y: float) -> Optional[int]:
        return wire.find_node_at(x, y, self.settings.get("node_handle_radius"))

    # --- History ---

    @staticmethod
    def snapshot(wire: Wire) -> dict:
        """A self-contained copy of the wire's editable state."""
        return wire.to_dict()

    def ensure_history(self, wire: Wire) -> None:
        """Start a history for the wire with its current state (no-op if present)."""
        self.history.initialize(wire.unique_id, self.snapshot(wire))

    def _commit(self, wire: Wire) -> None:
        self.history.push(wire.unique_id, self.snapshot(wire))

    def _apply(self, wire: Wire, snapshot: dict) -> None:
        wire.edit(
            {
                "path": snapshot["path"],
                "color": snapshot["color"],
                "line_width": snapshot["lineWidth"],
                "line_dash": snapshot["lineDash"],
            }
        )
        self._notify("wire_restored", wire)

    def undo_wire(self, wire: Wire) -> bool:
        """Step a wire back one snapshot. Returns False if there was nothing to undo."""
        key = wire.unique_id
        if key not in self.history or not self.history.can_undo(key):
            return False
        self._apply(wire, self.history.undo(key))
        return True

    def redo_wire(self, wire: Wire) -> bool:
        key = wire.unique_id
        if key not in self.history or not self.history.can_redo(key):
            return False
        self._apply(wire, self.history.redo(key))
        return True

    def restore_wire(self, wire: Wire, index: int) -> None:
        """
        Jump a wire to a specific snapshot.

        Raises:
            HistoryKeyError: If the wire has no history.
            HistoryIndexError: If index is out of range.
        """
        self._apply(wire, self.history.restore(wire.unique_id, index))

    # --- Selection and hit-testing ---

    def find_element_at(self, x: float, y: float) -> Optional[Element]:
        """
        Return the topmost element under (x, y).

        Committed wires are checked newest first, then terminals, then
        component bounding boxes.
        """
        for wire in reversed(self.model.wires):
            if not wire.is_temporary and wire.is_hit(self._probe, x, y):
                return wire
        components = list(self.model.components.values())
        for component in reversed(components):
            for terminal in component.terminals:
                if terminal.is_hit(x, y):
                    return terminal
        for component in reversed(components):
            if component.is_hit(x, y):
                return component
        return None

    def selected_wires(self) -> list[Wire]:
        return [w for w in self.model.wires if w.is_selected]

    def select_wire(self, wire: Wire, additive: bool = False) -> None:
        if not additive:
            for other in self.model.wires:
                other.deselect()
        wire.select()
        self._notify("selection_changed", self.selected_wires())

    def select_at(self, x: float, y: float, additive: bool = False) -> Optional[Wire]:
        """Select the wire under (x, y); clicking empty space clears the selection."""
        element = self.find_element_at(x, y)
        if isinstance(element, Wire):
            self.select_wire(element, additive)
            return element
        if not additive:
            self.clear_selection()
        return None

    def clear_selection(self) -> None:
        for wire in self.model.wires:
            wire.deselect()
        self._notify("selection_changed", [])

    # --- Rendering ---

    def draw(self, surface: RenderSurface) -> None:
        """Draw terminals, then wires in order (later wires on top)."""
        for component in self.model.components.values():
            for terminal in component.terminals:
                terminal.draw(surface)
        for wire in self.model.wires:
            wire.draw(surface)

    def clear(self) -> None:
        self.active_wire = None
        self.model.clear()
        self.history.clear_all()
        self._notify("drawing_cleared", None)
