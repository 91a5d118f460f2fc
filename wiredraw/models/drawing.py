"""
DrawingModel - Central data store for drawing state.

This module contains no Qt dependencies. It holds components (which own
terminals) and wires, and performs the two-phase reconstruction that
reconnects persisted terminal ids to live Terminal objects.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from .component import ComponentData
from .terminal import Terminal
from .wire import Wire

logger = logging.getLogger(__name__)


@dataclass
class UnresolvedReference:
    """A wire end whose terminal id was missing from the terminal table."""

    wire_id: str
    end: str  # "start" or "end"
    terminal_id: str


@dataclass
class DrawingModel:
    """
    Central data store holding all drawing state.

    Wires are kept in drawing order: later wires are drawn on top and are
    found first by hit-testing.
    """

    components: dict[str, ComponentData] = field(default_factory=dict)
    wires: list[Wire] = field(default_factory=list)
    component_counter: dict[str, int] = field(default_factory=dict)
    unresolved: list[UnresolvedReference] = field(default_factory=list)

    # --- Component operations ---

    def add_component(self, component: ComponentData) -> None:
        self.components[component.component_id] = component

    def remove_component(self, component_id: str) -> list[Wire]:
        """
        Remove a component and return the wires attached to its terminals.

        The caller is responsible for deleting (or detaching) the returned
        wires; the model does not touch them.
        """
        component = self.components.pop(component_id, None)
        if component is None:
            return []
        return [w for w in self.wires if any(w.is_connected_to(t) for t in component.terminals)]

    # --- Wire operations ---

    def add_wire(self, wire: Wire) -> None:
        if not any(w is wire for w in self.wires):
            self.wires.append(wire)

    def remove_wire(self, wire: Wire) -> bool:
        for index, existing in enumerate(self.wires):
            if existing is wire:
                del self.wires[index]
                return True
        return False

    def get_wire(self, wire_id: str) -> Optional[Wire]:
        for wire in self.wires:
            if wire.unique_id == wire_id:
                return wire
        return None

    # --- Terminal table ---

    def terminal_map(self) -> dict[str, Terminal]:
        """
        Build the id -> Terminal table used to resolve wire references.

        Terminal ids are expected to be unique across the drawing; on a
        collision the first terminal wins and a warning is logged.
        """
        table: dict[str, Terminal] = {}
        for component in self.components.values():
            for terminal in component.terminals:
                if terminal.terminal_id in table:
                    logger.warning(
                        "Duplicate terminal id %r on %s ignored", terminal.terminal_id, component.component_id
                    )
                    continue
                table[terminal.terminal_id] = terminal
        return table

    def wires_attached_to(self, terminal: Terminal) -> list[Wire]:
        return [w for w in self.wires if w.is_connected_to(terminal)]

    def clear(self) -> None:
        self.components.clear()
        self.wires.clear()
        self.component_counter.clear()
        self.unresolved.clear()

    # --- Serialization ---

    def to_dict(self) -> dict:
        return {
            "components": [c.to_dict() for c in self.components.values()],
            "wires": [w.to_dict() for w in self.wires if not w.is_temporary],
            "counters": dict(self.component_counter),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DrawingModel":
        """
        Rebuild a drawing in two phases.

        Phase one recreates components (and their terminals) and wires from
        scalar data. Phase two resolves each wire's terminal ids against the
        complete terminal table and registers the wire with the terminals it
        attached to. Unresolved ids are recorded in ``unresolved``.
        """
        if not isinstance(data, dict):
            raise TypeError("Invalid data for DrawingModel.from_dict: expected a dict")

        model = cls()
        for comp_data in data.get("components", []):
            component = ComponentData.from_dict(comp_data)
            model.components[component.component_id] = component
        model.component_counter = dict(data.get("counters", {}))

        wires = [Wire.from_dict(w) for w in data.get("wires", [])]

        table = model.terminal_map()
        for wire in wires:
            start_id, end_id = wire.pending_start_id, wire.pending_end_id
            result = wire.resolve_terminals(table)
            if start_id is not None and not result.resolved_start:
                model.unresolved.append(UnresolvedReference(wire.unique_id, "start", start_id))
            if end_id is not None and not result.resolved_end:
                model.unresolved.append(UnresolvedReference(wire.unique_id, "end", end_id))
            for terminal in (wire.start_terminal, wire.end_terminal):
                if terminal is not None:
                    terminal.add_wire(wire)
            model.wires.append(wire)

        if model.unresolved:
            logger.warning("%d wire terminal reference(s) could not be resolved", len(model.unresolved))
        return model
