"""
ComponentData - Pure Python data model for components that own terminals.

This module contains no Qt dependencies. Positions are (x, y) tuples for
the component's top-left corner. Component bodies are not rendered here;
the component only provides placement, a bounding box for hit-testing and
the terminals wires attach to.
"""

from dataclasses import dataclass, field
from typing import Optional

from .entity import DEFAULT_HIT_MARGIN
from .geometry import Point, coerce_number
from .terminal import Terminal

# Prefixes used when generating component ids (R1, C2, ...)
COMPONENT_PREFIXES = {
    "Resistor": "R",
    "Capacitor": "C",
    "Inductor": "L",
    "Voltage Source": "V",
    "Current Source": "I",
    "Ground": "GND",
    "Diode": "D",
    "Switch": "S",
    "Connector": "J",
}

# Default terminal layout per component type: (name, x, y) relative to top-left
DEFAULT_TERMINALS = {
    "Ground": [("A", 20.0, 0.0)],
    "Connector": [("A", 0.0, 10.0)],
}
TWO_TERMINAL_LAYOUT = [("A", 0.0, 10.0), ("B", 40.0, 10.0)]


@dataclass
class ComponentData:
    """
    Pure Python data class representing a placed component.

    Terminals are stored relative to the component's top-left corner, so
    moving the component moves every terminal (and with it the geometry of
    every attached wire) without touching the terminals themselves.
    """

    component_id: str
    component_type: str = "Generic"
    position: tuple[float, float] = (0.0, 0.0)  # top-left, scene coordinates
    width: float = 40.0
    height: float = 20.0
    rotation: float = 0.0  # degrees, applied about the centre
    flip_h: bool = False
    flip_v: bool = False
    terminals_follow_transform: bool = False
    hit_margin: float = DEFAULT_HIT_MARGIN
    terminals: list[Terminal] = field(default_factory=list, repr=False, compare=False)

    def add_terminal(self, terminal_id: str, x: float, y: float) -> Terminal:
        """Create a terminal at (x, y) relative to the component origin."""
        terminal = Terminal(terminal_id, x, y, parent=self)
        self.terminals.append(terminal)
        return terminal

    def get_terminal(self, terminal_id: str) -> Optional[Terminal]:
        for terminal in self.terminals:
            if terminal.terminal_id == terminal_id:
                return terminal
        return None

    def attached_wires(self) -> list:
        """Every wire attached to any of this component's terminals (no duplicates)."""
        wires = []
        for terminal in self.terminals:
            for wire in terminal.connected_wires:
                if not any(w is wire for w in wires):
                    wires.append(wire)
        return wires

    def move(self, dx: float, dy: float) -> None:
        self.position = (self.position[0] + dx, self.position[1] + dy)

    def center(self) -> Point:
        return Point(self.position[0] + self.width / 2, self.position[1] + self.height / 2)

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Return (x, y, width, height) enlarged by the hit margin on every side."""
        margin = self.hit_margin
        return (
            self.position[0] - margin,
            self.position[1] - margin,
            self.width + 2 * margin,
            self.height + 2 * margin,
        )

    def is_hit(self, x: float, y: float) -> bool:
        left, top, width, height = self.bounding_box()
        return left <= x <= left + width and top <= y <= top + height

    def to_dict(self) -> dict:
        """Serialize component and its terminals to a dictionary."""
        return {
            "id": self.component_id,
            "type": self.component_type,
            "pos": {"x": self.position[0], "y": self.position[1]},
            "width": self.width,
            "height": self.height,
            "rotation": self.rotation,
            "flip_h": self.flip_h,
            "flip_v": self.flip_v,
            "terminals_follow_transform": self.terminals_follow_transform,
            "terminals": [t.to_dict() for t in self.terminals],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ComponentData":
        """
        Deserialize a component, recreating its terminals with this
        component as their parent.
        """
        if not isinstance(data, dict):
            raise TypeError("Invalid data for ComponentData.from_dict: expected a dict")
        pos = data.get("pos") or {}
        component = cls(
            component_id=data["id"],
            component_type=data.get("type", "Generic"),
            position=(coerce_number(pos.get("x")), coerce_number(pos.get("y"))),
            width=coerce_number(data.get("width"), 40.0),
            height=coerce_number(data.get("height"), 20.0),
            rotation=coerce_number(data.get("rotation")),
            flip_h=bool(data.get("flip_h", False)),
            flip_v=bool(data.get("flip_v", False)),
            terminals_follow_transform=bool(data.get("terminals_follow_transform", False)),
        )
        for terminal_data in data.get("terminals", []):
            component.terminals.append(Terminal.from_dict(terminal_data, parent=component))
        return component

    def __repr__(self) -> str:
        return f"ComponentData({self.component_id!r}, {self.component_type!r}, pos={self.position})"
