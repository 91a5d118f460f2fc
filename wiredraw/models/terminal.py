"""
Terminal - Anchor point owned by a component that wires attach to.

This module contains no Qt dependencies. Terminal positions are stored
relative to the owning component; the absolute position is recomputed on
every query so attached wires follow component movement implicitly.
"""

import logging
from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

from .geometry import Point, coerce_number, distance_sq, rotate_about
from .surface import RenderSurface
from .validation import SetterResult, check_color, check_number, report

if TYPE_CHECKING:
    from .component import ComponentData

logger = logging.getLogger(__name__)

# Pixels added to radius + owner hit margin when hit-testing a terminal
TERMINAL_HIT_SLACK = 2.0


@runtime_checkable
class TerminalLike(Protocol):
    """The capability a wire needs from whatever it is anchored to."""

    def get_absolute_position(self) -> Point: ...


def is_terminal_like(value) -> bool:
    return callable(getattr(value, "get_absolute_position", None))


class Terminal:
    """
    A named connection point on a component.

    Wires hold non-owning references to terminals, and terminals keep a
    list of the wires attached to them so a deleted wire can be detached
    from both ends.
    """

    def __init__(
        self,
        terminal_id: str,
        position_x: float = 0.0,
        position_y: float = 0.0,
        parent: Optional["ComponentData"] = None,
        radius: float = 4.0,
        color: str = "#0000FF",
    ):
        self.terminal_id = terminal_id
        self.parent = parent
        self._position_x = 0.0
        self._position_y = 0.0
        self._radius = 4.0
        self._color = "#0000FF"
        self._connected_wires: list = []
        self.set_position_x(position_x)
        self.set_position_y(position_y)
        self.set_radius(radius)
        self.set_color(color)

    # --- Validated fields ---

    @property
    def position_x(self) -> float:
        return self._position_x

    @position_x.setter
    def position_x(self, value) -> None:
        self.set_position_x(value)

    def set_position_x(self, value) -> SetterResult:
        result = report(check_number("position_x", value), logger, "Terminal")
        if result.ok:
            self._position_x = result.value
        return result

    @property
    def position_y(self) -> float:
        return self._position_y

    @position_y.setter
    def position_y(self, value) -> None:
        self.set_position_y(value)

    def set_position_y(self, value) -> SetterResult:
        result = report(check_number("position_y", value), logger, "Terminal")
        if result.ok:
            self._position_y = result.value
        return result

    @property
    def radius(self) -> float:
        return self._radius

    @radius.setter
    def radius(self, value) -> None:
        self.set_radius(value)

    def set_radius(self, value) -> SetterResult:
        result = report(check_number("radius", value, minimum=0), logger, "Terminal")
        if result.ok:
            self._radius = result.value
        return result

    @property
    def color(self) -> str:
        return self._color

    @color.setter
    def color(self, value) -> None:
        self.set_color(value)

    def set_color(self, value) -> SetterResult:
        result = report(check_color("color", value), logger, "Terminal")
        if result.ok:
            self._color = result.value
        return result

    # --- Wire back-references ---

    @property
    def connected_wires(self) -> list:
        """Wires currently attached to this terminal (copy)."""
        return list(self._connected_wires)

    def add_wire(self, wire) -> None:
        """Register a wire; adding the same wire twice is a no-op."""
        if not any(w is wire for w in self._connected_wires):
            self._connected_wires.append(wire)

    def remove_wire(self, wire) -> None:
        self._connected_wires = [w for w in self._connected_wires if w is not wire]

    def has_wire(self, wire) -> bool:
        return any(w is wire for w in self._connected_wires)

    # --- Geometry ---

    def get_absolute_position(self) -> Point:
        """
        Return the terminal position in surface coordinates.

        Without a parent the stored position is already absolute. With a
        parent the position is offset by the parent's top-left corner, and
        when the parent sets ``terminals_follow_transform`` the point is
        flipped and then rotated about the parent's centre.
        """
        parent = self.parent
        if parent is None:
            return Point(self._position_x, self._position_y)

        parent_x = coerce_number(parent.position[0])
        parent_y = coerce_number(parent.position[1])
        local = Point(parent_x + self._position_x, parent_y + self._position_y)

        if not parent.terminals_follow_transform:
            return local

        center = parent.center()
        vx = local.x - center.x
        vy = local.y - center.y
        if parent.flip_h:
            vx = -vx
        if parent.flip_v:
            vy = -vy
        flipped = Point(center.x + vx, center.y + vy)
        return rotate_about(flipped, center, coerce_number(parent.rotation))

    def is_hit(self, x: float, y: float) -> bool:
        position = self.get_absolute_position()
        margin = coerce_number(getattr(self.parent, "hit_margin", 0.0)) if self.parent else 0.0
        hit_radius = self._radius + margin + TERMINAL_HIT_SLACK
        return distance_sq(x, y, position.x, position.y) <= hit_radius * hit_radius

    def draw(self, surface: RenderSurface) -> None:
        position = self.get_absolute_position()
        surface.save()
        surface.set_fill_color(self._color)
        surface.set_stroke_color("#000000")
        surface.set_stroke_width(1)
        surface.begin_path()
        surface.circle(position.x, position.y, self._radius)
        surface.fill()
        surface.stroke()
        surface.restore()

    # --- Serialization ---

    def to_dict(self) -> dict:
        return {"id": self.terminal_id, "x": self._position_x, "y": self._position_y}

    @classmethod
    def from_dict(cls, data: dict, parent: Optional["ComponentData"] = None) -> "Terminal":
        if not isinstance(data, dict):
            raise TypeError("Invalid data for Terminal.from_dict: expected a dict")
        return cls(
            data.get("id"),
            coerce_number(data.get("x")),
            coerce_number(data.get("y")),
            parent=parent,
        )

    def __repr__(self) -> str:
        owner = self.parent.component_id if self.parent is not None else None
        return f"Terminal({self.terminal_id!r}, owner={owner!r})"
