"""
Wire - Connectivity-aware polyline between optional terminals.

This module contains no Qt dependencies. A wire is an optional start
terminal, an ordered list of interior bend points and an optional end
terminal. Terminal positions are re-queried every time geometry is needed,
so an attached wire follows its components without being updated.

Persistence is two-phase: to_dict() stores terminal ids only, from_dict()
rebuilds the scalar fields, and resolve_terminals() reconnects the ids to
live Terminal objects once every component has been reconstructed.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

from .entity import DEFAULT_HIT_MARGIN, EditableEntity
from .geometry import Point, coerce_number, distance_sq, point_from_any, polyline_hit
from .handle import Handle, HandleType
from .surface import RenderSurface
from .terminal import TerminalLike, is_terminal_like
from .validation import (
    Accepted,
    Rejected,
    SetterResult,
    check_color,
    check_dash,
    check_number,
    check_points,
    report,
)

logger = logging.getLogger(__name__)

DEFAULT_WIRE_COLOR = "#000000"
DEFAULT_WIRE_WIDTH = 2.0


@dataclass(frozen=True)
class TerminalResolution:
    """Outcome of Wire.resolve_terminals()."""

    resolved_start: bool
    resolved_end: bool

    @property
    def complete(self) -> bool:
        return self.resolved_start and self.resolved_end


def terminal_id_of(terminal) -> Optional[str]:
    """Return the id cached on a terminal object, or None."""
    if terminal is None:
        return None
    return getattr(terminal, "terminal_id", None) or getattr(terminal, "id", None) or None


def _lookup(mapping, key):
    """Look up ``key`` in a dict-like table or an attribute namespace."""
    if mapping is None or not isinstance(key, str):
        return None
    if isinstance(mapping, Mapping) or callable(getattr(mapping, "get", None)):
        try:
            return mapping.get(key)
        except TypeError:
            return None
    return getattr(mapping, key, None)


class Wire(EditableEntity):
    """
    An electrical wire drawn as an open polyline.

    Geometry is ``[start terminal] + path + [end terminal]``. A wire with
    either terminal set is attached and ignores move(); only free wires
    translate as a rigid body.
    """

    EDITABLE_PROPERTIES = ("color", "line_width", "line_dash", "is_temporary", "path")

    def __init__(
        self,
        start_terminal: Optional[TerminalLike] = None,
        end_terminal: Optional[TerminalLike] = None,
        unique_id: Optional[str] = None,
        hit_margin: float = DEFAULT_HIT_MARGIN,
    ):
        super().__init__(unique_id=unique_id, hit_margin=hit_margin)
        self._start_terminal: Optional[TerminalLike] = None
        self._end_terminal: Optional[TerminalLike] = None
        self._path: list[Point] = []
        self._color = DEFAULT_WIRE_COLOR
        self._line_width = DEFAULT_WIRE_WIDTH
        self._line_dash: list[float] = []
        self._is_temporary = False

        # Terminal ids read by from_dict(), kept until resolve_terminals() succeeds
        self.pending_start_id: Optional[str] = None
        self.pending_end_id: Optional[str] = None

        self.set_start_terminal(start_terminal)
        self.set_end_terminal(end_terminal)

    def _report(self, result: SetterResult) -> SetterResult:
        return report(result, logger, "Wire")

    # --- Terminals ---

    @property
    def start_terminal(self) -> Optional[TerminalLike]:
        return self._start_terminal

    @start_terminal.setter
    def start_terminal(self, value) -> None:
        self.set_start_terminal(value)

    def set_start_terminal(self, value) -> SetterResult:
        result = self._report(self._check_terminal("start_terminal", value))
        if result.ok:
            self._start_terminal = value
        return result

    @property
    def end_terminal(self) -> Optional[TerminalLike]:
        return self._end_terminal

    @end_terminal.setter
    def end_terminal(self, value) -> None:
        self.set_end_terminal(value)

    def set_end_terminal(self, value) -> SetterResult:
        result = self._report(self._check_terminal("end_terminal", value))
        if result.ok:
            self._end_terminal = value
        return result

    @staticmethod
    def _check_terminal(field: str, value) -> SetterResult:
        if value is not None and not is_terminal_like(value):
            return Rejected(field, value, "must be None or a terminal")
        return Accepted(value)

    @property
    def is_attached(self) -> bool:
        return self._start_terminal is not None or self._end_terminal is not None

    def is_connected_to(self, terminal) -> bool:
        return self._start_terminal is terminal or self._end_terminal is terminal

    # --- Path ---

    @property
    def path(self) -> list[Point]:
        """Interior bend points in traversal order (live list)."""
        return self._path

    @path.setter
    def path(self, value) -> None:
        self.set_path(value)

    def set_path(self, value) -> SetterResult:
        result = self._report(check_points("path", value))
        if result.ok:
            self._path = result.value
        return result

    def add_point(self, x, y) -> Point:
        """Append an interior point; non-numeric coordinates become 0."""
        point = Point(coerce_number(x), coerce_number(y))
        self._path.append(point)
        return point

    def insert_point(self, index: int, x, y) -> Point:
        """Insert an interior point before ``index`` (clamped); a non-int index appends."""
        point = Point(coerce_number(x), coerce_number(y))
        if isinstance(index, bool) or not isinstance(index, int):
            index = len(self._path)
        index = max(0, min(index, len(self._path)))
        self._path.insert(index, point)
        return point

    def remove_point(self, index) -> Optional[Point]:
        """Remove and return the interior point at ``index``; invalid indices are ignored."""
        if isinstance(index, bool) or not isinstance(index, int):
            return None
        if index < 0 or index >= len(self._path):
            return None
        return self._path.pop(index)

    def move_point(self, index: int, x, y) -> bool:
        """Relocate a single interior point. Terminal endpoints are not addressable."""
        if isinstance(index, bool) or not isinstance(index, int):
            return False
        if index < 0 or index >= len(self._path):
            return False
        self._path[index] = Point(coerce_number(x), coerce_number(y))
        return True

    def find_node_at(self, x: float, y: float, radius: float) -> Optional[int]:
        """Return the index of the first interior point within ``radius`` of (x, y)."""
        radius_sq = radius * radius
        for index, point in enumerate(self._path):
            if distance_sq(x, y, point.x, point.y) <= radius_sq:
                return index
        return None

    # --- Style ---

    @property
    def color(self) -> str:
        return self._color

    @color.setter
    def color(self, value) -> None:
        self.set_color(value)

    def set_color(self, value) -> SetterResult:
        result = self._report(check_color("color", value))
        if result.ok:
            self._color = result.value
        return result

    @property
    def line_width(self) -> float:
        return self._line_width

    @line_width.setter
    def line_width(self, value) -> None:
        self.set_line_width(value)

    def set_line_width(self, value) -> SetterResult:
        result = self._report(check_number("line_width", value, minimum=0))
        if result.ok:
            self._line_width = result.value
        return result

    @property
    def line_dash(self) -> list[float]:
        return self._line_dash

    @line_dash.setter
    def line_dash(self, value) -> None:
        self.set_line_dash(value)

    def set_line_dash(self, value) -> SetterResult:
        result = self._report(check_dash("line_dash", value))
        if result.ok:
            self._line_dash = result.value
        return result

    @property
    def is_temporary(self) -> bool:
        return self._is_temporary

    @is_temporary.setter
    def is_temporary(self, value) -> None:
        self.set_is_temporary(value)

    def set_is_temporary(self, value) -> SetterResult:
        self._is_temporary = bool(value)
        return Accepted(self._is_temporary)

    # --- Geometry ---

    def get_all_points(self) -> list[Point]:
        """
        Return the rendered polyline: start terminal, path, end terminal.

        Points are fresh copies; mutating them does not affect the wire.
        """
        points = []
        if self._start_terminal is not None:
            points.append(self._terminal_point(self._start_terminal))
        points.extend(Point(p.x, p.y) for p in self._path)
        if self._end_terminal is not None:
            points.append(self._terminal_point(self._end_terminal))
        return points

    @staticmethod
    def _terminal_point(terminal: TerminalLike) -> Point:
        position = terminal.get_absolute_position()
        return point_from_any(position) or Point(
            coerce_number(getattr(position, "x", 0.0)), coerce_number(getattr(position, "y", 0.0))
        )

    def hit_tolerance(self) -> float:
        return self._line_width / 2 + self.hit_margin

    def is_hit(self, surface: RenderSurface, x: float, y: float) -> bool:
        """
        Return True if (x, y) is within line_width / 2 + hit_margin of any
        segment, measured to the closest point on the segment.
        """
        return polyline_hit(self.get_all_points(), float(x), float(y), self.hit_tolerance())

    def move(self, dx: float, dy: float) -> bool:
        """Translate every interior point in place. Attached wires never move."""
        if self.is_attached:
            return False
        dx = coerce_number(dx)
        dy = coerce_number(dy)
        for point in self._path:
            point.x += dx
            point.y += dy
        return True

    # --- Rendering ---

    def draw(self, surface: RenderSurface) -> None:
        points = self.get_all_points()
        if len(points) < 2:
            return

        surface.save()
        surface.set_stroke_color(self._color)
        surface.set_stroke_width(self._line_width)
        surface.set_stroke_dash(self._line_dash)
        surface.set_stroke_cap("round")
        surface.set_stroke_join("round")
        surface.begin_path()
        surface.move_to(points[0].x, points[0].y)
        for point in points[1:]:
            surface.line_to(point.x, point.y)
        surface.stroke()
        surface.restore()

        if self.is_selected:
            self.draw_selection_handles(surface)

    def selection_handles(self) -> list[Handle]:
        """DOT handles for interior nodes, SQUARE handles for attached terminals."""
        handles = [Handle(p.x, p.y, HandleType.DOT) for p in self._path]
        for terminal in (self._start_terminal, self._end_terminal):
            if terminal is not None:
                position = self._terminal_point(terminal)
                handles.append(Handle(position.x, position.y, HandleType.SQUARE))
        return handles

    def draw_selection_handles(self, surface: RenderSurface) -> None:
        for handle in self.selection_handles():
            handle.draw(surface)

    # --- Serialization ---

    def to_dict(self) -> dict:
        """
        Serialize the wire. Terminals are stored by id only, never nested.
        """
        return {
            "id": self.unique_id,
            "startTerminalId": terminal_id_of(self._start_terminal),
            "endTerminalId": terminal_id_of(self._end_terminal),
            "path": [p.to_dict() for p in self._path],
            "color": self._color,
            "lineWidth": self._line_width,
            "lineDash": list(self._line_dash),
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        start_terminal: Optional[TerminalLike] = None,
        end_terminal: Optional[TerminalLike] = None,
        hit_margin: float = DEFAULT_HIT_MARGIN,
    ) -> "Wire":
        """
        Rebuild a wire from its scalar fields.

        Terminals may be passed directly (same-session reconstruction);
        otherwise they stay None and the stored ids are kept as
        pending_start_id / pending_end_id for resolve_terminals().

        Raises:
            TypeError: If data is not a dict.
        """
        if not isinstance(data, dict):
            raise TypeError("Invalid data for Wire.from_dict: expected a dict")

        wire = cls(start_terminal, end_terminal, unique_id=data.get("id"), hit_margin=hit_margin)
        raw_path = data.get("path")
        path = []
        if isinstance(raw_path, list):
            for raw in raw_path:
                raw = raw if isinstance(raw, dict) else {}
                path.append(Point(coerce_number(raw.get("x")), coerce_number(raw.get("y"))))

        props = {"path": path}
        for key, name in (("color", "color"), ("lineWidth", "line_width"), ("lineDash", "line_dash")):
            if key in data:
                props[name] = data[key]
        wire.edit(props)

        wire.pending_start_id = data.get("startTerminalId")
        wire.pending_end_id = data.get("endTerminalId")
        return wire

    def resolve_terminals(self, mapping, start_id=None, end_id=None) -> TerminalResolution:
        """
        Reconnect terminal references from an id -> Terminal table.

        For each end the id used is, in order: the explicit argument, the id
        cached on the currently assigned terminal, or the pending id read by
        from_dict(). A lookup miss leaves that terminal None and reports
        False; it never raises.
        """
        resolved_start = self._resolve_end("start", mapping, start_id)
        resolved_end = self._resolve_end("end", mapping, end_id)
        return TerminalResolution(resolved_start, resolved_end)

    def _resolve_end(self, end: str, mapping, explicit_id) -> bool:
        current = getattr(self, f"_{end}_terminal")
        candidate_id = explicit_id
        if candidate_id is None:
            candidate_id = terminal_id_of(current)
        if candidate_id is None:
            candidate_id = getattr(self, f"pending_{end}_id")
        if candidate_id is None:
            return False

        found = _lookup(mapping, candidate_id)
        if found is not None and is_terminal_like(found):
            setattr(self, f"_{end}_terminal", found)
            setattr(self, f"pending_{end}_id", None)
            return True

        logger.debug("Wire %s: %s terminal %r not found", self.unique_id, end, candidate_id)
        setattr(self, f"_{end}_terminal", None)
        setattr(self, f"pending_{end}_id", candidate_id)
        return False

    def __repr__(self) -> str:
        return (
            f"Wire({self.unique_id[:8]}, {terminal_id_of(self._start_terminal)} -> "
            f"{terminal_id_of(self._end_terminal)}, {len(self._path)} points)"
        )
