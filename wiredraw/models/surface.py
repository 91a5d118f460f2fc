"""
RenderSurface - Drawing capability contract consumed by the shape model.

This module contains no Qt dependencies. Entities draw through the
``RenderSurface`` protocol only; concrete backends (a QPainter adapter in
GUI/, or the headless ``RecordingSurface`` below) implement it.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence, runtime_checkable


@runtime_checkable
class RenderSurface(Protocol):
    """Stateful drawing surface used by Wire, Terminal and Handle."""

    def save(self) -> None: ...

    def restore(self) -> None: ...

    def set_stroke_color(self, color: str) -> None: ...

    def set_stroke_width(self, width: float) -> None: ...

    def set_stroke_dash(self, dash: Sequence[float]) -> None: ...

    def set_stroke_cap(self, cap: str) -> None: ...

    def set_stroke_join(self, join: str) -> None: ...

    def set_fill_color(self, color: str) -> None: ...

    def begin_path(self) -> None: ...

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def circle(self, x: float, y: float, radius: float) -> None: ...

    def rectangle(self, x: float, y: float, width: float, height: float) -> None: ...

    def stroke(self) -> None: ...

    def fill(self) -> None: ...

    def text(self, x: float, y: float, content: str) -> None: ...


@dataclass
class SurfaceState:
    """Style state saved and restored by RecordingSurface."""

    stroke_color: str = "#000000"
    stroke_width: float = 1.0
    stroke_dash: list[float] = field(default_factory=list)
    stroke_cap: str = "butt"
    stroke_join: str = "miter"
    fill_color: str = "#000000"

    def copy(self) -> "SurfaceState":
        return SurfaceState(
            stroke_color=self.stroke_color,
            stroke_width=self.stroke_width,
            stroke_dash=list(self.stroke_dash),
            stroke_cap=self.stroke_cap,
            stroke_join=self.stroke_join,
            fill_color=self.fill_color,
        )


class RecordingSurface:
    """
    Headless RenderSurface that records every call as a command list.

    Used for previews that only need geometry (hit-testing has no use for a
    real backend) and by the test suite to inspect what an entity drew.
    """

    def __init__(self):
        self.commands: list[tuple[str, tuple[Any, ...]]] = []
        self.state = SurfaceState()
        self._stack: list[SurfaceState] = []

    def _record(self, name: str, *args) -> None:
        self.commands.append((name, args))

    # --- Scoped state ---

    def save(self) -> None:
        self._stack.append(self.state.copy())
        self._record("save")

    def restore(self) -> None:
        if self._stack:
            self.state = self._stack.pop()
        self._record("restore")

    @property
    def depth(self) -> int:
        """Number of unmatched save() calls."""
        return len(self._stack)

    # --- Style ---

    def set_stroke_color(self, color: str) -> None:
        self.state.stroke_color = color
        self._record("set_stroke_color", color)

    def set_stroke_width(self, width: float) -> None:
        self.state.stroke_width = width
        self._record("set_stroke_width", width)

    def set_stroke_dash(self, dash: Sequence[float]) -> None:
        self.state.stroke_dash = list(dash)
        self._record("set_stroke_dash", list(dash))

    def set_stroke_cap(self, cap: str) -> None:
        self.state.stroke_cap = cap
        self._record("set_stroke_cap", cap)

    def set_stroke_join(self, join: str) -> None:
        self.state.stroke_join = join
        self._record("set_stroke_join", join)

    def set_fill_color(self, color: str) -> None:
        self.state.fill_color = color
        self._record("set_fill_color", color)

    # --- Geometry ---

    def begin_path(self) -> None:
        self._record("begin_path")

    def move_to(self, x: float, y: float) -> None:
        self._record("move_to", x, y)

    def line_to(self, x: float, y: float) -> None:
        self._record("line_to", x, y)

    def circle(self, x: float, y: float, radius: float) -> None:
        self._record("circle", x, y, radius)

    def rectangle(self, x: float, y: float, width: float, height: float) -> None:
        self._record("rectangle", x, y, width, height)

    def stroke(self) -> None:
        self._record("stroke")

    def fill(self) -> None:
        self._record("fill")

    def text(self, x: float, y: float, content: str) -> None:
        self._record("text", x, y, content)

    # --- Inspection ---

    def calls(self, name: str) -> list[tuple[Any, ...]]:
        """Return the argument tuples of every recorded call with this name."""
        return [args for cmd, args in self.commands if cmd == name]

    def names(self) -> list[str]:
        return [cmd for cmd, _ in self.commands]

    def clear(self) -> None:
        self.commands.clear()
