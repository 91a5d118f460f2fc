"""Selection handle markers drawn over selected entities."""

from dataclasses import dataclass
from enum import Enum

from .surface import RenderSurface


class HandleType(Enum):
    SQUARE = "square"  # terminal endpoints (not editable through the wire)
    DOT = "dot"  # interior path nodes


@dataclass
class Handle:
    """A small marker centred on (x, y)."""

    x: float
    y: float
    handle_type: HandleType = HandleType.SQUARE
    size: float = 5.0
    fill_color: str = "#00ccff66"
    border_color: str = "#00ccffff"
    border_size: float = 1.0

    def top_left(self) -> tuple[float, float]:
        """Return the marker's top-left corner, accounting for the border."""
        offset = self.size / 2 + self.border_size / 2
        return (self.x - offset, self.y - offset)

    def draw(self, surface: RenderSurface) -> None:
        surface.save()
        surface.set_stroke_color(self.border_color)
        surface.set_fill_color(self.fill_color)
        surface.set_stroke_width(self.border_size)
        if self.handle_type is HandleType.DOT:
            self._draw_dot(surface)
        else:
            self._draw_square(surface)
        surface.restore()

    def _draw_square(self, surface: RenderSurface) -> None:
        left, top = self.top_left()
        inner = max(0.0, self.size - self.border_size)
        surface.begin_path()
        surface.rectangle(left, top, inner, inner)
        surface.fill()
        surface.begin_path()
        surface.rectangle(left, top, self.size, self.size)
        surface.stroke()

    def _draw_dot(self, surface: RenderSurface) -> None:
        left, top = self.top_left()
        radius = max(0.0, (self.size - self.border_size) / 2)
        surface.begin_path()
        surface.circle(left + self.size / 2, top + self.size / 2, radius)
        surface.fill()
        surface.stroke()
