"""
QPainterSurface - RenderSurface implementation backed by a QPainter.

Colors use CSS hex notation (#RRGGBB or #RRGGBBAA) as stored in the model;
Qt's own 8-digit form is #AARRGGBB, so alpha colors are converted here.
"""

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QPainter, QPainterPath, QPen

CAP_STYLES = {
    "round": Qt.PenCapStyle.RoundCap,
    "butt": Qt.PenCapStyle.FlatCap,
    "square": Qt.PenCapStyle.SquareCap,
}

JOIN_STYLES = {
    "round": Qt.PenJoinStyle.RoundJoin,
    "miter": Qt.PenJoinStyle.MiterJoin,
    "bevel": Qt.PenJoinStyle.BevelJoin,
}


def css_to_qcolor(value: str) -> QColor:
    """Convert a CSS color string to QColor, honouring #RRGGBBAA alpha."""
    if isinstance(value, str) and value.startswith("#") and len(value) == 9:
        try:
            r, g, b, a = (int(value[i:i + 2], 16) for i in (1, 3, 5, 7))
        except ValueError:
            return QColor(value)
        return QColor(r, g, b, a)
    return QColor(value)


class QPainterSurface:
    """
    Adapts an active QPainter to the RenderSurface contract.

    Path commands accumulate into a QPainterPath until stroke() or fill();
    begin_path() starts a new one. save()/restore() wrap QPainter's own
    state stack together with the pen, brush and dash settings kept here.
    """

    def __init__(self, painter: QPainter):
        self.painter = painter
        self._pen = QPen(QColor("#000000"))
        self._pen.setWidthF(1.0)
        self._brush = QBrush(QColor("#000000"))
        self._dash: list[float] = []
        self._path = QPainterPath()
        self._stack: list[tuple[QPen, QBrush, list[float]]] = []

    # --- Scoped state ---

    def save(self) -> None:
        self.painter.save()
        self._stack.append((QPen(self._pen), QBrush(self._brush), list(self._dash)))

    def restore(self) -> None:
        if self._stack:
            self._pen, self._brush, self._dash = self._stack.pop()
        self.painter.restore()

    # --- Style ---

    def set_stroke_color(self, color: str) -> None:
        self._pen.setColor(css_to_qcolor(color))

    def set_stroke_width(self, width: float) -> None:
        self._pen.setWidthF(float(width))
        # Qt dash patterns are in units of pen width
        self._apply_dash()

    def set_stroke_dash(self, dash) -> None:
        self._dash = [float(d) for d in dash]
        self._apply_dash()

    def _apply_dash(self) -> None:
        if not self._dash or not any(self._dash):
            self._pen.setStyle(Qt.PenStyle.SolidLine)
            return
        pattern = list(self._dash)
        if len(pattern) % 2:
            pattern = pattern * 2
        width = self._pen.widthF() or 1.0
        self._pen.setDashPattern([max(d / width, 1e-3) for d in pattern])

    def set_stroke_cap(self, cap: str) -> None:
        self._pen.setCapStyle(CAP_STYLES.get(cap, Qt.PenCapStyle.FlatCap))

    def set_stroke_join(self, join: str) -> None:
        self._pen.setJoinStyle(JOIN_STYLES.get(join, Qt.PenJoinStyle.MiterJoin))

    def set_fill_color(self, color: str) -> None:
        self._brush = QBrush(css_to_qcolor(color))

    # --- Geometry ---

    def begin_path(self) -> None:
        self._path = QPainterPath()

    def move_to(self, x: float, y: float) -> None:
        self._path.moveTo(x, y)

    def line_to(self, x: float, y: float) -> None:
        self._path.lineTo(x, y)

    def circle(self, x: float, y: float, radius: float) -> None:
        self._path.addEllipse(QPointF(x, y), radius, radius)

    def rectangle(self, x: float, y: float, width: float, height: float) -> None:
        self._path.addRect(QRectF(x, y, width, height))

    def stroke(self) -> None:
        self.painter.strokePath(self._path, self._pen)

    def fill(self) -> None:
        self.painter.fillPath(self._path, self._brush)

    def text(self, x: float, y: float, content: str) -> None:
        self.painter.setPen(self._pen)
        self.painter.drawText(QPointF(x, y), content)
