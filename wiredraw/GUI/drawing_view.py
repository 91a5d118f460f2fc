from PyQt6.QtGui import QColor, QPainter
from PyQt6.QtWidgets import QWidget

from ..controllers.drawing_controller import DrawingController
from .painter_surface import QPainterSurface


class DrawingView(QWidget):
    """Paints a DrawingController's model and repaints on model events."""

    BACKGROUND = QColor(255, 255, 255)

    def __init__(self, controller: DrawingController, parent=None):
        super().__init__(parent)
        self.controller = controller
        self.repaint_count = 0
        controller.add_observer(self._on_model_event)

    def _on_model_event(self, event, data):
        self.update()

    def detach(self):
        """Stop listening to the controller (call before discarding the view)."""
        self.controller.remove_observer(self._on_model_event)

    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.fillRect(self.rect(), self.BACKGROUND)
            self.controller.draw(QPainterSurface(painter))
            self.repaint_count += 1
        finally:
            painter.end()
