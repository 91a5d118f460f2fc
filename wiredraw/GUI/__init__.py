from .drawing_view import DrawingView
from .painter_surface import QPainterSurface, css_to_qcolor

__all__ = ["DrawingView", "QPainterSurface", "css_to_qcolor"]
