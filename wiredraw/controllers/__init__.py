"""
Controllers for wiredraw.

This package contains Qt-free controller classes that orchestrate
editing, history and file I/O between models and views.
"""

from .drawing_controller import DrawingController
from .editor_settings import EditorSettings
from .file_controller import FileController, validate_drawing_data
from .history_store import HistoryIndexError, HistoryKeyError, HistoryStore

__all__ = [
    "DrawingController",
    "EditorSettings",
    "FileController",
    "HistoryIndexError",
    "HistoryKeyError",
    "HistoryStore",
    "validate_drawing_data",
]
