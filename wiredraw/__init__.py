"""wiredraw - connectivity-aware wire model and per-object undo history for a diagram editor."""

__version__ = "0.1.0"
