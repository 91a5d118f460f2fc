"""
Pure Python data models for wiredraw.

This package contains Qt-free classes for the editable drawing model:
geometry, terminals, components, wires and the render-surface contract.
"""

from .component import COMPONENT_PREFIXES, DEFAULT_TERMINALS, TWO_TERMINAL_LAYOUT, ComponentData
from .drawing import DrawingModel, UnresolvedReference
from .entity import DEFAULT_HIT_MARGIN, EditableEntity
from .geometry import Point
from .handle import Handle, HandleType
from .surface import RecordingSurface, RenderSurface
from .terminal import Terminal, TerminalLike
from .validation import Accepted, Rejected, SetterResult
from .wire import Wire, TerminalResolution

__all__ = [
    "Accepted",
    "COMPONENT_PREFIXES",
    "ComponentData",
    "DEFAULT_HIT_MARGIN",
    "DEFAULT_TERMINALS",
    "DrawingModel",
    "EditableEntity",
    "Handle",
    "HandleType",
    "Point",
    "RecordingSurface",
    "Rejected",
    "RenderSurface",
    "SetterResult",
    "Terminal",
    "TerminalLike",
    "TerminalResolution",
    "TWO_TERMINAL_LAYOUT",
    "UnresolvedReference",
    "Wire",
]
