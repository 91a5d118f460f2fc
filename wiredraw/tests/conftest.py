"""
Shared test fixtures for the wiredraw test suite.

Model fixtures are pure Python (no Qt dependencies).
"""

import sys
from pathlib import Path

# Ensure the repository root is on sys.path so `import wiredraw` works when
# running individual test files without installing the package.
_repo_root = str(Path(__file__).resolve().parent.parent.parent)
if _repo_root not in sys.path:
    sys.path.insert(0, _repo_root)

import pytest
from wiredraw.controllers.drawing_controller import DrawingController
from wiredraw.controllers.editor_settings import EditorSettings
from wiredraw.models.component import ComponentData
from wiredraw.models.surface import RecordingSurface
from wiredraw.models.terminal import Terminal
from wiredraw.models.wire import Wire


def make_wire(points=(), start=None, end=None, **props):
    """Helper to create a Wire with a path and optional style properties."""
    wire = Wire(start, end)
    wire.path = [tuple(p) for p in points]
    if props:
        wire.edit(props)
    return wire


def make_component(component_id, position=(0.0, 0.0), terminals=(("A", 0.0, 10.0), ("B", 40.0, 10.0))):
    """Helper to create a ComponentData with terminals named <id>.<name>."""
    component = ComponentData(component_id=component_id, position=position)
    for name, x, y in terminals:
        component.add_terminal(f"{component_id}.{name}", x, y)
    return component


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def settings(tmp_path):
    """EditorSettings isolated from the user's home directory."""
    return EditorSettings(config_path=tmp_path / "settings.json")


@pytest.fixture
def controller(settings):
    return DrawingController(settings=settings)


@pytest.fixture
def two_resistors():
    """
    R1 at (0, 0) and R2 at (100, 0), each 40x20 with terminals A (left) and B (right).

    R1.B is at (40, 10); R2.A is at (100, 10).
    """
    return make_component("R1", (0.0, 0.0)), make_component("R2", (100.0, 0.0))


@pytest.fixture
def free_terminal():
    """A terminal with no parent: its stored position is absolute."""
    return Terminal("T1", 5.0, 5.0)
