"""
EditableEntity - Common capability set for selectable, editable shapes.

This module contains no Qt dependencies. Concrete entities (Wire) provide
drawing, hit-testing, movement and serialization; the base class owns
identity, selection state and the whitelist-driven edit() protocol.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Optional

from .surface import RenderSurface
from .validation import SetterResult, check_number, report

logger = logging.getLogger(__name__)

# Extra pixels around a stroke that still count as touching it
DEFAULT_HIT_MARGIN = 5.0


def generate_id() -> str:
    """Return a new opaque entity identifier."""
    return uuid.uuid4().hex


class EditableEntity(ABC):
    """
    Base class for editable drawing entities.

    Subclasses list the property names accepted by edit() in
    EDITABLE_PROPERTIES; each name must have a matching ``set_<name>``
    method returning a SetterResult.
    """

    EDITABLE_PROPERTIES: tuple[str, ...] = ()

    def __init__(self, unique_id: Optional[str] = None, hit_margin: float = DEFAULT_HIT_MARGIN):
        self._unique_id = str(unique_id) if unique_id else generate_id()
        self.is_selected = False
        self._hit_margin = DEFAULT_HIT_MARGIN
        self.set_hit_margin(hit_margin)

    @property
    def unique_id(self) -> str:
        """Opaque identifier, read-only after creation."""
        return self._unique_id

    @property
    def hit_margin(self) -> float:
        return self._hit_margin

    @hit_margin.setter
    def hit_margin(self, value) -> None:
        self.set_hit_margin(value)

    def set_hit_margin(self, value) -> SetterResult:
        result = report(check_number("hit_margin", value, minimum=0), logger, type(self).__name__)
        if result.ok:
            self._hit_margin = result.value
        return result

    # --- Selection ---

    def select(self) -> None:
        self.is_selected = True

    def deselect(self) -> None:
        self.is_selected = False

    # --- Editing ---

    def edit(self, properties) -> dict[str, SetterResult]:
        """
        Apply whitelisted properties through their validated setters.

        Unknown keys are ignored. Non-mapping input is ignored.

        Returns:
            Mapping of each applied property name to its SetterResult.
        """
        results: dict[str, SetterResult] = {}
        if not isinstance(properties, dict):
            return results
        for name in self.EDITABLE_PROPERTIES:
            if name in properties:
                setter = getattr(self, f"set_{name}")
                results[name] = setter(properties[name])
        return results

    # --- Subclass contract ---

    @abstractmethod
    def draw(self, surface: RenderSurface) -> None:
        """Render the entity onto the surface."""

    @abstractmethod
    def is_hit(self, surface: RenderSurface, x: float, y: float) -> bool:
        """Return True if (x, y) touches the entity."""

    @abstractmethod
    def move(self, dx: float, dy: float) -> bool:
        """Translate the entity; return True if anything moved."""

    @abstractmethod
    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dictionary."""
