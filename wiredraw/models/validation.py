"""
Setter outcomes for fail-soft field validation.

A validated setter never raises on bad input. It returns ``Accepted`` with
the normalized value that was stored, or ``Rejected`` with a reason while
the field keeps its previous value. Callers decide whether to log.
"""

import math
from dataclasses import dataclass
from typing import Any, Optional, Union

from .geometry import is_real_number, point_from_any


@dataclass(frozen=True)
class Accepted:
    """The value passed validation and was stored."""

    value: Any

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """The value failed validation; the field is unchanged."""

    field: str
    value: Any
    reason: str

    @property
    def ok(self) -> bool:
        return False

    def describe(self) -> str:
        return f"invalid {self.field} assignment ({self.value!r}): {self.reason}"


SetterResult = Union[Accepted, Rejected]


def report(result: SetterResult, logger, owner: str) -> SetterResult:
    """Log a rejected assignment at WARNING and pass the result through."""
    if not result.ok:
        logger.warning("[%s] %s. Keeping previous value.", owner, result.describe())
    return result


def check_color(field: str, value) -> SetterResult:
    if not isinstance(value, str):
        return Rejected(field, value, "must be a string")
    return Accepted(value)


def check_number(field: str, value, minimum: Optional[float] = None) -> SetterResult:
    """Accept anything float() understands (bool excluded) that is finite and >= minimum."""
    if isinstance(value, bool):
        return Rejected(field, value, "must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        return Rejected(field, value, "must be a number")
    if not math.isfinite(number):
        return Rejected(field, value, "must be finite")
    if minimum is not None and number < minimum:
        return Rejected(field, value, f"must be >= {minimum:g}")
    return Accepted(number)


def check_dash(field: str, value) -> SetterResult:
    if not isinstance(value, (list, tuple)):
        return Rejected(field, value, "must be a list of numbers")
    if not all(is_real_number(n) and n >= 0 for n in value):
        return Rejected(field, value, "entries must be non-negative numbers")
    return Accepted([float(n) for n in value])


def check_points(field: str, value) -> SetterResult:
    if not isinstance(value, (list, tuple)):
        return Rejected(field, value, "must be a list of points")
    points = []
    for raw in value:
        point = point_from_any(raw)
        if point is None:
            return Rejected(field, value, f"invalid point {raw!r}")
        points.append(point)
    return Accepted(points)
