"""Planar primitives used by the offset resolver and the collision detector."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

PARALLEL_TOLERANCE = 0.001
ENDPOINT_MARGIN = 0.001


@dataclass(frozen=True)
class Point:
    """Immutable 2D point, also used as a free vector."""

    x: float = 0.0
    y: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    @classmethod
    def polar(cls, angle_deg: float, distance: float) -> "Point":
        theta = math.radians(angle_deg)
        return cls(math.cos(theta) * distance, math.sin(theta) * distance)

    def move(self, offset: "Point") -> "Point":
        return Point(self.x + offset.x, self.y + offset.y)

    def subtract(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def negative(self) -> "Point":
        return Point(-self.x, -self.y)

    def scale(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor)

    def line_to(self, other: "Point") -> "Line":
        return Line(self, other)

    def distance_from_origin(self) -> float:
        return math.hypot(self.x, self.y)

    def as_tuple(self) -> Tuple[float, float]:
        return self.x, self.y

    def __add__(self, other: "Point") -> "Point":
        return self.move(other)

    def __sub__(self, other: "Point") -> "Point":
        return self.subtract(other)

    def __neg__(self) -> "Point":
        return self.negative()


ORIGIN = Point()


@dataclass(frozen=True)
class Line:
    """Ordered pair of points; a segment from ``point1`` to ``point2``."""

    point1: Point
    point2: Point

    def move(self, offset: Point) -> "Line":
        return Line(self.point1.move(offset), self.point2.move(offset))

    @property
    def direction(self) -> Point:
        return self.point2.subtract(self.point1)

    def magnitude(self) -> float:
        return magnitude(self.direction)

    def is_degenerate(self) -> bool:
        return self.point1 == self.point2

    def serialize(self) -> Dict[str, float]:
        return {
            "x1": self.point1.x,
            "y1": self.point1.y,
            "x2": self.point2.x,
            "y2": self.point2.y,
        }


def dot(a: Point, b: Point) -> float:
    return a.x * b.x + a.y * b.y


def cross(a: Point, b: Point) -> float:
    return a.x * b.y - a.y * b.x


def magnitude(a: Point) -> float:
    return math.sqrt(dot(a, a))


def segment_intersect(
    a: Line,
    b: Line,
    *,
    parallel_tolerance: float = PARALLEL_TOLERANCE,
    endpoint_margin: float = ENDPOINT_MARGIN,
) -> Optional[Point]:
    """Return where ``b`` crosses the interior of segment ``a``.

    Only the parameter along ``a`` is bounded: ``b`` behaves as the infinite
    line through its two points. Zero-length inputs, near-parallel lines
    (``|cross| < parallel_tolerance``) and crossings at or within
    ``endpoint_margin`` of either end of ``a`` all yield ``None``.
    """

    if a.is_degenerate() or b.is_degenerate():
        return None

    da = a.direction
    db = b.direction
    denominator = cross(da, db)
    if abs(denominator) < parallel_tolerance:
        return None

    t = cross(b.point1.subtract(a.point1), db) / denominator
    if t <= endpoint_margin or t >= 1.0 - endpoint_margin:
        return None

    return Point(a.point1.x + t * da.x, a.point1.y + t * da.y)


def angle_between(v1: Point, v2: Point) -> float:
    """Unsigned angle between two vectors in degrees, within ``[0, 180]``."""

    norm = magnitude(v1) * magnitude(v2)
    if norm == 0.0:
        return 0.0
    cosine = max(-1.0, min(1.0, dot(v1, v2) / norm))
    return math.degrees(math.acos(cosine))


__all__ = [
    "ENDPOINT_MARGIN",
    "Line",
    "ORIGIN",
    "PARALLEL_TOLERANCE",
    "Point",
    "angle_between",
    "cross",
    "dot",
    "magnitude",
    "segment_intersect",
]
