"""Crossings between a node's links to its ancestors and their wedge edges."""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .arena import PositionArena, PositionId
from .boundaries import node_boundaries
from .config import LayoutConfig
from .geometry import ORIGIN, Line, Point, angle_between, magnitude, segment_intersect
from .logging_utils import apply_debug_logging
from .offsets import LayoutSnapshot

logger = logging.getLogger(__name__)

_SIN_EPS = 1e-12


class BoundarySide(str, enum.Enum):
    CLOCKWISE = "clockwise"
    ANTICLOCKWISE = "anticlockwise"


@dataclass(frozen=True)
class CollisionRecord:
    """Outcome of testing one ``(node, ancestor)`` pair.

    All geometry is expressed in the descendant's frame: ``connecting_line``
    runs from the descendant's centre to the ancestor's centre.
    """

    descendant: PositionId
    ancestor: PositionId
    connecting_line: Line
    clockwise_boundary: Line
    anticlockwise_boundary: Line
    clockwise_intersection: Optional[Point] = None
    anticlockwise_intersection: Optional[Point] = None

    @property
    def has_intersect(self) -> bool:
        return self.clockwise_intersection is not None or self.anticlockwise_intersection is not None

    @property
    def boundary(self) -> Optional[BoundarySide]:
        if self.clockwise_intersection is not None:
            return BoundarySide.CLOCKWISE
        if self.anticlockwise_intersection is not None:
            return BoundarySide.ANTICLOCKWISE
        return None

    @property
    def intersecting_ray(self) -> Optional[Line]:
        side = self.boundary
        if side is BoundarySide.CLOCKWISE:
            return self.clockwise_boundary
        if side is BoundarySide.ANTICLOCKWISE:
            return self.anticlockwise_boundary
        return None

    @property
    def intersection(self) -> Optional[Point]:
        if self.clockwise_intersection is not None:
            return self.clockwise_intersection
        return self.anticlockwise_intersection

    @property
    def end_point(self) -> Point:
        return self.connecting_line.point2


def detect_collisions(
    position_id: PositionId,
    arena: PositionArena,
    snapshot: LayoutSnapshot,
    config: LayoutConfig,
    *,
    probe_length: Optional[float] = None,
) -> List[CollisionRecord]:
    """Test ``position_id`` against every ancestor, parent first and root last."""

    probe = config.probe_length if probe_length is None else probe_length
    position = arena[position_id]
    own_absolute = snapshot.absolute_position(position_id)
    records: List[CollisionRecord] = []

    for ancestor_id in position.ancestors:
        ancestor = arena[ancestor_id]
        end_point = snapshot.absolute_position(ancestor_id).subtract(own_absolute)
        connecting = ORIGIN.line_to(end_point)

        clockwise, anticlockwise = (
            ray.move(end_point)
            for ray in node_boundaries(ancestor.sector, snapshot.offset(ancestor_id), probe)
        )
        records.append(
            CollisionRecord(
                descendant=position_id,
                ancestor=ancestor_id,
                connecting_line=connecting,
                clockwise_boundary=clockwise,
                anticlockwise_boundary=anticlockwise,
                clockwise_intersection=segment_intersect(
                    connecting,
                    clockwise,
                    parallel_tolerance=config.parallel_tolerance,
                    endpoint_margin=config.endpoint_margin,
                ),
                anticlockwise_intersection=segment_intersect(
                    connecting,
                    anticlockwise,
                    parallel_tolerance=config.parallel_tolerance,
                    endpoint_margin=config.endpoint_margin,
                ),
            )
        )
    return records


def select_correction(records: Sequence[CollisionRecord]) -> Optional[CollisionRecord]:
    """Pick the single record corrected per pass: the last one that intersects."""

    for record in reversed(records):
        if record.has_intersect:
            return record
    return None


def required_distance(record: CollisionRecord, angle_difference: float) -> float:
    """Extra separation the ancestor needs so the link clears its wedge edge.

    Law of sines over the triangle formed by the link, the crossed edge and
    the correction: ``|link| / sin(half_wedge) * sin(180 - angle(link, edge))``.
    """

    ray = record.intersecting_ray
    if ray is None:
        return 0.0
    link = record.connecting_line.direction
    angle_of_intersection = 180.0 - angle_between(link, ray.direction)
    half_wedge = math.sin(math.radians(angle_difference / 2.0))
    if abs(half_wedge) < _SIN_EPS:
        return 0.0
    return abs(magnitude(link) / half_wedge * math.sin(math.radians(angle_of_intersection)))


apply_debug_logging(globals(), logger=logger)


__all__ = [
    "BoundarySide",
    "CollisionRecord",
    "detect_collisions",
    "required_distance",
    "select_correction",
]
