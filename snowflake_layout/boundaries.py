"""Edge rays of a node's angular wedge."""

from __future__ import annotations

from typing import Tuple

from .geometry import Line, Point
from .sectors import Sector


def node_boundaries(sector: Sector, offset: Point, probe_length: float) -> Tuple[Line, Line]:
    """Return the ``(clockwise, anticlockwise)`` wedge edges of a node.

    Both rays are expressed in the node's own frame: they start at the
    parent's centre (``-offset``) and run ``probe_length`` along
    ``effective_angle + half_width`` and ``effective_angle - half_width``.
    """

    start = offset.negative()
    angle = sector.effective_angle
    half = sector.half_width
    return (
        start.line_to(Point.polar(angle + half, probe_length).move(start)),
        start.line_to(Point.polar(angle - half, probe_length).move(start)),
    )


__all__ = ["node_boundaries"]
