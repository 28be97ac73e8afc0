"""Records handed to the paint and debug-overlay collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .collisions import CollisionRecord
from .geometry import ORIGIN, Line, Point
from .layout import SnowflakeLayout

DEBUG_PROBE_LENGTH = 1000.0


@dataclass(frozen=True)
class PaintRecord:
    """Everything a painter needs to draw one node.

    ``position`` is absolute with the focus translation already applied;
    ``guide_line`` runs from the node's centre back to its parent's centre in
    the node's own frame (``None`` for the hub).
    """

    position_id: str
    node_id: str
    title: str
    active: bool
    radius: float
    offset: Point
    position: Point
    guide_line: Optional[Line]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position_id": self.position_id,
            "id": self.node_id,
            "title": self.title,
            "active": self.active,
            "radius": self.radius,
            "offset": list(self.offset.as_tuple()),
            "position": list(self.position.as_tuple()),
            "guide_line": self.guide_line.serialize() if self.guide_line else None,
        }


@dataclass(frozen=True)
class OverlayRecord:
    position_id: str
    boundaries: Tuple[Line, Line]
    collisions: Tuple[CollisionRecord, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position_id": self.position_id,
            "boundaries": [line.serialize() for line in self.boundaries],
            "collisions": [
                {
                    "ancestor": record.ancestor,
                    "line": record.connecting_line.serialize(),
                    "has_intersect": record.has_intersect,
                    "boundary": record.boundary.value if record.boundary else None,
                    "intersection": list(record.intersection.as_tuple()) if record.intersection else None,
                }
                for record in self.collisions
            ],
        }


def paint_records(layout: SnowflakeLayout, focus: Optional[Point] = None) -> List[PaintRecord]:
    """Return one record per reachable position, hub first.

    ``focus`` is the camera point placed at the viewport centre; it only
    translates the output and never feeds back into the layout.
    """

    shift = (focus or ORIGIN).negative()
    records: List[PaintRecord] = []
    for pid in layout.positions():
        position = layout.arena[pid]
        offset = layout.get_offset(pid)
        records.append(
            PaintRecord(
                position_id=pid,
                node_id=position.node.id,
                title=position.node.title,
                active=layout.state(pid).active,
                radius=layout.get_radius(pid),
                offset=offset,
                position=layout.absolute_position(pid).move(shift),
                guide_line=None if position.is_root else ORIGIN.line_to(offset.negative()),
            )
        )
    return records


def debug_overlay(layout: SnowflakeLayout, probe_length: float = DEBUG_PROBE_LENGTH) -> List[OverlayRecord]:
    return [
        OverlayRecord(
            position_id=pid,
            boundaries=layout.get_boundaries(pid, probe_length),
            collisions=tuple(layout.get_collisions(pid)),
        )
        for pid in layout.positions()
    ]


__all__ = ["DEBUG_PROBE_LENGTH", "OverlayRecord", "PaintRecord", "debug_overlay", "paint_records"]
