"""Angular partition of a node's surroundings into child wedges."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Sector:
    """Wedge assigned to a node inside its parent's frame (degrees)."""

    angle: float
    angle_difference: float
    starting_angle: float = 0.0

    @property
    def effective_angle(self) -> float:
        return self.starting_angle + self.angle

    @property
    def half_width(self) -> float:
        return self.angle_difference / 2.0


def root_sector() -> Sector:
    return Sector(angle=0.0, angle_difference=360.0, starting_angle=0.0)


def child_sectors(parent: Sector, count: int, *, full_circle: bool = False) -> List[Sector]:
    """Return the wedges of ``count`` children of a node placed in ``parent``.

    Children occupy slots ``1..count`` of ``count + 1`` equal slots; slot 0 is
    the incoming edge. Their frame opens opposite the parent's incoming
    direction. With ``full_circle`` the children share all slots instead
    (used for the diagram hub, which has no incoming edge).
    """

    if count <= 0:
        return []
    if full_circle:
        width = 360.0 / count
        return [Sector(angle=width * i, angle_difference=width, starting_angle=0.0) for i in range(count)]

    width = 360.0 / (count + 1)
    starting = (parent.starting_angle + 180.0 + parent.angle) % 360
    return [
        Sector(angle=width * (i + 1), angle_difference=width, starting_angle=starting)
        for i in range(count)
    ]


__all__ = ["Sector", "child_sectors", "root_sector"]
