"""Per-node offsets relative to the parent and the resulting absolute positions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional, Set, Tuple

import numpy as np

from .arena import PositionArena, PositionId, UnknownPositionError
from .config import LayoutConfig
from .geometry import ORIGIN, Point
from .ledger import DistanceLedger
from .logging_utils import apply_debug_logging
from .sectors import Sector
from .tree import TreeNode

logger = logging.getLogger(__name__)


def node_radius(node: TreeNode, active: bool) -> float:
    return node.active_radius if active else node.inactive_radius


def required_separation(ledger_values: Iterable[float], active: bool, min_line_distance: float) -> float:
    """Radial gap between a node's rim and its parent's rim.

    Inactive nodes need none. Active nodes use the largest ledger entry, never
    less than ``min_line_distance``.
    """

    if not active:
        return 0.0
    return max([min_line_distance, *ledger_values])


def offset_distance(own_radius: float, parent_radius: float, active: bool, separation: float) -> float:
    # an inactive node collapses onto its parent's rim
    return own_radius + parent_radius + (separation if active else -own_radius)


def resolve_offset(
    sector: Sector, own_radius: float, parent_radius: float, active: bool, separation: float
) -> Point:
    distance = offset_distance(own_radius, parent_radius, active, separation)
    return Point.polar(sector.effective_angle, distance)


@dataclass(frozen=True, eq=False)
class LayoutSnapshot:
    """Immutable resolution of every reachable position.

    Rows of ``offsets`` / ``absolute`` / ``radii`` follow ``order``, which
    lists parents before children.
    """

    order: Tuple[PositionId, ...]
    index: Dict[PositionId, int]
    active: Dict[PositionId, bool]
    radii: np.ndarray
    offsets: np.ndarray
    absolute: np.ndarray

    def __contains__(self, position_id: object) -> bool:
        return position_id in self.index

    def _row(self, position_id: PositionId) -> int:
        try:
            return self.index[position_id]
        except KeyError:
            raise UnknownPositionError(position_id, "position is not reachable") from None

    def radius(self, position_id: PositionId) -> float:
        return float(self.radii[self._row(position_id)])

    def offset(self, position_id: PositionId) -> Point:
        x, y = self.offsets[self._row(position_id)]
        return Point(x, y)

    def absolute_position(self, position_id: PositionId) -> Point:
        x, y = self.absolute[self._row(position_id)]
        return Point(x, y)

    def changed_since(self, previous: Optional["LayoutSnapshot"], *, atol: float = 1e-9) -> Set[PositionId]:
        """Positions that are new or whose absolute position moved."""

        if previous is None:
            return set(self.order)
        changed: Set[PositionId] = set()
        for pid, row in self.index.items():
            old_row = previous.index.get(pid)
            if old_row is None or not np.allclose(self.absolute[row], previous.absolute[old_row], rtol=0.0, atol=atol):
                changed.add(pid)
        return changed


def resolve_snapshot(
    arena: PositionArena,
    active: Mapping[PositionId, bool],
    ledger: DistanceLedger,
    config: LayoutConfig,
) -> LayoutSnapshot:
    """Resolve offsets top-down for every position present in ``active``."""

    order = tuple(pos.position_id for pos in arena if pos.position_id in active)
    index = {pid: row for row, pid in enumerate(order)}
    count = len(order)
    radii = np.zeros(count, dtype=float)
    offsets = np.zeros((count, 2), dtype=float)
    absolute = np.zeros((count, 2), dtype=float)

    for row, pid in enumerate(order):
        position = arena[pid]
        is_active = bool(active[pid])
        radius = node_radius(position.node, is_active)
        if position.is_root:
            if config.root_radius is not None:
                radius = float(config.root_radius)
            radii[row] = radius
            offsets[row] = ORIGIN.as_tuple()
            continue

        parent_row = index[position.parent_id]
        separation = required_separation(ledger.values_for(pid), is_active, config.min_line_distance)
        offset = resolve_offset(position.sector, radius, float(radii[parent_row]), is_active, separation)
        radii[row] = radius
        offsets[row] = offset.as_tuple()
        absolute[row] = absolute[parent_row] + offsets[row]

    return LayoutSnapshot(
        order=order,
        index=index,
        active={pid: bool(active[pid]) for pid in order},
        radii=radii,
        offsets=offsets,
        absolute=absolute,
    )


apply_debug_logging(globals(), logger=logger)


__all__ = [
    "LayoutSnapshot",
    "node_radius",
    "offset_distance",
    "required_separation",
    "resolve_offset",
    "resolve_snapshot",
]
