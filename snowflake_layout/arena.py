"""Arena of tree positions addressed by stable dotted-path ids."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from .sectors import Sector, child_sectors, root_sector
from .tree import TreeNode

PositionId = str

ROOT_POSITION: PositionId = "0"


class LayoutError(RuntimeError):
    """Base error of the layout engine."""


class UnknownPositionError(LayoutError, KeyError):
    """Raised when a position id is not part of the arena or not reachable."""

    def __init__(self, position_id: str, reason: str = "unknown position"):
        super().__init__(f"{reason}: {position_id!r}")
        self.position_id = position_id

    def __str__(self) -> str:
        return str(self.args[0])


@dataclass(frozen=True)
class NodePosition:
    """One place in the tree where a :class:`TreeNode` is drawn."""

    position_id: PositionId
    index: int
    node: TreeNode
    sector: Sector
    parent_id: Optional[PositionId]
    ancestors: Tuple[PositionId, ...]  # parent first, root last
    children: Tuple[PositionId, ...]

    @property
    def depth(self) -> int:
        return len(self.ancestors)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


class PositionArena:
    """Flattened, immutable view of the input tree.

    Positions are stored in depth-first pre-order so a parent always precedes
    its descendants.
    """

    def __init__(self, root: TreeNode, *, root_full_circle: bool = False):
        self.root = root
        self._positions: List[NodePosition] = []
        self._by_id: Dict[PositionId, NodePosition] = {}
        self._build(root, root_full_circle)

    def _build(self, root: TreeNode, root_full_circle: bool) -> None:
        # (node, position id, sector, parent id, ancestors)
        stack: List[Tuple[TreeNode, PositionId, Sector, Optional[PositionId], Tuple[PositionId, ...]]] = [
            (root, ROOT_POSITION, root_sector(), None, ())
        ]
        while stack:
            node, pid, sector, parent_id, ancestors = stack.pop()
            child_ids = tuple(f"{pid}.{i}" for i in range(len(node.children)))
            position = NodePosition(
                position_id=pid,
                index=len(self._positions),
                node=node,
                sector=sector,
                parent_id=parent_id,
                ancestors=ancestors,
                children=child_ids,
            )
            self._positions.append(position)
            self._by_id[pid] = position

            sectors = child_sectors(
                sector, len(node.children), full_circle=root_full_circle and parent_id is None
            )
            child_ancestors = (pid,) + ancestors
            for child, child_id, child_sector in reversed(list(zip(node.children, child_ids, sectors))):
                stack.append((child, child_id, child_sector, pid, child_ancestors))

    def __len__(self) -> int:
        return len(self._positions)

    def __iter__(self) -> Iterator[NodePosition]:
        return iter(self._positions)

    def __contains__(self, position_id: object) -> bool:
        return position_id in self._by_id

    def __getitem__(self, position_id: PositionId) -> NodePosition:
        try:
            return self._by_id[position_id]
        except KeyError:
            raise UnknownPositionError(position_id) from None

    def descendants(self, position_id: PositionId) -> List[PositionId]:
        """Return every position below ``position_id`` in pre-order."""

        out: List[PositionId] = []
        stack = list(reversed(self[position_id].children))
        while stack:
            pid = stack.pop()
            out.append(pid)
            stack.extend(reversed(self._by_id[pid].children))
        return out

    def find_by_node_id(self, node_id: str) -> List[PositionId]:
        return [pos.position_id for pos in self._positions if pos.node.id == node_id]


__all__ = [
    "LayoutError",
    "NodePosition",
    "PositionArena",
    "PositionId",
    "ROOT_POSITION",
    "UnknownPositionError",
]
