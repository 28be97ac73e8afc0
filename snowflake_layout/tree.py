"""Input tree records supplied by the host application."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from .config import LayoutConfig, get_layout_config


class TreeFormatError(ValueError):
    """Raised when a tree mapping cannot be turned into :class:`TreeNode` records."""


@dataclass(frozen=True)
class TreeNode:
    """Static description of one diagram node.

    ``id`` is not required to be unique: the same subtree may be attached at
    several places, so layout state is keyed by tree position instead.
    """

    id: str
    title: str = ""
    active_radius: float = 80.0
    inactive_radius: float = 20.0
    children: Tuple["TreeNode", ...] = field(default_factory=tuple)
    active: bool = False

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def radius(self, active: bool) -> float:
        return self.active_radius if active else self.inactive_radius

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any], config: Optional[LayoutConfig] = None
    ) -> "TreeNode":
        """Build a tree from the JSON shape used by diagram data files.

        Radii are read from an ``options`` sub-mapping (``activeRadius`` /
        ``inactiveRadius``); children come from ``nodes``. Missing radii fall
        back to the configured defaults.
        """

        cfg = config or get_layout_config()
        return _node_from_mapping(data, cfg, path="0")

    def to_mapping(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "options": {
                "activeRadius": self.active_radius,
                "inactiveRadius": self.inactive_radius,
            },
            "active": self.active,
        }
        if self.children:
            out["nodes"] = [child.to_mapping() for child in self.children]
        return out


def _node_from_mapping(data: Any, config: LayoutConfig, path: str) -> TreeNode:
    if not isinstance(data, Mapping):
        raise TreeFormatError(f"[{path}] tree node must be a mapping, got {type(data).__name__}")
    if "id" not in data or data["id"] is None:
        raise TreeFormatError(f"[{path}] tree node is missing an 'id'")

    options = data.get("options") or {}
    if not isinstance(options, Mapping):
        raise TreeFormatError(f"[{path}] 'options' must be a mapping")

    raw_children = data.get("nodes") or []
    if not isinstance(raw_children, (list, tuple)):
        raise TreeFormatError(f"[{path}] 'nodes' must be a list")

    children = tuple(
        _node_from_mapping(child, config, f"{path}.{idx}") for idx, child in enumerate(raw_children)
    )
    return TreeNode(
        id=str(data["id"]),
        title=str(data.get("title", "")),
        active_radius=float(options.get("activeRadius", config.default_active_radius)),
        inactive_radius=float(options.get("inactiveRadius", config.default_inactive_radius)),
        children=children,
        active=bool(data.get("active", False)),
    )


def iter_nodes(root: TreeNode) -> Iterator[TreeNode]:
    """Yield ``root`` and every descendant in depth-first pre-order."""

    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


__all__ = ["TreeFormatError", "TreeNode", "iter_nodes"]
