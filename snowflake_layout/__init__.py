from .arena import LayoutError, NodePosition, PositionArena, ROOT_POSITION, UnknownPositionError
from .boundaries import node_boundaries
from .collisions import BoundarySide, CollisionRecord, detect_collisions, required_distance, select_correction
from .config import LayoutConfig, get_layout_config, set_layout_config
from .diagnostics import LayoutDiagnostics, LoggingDiagnostics
from .geometry import Line, Point, angle_between, dot, magnitude, segment_intersect
from .layout import NodeLayoutState, NodePhase, SettleReport, SnowflakeLayout
from .ledger import DistanceLedger, PairKey
from .offsets import LayoutSnapshot, required_separation, resolve_offset, resolve_snapshot
from .render import OverlayRecord, PaintRecord, debug_overlay, paint_records
from .sectors import Sector, child_sectors, root_sector
from .tree import TreeFormatError, TreeNode

__all__ = [
    'LayoutError',
    'NodePosition',
    'PositionArena',
    'ROOT_POSITION',
    'UnknownPositionError',
    'node_boundaries',
    'BoundarySide',
    'CollisionRecord',
    'detect_collisions',
    'required_distance',
    'select_correction',
    'LayoutConfig',
    'get_layout_config',
    'set_layout_config',
    'LayoutDiagnostics',
    'LoggingDiagnostics',
    'Line',
    'Point',
    'angle_between',
    'dot',
    'magnitude',
    'segment_intersect',
    'NodeLayoutState',
    'NodePhase',
    'SettleReport',
    'SnowflakeLayout',
    'DistanceLedger',
    'PairKey',
    'LayoutSnapshot',
    'required_separation',
    'resolve_offset',
    'resolve_snapshot',
    'OverlayRecord',
    'PaintRecord',
    'debug_overlay',
    'paint_records',
    'Sector',
    'child_sectors',
    'root_sector',
    'TreeFormatError',
    'TreeNode',
]
