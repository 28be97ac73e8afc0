"""Activation state, ledger propagation and the settling loop."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .arena import ROOT_POSITION, PositionArena, PositionId, UnknownPositionError
from .boundaries import node_boundaries
from .collisions import CollisionRecord, detect_collisions, required_distance, select_correction
from .config import LayoutConfig, get_layout_config
from .diagnostics import LayoutDiagnostics, LoggingDiagnostics
from .geometry import Line, Point
from .ledger import DistanceLedger, PairKey
from .offsets import LayoutSnapshot, resolve_snapshot
from .tree import TreeNode


class NodePhase(str, enum.Enum):
    INACTIVE = "inactive"
    SETTLING = "settling"
    STABLE = "stable"


@dataclass
class NodeLayoutState:
    """Mutable state of one reachable position."""

    position_id: PositionId
    active: bool
    phase: NodePhase
    collisions: List[CollisionRecord] = field(default_factory=list)


@dataclass
class SettleReport:
    passes: int = 0
    checked: int = 0
    writes: int = 0
    converged: bool = True
    pending: Tuple[PositionId, ...] = ()


class SnowflakeLayout:
    """Radial layout of ``tree`` that resolves link/wedge collisions incrementally.

    Every mutation (activation toggle) resolves positions top-down into an
    immutable :class:`LayoutSnapshot`, then runs settling passes: each pass
    checks the queued positions against their ancestors' wedge edges on one
    snapshot, writes at most one ledger correction per position, and queues
    whatever moved for the next pass. The loop ends at a pass without new
    corrections or after ``config.max_settle_passes`` passes.
    """

    def __init__(
        self,
        tree: TreeNode,
        config: Optional[LayoutConfig] = None,
        diagnostics: Optional[LayoutDiagnostics] = None,
    ):
        self.config = config or get_layout_config()
        self.diagnostics = diagnostics if diagnostics is not None else LoggingDiagnostics()
        self.arena = PositionArena(tree, root_full_circle=self.config.root_full_circle)
        self.ledger = DistanceLedger()
        self.last_report = SettleReport()
        self._states: Dict[PositionId, NodeLayoutState] = {}
        self._snapshot: Optional[LayoutSnapshot] = None

        # the hub is always expanded
        attached = self._attach(ROOT_POSITION, True)
        self.diagnostics.positions_attached(attached)
        self._settle(attached, previous=None)

    # ------------------------------------------------------------------ queries

    @property
    def snapshot(self) -> LayoutSnapshot:
        assert self._snapshot is not None
        return self._snapshot

    def is_reachable(self, position_id: PositionId) -> bool:
        return position_id in self._states

    def positions(self) -> Tuple[PositionId, ...]:
        return self.snapshot.order

    def state(self, position_id: PositionId) -> NodeLayoutState:
        if position_id not in self.arena:
            raise UnknownPositionError(position_id)
        try:
            return self._states[position_id]
        except KeyError:
            raise UnknownPositionError(position_id, "position is not reachable") from None

    def get_radius(self, position_id: PositionId) -> float:
        self.state(position_id)
        return self.snapshot.radius(position_id)

    def get_offset(self, position_id: PositionId) -> Point:
        self.state(position_id)
        return self.snapshot.offset(position_id)

    def absolute_position(self, position_id: PositionId) -> Point:
        self.state(position_id)
        return self.snapshot.absolute_position(position_id)

    def get_boundaries(self, position_id: PositionId, probe_length: Optional[float] = None) -> Tuple[Line, Line]:
        probe = self.config.probe_length if probe_length is None else probe_length
        return node_boundaries(self.arena[position_id].sector, self.get_offset(position_id), probe)

    def get_collisions(self, position_id: PositionId) -> List[CollisionRecord]:
        """Run the detector for ``position_id`` against the current snapshot."""

        self.state(position_id)
        return detect_collisions(position_id, self.arena, self.snapshot, self.config)

    def ledger_entries(self, position_id: PositionId) -> Dict[PairKey, float]:
        self.state(position_id)
        return self.ledger.entries_for(position_id)

    def pair_label(self, key: PairKey) -> str:
        return f"{self.arena[key.descendant].node.id}_{self.arena[key.ancestor].node.id}"

    # ---------------------------------------------------------------- mutation

    def toggle_active(self, position_id: PositionId, active: Optional[bool] = None) -> bool:
        """Flip (or set) the active flag of a reachable position.

        Returns ``False`` when ``active`` equals the current state.
        """

        state = self.state(position_id)
        target = (not state.active) if active is None else bool(active)
        if target == state.active:
            return False

        previous = self._snapshot
        touched: Set[PositionId] = {position_id}
        if target:
            state.active = True
            state.phase = NodePhase.SETTLING
            attached: List[PositionId] = []
            for child_id in self.arena[position_id].children:
                attached.extend(self._attach(child_id, self.arena[child_id].node.active))
            self.diagnostics.positions_attached(attached)
            touched.update(attached)
        else:
            discarded = [pid for pid in self.arena.descendants(position_id) if pid in self._states]
            for pid in discarded:
                touched.update(self._release(pid))
            touched.update(self._release(position_id))
            for pid in discarded:
                del self._states[pid]
            self.diagnostics.positions_discarded(discarded)
            state.active = False
            state.phase = NodePhase.INACTIVE
            state.collisions = []

        self._settle([pid for pid in touched if pid in self._states], previous)
        return True

    def _attach(self, position_id: PositionId, active: bool) -> List[PositionId]:
        attached: List[PositionId] = []
        stack = [(position_id, active)]
        while stack:
            pid, is_active = stack.pop()
            self._states[pid] = NodeLayoutState(
                position_id=pid,
                active=is_active,
                phase=NodePhase.SETTLING if is_active else NodePhase.INACTIVE,
            )
            attached.append(pid)
            if is_active:
                for child_id in reversed(self.arena[pid].children):
                    stack.append((child_id, self.arena[child_id].node.active))
        return attached

    def _release(self, position_id: PositionId) -> Set[PositionId]:
        ancestors: Set[PositionId] = set()
        for key, distance in self.ledger.release(position_id):
            self.diagnostics.ledger_released(key, distance)
            ancestors.add(key.ancestor)
        return ancestors

    # ---------------------------------------------------------------- settling

    def _resolve(self) -> LayoutSnapshot:
        active = {pid: state.active for pid, state in self._states.items()}
        return resolve_snapshot(self.arena, active, self.ledger, self.config)

    @staticmethod
    def _ordered(snapshot: LayoutSnapshot, position_ids: Iterable[PositionId]) -> List[PositionId]:
        return sorted({pid for pid in position_ids if pid in snapshot.index}, key=snapshot.index.__getitem__)

    def _settle(self, seeds: Iterable[PositionId], previous: Optional[LayoutSnapshot]) -> SettleReport:
        report = SettleReport()
        snapshot = self._resolve()
        queue = self._ordered(snapshot, set(seeds) | snapshot.changed_since(previous))

        while queue:
            if report.passes >= self.config.max_settle_passes:
                report.converged = False
                report.pending = tuple(queue)
                self.diagnostics.budget_exhausted(report)
                break
            report.passes += 1

            moved_ancestors: Set[PositionId] = set()
            pass_writes = 0
            for pid in queue:
                state = self._states[pid]
                if state.active:
                    state.phase = NodePhase.SETTLING
                state.collisions = detect_collisions(pid, self.arena, snapshot, self.config)
                selected = select_correction(state.collisions)
                if selected is None:
                    continue

                self.diagnostics.collision_selected(selected)
                distance = required_distance(selected, self.arena[selected.ancestor].sector.angle_difference)
                key = PairKey(pid, selected.ancestor)
                current = self.ledger.get(key)
                if current is not None and math.isclose(
                    current, distance, rel_tol=0.0, abs_tol=self.config.ledger_tolerance
                ):
                    continue
                self.ledger.record(key, distance)
                self.diagnostics.ledger_written(key, distance)
                moved_ancestors.add(selected.ancestor)
                pass_writes += 1

            report.checked += len(queue)
            report.writes += pass_writes
            self.diagnostics.pass_completed(report.passes, len(queue), pass_writes)
            if not pass_writes:
                break

            previous, snapshot = snapshot, self._resolve()
            queue = self._ordered(snapshot, moved_ancestors | snapshot.changed_since(previous))

        self._snapshot = snapshot
        if report.converged:
            for state in self._states.values():
                if state.active:
                    state.phase = NodePhase.STABLE
            self.diagnostics.settled(report)
        self.last_report = report
        return report


__all__ = ["NodeLayoutState", "NodePhase", "SettleReport", "SnowflakeLayout"]
