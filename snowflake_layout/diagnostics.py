"""Observability hooks invoked by the settling loop."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from .arena import PositionId
from .ledger import PairKey

if TYPE_CHECKING:  # pragma: no cover
    from .collisions import CollisionRecord
    from .layout import SettleReport

logger = logging.getLogger(__name__)


class LayoutDiagnostics:
    """No-op diagnostics sink; subclass and override the hooks you need.

    Hooks are called synchronously from the layout engine and must not
    mutate layout state.
    """

    def positions_attached(self, position_ids: Sequence[PositionId]) -> None:
        pass

    def positions_discarded(self, position_ids: Sequence[PositionId]) -> None:
        pass

    def collision_selected(self, record: "CollisionRecord") -> None:
        pass

    def ledger_written(self, key: PairKey, distance: float) -> None:
        pass

    def ledger_released(self, key: PairKey, distance: float) -> None:
        pass

    def pass_completed(self, pass_index: int, checked: int, writes: int) -> None:
        pass

    def settled(self, report: "SettleReport") -> None:
        pass

    def budget_exhausted(self, report: "SettleReport") -> None:
        pass


class LoggingDiagnostics(LayoutDiagnostics):
    """Forward every hook to a :mod:`logging` logger."""

    def __init__(self, log: logging.Logger = logger):
        self.log = log

    def positions_attached(self, position_ids: Sequence[PositionId]) -> None:
        if position_ids:
            self.log.debug("Attached %d position(s): %s", len(position_ids), ", ".join(position_ids))

    def positions_discarded(self, position_ids: Sequence[PositionId]) -> None:
        if position_ids:
            self.log.debug("Discarded %d position(s): %s", len(position_ids), ", ".join(position_ids))

    def collision_selected(self, record: "CollisionRecord") -> None:
        self.log.debug(
            "Collision %s -> %s on %s boundary at %s",
            record.descendant,
            record.ancestor,
            record.boundary.value if record.boundary else "no",
            record.intersection,
        )

    def ledger_written(self, key: PairKey, distance: float) -> None:
        self.log.debug("Ledger %s = %.3f", key.label, distance)

    def ledger_released(self, key: PairKey, distance: float) -> None:
        self.log.debug("Ledger %s released (was %.3f)", key.label, distance)

    def pass_completed(self, pass_index: int, checked: int, writes: int) -> None:
        self.log.debug("Pass %d checked %d position(s), wrote %d correction(s)", pass_index, checked, writes)

    def settled(self, report: "SettleReport") -> None:
        self.log.info(
            "Settled after %d pass(es): %d correction(s), %d position(s) checked",
            report.passes,
            report.writes,
            report.checked,
        )

    def budget_exhausted(self, report: "SettleReport") -> None:
        self.log.warning(
            "Settle budget exhausted after %d pass(es); %d position(s) still pending",
            report.passes,
            len(report.pending),
        )


__all__ = ["LayoutDiagnostics", "LoggingDiagnostics"]
