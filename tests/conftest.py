from typing import List, Tuple

import pytest

from snowflake_layout import LayoutConfig, LayoutDiagnostics, TreeNode


class RecordingDiagnostics(LayoutDiagnostics):
    def __init__(self) -> None:
        self.events: List[Tuple] = []

    def positions_attached(self, position_ids):
        self.events.append(("attached", tuple(position_ids)))

    def positions_discarded(self, position_ids):
        self.events.append(("discarded", tuple(position_ids)))

    def collision_selected(self, record):
        self.events.append(("collision", record.descendant, record.ancestor))

    def ledger_written(self, key, distance):
        self.events.append(("written", key, distance))

    def ledger_released(self, key, distance):
        self.events.append(("released", key, distance))

    def pass_completed(self, pass_index, checked, writes):
        self.events.append(("pass", pass_index, checked, writes))

    def settled(self, report):
        self.events.append(("settled", report.passes))

    def budget_exhausted(self, report):
        self.events.append(("exhausted", report.passes, report.pending))

    def of_kind(self, kind: str) -> List[Tuple]:
        return [event for event in self.events if event[0] == kind]


def _leaf(node_id: str, active_radius: float = 80.0) -> TreeNode:
    return TreeNode(id=node_id, title=node_id, active_radius=active_radius, inactive_radius=20.0)


@pytest.fixture
def hub_tree() -> TreeNode:
    """Hub with three children; the third ("branch", position 0.2) has three leaves.

    The first leaf ("wide", position 0.2.0) has an active radius of 120 so that
    expanding it pushes its link across the branch's wedge edge.
    """

    branch = TreeNode(
        id="branch",
        title="Branch",
        active_radius=80.0,
        inactive_radius=20.0,
        children=(_leaf("wide", active_radius=120.0), _leaf("up"), _leaf("west")),
    )
    return TreeNode(
        id="hub",
        title="Hub",
        active_radius=80.0,
        inactive_radius=20.0,
        children=(_leaf("south"), _leaf("east"), branch),
    )


@pytest.fixture
def config() -> LayoutConfig:
    return LayoutConfig()


@pytest.fixture
def diagnostics() -> RecordingDiagnostics:
    return RecordingDiagnostics()
