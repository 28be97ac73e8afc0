import pytest

from snowflake_layout import (
    LayoutConfig,
    LayoutDiagnostics,
    NodePhase,
    PairKey,
    Point,
    SnowflakeLayout,
    TreeNode,
    UnknownPositionError,
)


def _distance(layout, position_id):
    return layout.absolute_position(position_id).distance_from_origin()


@pytest.fixture
def layout(hub_tree, diagnostics):
    return SnowflakeLayout(hub_tree, LayoutConfig(), diagnostics)


def test_initial_layout_expands_only_the_hub(layout):
    assert layout.positions() == ("0", "0.0", "0.1", "0.2")
    assert layout.state("0").active
    assert layout.state("0").phase is NodePhase.STABLE
    assert layout.state("0.2").phase is NodePhase.INACTIVE
    assert len(layout.ledger) == 0
    assert layout.get_offset("0") == Point(0.0, 0.0)
    # collapsed children touch the hub's rim
    for pid in ("0.0", "0.1", "0.2"):
        assert _distance(layout, pid) == pytest.approx(80.0)


def test_activation_attaches_children(layout, diagnostics):
    assert layout.toggle_active("0.2", True) is True
    assert layout.positions() == ("0", "0.0", "0.1", "0.2", "0.2.0", "0.2.1", "0.2.2")
    assert ("attached", ("0.2.0", "0.2.1", "0.2.2")) in diagnostics.events

    branch = layout.absolute_position("0.2")
    assert branch.x == pytest.approx(0.0, abs=1e-9)
    assert branch.y == pytest.approx(280.0)
    assert len(layout.ledger) == 0
    assert layout.last_report.converged
    assert layout.last_report.writes == 0


def test_toggle_is_idempotent(layout):
    assert layout.toggle_active("0.2", False) is False
    layout.toggle_active("0.2", True)
    report = layout.last_report
    assert layout.toggle_active("0.2", True) is False
    assert layout.last_report is report


def test_toggle_without_explicit_state_flips(layout):
    assert layout.toggle_active("0.1") is True
    assert layout.state("0.1").active
    assert layout.toggle_active("0.1") is True
    assert not layout.state("0.1").active


def test_collision_pushes_ancestor_outwards(layout, diagnostics):
    layout.toggle_active("0.2", True)
    layout.toggle_active("0.2.0", True)

    assert dict(layout.ledger) == {PairKey("0.2.0", "0.2"): pytest.approx(320.0)}
    assert layout.ledger_entries("0.2") == {PairKey("0.2.0", "0.2"): pytest.approx(320.0)}
    assert _distance(layout, "0.2") == pytest.approx(80.0 + 80.0 + 320.0)

    wide = layout.absolute_position("0.2.0")
    assert wide.x == pytest.approx(320.0)
    assert wide.y == pytest.approx(480.0)

    report = layout.last_report
    assert report.converged
    assert report.passes == 2
    assert report.writes == 1
    assert [event[1] for event in diagnostics.of_kind("written")] == [PairKey("0.2.0", "0.2")]
    assert layout.pair_label(PairKey("0.2.0", "0.2")) == "wide_branch"

    for pid in layout.positions():
        assert not any(record.has_intersect for record in layout.get_collisions(pid))
        if layout.state(pid).active:
            assert layout.state(pid).phase is NodePhase.STABLE


def test_collisions_are_stable_across_reads(layout):
    layout.toggle_active("0.2", True)
    layout.toggle_active("0.2.0", True)
    for pid in layout.positions():
        assert layout.get_collisions(pid) == layout.get_collisions(pid)


def test_deactivation_releases_ledger_and_reverts_offset(layout, diagnostics):
    layout.toggle_active("0.2", True)
    layout.toggle_active("0.2.0", True)
    layout.toggle_active("0.2.0", False)

    assert len(layout.ledger) == 0
    assert diagnostics.of_kind("released") == [("released", PairKey("0.2.0", "0.2"), pytest.approx(320.0))]
    assert _distance(layout, "0.2") == pytest.approx(280.0)
    wide = layout.absolute_position("0.2.0")
    assert wide.x == pytest.approx(80.0)
    assert wide.y == pytest.approx(280.0)
    assert layout.state("0.2.0").phase is NodePhase.INACTIVE


def test_collapsing_a_branch_discards_its_subtree(layout, diagnostics):
    layout.toggle_active("0.2", True)
    layout.toggle_active("0.2.0", True)
    layout.toggle_active("0.2", False)

    assert layout.positions() == ("0", "0.0", "0.1", "0.2")
    assert len(layout.ledger) == 0
    assert not layout.is_reachable("0.2.0")
    assert ("discarded", ("0.2.0", "0.2.1", "0.2.2")) in diagnostics.events
    with pytest.raises(UnknownPositionError):
        layout.get_offset("0.2.0")

    # re-expanding starts the children from their tree defaults
    layout.toggle_active("0.2", True)
    assert not layout.state("0.2.0").active
    assert len(layout.ledger) == 0


def test_root_stays_at_origin(layout):
    for pid, active in (("0.2", True), ("0.2.0", True), ("0", False), ("0", True), ("0.1", True)):
        layout.toggle_active(pid, active)
        assert layout.get_offset("0") == Point(0.0, 0.0)
        assert layout.absolute_position("0") == Point(0.0, 0.0)


def test_root_deactivation_collapses_everything(layout):
    layout.toggle_active("0.2", True)
    layout.toggle_active("0", False)
    assert layout.positions() == ("0",)
    assert layout.get_radius("0") == 20.0


def test_unknown_positions_raise(layout):
    with pytest.raises(UnknownPositionError) as excinfo:
        layout.state("0.9")
    assert isinstance(excinfo.value, KeyError)
    assert "0.9" in str(excinfo.value)

    with pytest.raises(UnknownPositionError, match="not reachable"):
        layout.toggle_active("0.2.0")


def test_budget_exhaustion_is_reported(hub_tree, diagnostics):
    layout = SnowflakeLayout(hub_tree, LayoutConfig(max_settle_passes=1), diagnostics)
    layout.toggle_active("0.2", True)
    assert layout.last_report.converged

    layout.toggle_active("0.2.0", True)
    report = layout.last_report
    assert not report.converged
    assert report.passes == 1
    assert report.writes == 1
    assert report.pending == ("0.2", "0.2.0", "0.2.1", "0.2.2")
    assert diagnostics.of_kind("exhausted") == [("exhausted", 1, report.pending)]
    assert layout.state("0.2.0").phase is NodePhase.SETTLING
    # the written correction is already reflected in the published snapshot
    assert _distance(layout, "0.2") == pytest.approx(480.0)


def test_custom_tree_defaults_for_active_children():
    tree = TreeNode(
        id="hub",
        title="Hub",
        children=(
            TreeNode(id="open", title="Open", active=True, children=(TreeNode(id="leaf", title="Leaf"),)),
        ),
    )
    layout = SnowflakeLayout(tree, diagnostics=LayoutDiagnostics())
    assert layout.positions() == ("0", "0.0", "0.0.0")
    assert layout.state("0.0").active


def test_duplicate_node_ids_get_distinct_positions():
    shared = TreeNode(id="shared", title="Shared", children=(TreeNode(id="leaf", title="Leaf"),))
    tree = TreeNode(id="hub", title="Hub", children=(shared, shared))
    layout = SnowflakeLayout(tree, diagnostics=LayoutDiagnostics())

    assert layout.arena.find_by_node_id("shared") == ["0.0", "0.1"]
    layout.toggle_active("0.0", True)
    assert layout.is_reachable("0.0.0")
    assert not layout.is_reachable("0.1.0")
    layout.toggle_active("0.1", True)
    assert layout.absolute_position("0.0.0") != layout.absolute_position("0.1.0")


def test_root_full_circle_spreads_hub_children():
    tree = TreeNode(
        id="hub",
        title="Hub",
        children=tuple(TreeNode(id=f"n{i}", title=f"N{i}") for i in range(4)),
    )
    layout = SnowflakeLayout(tree, LayoutConfig(root_full_circle=True), LayoutDiagnostics())
    first = layout.absolute_position("0.0")
    second = layout.absolute_position("0.1")
    assert first.x == pytest.approx(80.0)
    assert first.y == pytest.approx(0.0, abs=1e-9)
    assert second.x == pytest.approx(0.0, abs=1e-9)
    assert second.y == pytest.approx(80.0)


def test_boundaries_follow_sector(layout):
    layout.toggle_active("0.2", True)
    clockwise, anticlockwise = layout.get_boundaries("0.2.1", probe_length=100.0)
    assert clockwise.point1 == anticlockwise.point1
    assert clockwise.magnitude() == pytest.approx(100.0)
