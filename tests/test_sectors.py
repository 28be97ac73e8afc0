import pytest

from snowflake_layout import Sector, child_sectors, root_sector


@pytest.mark.parametrize("count", [1, 2, 3, 4, 7])
def test_child_sector_widths_leave_one_slot_free(count):
    sectors = child_sectors(root_sector(), count)
    assert len(sectors) == count
    for sector in sectors:
        assert sector.angle_difference == pytest.approx(360.0 / (count + 1))
    assert sum(s.angle_difference for s in sectors) == pytest.approx(count * 360.0 / (count + 1))


def test_leaf_has_no_sectors():
    assert child_sectors(root_sector(), 0) == []


def test_children_occupy_slots_one_to_k():
    sectors = child_sectors(root_sector(), 3)
    assert [s.angle for s in sectors] == pytest.approx([90.0, 180.0, 270.0])


def test_children_open_opposite_the_incoming_direction():
    parent = Sector(angle=90.0, angle_difference=120.0, starting_angle=30.0)
    sectors = child_sectors(parent, 2)
    assert all(s.starting_angle == pytest.approx(300.0) for s in sectors)
    assert sectors[0].effective_angle == pytest.approx(420.0)


def test_starting_angle_wraps_at_full_turn():
    parent = Sector(angle=270.0, angle_difference=90.0, starting_angle=180.0)
    assert child_sectors(parent, 1)[0].starting_angle == pytest.approx(270.0)


def test_full_circle_spreads_children_over_every_slot():
    sectors = child_sectors(root_sector(), 4, full_circle=True)
    assert [s.angle for s in sectors] == pytest.approx([0.0, 90.0, 180.0, 270.0])
    assert all(s.angle_difference == pytest.approx(90.0) for s in sectors)
    assert sum(s.angle_difference for s in sectors) == pytest.approx(360.0)


def test_root_sector():
    sector = root_sector()
    assert sector.effective_angle == 0.0
    assert sector.half_width == 180.0
