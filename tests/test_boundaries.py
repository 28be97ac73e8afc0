import math

import pytest

from snowflake_layout import Point, Sector, node_boundaries


def test_rays_start_at_parent_centre_and_bound_the_wedge():
    sector = Sector(angle=90.0, angle_difference=90.0, starting_angle=0.0)
    clockwise, anticlockwise = node_boundaries(sector, Point(0.0, 280.0), 100.0)

    assert clockwise.point1 == Point(0.0, -280.0)
    assert anticlockwise.point1 == Point(0.0, -280.0)

    half = 100.0 / math.sqrt(2.0)
    assert clockwise.point2.x == pytest.approx(-half)
    assert clockwise.point2.y == pytest.approx(-280.0 + half)
    assert anticlockwise.point2.x == pytest.approx(half)
    assert anticlockwise.point2.y == pytest.approx(-280.0 + half)


def test_ray_length_matches_probe():
    sector = Sector(angle=40.0, angle_difference=72.0, starting_angle=200.0)
    for ray in node_boundaries(sector, Point(12.0, -7.0), 5000.0):
        assert ray.magnitude() == pytest.approx(5000.0)


def test_root_rays_coincide():
    sector = Sector(angle=0.0, angle_difference=360.0)
    clockwise, anticlockwise = node_boundaries(sector, Point(), 10.0)
    assert clockwise.point2.x == pytest.approx(-10.0)
    assert anticlockwise.point2.x == pytest.approx(-10.0)
