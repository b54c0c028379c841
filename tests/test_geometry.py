import math

import numpy as np
import pytest
from shapely.geometry import Polygon

from districtmap.geometry import (
    build_border, build_polygon, extrude_region, filter_valid, ground_plane_matrix,
    is_valid_coord, lift_points,
)
from districtmap.models import LineStyle, NormalizationParams

MIXED_RING = [[1, 2], [math.nan, 3], [4, "x"], [5, 6], [7, 8]]


@pytest.mark.parametrize("coord, expected", [
    ([1, 2], True),
    ((1.5, -2.5, 100), True),
    (np.array([3.0, 4.0]), True),
    ([1], False),
    ([math.nan, 1], False),
    ([1, math.inf], False),
    (["1", 2], False),
    ([True, 2], False),
    (None, False),
    ("12", False),
])
def test_is_valid_coord(coord, expected):
    assert is_valid_coord(coord) is expected


def test_filter_valid_keeps_numeric_pairs_in_order():
    assert filter_valid(MIXED_RING) == [(1, 2), (5, 6), (7, 8)]


def test_filter_valid_on_non_ring():
    assert filter_valid(None) == []
    assert filter_valid(42) == []


def test_three_valid_points_build_a_polygon(unit_params):
    built = build_polygon(MIXED_RING, unit_params)

    assert built is not None
    points, polygon = built
    assert points == [(1, 2), (5, 6), (7, 8)]
    assert isinstance(polygon, Polygon)


def test_two_valid_points_return_none(unit_params):
    assert build_polygon(MIXED_RING[:4], unit_params) is None


def test_polygon_points_are_normalized_from_first_valid_point():
    params = NormalizationParams(scale=5.0, center_x=5.0, center_y=5.0)
    points, polygon = build_polygon([[0, 0], [0, 10], [10, 10], [10, 0]], params)

    assert points[0] == pytest.approx((-25.0, -25.0))
    assert polygon.exterior.coords[0] == pytest.approx((-25.0, -25.0))
    assert polygon.exterior.coords[-1] == polygon.exterior.coords[0]
    assert polygon.area == pytest.approx(2500.0)


def test_ground_plane_maps_planar_y_to_negative_z():
    lifted = lift_points([(3.0, 4.0)], elevation=1.2)
    np.testing.assert_allclose(lifted, [[3.0, 1.2, -4.0]], atol=1e-12)

    matrix = ground_plane_matrix()
    np.testing.assert_allclose(matrix[:3, :3] @ [0, 0, 1], [0, 1, 0], atol=1e-12)


def test_border_is_closed_at_fixed_elevation():
    style = LineStyle(color=(1, 0, 0), opacity=0.7, emphasis=True)
    border = build_border([(0, 0), (1, 0), (1, 1)], style=style, name="A")

    assert border.vertices.shape == (4, 3)
    np.testing.assert_allclose(border.vertices[0], border.vertices[-1])
    np.testing.assert_allclose(border.vertices[:, 1], 1.2)
    assert border.planar_points[:3] == pytest.approx([(0, 0), (1, 0), (1, 1)])
    assert border.style.emphasis
    assert border.name == "A"


def test_extrusion_lies_on_ground_plane():
    polygon = Polygon([(-25, -25), (-25, 25), (25, 25), (25, -25)])
    mesh = extrude_region(polygon, depth=1.0)

    np.testing.assert_allclose(mesh.bounds, [[-25, 0, -25], [25, 1, 25]], atol=1e-9)
    assert mesh.is_watertight
    assert mesh.volume == pytest.approx(2500.0)


def test_extrusion_repairs_self_intersecting_ring():
    bowtie = Polygon([(0, 0), (2, 2), (2, 0), (0, 2)])
    mesh = extrude_region(bowtie, depth=1.0)

    assert mesh.volume == pytest.approx(2.0)


def test_extrusion_rejects_zero_area(unit_params):
    _, collinear = build_polygon(MIXED_RING, unit_params)
    with pytest.raises(ValueError):
        extrude_region(collinear)


def test_border_converts_to_trimesh_path():
    border = build_border([(0, 0), (4, 0), (4, 3)])
    path = border.to_path()

    assert len(path.entities) == 1
    np.testing.assert_allclose(path.bounds, [[0, 1.2, -3], [4, 1.2, 0]], atol=1e-9)
