import numpy as np
import pytest

from districtmap.normalize import normalize_collection
from districtmap.projection import (
    CameraState, label_positions, look_at, perspective_matrix, project,
)
from districtmap.regions import build_regions


@pytest.fixture
def camera():
    return CameraState(
        view_matrix=look_at(eye=(0, 0, 10), target=(0, 0, 0)),
        projection_matrix=perspective_matrix(60, 1.0, 0.1, 100),
        width=800, height=600,
    )


def test_target_projects_to_viewport_center(camera):
    point = project((0, 0, 0), camera)

    assert point.x == pytest.approx(400)
    assert point.y == pytest.approx(300)
    assert point.visible


def test_screen_axes(camera):
    right = project((1, 0, 0), camera)
    up = project((0, 1, 0), camera)

    assert right.x > 400
    assert right.y == pytest.approx(300)
    assert up.y < 300


def test_point_behind_camera_is_hidden(camera):
    assert not project((0, 0, 20), camera).visible


def test_point_beyond_far_plane_is_hidden(camera):
    assert not project((0, 0, -500), camera).visible


def test_look_at_moves_eye_to_origin():
    view = look_at(eye=(5, 20, 5), target=(0, 0, 0))
    np.testing.assert_allclose(view @ [5, 20, 5, 1], [0, 0, 0, 1], atol=1e-9)


def test_label_positions_follow_solids(camera, square_districts):
    params = normalize_collection(square_districts)
    solids = [r.solid for r in build_regions(square_districts, params)]

    labels = label_positions(solids, camera)

    assert [name for name, _ in labels] == ["Test"]
    _, screen = labels[0]
    assert screen.x == pytest.approx(400)
    assert screen.y < 300
