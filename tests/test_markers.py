import pytest

from districtmap.exceptions import PreconditionError
from districtmap.markers import build_markers, polygon_centroid
from districtmap.models import GeoFeature, NormalizationParams

from .helpers import collection, multipolygon_feature, polygon_feature, square


def test_centroid_is_vertex_average_including_closing_point():
    assert polygon_centroid([square(0, 0)]) == pytest.approx((4.0, 4.0))
    assert polygon_centroid([[[0, 0], [6, 0], [0, 6]]]) == pytest.approx((2.0, 2.0))


def test_centroid_without_valid_points():
    assert polygon_centroid([[["a", 1]]]) is None
    assert polygon_centroid(None) is None


def test_markers_are_normalized_and_lifted():
    params = NormalizationParams(scale=2.0, center_x=1.0, center_y=1.0)
    markers = build_markers(collection(
        polygon_feature([[0, 0], [6, 0], [0, 6]], name="Lycee"),
        polygon_feature([[2, 2], [4, 2], [2, 4]]),
    ), params)

    assert [m.name for m in markers] == ["Lycee", "Marker 2"]
    assert markers[0].point == pytest.approx((2.0, 2.0))
    assert markers[0].position == pytest.approx((2.0, 1.2, -2.0))


def test_non_polygon_and_empty_markers_are_skipped():
    params = NormalizationParams(scale=1.0, center_x=0.0, center_y=0.0)
    markers = build_markers(collection(
        multipolygon_feature([square(0, 0)], name="Multi"),
        polygon_feature([[None, None]], name="Empty"),
        polygon_feature(square(0, 0), name="Kept"),
    ), params)

    assert [(m.index, m.name) for m in markers] == [(2, "Kept")]


def test_markers_require_params():
    with pytest.raises(PreconditionError):
        build_markers(collection(), None)


def test_marker_without_properties_keeps_batch_going():
    params = NormalizationParams(scale=1.0, center_x=0.0, center_y=0.0)
    markers = build_markers([
        GeoFeature("Polygon", [square(0, 0)], None),
        GeoFeature("Polygon", [square(4, 4)], {"name": 7}),
        GeoFeature("Polygon", [square(8, 8)], {"name": "Ataturk Lisesi"}),
    ], params)

    assert [m.name for m in markers] == ["Marker 1", "Marker 2", "Ataturk Lisesi"]
