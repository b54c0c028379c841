import pytest

from districtmap.models import NormalizationParams

from .helpers import collection, polygon_feature, square


@pytest.fixture
def unit_params():
    return NormalizationParams(scale=1.0, center_x=0.0, center_y=0.0)


@pytest.fixture
def square_districts():
    """The reference scenario: one 10x10 square named "Test, Region"."""
    return collection(polygon_feature(
        [[0, 0], [0, 10], [10, 10], [10, 0]], display_name="Test, Region"))


@pytest.fixture
def grid_markers():
    """Four marker polygons whose vertex averages form a square."""
    return collection(*[
        polygon_feature(square(x, y, 2), name=f"School {i}")
        for i, (x, y) in enumerate([(0, 0), (8, 0), (0, 8), (8, 8)])
    ])
