"""Bounding box and design-space normalization for feature collections."""

import logging

from .constants import MAP_EXTENT
from .exceptions import DegenerateBoundsError, InvalidInputError
from .geometry import is_valid_coord
from .models import Bounds, NormalizationParams, iter_features

logger = logging.getLogger(__name__)


def first_ring(feature):
    """Return the ring used for bounds, or None.

    Polygons use their outer ring. MultiPolygons only use the outer ring of
    their first part, so secondary parts never widen the bounds.
    """
    coords = feature.coordinates
    if not isinstance(coords, (list, tuple)) or not coords:
        return None
    ring = coords[0]
    if feature.geometry_type == 'MultiPolygon':
        if not isinstance(ring, (list, tuple)) or not ring:
            return None
        ring = ring[0]
    if not isinstance(ring, (list, tuple)):
        return None
    return ring


def compute_bounds(features) -> Bounds:
    """Union bounding box over the first ring of every feature."""
    bounds = Bounds()
    for feature in iter_features(features):
        ring = first_ring(feature)
        if ring is None:
            continue
        for coord in ring:
            if is_valid_coord(coord):
                bounds.include(float(coord[0]), float(coord[1]))
    return bounds


def compute_params(bounds: Bounds) -> NormalizationParams:
    """Derive scale and center so the larger side spans MAP_EXTENT units."""
    if bounds.is_empty:
        raise InvalidInputError("No valid coordinates found; cannot normalize")

    extent = max(bounds.width, bounds.height)
    if extent == 0:
        raise DegenerateBoundsError(
            f"Bounds collapse to a single point "
            f"({bounds.min_x}, {bounds.min_y}); cannot derive a scale")

    params = NormalizationParams(
        scale=MAP_EXTENT / extent,
        center_x=(bounds.min_x + bounds.max_x) / 2,
        center_y=(bounds.min_y + bounds.max_y) / 2,
    )
    logger.info(f"Normalization: scale={params.scale:.6g}, "
                f"center=({params.center_x:.6g}, {params.center_y:.6g})")
    return params


def normalize_collection(features) -> NormalizationParams:
    return compute_params(compute_bounds(features))
