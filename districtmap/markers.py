"""Point-of-interest markers placed at polygon centroids."""

import logging

import numpy as np

from .constants import MARKER_ELEVATION, MARKER_NAME_FALLBACK
from .exceptions import PreconditionError
from .geometry import filter_valid, lift_points
from .models import Marker, iter_features

logger = logging.getLogger(__name__)


def polygon_centroid(coordinates):
    """Arithmetic mean of the outer ring's valid vertices, or None.

    This is a vertex average, not an area centroid; a closed GeoJSON ring
    counts its first vertex twice.
    """
    if not isinstance(coordinates, (list, tuple)) or not coordinates:
        return None
    valid = filter_valid(coordinates[0])
    if not valid:
        return None
    cx, cy = np.mean(np.asarray(valid), axis=0)
    return float(cx), float(cy)


def build_markers(features, params) -> list[Marker]:
    """Normalize marker features into named planar points."""
    if params is None:
        raise PreconditionError(
            "Normalization parameters are missing; load districts first")

    markers = []
    for index, feature in enumerate(iter_features(features)):
        if feature.geometry_type != 'Polygon':
            logger.debug(f"Skipping marker {index}: geometry "
                         f"{feature.geometry_type!r} is not a Polygon")
            continue
        center = polygon_centroid(feature.coordinates)
        if center is None:
            logger.warning(f"Skipping marker {index}: no valid coordinates")
            continue

        try:
            point = params.transform(*center)
            position = tuple(float(v) for v in lift_points([point], MARKER_ELEVATION)[0])
        except Exception as e:
            logger.error(f"Error placing marker {index}: {e}")
            continue
        name = feature.name if isinstance(feature.name, str) else None
        markers.append(Marker(index=index, point=point, position=position,
                              name=name or f"{MARKER_NAME_FALLBACK} {index + 1}"))

    logger.info(f"Created {len(markers)} markers")
    return markers
