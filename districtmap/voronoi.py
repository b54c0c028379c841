"""Voronoi tessellation of marker points, clipped to a padded bounding box."""

import math
import logging

import numpy as np
import shapely
from shapely.geometry import MultiPoint, Point
from shapely.geometry.polygon import orient
from shapely.strtree import STRtree

from .constants import BORDER_ELEVATION, CELL_PADDING_RATIO, STYLES
from .exceptions import InvalidInputError
from .geometry import build_border
from .models import Bounds, LineStyle, TessellationCell

logger = logging.getLogger(__name__)


class VoronoiTessellator:
    """Builds one bounded cell per marker point.

    Stateless: every ``generate`` call starts from scratch, so callers
    replace (never extend) their previous cell list with the result.
    """

    def __init__(self, padding_ratio: float = CELL_PADDING_RATIO,
                 border_style: LineStyle | None = None,
                 elevation: float = BORDER_ELEVATION):
        self.padding_ratio = padding_ratio
        self.border_style = border_style or LineStyle.from_rgba(
            STYLES['cell']['border'])
        self.elevation = elevation

    def clip_bounds(self, points: np.ndarray, reference_scale: float) -> Bounds:
        bounds = Bounds(
            min_x=float(points[:, 0].min()), max_x=float(points[:, 0].max()),
            min_y=float(points[:, 1].min()), max_y=float(points[:, 1].max()),
        )
        return bounds.padded(reference_scale * self.padding_ratio)

    def _assign_regions(self, points: np.ndarray, valid: np.ndarray, clip) -> dict:
        """Map point index -> raw Voronoi region (unclipped)."""
        indices = np.flatnonzero(valid)
        distinct = np.unique(points[indices], axis=0)
        if len(distinct) == 1:
            # One site owns the whole box; coincident copies get nothing
            return {int(indices[0]): clip}

        diagram = shapely.voronoi_polygons(MultiPoint(points[indices]),
                                           extend_to=clip)
        regions = list(diagram.geoms)
        tree = STRtree(regions)

        owned = {}
        claimed = set()
        for i in indices:
            hits = tree.query(Point(points[i]), predicate='within')
            hits = [int(h) for h in sorted(hits) if int(h) not in claimed]
            if not hits:
                logger.debug(f"Point {i} owns no Voronoi region (duplicate?)")
                continue
            claimed.add(hits[0])
            owned[int(i)] = regions[hits[0]]
        return owned

    def generate(self, points, reference_scale: float,
                 names=None) -> list[TessellationCell]:
        """Tessellate planar points; the result replaces any earlier cells."""
        if not math.isfinite(reference_scale) or reference_scale <= 0:
            raise InvalidInputError(
                f"reference_scale must be a positive number, got {reference_scale!r}")

        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        if len(pts) == 0:
            return []

        valid = np.isfinite(pts).all(axis=1)
        if not valid.any():
            logger.warning("No finite marker points; no cells generated")
            return []

        bounds = self.clip_bounds(pts[valid], reference_scale)
        clip = bounds.to_polygon()
        regions = self._assign_regions(pts, valid, clip)

        cells = []
        for i in range(len(pts)):
            region = regions.get(i)
            if region is None:
                continue
            try:
                cells.append(self._build_cell(i, region, clip, names))
            except Exception as e:
                logger.error(f"Error building cell {i}: {e}")
                continue

        logger.info(f"Voronoi diagram built: {len(cells)} cells "
                    f"for {len(pts)} points")
        return cells

    def _build_cell(self, index, region, clip, names) -> TessellationCell:
        polygon = region.intersection(clip)
        if polygon.geom_type != 'Polygon' or polygon.is_empty:
            raise ValueError(f"clipped region is a {polygon.geom_type}")
        polygon = orient(polygon, sign=1.0)
        vertices = [(float(x), float(y)) for x, y in polygon.exterior.coords[:-1]]
        name = names[index] if names is not None else None
        border = build_border(vertices, style=self.border_style, name=name,
                              elevation=self.elevation)
        return TessellationCell(index=index, polygon=polygon, points=vertices,
                                border=border, name=name)


def generate_cells(points, reference_scale: float, names=None):
    """Tessellate with the default padding and styling."""
    return VoronoiTessellator().generate(points, reference_scale, names=names)
