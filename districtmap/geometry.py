"""Ring validation, planar polygons, border polylines, and extrusion."""

import math
import logging
from numbers import Real

import numpy as np
import shapely
from shapely.errors import GEOSException
import trimesh
from shapely.geometry import Polygon
from shapely.geometry.polygon import orient

from .constants import BORDER_ELEVATION, EXTRUDE_DEPTH
from .models import BorderPolyline, LineStyle

logger = logging.getLogger(__name__)


# ── Coordinate validation ────────────────────────────────────────────────

def _is_number(value) -> bool:
    return (isinstance(value, Real) and not isinstance(value, bool)
            and math.isfinite(value))


def is_valid_coord(coord) -> bool:
    """True for a sequence of 2+ items whose first two are finite numbers."""
    if not isinstance(coord, (list, tuple, np.ndarray)) or len(coord) < 2:
        return False
    return _is_number(coord[0]) and _is_number(coord[1])


def filter_valid(ring) -> list[tuple[float, float]]:
    """Keep the usable (x, y) pairs of a raw ring, in order."""
    if not isinstance(ring, (list, tuple)):
        return []
    return [(float(c[0]), float(c[1])) for c in ring if is_valid_coord(c)]


# ── Planar polygons ──────────────────────────────────────────────────────

def build_polygon(ring, params):
    """Normalize a raw ring into a closed planar polygon.

    Returns ``(points, polygon)`` where ``points`` are the normalized valid
    points (first valid point first) and ``polygon`` is implicitly closed.
    Returns None when fewer than 3 valid points remain.
    """
    valid = filter_valid(ring)
    if len(valid) < 3:
        return None

    points = [tuple(p) for p in params.transform_many(valid).tolist()]
    try:
        polygon = Polygon(points)
    except (ValueError, GEOSException) as e:
        logger.warning(f"Ring with {len(points)} points is not a polygon: {e}")
        return None
    return points, polygon


# ── Ground plane ─────────────────────────────────────────────────────────

def ground_plane_matrix(elevation: float = 0.0) -> np.ndarray:
    """Tilt the XY design plane by -90° about X and raise it to ``elevation``.

    Planar (x, y) ends up at world (x, elevation, -y); extrusion depth
    along +Z becomes height along +Y.
    """
    rotation = trimesh.transformations.rotation_matrix(-math.pi / 2, [1, 0, 0])
    translation = trimesh.transformations.translation_matrix([0, elevation, 0])
    return translation @ rotation


def lift_points(points, elevation: float) -> np.ndarray:
    """Map planar points onto the ground plane at ``elevation``."""
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    flat = np.column_stack([pts, np.zeros(len(pts))])
    return trimesh.transformations.transform_points(
        flat, ground_plane_matrix(elevation))


def build_border(points, style: LineStyle | None = None, name=None,
                 elevation: float = BORDER_ELEVATION) -> BorderPolyline:
    """Closed outline over planar points; the first vertex is repeated last."""
    points = list(points)
    vertices = lift_points(points + points[:1], elevation)
    return BorderPolyline(vertices=vertices, style=style or LineStyle(),
                          name=name)


# ── Extrusion ────────────────────────────────────────────────────────────

def _polygonal_parts(polygon):
    """Valid, non-empty polygons making up ``polygon``."""
    if not polygon.is_valid:
        polygon = shapely.make_valid(polygon)
    if polygon.geom_type == 'Polygon':
        parts = [polygon]
    elif polygon.geom_type in ('MultiPolygon', 'GeometryCollection'):
        parts = []
        for g in polygon.geoms:
            # Flatten MultiPolygon inside GeometryCollection
            if g.geom_type == 'MultiPolygon':
                parts.extend(g.geoms)
            elif g.geom_type == 'Polygon':
                parts.append(g)
    else:
        parts = []
    return [p for p in parts if not p.is_empty and p.area > 0]


def extrude_region(polygon, depth: float = EXTRUDE_DEPTH,
                   material=None) -> trimesh.Trimesh:
    """Extrude a planar polygon (no bevel) and lay it on the ground plane.

    Self-intersecting rings are repaired first; a ring with no area left
    raises ValueError.
    """
    parts = _polygonal_parts(polygon)
    if not parts:
        raise ValueError("polygon has no area to extrude")

    meshes = [trimesh.creation.extrude_polygon(orient(p, sign=1.0), height=depth)
              for p in parts]
    mesh = meshes[0] if len(meshes) == 1 else trimesh.util.concatenate(meshes)
    # Proper rotation keeps handedness, so face winding stays outward
    mesh.apply_transform(ground_plane_matrix())

    if material is not None:
        mesh.visual = trimesh.visual.TextureVisuals(material=material)
    return mesh
