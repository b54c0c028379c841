"""Data classes shared by the geometry pipeline."""

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, NamedTuple, Optional

import numpy as np
import trimesh
from shapely.geometry import Point, Polygon, box

from .constants import STYLES

PlanarPoint = tuple[float, float]


@dataclass
class Bounds:
    min_x: float = math.inf
    max_x: float = -math.inf
    min_y: float = math.inf
    max_y: float = -math.inf

    @property
    def is_empty(self) -> bool:
        return self.min_x > self.max_x or self.min_y > self.max_y

    @property
    def width(self) -> float:
        return abs(self.max_x - self.min_x)

    @property
    def height(self) -> float:
        return abs(self.max_y - self.min_y)

    def include(self, x: float, y: float) -> None:
        """Grow the bounds to cover (x, y)."""
        self.min_x = min(self.min_x, x)
        self.max_x = max(self.max_x, x)
        self.min_y = min(self.min_y, y)
        self.max_y = max(self.max_y, y)

    def padded(self, padding: float) -> "Bounds":
        return Bounds(self.min_x - padding, self.max_x + padding,
                      self.min_y - padding, self.max_y + padding)

    def to_polygon(self) -> Polygon:
        """Convert bounds to a shapely box."""
        return box(self.min_x, self.min_y, self.max_x, self.max_y)


@dataclass(frozen=True)
class NormalizationParams:
    """Uniform scale + center offset into design space.

    Computed once per district collection and passed explicitly to every
    builder that places geometry in the same planar system.
    """
    scale: float
    center_x: float
    center_y: float

    def transform(self, x: float, y: float) -> PlanarPoint:
        return ((x - self.center_x) * self.scale,
                (y - self.center_y) * self.scale)

    def transform_many(self, points) -> np.ndarray:
        """Vectorised ``transform`` over an (N, 2) array-like."""
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        center = np.array([self.center_x, self.center_y])
        return (pts - center) * self.scale


@dataclass
class GeoFeature:
    """A GeoJSON-like feature: geometry kind, raw coordinates, properties."""
    geometry_type: Optional[str]
    coordinates: Any
    properties: dict = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.properties, Mapping):
            self.properties = {}

    @classmethod
    def from_geojson(cls, feature) -> "GeoFeature":
        if not isinstance(feature, Mapping):
            return cls(None, None, {})
        geometry = feature.get('geometry') or {}
        properties = feature.get('properties') or {}
        if not isinstance(geometry, Mapping):
            geometry = {}
        if not isinstance(properties, Mapping):
            properties = {}
        return cls(geometry.get('type'), geometry.get('coordinates'),
                   dict(properties))

    @property
    def display_name(self) -> Optional[str]:
        return self.properties.get('display_name')

    @property
    def name(self) -> Optional[str]:
        return self.properties.get('name')


def iter_features(collection):
    """Yield GeoFeature objects from a FeatureCollection or a feature list."""
    if collection is None:
        return
    if isinstance(collection, Mapping):
        collection = collection.get('features') or []
    for feature in collection:
        if isinstance(feature, GeoFeature):
            yield feature
        else:
            yield GeoFeature.from_geojson(feature)


# ── Output primitives ────────────────────────────────────────────────────

@dataclass(frozen=True)
class LineStyle:
    color: tuple = (1.0, 1.0, 1.0)
    opacity: float = 1.0
    emphasis: bool = False

    @classmethod
    def from_rgba(cls, rgba: Sequence, emphasis: bool = False) -> "LineStyle":
        return cls(tuple(rgba[:3]), float(rgba[3]) if len(rgba) > 3 else 1.0,
                   emphasis)


@dataclass
class BorderPolyline:
    """Closed outline in world space; vertices[0] == vertices[-1]."""
    vertices: np.ndarray
    style: LineStyle = field(default_factory=LineStyle)
    name: Optional[str] = None

    @property
    def planar_points(self) -> list[PlanarPoint]:
        # world (x, h, -y) back to planar (x, y)
        return [(float(x), float(-z)) for x, _, z in self.vertices]

    def to_path(self):
        """Outline as a trimesh Path3D, e.g. for adding to a Scene."""
        return trimesh.load_path(self.vertices)


@dataclass
class RegionSolid:
    """An extruded district polygon lying on the ground plane."""
    name: str
    points: list[PlanarPoint]
    polygon: Polygon
    mesh: trimesh.Trimesh
    depth: float

    @property
    def label_anchor(self) -> np.ndarray:
        """World-space center of the mesh bounding box."""
        return self.mesh.bounds.mean(axis=0)


class RegionGeometry(NamedTuple):
    solid: RegionSolid
    border: BorderPolyline
    display_name: str


@dataclass
class Marker:
    index: int
    name: str
    point: PlanarPoint
    position: tuple[float, float, float]


@dataclass
class TessellationCell:
    """The bounded region of the plane nearest to one marker point."""
    index: int
    polygon: Polygon
    points: list[PlanarPoint]
    border: BorderPolyline
    name: Optional[str] = None
    fill: tuple = field(default_factory=lambda: tuple(STYLES['cell']['fill']))

    def covers(self, x: float, y: float) -> bool:
        return self.polygon.covers(Point(x, y))
