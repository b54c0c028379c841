"""districtmap — geometry pipeline for 3D administrative maps.

Import constants FIRST so logging and environment overrides are
configured before any other module reads them.
"""

from districtmap import constants as _constants  # noqa: F401

from districtmap.exceptions import (
    DegenerateBoundsError, GeometryPipelineError, InvalidInputError,
    PreconditionError,
)
from districtmap.models import (
    Bounds, BorderPolyline, GeoFeature, LineStyle, Marker,
    NormalizationParams, RegionGeometry, RegionSolid, TessellationCell,
)
from districtmap.normalize import compute_bounds, compute_params
from districtmap.geometry import build_polygon, filter_valid
from districtmap.regions import build_neighborhood_borders, build_region, build_regions
from districtmap.voronoi import VoronoiTessellator, generate_cells
from districtmap.pipeline import MapPipeline
