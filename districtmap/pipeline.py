"""MapPipeline — thin orchestrator over the geometry modules."""

import logging

from .exceptions import PreconditionError
from .markers import build_markers
from .normalize import normalize_collection
from .regions import build_neighborhood_borders, build_regions
from .selection import CellSelection
from .voronoi import VoronoiTessellator

logger = logging.getLogger(__name__)


class MapPipeline:
    def __init__(self, material=None, tessellator=None, progress_callback=None):
        """
        material: district material; a default PBR material if None.
        tessellator: VoronoiTessellator used for marker cells.
        progress_callback: optional ``fn(pct, msg)``.
        """
        self.material = material
        self.tessellator = tessellator or VoronoiTessellator()
        self.progress_callback = progress_callback

        self.params = None
        self.regions = []
        self.neighborhoods = []
        self.markers = []
        self.cells = []
        self.selection = CellSelection()

    def _progress(self, pct, msg):
        if self.progress_callback:
            self.progress_callback(pct, msg)

    def _require_params(self):
        if self.params is None:
            raise PreconditionError(
                "District map has not been loaded; call load_districts first")

    def load_districts(self, collection):
        """Normalize the district collection and build its solids.

        Replaces the active params; layers derived from previous params
        are dropped since they no longer share a coordinate system.
        """
        self._progress(10, "Computing map bounds...")
        params = normalize_collection(collection)

        self.neighborhoods = []
        self.markers = []
        self.clear_cells()
        self.params = params

        self._progress(40, "Building district solids...")
        self.regions = build_regions(collection, params, self.material)
        self._progress(100, f"{len(self.regions)} district solids ready")
        return self.regions

    def load_neighborhoods(self, collection):
        self._require_params()
        self.neighborhoods = build_neighborhood_borders(collection, self.params)
        return self.neighborhoods

    def load_markers(self, collection):
        """Place markers and regenerate the full cell set from scratch."""
        self._require_params()
        markers = build_markers(collection, self.params)

        self.clear_cells()
        self.markers = markers
        self.cells = self.tessellator.generate(
            [m.point for m in markers], self.params.scale,
            names=[m.name for m in markers])
        self.selection.reset(self.cells)
        return self.cells

    def clear_cells(self):
        """Release every previously generated cell."""
        if self.cells:
            logger.debug(f"Clearing {len(self.cells)} cells")
        self.cells = []
        self.selection.reset([])

    def select_cell(self, x: float, y: float):
        return self.selection.select_at(x, y)
