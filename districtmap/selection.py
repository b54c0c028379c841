"""Planar hit-testing and highlight state for tessellation cells."""

import logging

from .constants import STYLES

logger = logging.getLogger(__name__)


def locate_cell(cells, x: float, y: float):
    """First cell whose polygon covers planar (x, y), or None."""
    for cell in cells:
        if cell.covers(x, y):
            return cell
    return None


class CellSelection:
    """Tracks the highlighted cell; at most one is highlighted at a time."""

    def __init__(self, cells=None):
        self.cells = list(cells or [])
        self.selected = None

    def reset(self, cells) -> None:
        """Swap in a regenerated cell list and drop the old selection."""
        if self.selected is not None:
            self._restore(self.selected)
        self.cells = list(cells)
        self.selected = None

    def select_at(self, x: float, y: float):
        """Highlight the cell under (x, y); returns it, or None on a miss."""
        if self.selected is not None:
            self._restore(self.selected)
            self.selected = None

        cell = locate_cell(self.cells, x, y)
        if cell is not None:
            cell.fill = tuple(STYLES['cell']['highlight'])
            self.selected = cell
            logger.debug(f"Selected cell {cell.index} ({cell.name})")
        return cell

    @staticmethod
    def _restore(cell) -> None:
        cell.fill = tuple(STYLES['cell']['fill'])
