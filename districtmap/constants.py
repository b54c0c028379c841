"""Configuration constants, layer styles, and logging setup."""

import os
import logging

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_float(name: str, default: float) -> float:
    """Read a float override from the environment, falling back on bad values."""
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Ignoring {name}={raw!r}: not a number, using {default}")
        return default


# ── Design-space geometry ────────────────────────────────────────────────

# Length of the larger bounding-box side after normalization
MAP_EXTENT = _env_float("DISTRICTMAP_MAP_EXTENT", 50.0)

EXTRUDE_DEPTH = 1.0       # district solids, in design units
BORDER_ELEVATION = 1.2    # outlines sit just above the solids
MARKER_ELEVATION = 1.2

# Voronoi clip box padding as a fraction of the map scale
CELL_PADDING_RATIO = _env_float("DISTRICTMAP_CELL_PADDING_RATIO", 0.1)

DISTRICT_NAME_FALLBACK = "District"
MARKER_NAME_FALLBACK = "Marker"

# ── Layer styles ─────────────────────────────────────────────────────────
# Colours are RGBA in 0-1, same convention as PBRMaterial.baseColorFactor

STYLES = {
    'district': {
        'fill': [0.08, 0.38, 0.54, 0.9],      # Steel blue
        'border': [1.0, 1.0, 1.0, 0.5],       # Translucent white
    },
    'neighborhood': {
        'border': [1.0, 0.0, 0.0, 0.7],       # Red outline
    },
    'cell': {
        'fill': [0.08, 0.38, 0.54, 0.1],      # Faint steel blue
        'border': [0.95, 0.95, 0.95, 0.5],    # Light grey
        'highlight': [0.12, 0.56, 1.0, 0.3],  # Dodger blue
    },
}

# Configure logging
logging.basicConfig(
    level=os.environ.get("DISTRICTMAP_LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)
