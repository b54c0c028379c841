"""District solids and neighborhood outlines from feature collections."""

import logging

from trimesh.visual.material import PBRMaterial

from .constants import (
    BORDER_ELEVATION, DISTRICT_NAME_FALLBACK, EXTRUDE_DEPTH, STYLES,
)
from .exceptions import PreconditionError
from .geometry import build_border, build_polygon, extrude_region
from .models import LineStyle, RegionGeometry, RegionSolid, iter_features

logger = logging.getLogger(__name__)


def default_material():
    """Shared district material; callers may pass their own."""
    return PBRMaterial(
        baseColorFactor=STYLES['district']['fill'],
        doubleSided=True,
    )


def district_name(feature, index: int) -> str:
    """First comma-separated token of display_name, or a positional name.

    "Kadikoy, Istanbul, Turkey" -> "Kadikoy"
    """
    name = feature.display_name
    if not isinstance(name, str):
        name = None
    else:
        name = name.split(',')[0].strip()
    return name or f"{DISTRICT_NAME_FALLBACK} {index + 1}"


def outer_rings(feature):
    """Yield the outer ring of each polygon part of a feature.

    A malformed MultiPolygon part yields None so that only that part is
    skipped.
    """
    coords = feature.coordinates
    if not isinstance(coords, (list, tuple)) or not coords:
        raise ValueError("geometry has no coordinates")
    if feature.geometry_type == 'Polygon':
        yield coords[0]
    elif feature.geometry_type == 'MultiPolygon':
        for part in coords:
            yield part[0] if isinstance(part, (list, tuple)) and part else None
    else:
        raise ValueError(f"Unsupported geometry type: {feature.geometry_type!r}")


def _require_params(params):
    if params is None:
        raise PreconditionError(
            "Normalization parameters are missing; load districts first")


def build_region(feature, params, material=None, index: int = 0,
                 border_style: LineStyle | None = None) -> list[RegionGeometry]:
    """Build one solid + border per polygon part of a district feature.

    Parts that cannot be built are logged and skipped; the others are
    still returned.
    """
    _require_params(params)
    name = district_name(feature, index)
    border_style = border_style or LineStyle.from_rgba(STYLES['district']['border'])

    try:
        rings = list(outer_rings(feature))
    except (TypeError, IndexError, KeyError, ValueError) as e:
        logger.warning(f"Skipping district {name}: malformed geometry ({e})")
        return []

    results = []
    for part_index, ring in enumerate(rings):
        if len(rings) > 1:
            logger.debug(f"Processing MultiPolygon part: {name} - "
                         f"part {part_index + 1}/{len(rings)}")
        try:
            built = build_polygon(ring, params)
            if built is None:
                logger.warning(f"Not enough valid coordinates: {name} "
                               f"(part {part_index + 1})")
                continue
            points, polygon = built
            mesh = extrude_region(polygon, depth=EXTRUDE_DEPTH, material=material)
            solid = RegionSolid(name=name, points=points, polygon=polygon,
                                mesh=mesh, depth=EXTRUDE_DEPTH)
            border = build_border(points, style=border_style, name=name,
                                  elevation=BORDER_ELEVATION)
            results.append(RegionGeometry(solid, border, name))
        except Exception as e:
            logger.error(f"Error building district part ({name}, "
                         f"part {part_index + 1}): {e}")
            continue
    return results


def build_regions(features, params, material=None) -> list[RegionGeometry]:
    """Build every district in a collection, skipping unusable records."""
    _require_params(params)
    if material is None:
        material = default_material()

    results = []
    for index, feature in enumerate(iter_features(features)):
        try:
            results.extend(build_region(feature, params, material, index=index))
        except Exception as e:
            logger.error(f"Error processing district {index}: {e}")
            continue

    logger.info(f"Built {len(results)} district solids")
    return results


def build_neighborhood_borders(features, params,
                               style: LineStyle | None = None) -> list:
    """Outline-only neighborhoods drawn over the district solids."""
    _require_params(params)
    if style is None:
        style = LineStyle.from_rgba(STYLES['neighborhood']['border'],
                                    emphasis=True)

    borders = []
    for index, feature in enumerate(iter_features(features)):
        try:
            for ring in outer_rings(feature):
                built = build_polygon(ring, params)
                if built is None:
                    logger.warning(f"Skipping neighborhood {index}: "
                                   f"not enough valid coordinates")
                    continue
                points, _ = built
                borders.append(build_border(points, style=style,
                                            name=feature.display_name or feature.name))
        except Exception as e:
            logger.error(f"Error processing neighborhood ({index}): {e}")
            continue

    logger.info(f"Built {len(borders)} neighborhood borders")
    return borders
