"""GeoJSON builders shared by the tests."""


def square(x0, y0, size=10):
    """Closed GeoJSON ring for an axis-aligned square."""
    return [[x0, y0], [x0, y0 + size], [x0 + size, y0 + size],
            [x0 + size, y0], [x0, y0]]


def polygon_feature(ring, **properties):
    return {
        "type": "Feature",
        "geometry": {"type": "Polygon", "coordinates": [ring]},
        "properties": properties,
    }


def multipolygon_feature(rings, **properties):
    return {
        "type": "Feature",
        "geometry": {"type": "MultiPolygon",
                     "coordinates": [[ring] for ring in rings]},
        "properties": properties,
    }


def collection(*features):
    return {"type": "FeatureCollection", "features": list(features)}
