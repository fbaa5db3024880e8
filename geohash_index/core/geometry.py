"""
Geometry of geohash cells.

Shapely polygons for cells and coverages, and the ground size of a cell
using the haversine great-circle distance.
"""
import math
from typing import Iterable, Tuple, Union

from shapely.geometry import MultiPolygon, Polygon, box
from shapely.ops import unary_union

from geohash_index.core.codec import decode_bounds, height_degrees, width_degrees
from geohash_index.core.coverage import Coverage, CoverageLongs


# Earth's radius in meters (mean radius)
EARTH_RADIUS_M = 6371000.0


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate great-circle distance between two points using Haversine formula.

    Args:
        lat1: Latitude of first point (decimal degrees)
        lon1: Longitude of first point (decimal degrees)
        lat2: Latitude of second point (decimal degrees)
        lon2: Longitude of second point (decimal degrees)

    Returns:
        Distance in meters

    References:
        https://en.wikipedia.org/wiki/Haversine_formula
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    dlat = lat2_rad - lat1_rad
    dlon = math.radians(lon2 - lon1)

    a = (math.sin(dlat / 2)) ** 2 + \
        math.cos(lat1_rad) * math.cos(lat2_rad) * (math.sin(dlon / 2)) ** 2

    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


def cell_dimensions_m(length: int, latitude: float = 0.0) -> Tuple[float, float]:
    """
    Approximate ground size of a geohash cell.

    Args:
        length: Hash length
        latitude: Latitude at which the width is measured (default: equator)

    Returns:
        Tuple of (height_m, width_m)

    Example:
        >>> height_m, width_m = cell_dimensions_m(7)
        >>> print(f"~{height_m:.0f}m x {width_m:.0f}m")
        ~153m x 153m
    """
    height = haversine_distance(0.0, 0.0, height_degrees(length), 0.0)
    width = haversine_distance(latitude, 0.0, latitude, width_degrees(length))
    return height, width


def cell_polygon(geohash: str) -> Polygon:
    """
    Convert a geohash to a Shapely Polygon representing its bounding box.

    Coordinates are (lon, lat) as usual for GIS tooling.

    Example:
        >>> cell_polygon("s").bounds
        (0.0, 0.0, 45.0, 45.0)
    """
    min_lat, max_lat, min_lon, max_lon = decode_bounds(geohash)
    return box(min_lon, min_lat, max_lon, max_lat)


def coverage_polygon(
    coverage: Union[Coverage, CoverageLongs, Iterable[str]]
) -> Union[Polygon, MultiPolygon]:
    """
    Union of the cells in a coverage (or any iterable of hashes).

    Adjacent cells merge, so a coverage of a compact region usually comes
    back as a single Polygon.
    """
    if isinstance(coverage, CoverageLongs):
        coverage = coverage.to_coverage()
    hashes = coverage.hashes if isinstance(coverage, Coverage) else coverage
    return unary_union([cell_polygon(h) for h in hashes])
