"""
Bounding box coverage planning.

Picks the longest hash length whose cells still cover an axis-aligned
bounding box within a cell budget, and enumerates those cells. Cells are
collected as packed integers so duplicates collapse on integer equality;
:class:`Coverage` holds the same cells as strings.
"""
import math
from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

from geohash_index.core.codec import (
    BITS_PER_CHAR,
    MAX_HASH_LENGTH,
    encode_to_packed_long,
    height_degrees,
    packed_long_to_string,
    width_degrees,
)
from geohash_index.core.intervals import (
    LATITUDE_RANGE,
    LONGITUDE_RANGE,
    bisect,
    normalize_longitude,
)
from geohash_index.utils.exceptions import (
    CoverageError,
    InvalidBoundingBoxError,
    InvalidPrecisionError,
)


# Default cell budget for cover_bounding_box
DEFAULT_MAX_HASHES = 12


@dataclass(frozen=True)
class CoverageLongs:
    """Packed hashes covering a region and how tightly they cover it.

    ``ratio`` is total cell area over bounding box area in square degrees;
    it is always >= 1 and closer to 1 means a tighter fit.
    """
    hashes: Tuple[int, ...]
    ratio: float

    @property
    def count(self) -> int:
        return len(self.hashes)

    @property
    def hash_length(self) -> int:
        """Length shared by all hashes, 0 when empty."""
        if not self.hashes:
            return 0
        return self.hashes[0] & 0xF

    def to_coverage(self) -> 'Coverage':
        return Coverage(
            hashes=frozenset(packed_long_to_string(h) for h in self.hashes),
            ratio=self.ratio,
        )


@dataclass(frozen=True)
class Coverage:
    """Geohash strings covering a region and how tightly they cover it."""
    hashes: FrozenSet[str]
    ratio: float

    @property
    def count(self) -> int:
        return len(self.hashes)

    @property
    def hash_length(self) -> int:
        """Length shared by all hashes, 0 when empty."""
        if not self.hashes:
            return 0
        return len(next(iter(self.hashes)))


def _normalized_box(top_left_lat, top_left_lon, bottom_right_lat, bottom_right_lon):
    corners = (top_left_lat, top_left_lon, bottom_right_lat, bottom_right_lon)
    if top_left_lat < bottom_right_lat:
        raise InvalidBoundingBoxError("top_left_lat must be >= bottom_right_lat", corners=corners)
    top_left_lon = normalize_longitude(top_left_lon)
    bottom_right_lon = normalize_longitude(bottom_right_lon)
    if top_left_lon > bottom_right_lon:
        # Boxes spanning the antimeridian are not split
        raise InvalidBoundingBoxError(
            "top_left_lon must be <= bottom_right_lon after normalisation", corners=corners
        )
    return top_left_lat, top_left_lon, bottom_right_lat, bottom_right_lon


def hash_length_to_cover_bounding_box(
    top_left_lat: float,
    top_left_lon: float,
    bottom_right_lat: float,
    bottom_right_lon: float,
) -> int:
    """
    Longest hash length whose single cell could hold both corners.

    Both corners are bisected together; the first bit at which they fall
    into different halves ends the search. Returns 0 when the corners part
    in the first character and 12 when they never part.
    """
    lat_range, lon_range = LATITUDE_RANGE, LONGITUDE_RANGE

    for bits in range(MAX_HASH_LENGTH * BITS_PER_CHAR):
        if bits % 2 == 0:
            first, second, interval = top_left_lon, bottom_right_lon, lon_range
        else:
            first, second, interval = top_left_lat, bottom_right_lat, lat_range

        mid = interval.mid
        upper = first >= mid
        if upper != (second >= mid):
            return bits // BITS_PER_CHAR
        interval, _ = bisect(interval, upper)

        if bits % 2 == 0:
            lon_range = interval
        else:
            lat_range = interval

    return MAX_HASH_LENGTH


def _cover_at_length(top_left_lat, top_left_lon, bottom_right_lat, bottom_right_lon, length) -> CoverageLongs:
    cell_width = width_degrees(length)
    cell_height = height_degrees(length)
    hashes = set()

    lat = bottom_right_lat
    while lat <= top_left_lat:
        lon = top_left_lon
        while lon <= bottom_right_lon:
            hashes.add(encode_to_packed_long(lat, lon, length))
            lon += cell_width
        lat += cell_height

    # Stepping accumulates rounding error, so add the right column,
    # the top row and the top right corner explicitly.
    lat = bottom_right_lat
    while lat <= top_left_lat:
        hashes.add(encode_to_packed_long(lat, bottom_right_lon, length))
        lat += cell_height
    lon = top_left_lon
    while lon <= bottom_right_lon:
        hashes.add(encode_to_packed_long(top_left_lat, lon, length))
        lon += cell_width
    hashes.add(encode_to_packed_long(top_left_lat, bottom_right_lon, length))

    area = (bottom_right_lon - top_left_lon) * (top_left_lat - bottom_right_lat)
    covered = len(hashes) * cell_width * cell_height
    ratio = covered / area if area > 0 else math.inf
    return CoverageLongs(hashes=tuple(sorted(hashes)), ratio=ratio)


def cover_bounding_box_at_length(
    top_left_lat: float,
    top_left_lon: float,
    bottom_right_lat: float,
    bottom_right_lon: float,
    length: int,
) -> Coverage:
    """
    Cells of a fixed length covering the bounding box.

    Raises:
        InvalidBoundingBoxError: If the corners are inverted
        InvalidPrecisionError: If length is outside [1, 12]
    """
    if not 1 <= length <= MAX_HASH_LENGTH:
        raise InvalidPrecisionError(f"length must be between 1 and {MAX_HASH_LENGTH}", value=length)
    box = _normalized_box(top_left_lat, top_left_lon, bottom_right_lat, bottom_right_lon)
    return _cover_at_length(*box, length).to_coverage()


def cover_bounding_box_longs(
    top_left_lat: float,
    top_left_lon: float,
    bottom_right_lat: float,
    bottom_right_lon: float,
    max_hashes: int = DEFAULT_MAX_HASHES,
) -> CoverageLongs:
    """
    Packed-hash form of :func:`cover_bounding_box`.

    Lengths are tried from the one returned by
    :func:`hash_length_to_cover_bounding_box` up to 12; the search stops
    at the first length needing more than ``max_hashes`` cells and the
    previous length wins. When the very first length is already over
    budget its coverage is returned anyway.

    Raises:
        CoverageError: If max_hashes < 1
        InvalidBoundingBoxError: If the corners are inverted
    """
    if max_hashes < 1:
        raise CoverageError(f"max_hashes must be at least 1, got {max_hashes}")
    box = _normalized_box(top_left_lat, top_left_lon, bottom_right_lat, bottom_right_lon)
    start_length = max(hash_length_to_cover_bounding_box(*box), 1)

    coverage: Optional[CoverageLongs] = None
    for length in range(start_length, MAX_HASH_LENGTH + 1):
        candidate = _cover_at_length(*box, length)
        if candidate.count > max_hashes:
            return coverage if coverage is not None else candidate
        coverage = candidate

    return coverage


def cover_bounding_box(
    top_left_lat: float,
    top_left_lon: float,
    bottom_right_lat: float,
    bottom_right_lon: float,
    max_hashes: int = DEFAULT_MAX_HASHES,
) -> Coverage:
    """
    Cover a bounding box with at most ``max_hashes`` geohash cells.

    Args:
        top_left_lat: Northern edge latitude
        top_left_lon: Western edge longitude
        bottom_right_lat: Southern edge latitude
        bottom_right_lon: Eastern edge longitude
        max_hashes: Cell budget

    Returns:
        Coverage with the finest cells that fit the budget

    Raises:
        InvalidBoundingBoxError: If the corners are inverted, including
            boxes that cross the antimeridian
        InvalidLatitudeError: If a latitude is outside [-90, 90]

    Example:
        >>> coverage = cover_bounding_box(-5, 100, -45, 170)
        >>> coverage.count <= 12 and coverage.ratio >= 1
        True
    """
    return cover_bounding_box_longs(
        top_left_lat, top_left_lon, bottom_right_lat, bottom_right_lon, max_hashes
    ).to_coverage()
