"""
Angular interval bisection shared by the encoders, the decoder and the
coverage planner.

A geohash is built by halving the longitude range [-180, 180] and the
latitude range [-90, 90] in turn, longitude first. Every halving emits one
bit: 1 when the upper half is kept, 0 otherwise.
"""
import math
from typing import Iterable, Iterator, NamedTuple, Tuple

from geohash_index.utils.exceptions import InvalidLongitudeError


class Interval(NamedTuple):
    """Closed angular range in decimal degrees."""
    low: float
    high: float

    @property
    def mid(self) -> float:
        return (self.low + self.high) / 2


LATITUDE_RANGE = Interval(-90.0, 90.0)
LONGITUDE_RANGE = Interval(-180.0, 180.0)


def bisect(interval: Interval, upper: bool) -> Tuple[Interval, float]:
    """
    Halve an interval.

    Args:
        interval: Range to split
        upper: Keep the upper half when True, the lower half otherwise

    Returns:
        Tuple of (kept half, midpoint used for the split)
    """
    mid = interval.mid
    if upper:
        return Interval(mid, interval.high), mid
    return Interval(interval.low, mid), mid


def refine(interval: Interval, value: float) -> Tuple[Interval, bool]:
    """Halve ``interval`` towards ``value``; the bit is ``value >= mid``."""
    bit = value >= interval.mid
    half, _ = bisect(interval, bit)
    return half, bit


def coordinate_bits(latitude: float, longitude: float, count: int) -> Iterator[bool]:
    """
    Yield the first ``count`` interleaved geohash bits of a point.

    Bits alternate longitude, latitude, longitude, ... most significant
    first. Inputs are assumed validated and normalised.
    """
    lat_range, lon_range = LATITUDE_RANGE, LONGITUDE_RANGE
    for position in range(count):
        if position % 2 == 0:
            lon_range, bit = refine(lon_range, longitude)
        else:
            lat_range, bit = refine(lat_range, latitude)
        yield bit


def refine_bounds(bits: Iterable[bool]) -> Tuple[Interval, Interval]:
    """
    Replay interleaved bits into (latitude range, longitude range).

    Example:
        >>> refine_bounds([False])
        (Interval(low=-90.0, high=90.0), Interval(low=-180.0, high=0.0))
    """
    lat_range, lon_range = LATITUDE_RANGE, LONGITUDE_RANGE
    for position, bit in enumerate(bits):
        if position % 2 == 0:
            lon_range, _ = bisect(lon_range, bit)
        else:
            lat_range, _ = bisect(lat_range, bit)
    return lat_range, lon_range


def normalize_longitude(longitude: float) -> float:
    """
    Bring a longitude into [-180, 180].

    Values already in range come back unchanged, so both -180 and 180
    survive and the function is idempotent. ``math.fmod`` is exact and the
    single 360 degree correction afterwards cannot round (Sterbenz), so
    boundary values never drift.

    Raises:
        InvalidLongitudeError: If longitude is infinite or NaN
    """
    if not math.isfinite(longitude):
        raise InvalidLongitudeError("longitude must be finite", value=longitude)
    if -180.0 <= longitude <= 180.0:
        return float(longitude)
    longitude = math.fmod(longitude, 360.0)
    if longitude > 180.0:
        longitude -= 360.0
    elif longitude < -180.0:
        longitude += 360.0
    return longitude
