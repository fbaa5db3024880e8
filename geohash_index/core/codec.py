"""
Geohash encoding and decoding.

Converts between latitude/longitude coordinates, geohash strings and
packed 64-bit integer hashes. Implementation based on the standard
geohash algorithm (https://en.wikipedia.org/wiki/Geohash).

Packed layout: the 5-bit groups of the hash fill the word from bit 63
downwards, the hash length (1-12) sits in the 4 lowest bits. Packed
hashes are unsigned, so integer order matches lexical hash order.
"""
from typing import Iterator, List, Optional, Tuple

from geohash_index.core.base32 import BASE32, char_from_index, index_from_char
from geohash_index.core.intervals import (
    coordinate_bits,
    normalize_longitude,
    refine_bounds,
)
from geohash_index.utils.exceptions import (
    InvalidAlphabetCharacterError,
    InvalidHashError,
    InvalidLatitudeError,
    InvalidLengthError,
    InvalidPrecisionError,
)


# Longest hash that fits the packed 64-bit layout
MAX_HASH_LENGTH = 12

# Longest string hash; 100 bits is far below float64 resolution already
MAX_STRING_HASH_LENGTH = 20

DEFAULT_HASH_LENGTH = 12

BITS_PER_CHAR = 5

_TOP_BIT = 1 << 63
_WORD_MASK = (1 << 64) - 1
_LENGTH_MASK = 0xF


def _check_latitude(latitude: float) -> None:
    if not -90.0 <= latitude <= 90.0:
        raise InvalidLatitudeError("latitude must be between -90 and 90 inclusive", value=latitude)


def _char_bits(geohash: str) -> Iterator[bool]:
    """Yield the bits of a hash string, raising InvalidHashError on bad input."""
    if not geohash or not geohash.strip():
        raise InvalidHashError("geohash cannot be empty", value=geohash)
    for char in geohash.lower():
        try:
            idx = index_from_char(char)
        except InvalidAlphabetCharacterError as e:
            raise InvalidHashError(f"invalid geohash character {char!r}", value=geohash) from e
        for shift in range(BITS_PER_CHAR - 1, -1, -1):
            yield bool((idx >> shift) & 1)


def encode(latitude: float, longitude: float, length: int = DEFAULT_HASH_LENGTH) -> str:
    """
    Encode latitude/longitude to a geohash string.

    Args:
        latitude: Latitude in decimal degrees (-90 to 90)
        longitude: Longitude in decimal degrees, any finite value
        length: Number of characters in the hash (1 to 20)

    Returns:
        Geohash string

    Raises:
        InvalidPrecisionError: If length is outside [1, 20]
        InvalidLatitudeError: If latitude is outside [-90, 90]
        InvalidLongitudeError: If longitude is not finite

    Example:
        >>> encode(40.7571397, -73.9891705, 5)
        'dr5ru'
    """
    if not 1 <= length <= MAX_STRING_HASH_LENGTH:
        raise InvalidPrecisionError(
            f"length must be between 1 and {MAX_STRING_HASH_LENGTH}", value=length
        )
    _check_latitude(latitude)
    longitude = normalize_longitude(longitude)

    chars = []
    group = 0
    for position, bit in enumerate(coordinate_bits(latitude, longitude, BITS_PER_CHAR * length), 1):
        group = (group << 1) | bit
        if position % BITS_PER_CHAR == 0:
            chars.append(BASE32[group])
            group = 0

    return ''.join(chars)


def encode_to_packed_long(latitude: float, longitude: float, length: int = MAX_HASH_LENGTH) -> int:
    """
    Encode latitude/longitude directly to a packed 64-bit hash.

    The bit derivation is the one used by :func:`encode`, so
    ``packed_long_to_string(encode_to_packed_long(lat, lon, n)) == encode(lat, lon, n)``.

    Raises:
        InvalidLengthError: If length is outside [1, 12]
        InvalidLatitudeError: If latitude is outside [-90, 90]
    """
    if not 1 <= length <= MAX_HASH_LENGTH:
        raise InvalidLengthError(f"length must be between 1 and {MAX_HASH_LENGTH}", value=length)
    _check_latitude(latitude)
    longitude = normalize_longitude(longitude)

    packed = 0
    bit = _TOP_BIT
    for value in coordinate_bits(latitude, longitude, BITS_PER_CHAR * length):
        if value:
            packed |= bit
        bit >>= 1

    return packed | length


def packed_long_to_string(packed: int) -> str:
    """
    Convert a packed hash back to its string form.

    Accepts the unsigned word or its two's complement signed value.

    Raises:
        InvalidLengthError: If the length tag is outside [1, 12]
    """
    packed &= _WORD_MASK
    length = packed & _LENGTH_MASK
    if not 1 <= length <= MAX_HASH_LENGTH:
        raise InvalidLengthError(f"invalid packed geohash {packed:#x}", value=length)

    return ''.join(
        char_from_index((packed >> (64 - BITS_PER_CHAR * (pos + 1))) & 0x1F)
        for pos in range(length)
    )


def string_to_packed_long(geohash: str) -> int:
    """
    Convert a geohash string of up to 12 characters to its packed form.

    Raises:
        InvalidHashError: If the hash is empty or has invalid characters
        InvalidLengthError: If the hash is longer than 12 characters
    """
    if len(geohash) > MAX_HASH_LENGTH:
        raise InvalidLengthError(
            f"only hashes up to {MAX_HASH_LENGTH} characters can be packed", value=geohash
        )
    packed = 0
    bit = _TOP_BIT
    for value in _char_bits(geohash):
        if value:
            packed |= bit
        bit >>= 1
    return packed | len(geohash)


def decode_bounds(geohash: str) -> Tuple[float, float, float, float]:
    """
    Get the bounding box for a geohash.

    Args:
        geohash: Geohash string

    Returns:
        Tuple of (min_lat, max_lat, min_lon, max_lon)

    Raises:
        InvalidHashError: If the hash is empty or has invalid characters
    """
    lat_range, lon_range = refine_bounds(_char_bits(geohash))
    return lat_range.low, lat_range.high, lon_range.low, lon_range.high


def decode(geohash: str) -> Tuple[float, float]:
    """
    Decode a geohash string to latitude/longitude coordinates.

    Returns the center point of the geohash box, not a corner.

    Args:
        geohash: Geohash string (e.g., "dr5ru"), case-insensitive

    Returns:
        Tuple of (latitude, longitude) in decimal degrees

    Raises:
        InvalidHashError: If the hash is empty or has invalid characters

    Example:
        >>> decode("s")
        (22.5, 22.5)
    """
    lat_range, lon_range = refine_bounds(_char_bits(geohash))
    return lat_range.mid, lon_range.mid


def hash_contains(geohash: str, latitude: float, longitude: float) -> bool:
    """True if the cell of ``geohash`` contains the point (edges included)."""
    center_lat, center_lon = decode(geohash)
    lon_offset = normalize_longitude(center_lon - longitude)
    return (abs(center_lat - latitude) <= height_degrees(len(geohash)) / 2
            and abs(lon_offset) <= width_degrees(len(geohash)) / 2)


# Memo tables for cell dimensions; slots are filled on first use and
# always receive the same value, so concurrent first writes are harmless.
_height_cache: List[Optional[float]] = [None] * MAX_HASH_LENGTH
_width_cache: List[Optional[float]] = [None] * MAX_HASH_LENGTH


def _calculate_height_degrees(n: int) -> float:
    a = 0.0 if n % 2 == 0 else -0.5
    return 180 / 2 ** (2.5 * n + a)


def _calculate_width_degrees(n: int) -> float:
    a = -1.0 if n % 2 == 0 else -0.5
    return 180 / 2 ** (2.5 * n + a)


def height_degrees(n: int) -> float:
    """
    Height in degrees of every geohash cell of length ``n``.

    Cached for lengths 1-12, computed on demand otherwise.

    Example:
        >>> height_degrees(1), height_degrees(2)
        (45.0, 5.625)
    """
    if 0 < n <= MAX_HASH_LENGTH:
        if _height_cache[n - 1] is None:
            _height_cache[n - 1] = _calculate_height_degrees(n)
        return _height_cache[n - 1]
    return _calculate_height_degrees(n)


def width_degrees(n: int) -> float:
    """
    Width in degrees of every geohash cell of length ``n``.

    Example:
        >>> width_degrees(1), width_degrees(2)
        (45.0, 11.25)
    """
    if 0 < n <= MAX_HASH_LENGTH:
        if _width_cache[n - 1] is None:
            _width_cache[n - 1] = _calculate_width_degrees(n)
        return _width_cache[n - 1]
    return _calculate_width_degrees(n)
