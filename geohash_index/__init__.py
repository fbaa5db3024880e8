"""
geohash-index: hierarchical geohash keys for sorted spatial indexes.

Encodes points to geohash strings or packed 64-bit integers, resolves
neighbouring cells across borders, meridian and poles, and plans the
set of cells covering a bounding box.
"""
from geohash_index.core import (
    encode,
    decode,
    encode_to_packed_long,
    packed_long_to_string,
    width_degrees,
    height_degrees,
    Direction,
    adjacent_hash,
    neighbours,
    Coverage,
    cover_bounding_box,
)

__version__ = "0.1.0"

__all__ = [
    'encode',
    'decode',
    'encode_to_packed_long',
    'packed_long_to_string',
    'width_degrees',
    'height_degrees',
    'Direction',
    'adjacent_hash',
    'neighbours',
    'Coverage',
    'cover_bounding_box',
]
