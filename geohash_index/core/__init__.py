"""
Core geohash algorithms.

Contains the point codec, adjacency resolution, bounding box coverage
planning and cell geometry.
"""
from geohash_index.core.codec import (
    encode,
    decode,
    decode_bounds,
    encode_to_packed_long,
    packed_long_to_string,
    string_to_packed_long,
    width_degrees,
    height_degrees,
    hash_contains,
    MAX_HASH_LENGTH,
    DEFAULT_HASH_LENGTH,
)
from geohash_index.core.adjacency import (
    Direction,
    Parity,
    adjacent_hash,
    neighbours,
    grid_as_string,
    grid_around,
)
from geohash_index.core.coverage import (
    Coverage,
    CoverageLongs,
    cover_bounding_box,
    cover_bounding_box_longs,
    cover_bounding_box_at_length,
    hash_length_to_cover_bounding_box,
    DEFAULT_MAX_HASHES,
)
from geohash_index.core.geometry import (
    cell_polygon,
    coverage_polygon,
    cell_dimensions_m,
)

__all__ = [
    'encode',
    'decode',
    'decode_bounds',
    'encode_to_packed_long',
    'packed_long_to_string',
    'string_to_packed_long',
    'width_degrees',
    'height_degrees',
    'hash_contains',
    'MAX_HASH_LENGTH',
    'DEFAULT_HASH_LENGTH',
    'Direction',
    'Parity',
    'adjacent_hash',
    'neighbours',
    'grid_as_string',
    'grid_around',
    'Coverage',
    'CoverageLongs',
    'cover_bounding_box',
    'cover_bounding_box_longs',
    'cover_bounding_box_at_length',
    'hash_length_to_cover_bounding_box',
    'DEFAULT_MAX_HASHES',
    'cell_polygon',
    'coverage_polygon',
    'cell_dimensions_m',
]
