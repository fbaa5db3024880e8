"""
Tabular batch helpers.

Provides pandas functions to add geohash columns to point tables
and centre coordinates to hash tables.
"""
from geohash_index.data.frames import encode_frame, decode_frame, load_points_csv

__all__ = [
    'encode_frame',
    'decode_frame',
    'load_points_csv',
]
