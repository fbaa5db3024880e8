"""
Batch geohash encoding and decoding for pandas DataFrames.

Adds geohash columns to point tables (and centre coordinates to hash
tables) so they can be joined against or loaded into a sorted index.
"""
from pathlib import Path
from typing import Optional

import numpy as np
import pandas as pd

from geohash_index.core.codec import decode, encode, encode_to_packed_long, MAX_HASH_LENGTH
from geohash_index.utils.error_handling import require_columns
from geohash_index.utils.exceptions import FrameLoadError, FrameValidationError
from geohash_index.utils.logging_config import get_logger

logger = get_logger(__name__)


def load_points_csv(file_path: Path, sample_rows: Optional[int] = None) -> pd.DataFrame:
    """
    Load a CSV of points.

    Args:
        file_path: Path to CSV file
        sample_rows: If specified, only load first N rows

    Returns:
        DataFrame as read

    Raises:
        FrameLoadError: If file not found or cannot be read
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FrameLoadError(f"Points file not found: {file_path}")

    logger.info("loading_points", file=str(file_path), sample_rows=sample_rows)
    try:
        df = pd.read_csv(file_path, nrows=sample_rows)
    except Exception as e:
        raise FrameLoadError(f"Failed to read points CSV: {e}") from e

    logger.info("points_loaded", rows=len(df), columns=len(df.columns))
    return df


def _invalid_coordinate_mask(lat: np.ndarray, lon: np.ndarray) -> np.ndarray:
    return ~np.isfinite(lat) | ~np.isfinite(lon) | (lat < -90.0) | (lat > 90.0)


@require_columns(['lat_col', 'lon_col'], df_param='df')
def encode_frame(
    df: pd.DataFrame,
    length: int = 7,
    lat_col: str = 'latitude',
    lon_col: str = 'longitude',
    out_col: str = 'geohash',
    packed: bool = False,
) -> pd.DataFrame:
    """
    Add a geohash column to a DataFrame of points.

    Args:
        df: Input points
        length: Hash length
        lat_col: Latitude column name
        lon_col: Longitude column name
        out_col: Name of the column to add
        packed: Store packed integer hashes (length <= 12) instead of strings

    Returns:
        Copy of ``df`` with ``out_col`` added

    Raises:
        FrameValidationError: If columns are missing or any row has a
            non-finite coordinate or a latitude outside [-90, 90]

    Example:
        >>> df = pd.DataFrame({'latitude': [40.7571397], 'longitude': [-73.9891705]})
        >>> encode_frame(df, length=5)['geohash'].tolist()
        ['dr5ru']
    """
    lat = pd.to_numeric(df[lat_col], errors='coerce').to_numpy(dtype=float)
    lon = pd.to_numeric(df[lon_col], errors='coerce').to_numpy(dtype=float)

    invalid = _invalid_coordinate_mask(lat, lon)
    if invalid.any():
        invalid_rows = int(invalid.sum())
        raise FrameValidationError(
            f"Cannot encode rows with invalid coordinates in {lat_col}/{lon_col}",
            invalid_rows=invalid_rows,
            details={'sample_index': df.index[invalid][:5].tolist()},
        )

    if packed:
        if not 1 <= length <= MAX_HASH_LENGTH:
            raise FrameValidationError(
                f"Packed hashes need a length between 1 and {MAX_HASH_LENGTH}, got {length}"
            )
        hashes = [encode_to_packed_long(float(a), float(b), length) for a, b in zip(lat, lon)]
        column = pd.Series(hashes, index=df.index, dtype='uint64')
    else:
        hashes = [encode(float(a), float(b), length) for a, b in zip(lat, lon)]
        column = pd.Series(hashes, index=df.index, dtype=object)

    result = df.copy()
    result[out_col] = column

    logger.debug("frame_encoded", rows=len(result), length=length, packed=packed)
    return result


@require_columns(['hash_col'], df_param='df')
def decode_frame(
    df: pd.DataFrame,
    hash_col: str = 'geohash',
    prefix: str = '',
) -> pd.DataFrame:
    """
    Add cell centre coordinates for a column of geohash strings.

    Args:
        df: Input table
        hash_col: Column holding geohash strings
        prefix: Prefix for the added ``latitude``/``longitude`` columns

    Returns:
        Copy of ``df`` with ``{prefix}latitude`` and ``{prefix}longitude`` added

    Raises:
        FrameValidationError: If the column is missing or has empty values
        InvalidHashError: If a value contains characters outside the alphabet
    """
    hashes = df[hash_col]
    missing = hashes.isna()
    if missing.any():
        raise FrameValidationError(
            f"Cannot decode empty values in {hash_col}",
            invalid_rows=int(missing.sum()),
        )

    centres = [decode(str(h)) for h in hashes]
    result = df.copy()
    result[f'{prefix}latitude'] = np.array([c[0] for c in centres], dtype=float)
    result[f'{prefix}longitude'] = np.array([c[1] for c in centres], dtype=float)

    logger.debug("frame_decoded", rows=len(result), column=hash_col)
    return result
