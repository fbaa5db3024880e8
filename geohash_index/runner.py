"""
Command line runner for geohash-index.

Sub-commands:
1. encode      - point to geohash string (and packed integer)
2. decode      - geohash to cell centre and bounds
3. packed      - packed integer back to geohash string
4. adjacent    - neighbour in one direction, optionally several steps away
5. neighbours  - the 8 surrounding cells
6. cover       - cells covering a bounding box within a budget
7. grid        - ASCII grid of cells around a hash
8. batch       - add a geohash column to a CSV of points

Usage:
    python -m geohash_index.runner encode 40.7571397 -73.9891705 --length 9
    python -m geohash_index.runner cover 41.0 -74.5 40.5 -73.5 --max-hashes 20
    python -m geohash_index.runner batch --input points.csv --output points_hashed.csv
"""
import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from geohash_index.core.adjacency import (
    Direction,
    adjacent_hash,
    grid_around,
    neighbours,
)
from geohash_index.core.codec import (
    MAX_HASH_LENGTH,
    decode,
    decode_bounds,
    encode,
    encode_to_packed_long,
    packed_long_to_string,
)
from geohash_index.core.coverage import cover_bounding_box, cover_bounding_box_at_length
from geohash_index.data.frames import encode_frame, load_points_csv
from geohash_index.utils.config import GeohashConfig, get_default_config, load_config
from geohash_index.utils.exceptions import GeohashError
from geohash_index.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)

DIRECTION_CHOICES = ['top', 'right', 'bottom', 'left', 'north', 'east', 'south', 'west']


def _emit(payload: Any) -> None:
    print(json.dumps(payload, indent=2))


def _parse_int(text: str) -> int:
    return int(text, 0)


def run_encode(args, config: GeohashConfig) -> Dict[str, Any]:
    length = args.length if args.length is not None else config.codec.default_length
    result = {
        'latitude': args.lat,
        'longitude': args.lon,
        'length': length,
        'geohash': encode(args.lat, args.lon, length),
    }
    if length <= MAX_HASH_LENGTH:
        result['packed'] = encode_to_packed_long(args.lat, args.lon, length)
    return result


def run_decode(args, config: GeohashConfig) -> Dict[str, Any]:
    lat, lon = decode(args.hash)
    min_lat, max_lat, min_lon, max_lon = decode_bounds(args.hash)
    return {
        'geohash': args.hash,
        'latitude': lat,
        'longitude': lon,
        'bounds': {
            'min_lat': min_lat,
            'max_lat': max_lat,
            'min_lon': min_lon,
            'max_lon': max_lon,
        },
    }


def run_packed(args, config: GeohashConfig) -> Dict[str, Any]:
    return {'packed': args.value, 'geohash': packed_long_to_string(args.value)}


def run_adjacent(args, config: GeohashConfig) -> Dict[str, Any]:
    direction = Direction[args.direction.upper()]
    return {
        'geohash': args.hash,
        'direction': direction.value,
        'steps': args.steps,
        'adjacent': adjacent_hash(args.hash, direction, args.steps),
    }


def run_neighbours(args, config: GeohashConfig) -> Dict[str, Any]:
    names = ['left', 'right', 'top', 'bottom', 'left_top', 'left_bottom', 'right_top', 'right_bottom']
    return {'geohash': args.hash, 'neighbours': dict(zip(names, neighbours(args.hash)))}


def run_cover(args, config: GeohashConfig) -> Dict[str, Any]:
    if args.length is not None:
        coverage = cover_bounding_box_at_length(
            args.top_left_lat, args.top_left_lon,
            args.bottom_right_lat, args.bottom_right_lon,
            args.length,
        )
    else:
        max_hashes = args.max_hashes if args.max_hashes is not None else config.coverage.max_hashes
        coverage = cover_bounding_box(
            args.top_left_lat, args.top_left_lon,
            args.bottom_right_lat, args.bottom_right_lon,
            max_hashes,
        )

    logger.info(
        "coverage_planned",
        hash_length=coverage.hash_length,
        cells=coverage.count,
        ratio=coverage.ratio,
    )
    return {
        'hash_length': coverage.hash_length,
        'count': coverage.count,
        'ratio': coverage.ratio,
        'hashes': sorted(coverage.hashes),
    }


def run_grid(args, config: GeohashConfig) -> str:
    return grid_around(args.hash, args.size, args.highlight or ())


def run_batch(args, config: GeohashConfig) -> Dict[str, Any]:
    length = args.length if args.length is not None else config.codec.default_length
    df = load_points_csv(args.input)
    df = encode_frame(
        df,
        length=length,
        lat_col=args.lat_col,
        lon_col=args.lon_col,
        out_col=args.out_col,
        packed=args.packed,
    )

    args.output.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(args.output, index=False)
    logger.info("batch_written", output=str(args.output), rows=len(df), length=length)
    return {'rows': len(df), 'output': str(args.output), 'length': length}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='geohash-index - geohash keys, neighbours and bounding box coverage',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Encode a point with 9 characters
  geohash-index encode 40.7571397 -73.9891705 --length 9

  # Cover a bounding box with at most 20 cells
  geohash-index cover 41.0 -74.5 40.5 -73.5 --max-hashes 20

  # Print a 5x5 grid around a hash, highlighting two cells
  geohash-index grid dr5ru --size 2 --highlight dr5rv dr5rt
        """
    )
    parser.add_argument(
        '--config',
        type=Path,
        default=None,
        help='YAML configuration file (default: built-in defaults)'
    )
    parser.add_argument(
        '--log-level',
        default=None,
        help='Override the configured logging level'
    )
    parser.add_argument(
        '--json-logs',
        action='store_true',
        help='Render logs as JSON'
    )

    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('encode', help='Encode a point')
    p.add_argument('lat', type=float)
    p.add_argument('lon', type=float)
    p.add_argument('--length', type=int, default=None, help='Hash length (1-20)')
    p.set_defaults(handler=run_encode)

    p = sub.add_parser('decode', help='Decode a geohash to its cell centre')
    p.add_argument('hash')
    p.set_defaults(handler=run_decode)

    p = sub.add_parser('packed', help='Convert a packed integer hash to a string')
    p.add_argument('value', type=_parse_int, help='Packed hash (decimal or 0x-prefixed hex)')
    p.set_defaults(handler=run_packed)

    p = sub.add_parser('adjacent', help='Adjacent hash in a direction')
    p.add_argument('hash')
    p.add_argument('direction', choices=DIRECTION_CHOICES)
    p.add_argument('--steps', type=int, default=1, help='Cells to move; negative reverses')
    p.set_defaults(handler=run_adjacent)

    p = sub.add_parser('neighbours', help='The 8 surrounding hashes')
    p.add_argument('hash')
    p.set_defaults(handler=run_neighbours)

    p = sub.add_parser('cover', help='Cells covering a bounding box')
    p.add_argument('top_left_lat', type=float)
    p.add_argument('top_left_lon', type=float)
    p.add_argument('bottom_right_lat', type=float)
    p.add_argument('bottom_right_lon', type=float)
    p.add_argument('--max-hashes', type=int, default=None, help='Cell budget')
    p.add_argument('--length', type=int, default=None, help='Fixed hash length (ignores budget)')
    p.set_defaults(handler=run_cover)

    p = sub.add_parser('grid', help='ASCII grid of hashes around a hash')
    p.add_argument('hash')
    p.add_argument('--size', type=int, default=1)
    p.add_argument('--highlight', nargs='*', default=None)
    p.set_defaults(handler=run_grid)

    p = sub.add_parser('batch', help='Add a geohash column to a CSV of points')
    p.add_argument('--input', type=Path, required=True)
    p.add_argument('--output', type=Path, required=True)
    p.add_argument('--length', type=int, default=None)
    p.add_argument('--lat-col', default='latitude')
    p.add_argument('--lon-col', default='longitude')
    p.add_argument('--out-col', default='geohash')
    p.add_argument('--packed', action='store_true', help='Write packed integer hashes')
    p.set_defaults(handler=run_batch)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config) if args.config else get_default_config()
    configure_logging(
        log_level=args.log_level or config.logging.level,
        log_file=config.logging.log_file,
        json_output=args.json_logs or config.logging.json_output,
    )

    try:
        result = args.handler(args, config)
    except GeohashError as e:
        logger.error("command_failed", command=args.command, error=str(e))
        return 1

    if isinstance(result, str):
        print(result, end='')
    else:
        _emit(result)
    return 0


if __name__ == '__main__':
    sys.exit(main())
