"""
Adjacent geohash resolution.

Neighbours are found with the classic lookup tables: the last character
of a hash indexes a per-direction, per-parity table, and characters on
the border of their parent cell carry the move into the shorter prefix.
Cells on the world edge are handled before the tables are consulted:
moving east of +180 wraps to -180 (and vice versa), and moving over a
pole keeps the latitude and rotates the longitude by 180 degrees.
"""
from enum import Enum
from typing import Dict, Iterable, List

from geohash_index.core.base32 import BASE32
from geohash_index.core.codec import decode, decode_bounds, encode
from geohash_index.utils.exceptions import UndefinedAdjacencyError


class Direction(Enum):
    """Compass direction between adjacent cells."""
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"

    # Aliases
    NORTH = "top"
    EAST = "right"
    SOUTH = "bottom"
    WEST = "left"

    @property
    def opposite(self) -> 'Direction':
        return _OPPOSITES[self]


_OPPOSITES = {
    Direction.TOP: Direction.BOTTOM,
    Direction.BOTTOM: Direction.TOP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Parity(Enum):
    """Hash length parity; selects the lookup table row."""
    EVEN = 0
    ODD = 1

    @classmethod
    def of(cls, geohash: str) -> 'Parity':
        return cls.EVEN if len(geohash) % 2 == 0 else cls.ODD


def _with_odd_rows(even: Dict[Direction, str]) -> Dict[Direction, Dict[Parity, str]]:
    # Odd lengths swap the roles of latitude and longitude, so each odd row
    # is the even row of the perpendicular direction.
    odd = {
        Direction.BOTTOM: even[Direction.LEFT],
        Direction.TOP: even[Direction.RIGHT],
        Direction.LEFT: even[Direction.BOTTOM],
        Direction.RIGHT: even[Direction.TOP],
    }
    return {d: {Parity.EVEN: even[d], Parity.ODD: odd[d]} for d in _OPPOSITES}


NEIGHBOURS = _with_odd_rows({
    Direction.RIGHT: "bc01fg45238967deuvhjyznpkmstqrwx",
    Direction.LEFT: "238967debc01fg45kmstqrwxuvhjyznp",
    Direction.TOP: "p0r21436x8zb9dcf5h7kjnmqesgutwvy",
    Direction.BOTTOM: "14365h7k9dcfesgujnmqp0r2twvyx8zb",
})

BORDERS = _with_odd_rows({
    Direction.RIGHT: "bcfguvyz",
    Direction.LEFT: "0145hjnp",
    Direction.TOP: "prxz",
    Direction.BOTTOM: "028b",
})


def _adjacent_at_world_edge(geohash: str, direction: Direction):
    """Return the wrapped neighbour if ``geohash`` sits on the edge being crossed, else None."""
    # Bisection of the world ranges is exact, so edge cells hit the
    # limits exactly at every length.
    min_lat, max_lat, min_lon, max_lon = decode_bounds(geohash)
    lat, lon = decode(geohash)
    length = len(geohash)

    if direction is Direction.RIGHT:
        if max_lon == 180.0:
            return encode(lat, -180.0, length)
    elif direction is Direction.LEFT:
        if min_lon == -180.0:
            return encode(lat, 180.0, length)
    elif direction is Direction.TOP:
        if max_lat == 90.0:
            return encode(lat, lon + 180, length)
    else:
        if min_lat == -90.0:
            return encode(lat, lon + 180, length)

    return None


def _adjacent(geohash: str, direction: Direction) -> str:
    if not geohash or not geohash.strip():
        raise UndefinedAdjacencyError(
            "adjacency has no meaning for a zero length hash that covers the whole world"
        )

    source = geohash.lower()
    wrapped = _adjacent_at_world_edge(source, direction)
    if wrapped is not None:
        return wrapped

    last = source[-1]
    parity = Parity.of(source)
    prefix = source[:-1]
    if last in BORDERS[direction][parity]:
        prefix = _adjacent(prefix, direction)
    return prefix + BASE32[NEIGHBOURS[direction][parity].index(last)]


def adjacent_hash(geohash: str, direction: Direction, steps: int = 1) -> str:
    """
    Return the hash ``steps`` cells away in ``direction``.

    A negative ``steps`` walks the opposite direction.

    Args:
        geohash: Origin hash
        direction: Direction to move
        steps: Number of cells to move

    Returns:
        Hash of the same length as ``geohash``

    Raises:
        UndefinedAdjacencyError: If geohash is empty
        InvalidHashError: If geohash contains invalid characters

    Example:
        >>> adjacent_hash("dr", Direction.RIGHT)
        'dx'
        >>> adjacent_hash("dr", Direction.TOP, -1)
        'dq'
    """
    if steps < 0:
        return adjacent_hash(geohash, direction.opposite, -steps)

    if not geohash or not geohash.strip():
        raise UndefinedAdjacencyError(
            "adjacency has no meaning for a zero length hash that covers the whole world"
        )
    result = geohash.lower()
    for _ in range(steps):
        result = _adjacent(result, direction)
    return result


def right(geohash: str) -> str:
    """Hash to the east."""
    return adjacent_hash(geohash, Direction.RIGHT)


def left(geohash: str) -> str:
    """Hash to the west."""
    return adjacent_hash(geohash, Direction.LEFT)


def top(geohash: str) -> str:
    """Hash to the north."""
    return adjacent_hash(geohash, Direction.TOP)


def bottom(geohash: str) -> str:
    """Hash to the south."""
    return adjacent_hash(geohash, Direction.BOTTOM)


def neighbours(geohash: str) -> List[str]:
    """
    Get the 8 surrounding hashes.

    Order: left, right, top, bottom, left-top, left-bottom, right-top,
    right-bottom.

    Example:
        >>> neighbours("dr")
        ['dp', 'dx', 'f2', 'dq', 'f0', 'dn', 'f8', 'dw']
    """
    west = left(geohash)
    east = right(geohash)
    return [
        west,
        east,
        top(geohash),
        bottom(geohash),
        top(west),
        bottom(west),
        top(east),
        bottom(east),
    ]


def grid_as_string(
    geohash: str,
    from_right: int,
    from_bottom: int,
    to_right: int,
    to_bottom: int,
    highlight: Iterable[str] = (),
) -> str:
    """
    Render the hashes around ``geohash`` as lines of text.

    Offsets count cells to the right and to the bottom of ``geohash`` and
    may be negative. Hashes in ``highlight`` are upper-cased.

    Example:
        >>> print(grid_as_string("dr", -1, -1, 1, 1, {"f2", "f8"}))
        f0 F2 F8
        dp dr dx
        dn dq dw
    """
    highlight = set(highlight)
    lines = []
    for down in range(from_bottom, to_bottom + 1):
        row = []
        for across in range(from_right, to_right + 1):
            cell = adjacent_hash(geohash, Direction.RIGHT, across)
            cell = adjacent_hash(cell, Direction.BOTTOM, down)
            row.append(cell.upper() if cell in highlight else cell)
        lines.append(''.join(f"{cell} " for cell in row))
    return ''.join(f"{line}\n" for line in lines)


def grid_around(geohash: str, size: int, highlight: Iterable[str] = ()) -> str:
    """Square grid of ``2 * size + 1`` cells per side centred on ``geohash``."""
    return grid_as_string(geohash, -size, -size, size, size, highlight)
