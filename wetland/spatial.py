"""
Spatial utility types for the 2-D grid.

Location value type plus helpers for bounds checks and
Moore-neighbourhood (8-connected) offsets.
"""

from typing import Iterator, NamedTuple, Tuple


# Row/column offsets of the 8 surrounding cells, row-major order
NEIGHBOUR_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (dr, dc)
    for dr in (-1, 0, 1)
    for dc in (-1, 0, 1)
    if dr != 0 or dc != 0
)


class Location(NamedTuple):
    """
    Immutable grid coordinate.

    Value semantics: two Locations with the same row and col are equal
    and hash identically, so they can be used as dict keys.
    """
    row: int
    col: int

    def __str__(self) -> str:
        return f"{self.row},{self.col}"


def in_bounds(row: int, col: int, depth: int, width: int) -> bool:
    """Check that (row, col) lies inside a depth x width grid"""
    return 0 <= row < depth and 0 <= col < width


def neighbours(location: Location, depth: int, width: int) -> Iterator[Location]:
    """
    Yield in-bounds neighbours of a location in row-major order.

    The location itself is never included. Corner cells have 3
    neighbours, edge cells 5, interior cells 8.

    Args:
        location: Centre cell
        depth: Grid rows
        width: Grid columns

    Yields:
        Neighbouring Locations (unshuffled)
    """
    for dr, dc in NEIGHBOUR_OFFSETS:
        row = location.row + dr
        col = location.col + dc
        if in_bounds(row, col, depth, width):
            yield Location(row, col)
