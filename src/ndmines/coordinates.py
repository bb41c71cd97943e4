"""
Coordinate module for N-dimensional Minesweeper.

Maps N-tuples of per-axis indices to flat storage indices and back,
and enumerates Moore neighbours for any number of dimensions.

Flat indices use mixed-radix encoding with the first dimension varying
fastest: ``index = c1 + d1 * (c2 + d2 * (c3 + ...))``.
"""
import numbers
from typing import Iterator, List, Sequence, Tuple

from .errors import InvalidConfiguration, OutOfBounds


Coordinate = Tuple[int, ...]
Dimensions = Tuple[int, ...]


def _is_integer(value) -> bool:
    """Check for an integer that is not a bool."""
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


# ============================================================================
# Dimension Helpers
# ============================================================================

def validate_dimensions(dimensions: Sequence[int]) -> Dimensions:
    """
    Normalise and validate a dimension spec.

    Args:
        dimensions: Extent of each axis.

    Returns:
        The extents as a tuple of ints.

    Raises:
        InvalidConfiguration: If there are no axes or any extent is < 1.
    """
    dims = tuple(dimensions)
    if not dims:
        raise InvalidConfiguration("Board needs at least one dimension")
    for extent in dims:
        if not _is_integer(extent):
            raise InvalidConfiguration(f"Dimension extents must be integers, got {extent!r}")
        if extent < 1:
            raise InvalidConfiguration("Board dimensions must be positive")
    return tuple(int(extent) for extent in dims)


def total_cells(dimensions: Sequence[int]) -> int:
    """Number of cells in the coordinate space."""
    count = 1
    for extent in dimensions:
        count *= extent
    return count


def strides(dimensions: Sequence[int]) -> Tuple[int, ...]:
    """Flat-index stride of each axis, ``(1, d1, d1*d2, ...)``."""
    result = []
    stride = 1
    for extent in dimensions:
        result.append(stride)
        stride *= extent
    return tuple(result)


def in_bounds(coord: Sequence[int], dimensions: Sequence[int]) -> bool:
    """Check if a coordinate has the right arity and lies on the board."""
    if len(coord) != len(dimensions):
        return False
    return all(_is_integer(c) and 0 <= c < d for c, d in zip(coord, dimensions))


# ============================================================================
# Index Conversion
# ============================================================================

def to_index(coord: Sequence[int], dimensions: Sequence[int]) -> int:
    """
    Convert a coordinate to its flat index.

    Args:
        coord: One index per dimension.
        dimensions: Extent of each axis.

    Returns:
        Flat storage index.

    Raises:
        OutOfBounds: If the arity is wrong or any component is not an
            integer on the board.
    """
    if len(coord) != len(dimensions):
        raise OutOfBounds(
            f"Coordinate {tuple(coord)} has {len(coord)} components, "
            f"board has {len(dimensions)} dimensions"
        )
    index = 0
    stride = 1
    for axis, (c, d) in enumerate(zip(coord, dimensions)):
        if not _is_integer(c):
            raise OutOfBounds(
                f"Coordinate {tuple(coord)} has non-integer component {c!r} on axis {axis}"
            )
        c = int(c)
        if not 0 <= c < d:
            raise OutOfBounds(
                f"Coordinate {tuple(coord)} out of bounds on axis {axis} (extent {d})"
            )
        index += c * stride
        stride *= d
    return index


def to_coord(index: int, dimensions: Sequence[int]) -> Coordinate:
    """
    Convert a flat index back to its coordinate.

    Args:
        index: Flat storage index.
        dimensions: Extent of each axis.

    Returns:
        Coordinate tuple.

    Raises:
        OutOfBounds: If the index is not an integer, is negative or is
            past the last cell.
    """
    if not _is_integer(index):
        raise OutOfBounds(f"Index {index!r} is not an integer")
    index = int(index)
    if not 0 <= index < total_cells(dimensions):
        raise OutOfBounds(f"Index {index} out of bounds for dimensions {tuple(dimensions)}")
    coord = []
    remainder = index
    for extent in dimensions:
        remainder, component = divmod(remainder, extent)
        coord.append(component)
    return tuple(coord)


# ============================================================================
# Neighbour Enumeration
# ============================================================================

def offsets(num_dimensions: int) -> Iterator[Coordinate]:
    """
    Yield every offset in {-1, 0, 1}^N except the all-zero one.

    Runs as an odometer: the first digit spins fastest and carries into
    the next, so no recursion depth grows with N.

    Args:
        num_dimensions: Number of axes N.

    Yields:
        Offset tuples, 3^N - 1 in total, in a fixed order.
    """
    digits = [-1] * num_dimensions
    while True:
        if any(digits):
            yield tuple(digits)
        axis = 0
        while axis < num_dimensions and digits[axis] == 1:
            digits[axis] = -1
            axis += 1
        if axis == num_dimensions:
            return
        digits[axis] += 1


def neighbors(coord: Sequence[int], dimensions: Sequence[int]) -> List[Coordinate]:
    """
    Get in-bounds Moore neighbours of a coordinate.

    Args:
        coord: Centre coordinate.
        dimensions: Extent of each axis.

    Returns:
        Neighbour coordinates in odometer order.

    Raises:
        OutOfBounds: If ``coord`` itself is off the board.
    """
    to_index(coord, dimensions)
    centre = tuple(int(c) for c in coord)
    result = []
    for delta in offsets(len(dimensions)):
        candidate = tuple(c + o for c, o in zip(centre, delta))
        if all(0 <= c < d for c, d in zip(candidate, dimensions)):
            result.append(candidate)
    return result


def neighbor_indices(index: int, dimensions: Sequence[int]) -> List[int]:
    """Flat-index version of :func:`neighbors`."""
    coord = to_coord(index, dimensions)
    axis_strides = strides(dimensions)
    result = []
    for delta in offsets(len(dimensions)):
        neighbor = index
        for c, o, d, s in zip(coord, delta, dimensions, axis_strides):
            if not 0 <= c + o < d:
                break
            neighbor += o * s
        else:
            result.append(neighbor)
    return result
