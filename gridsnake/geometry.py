"""Toroidal grid coordinates and directions."""

from enum import Enum
from typing import NamedTuple


class Cell(NamedTuple):
    x: int
    y: int


class Direction(Enum):
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"

    @property
    def vector(self):
        """Return the (dx, dy) offset of one step, y growing downwards."""
        return _VECTORS[self]

    @property
    def opposite(self):
        return _OPPOSITES[self]

    @classmethod
    def coerce(cls, value):
        """Accept a Direction or its name, raise ValueError for anything else."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise ValueError(f"invalid direction: {value!r}")


_VECTORS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def step(cell, direction, size):
    """Return the cell one unit away in direction, wrapping at the edges."""
    dx, dy = direction.vector
    return Cell((cell[0] + dx) % size, (cell[1] + dy) % size)


def is_reversal(current, candidate):
    return candidate is current.opposite


def in_bounds(cell, size):
    x, y = cell
    return 0 <= x < size and 0 <= y < size


def are_adjacent(a, b, size):
    """True when b is one wrapped step away from a."""
    return any(step(a, d, size) == b for d in Direction)


def all_cells(size):
    for y in range(size):
        for x in range(size):
            yield Cell(x, y)
