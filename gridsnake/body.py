"""
Snake body and direction buffering.
"""

from collections import deque

from .geometry import Cell, Direction, is_reversal, step


class SnakeBody:
    """
    Ordered body segments of the snake.

    Attributes:
        segments: deque of Cell from head at index 0 to tail at the end
        grid_size: side length of the toroidal board the snake lives on
    """

    def __init__(self, segments, grid_size):
        self.segments = deque(Cell(*segment) for segment in segments)
        if not self.segments:
            raise ValueError("a snake needs at least one segment")
        self.grid_size = grid_size

    @property
    def head(self):
        """Return the head position (first element)."""
        return self.segments[0]

    @property
    def tail(self):
        return self.segments[-1]

    def __len__(self):
        return len(self.segments)

    def __iter__(self):
        return iter(self.segments)

    def __contains__(self, cell):
        return cell in self.segments

    def occupied(self):
        return set(self.segments)

    def next_head(self, direction):
        """Cell the head would move to this tick."""
        return step(self.head, direction, self.grid_size)

    def advance(self, next_head, ate_food):
        """Prepend next_head; keep the tail only when food was eaten."""
        self.segments.appendleft(Cell(*next_head))
        if not ate_food:
            self.segments.pop()
        return self


class DirectionBuffer:
    """
    Holds the active direction and at most one pending turn.

    The active direction is the one used by the last committed move. A turn
    requested between ticks replaces any earlier pending turn and is dropped
    if it would reverse the active direction.
    """

    def __init__(self, initial):
        self.active = Direction.coerce(initial)
        self.pending = None

    def request(self, direction):
        """Buffer a turn; return False when it was rejected as a reversal."""
        direction = Direction.coerce(direction)
        if is_reversal(self.active, direction):
            return False
        self.pending = direction
        return True

    def peek(self):
        """Direction the next tick would use, without applying the pending turn."""
        return self.pending if self.pending is not None else self.active

    def commit(self):
        """Apply the pending turn, if any, and return the direction for this tick."""
        if self.pending is not None:
            self.active = self.pending
            self.pending = None
        return self.active

    def reset(self, initial):
        self.active = Direction.coerce(initial)
        self.pending = None
